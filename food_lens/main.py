"""Entry point — wires Config → FoodAnalyzer and prints the result."""
import argparse
import asyncio
import dataclasses
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from food_lens.analyzer import FoodAnalyzer
from food_lens.config import Config
from food_lens.errors import FoodAnalysisError


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="food-lens",
        description="Estimate the nutrition of a food photo with a vision model.",
    )
    parser.add_argument("image", help="path or file:// URI of a JPEG photo")
    parser.add_argument(
        "--debug", action="store_true", help="attach the raw model response to the output"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    config = Config.from_env()
    if args.debug:
        config = dataclasses.replace(
            config, analyzer=dataclasses.replace(config.analyzer, debug=True)
        )
    _setup_logging(config.log_level)

    console = Console()
    try:
        result = asyncio.run(FoodAnalyzer.from_config(config).analyze(args.image))
    except FoodAnalysisError as exc:
        Console(stderr=True).print(exc.user_message, style="red", markup=False)
        return 1
    console.print_json(data=result.to_dict())
    return 0


if __name__ == "__main__":
    sys.exit(main())
