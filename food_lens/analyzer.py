"""FoodAnalyzer — wires Loader → Prompt → Invoker → Validator for one image."""
import asyncio
import logging
from functools import partial
from typing import Optional

from food_lens.config import AnalyzerSettings, Config
from food_lens.constants import (
    MSG_ANALYSIS_FAILED,
    MSG_ANALYSIS_OK,
    PROVIDER_CLAUDE,
    PROVIDER_GEMINI,
    PROVIDER_OPENAI,
)
from food_lens.errors import FoodAnalysisError
from food_lens.image_loader import ImageRef, load_image
from food_lens.invoker import InferenceInvoker, Sleep
from food_lens.prompt import build_prompt
from food_lens.schema import AnalysisResult
from food_lens.validator import validate_response
from food_lens.vision.claude import ClaudeVisionClient
from food_lens.vision.client import VisionClient
from food_lens.vision.gemini import GeminiVisionClient
from food_lens.vision.openai import OpenAIVisionClient

logger = logging.getLogger(__name__)


_BACKENDS: dict[str, type[VisionClient]] = {
    PROVIDER_GEMINI: GeminiVisionClient,
    PROVIDER_CLAUDE: ClaudeVisionClient,
    PROVIDER_OPENAI: OpenAIVisionClient,
}


def make_vision_client(config: Config) -> VisionClient:
    match _BACKENDS.get(config.provider):
        case None:
            raise ValueError(f"Unknown vision provider: {config.provider}")
        case backend:
            return backend(config.api_key, config.analyzer.model_name)


class FoodAnalyzer:

    def __init__(
        self,
        client: VisionClient,
        settings: AnalyzerSettings = AnalyzerSettings(),
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._settings = settings
        self._invoker = InferenceInvoker(client, settings, sleep)

    @classmethod
    def from_config(cls, config: Config) -> "FoodAnalyzer":
        return cls(make_vision_client(config), config.analyzer)

    async def analyze(self, image_ref: ImageRef | None) -> AnalysisResult:
        """Analyze one food photo.

        Returns a fully populated AnalysisResult or raises exactly one
        FoodAnalysisError. ``str(exc)`` keeps the technical reason of the last
        failed attempt for logs; ``exc.user_message`` is the classified,
        display-safe text and is the only field meant for end users.
        """
        try:
            image = await load_image(image_ref)
            result = await self._invoker.invoke(
                build_prompt(),
                image,
                partial(validate_response, include_raw=self._settings.debug),
            )
        except FoodAnalysisError as exc:
            logger.error(MSG_ANALYSIS_FAILED, exc)
            raise
        logger.info(MSG_ANALYSIS_OK, result.food, result.confidence)
        return result


async def analyze_food_image(
    image_ref: ImageRef | None, config: Optional[Config] = None
) -> AnalysisResult:
    return await FoodAnalyzer.from_config(config or Config.from_env()).analyze(image_ref)
