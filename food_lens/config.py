from dataclasses import dataclass
from typing import Optional
import os
from dotenv import load_dotenv

from food_lens.constants import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_MODELS,
    DEFAULT_PROVIDER,
    DEFAULT_RETRY_DELAY_MS,
    GEMINI_VISION_MODEL,
    PROVIDER_CLAUDE,
    PROVIDER_GEMINI,
    PROVIDER_OPENAI,
    TRUTHY_STRINGS,
)

_API_KEY_ENV = {
    PROVIDER_GEMINI: "GEMINI_API_KEY",
    PROVIDER_CLAUDE: "ANTHROPIC_API_KEY",
    PROVIDER_OPENAI: "OPENAI_API_KEY",
}


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in TRUTHY_STRINGS


@dataclass(frozen=True)
class AnalyzerSettings:
    """Per-pipeline knobs handed to the invoker at construction."""

    model_name: str = GEMINI_VISION_MODEL
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay_ms: int = DEFAULT_RETRY_DELAY_MS
    debug: bool = False
    retry_invalid_responses: bool = True

    def __post_init__(self) -> None:
        match (self.max_retries, self.retry_delay_ms):
            case (r, _) if r < 0:
                raise ValueError("MAX_RETRIES must not be negative")
            case (_, d) if d < 0:
                raise ValueError("RETRY_DELAY_MS must not be negative")
            case _:
                pass


@dataclass(frozen=True)
class Config:
    provider: str
    api_key: str
    log_level: str
    analyzer: AnalyzerSettings

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        provider = os.getenv("VISION_PROVIDER", DEFAULT_PROVIDER).strip().lower()
        keys = {
            PROVIDER_GEMINI: os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY") or None,
            PROVIDER_CLAUDE: os.getenv("ANTHROPIC_API_KEY") or None,
            PROVIDER_OPENAI: os.getenv("OPENAI_API_KEY") or None,
        }
        model = os.getenv("VISION_MODEL") or DEFAULT_MODELS.get(provider, "")
        max_retries = os.getenv("MAX_RETRIES", str(DEFAULT_MAX_RETRIES))
        retry_delay_ms = os.getenv("RETRY_DELAY_MS", str(DEFAULT_RETRY_DELAY_MS))
        log_level = os.getenv("LOG_LEVEL", "INFO")

        return cls._validate(
            provider=provider,
            api_key=keys.get(provider),
            log_level=log_level,
            analyzer=AnalyzerSettings(
                model_name=model,
                max_retries=int(max_retries),
                retry_delay_ms=int(retry_delay_ms),
                debug=_env_flag("DEBUG_RAW_RESPONSE", "false"),
                retry_invalid_responses=_env_flag("RETRY_INVALID_RESPONSES", "true"),
            ),
        )

    @staticmethod
    def _validate(
        provider: str,
        api_key: Optional[str],
        log_level: str,
        analyzer: AnalyzerSettings,
    ) -> "Config":
        match provider:
            case str() as p if p in _API_KEY_ENV:
                pass
            case _:
                raise ValueError(
                    f"VISION_PROVIDER must be one of {', '.join(_API_KEY_ENV)}, got {provider!r}"
                )

        match api_key:
            case None | "":
                raise ValueError(f"{_API_KEY_ENV[provider]} must be set in .env")
            case _:
                pass

        return Config(
            provider=provider,
            api_key=api_key,
            log_level=log_level,
            analyzer=analyzer,
        )
