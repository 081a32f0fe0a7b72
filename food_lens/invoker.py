"""InferenceInvoker — one remote call per attempt, bounded retry around it."""
import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

from food_lens.config import AnalyzerSettings
from food_lens.constants import (
    MSG_ATTEMPT_FAILED,
    MSG_ATTEMPT_GAVE_UP,
    MSG_CALLING_MODEL,
    MSG_NOT_RETRYABLE,
    REASON_INVALID_JSON,
)
from food_lens.errors import (
    FoodAnalysisError,
    InvalidResponseError,
    MalformedResponseError,
    TransportError,
)
from food_lens.image_loader import EncodedImage
from food_lens.vision.client import VisionClient

logger = logging.getLogger(__name__)

T = TypeVar("T")
Sleep = Callable[[float], Awaitable[None]]


@dataclass
class RetryState:
    attempt: int = 0
    last_error: Optional[FoodAnalysisError] = None


class InferenceInvoker:

    def __init__(
        self,
        client: VisionClient,
        settings: AnalyzerSettings,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._client = client
        self._settings = settings
        self._sleep = sleep

    @property
    def total_attempts(self) -> int:
        return 1 + self._settings.max_retries

    async def invoke(
        self,
        prompt: str,
        image: EncodedImage,
        parse: Optional[Callable[[str], T]] = None,
    ) -> T | str:
        """Run attempts until one succeeds. ``parse`` runs inside each attempt,
        so its errors consume retries. On exhaustion the last error is raised."""
        state = RetryState()
        total = self.total_attempts
        delay_ms = self._settings.retry_delay_ms

        while state.attempt < total:
            state.attempt += 1
            try:
                text = await self._call(prompt, image, state.attempt)
                return self._parse(parse, text) if parse is not None else text
            except FoodAnalysisError as exc:
                match self._should_retry(exc):
                    case False:
                        logger.error(MSG_NOT_RETRYABLE, state.attempt, exc)
                        raise
                    case True:
                        state.last_error = exc

            match state.attempt < total:
                case True:
                    logger.warning(MSG_ATTEMPT_FAILED, state.attempt, total, delay_ms, state.last_error)
                    await self._sleep(delay_ms / 1000)
                case False:
                    logger.warning(MSG_ATTEMPT_GAVE_UP, state.attempt, total, state.last_error)

        raise state.last_error

    async def _call(self, prompt: str, image: EncodedImage, attempt: int) -> str:
        logger.info(MSG_CALLING_MODEL, self._client.name, attempt, self.total_attempts)
        try:
            return await self._client.generate(prompt, image)
        except FoodAnalysisError:
            raise
        except Exception as exc:
            raise TransportError(str(exc) or type(exc).__name__) from exc

    @staticmethod
    def _parse(parse: Callable[[str], T], text: str) -> T:
        try:
            return parse(text)
        except FoodAnalysisError:
            raise
        except Exception as exc:
            raise MalformedResponseError(
                str(exc) or type(exc).__name__, REASON_INVALID_JSON
            ) from exc

    def _should_retry(self, exc: FoodAnalysisError) -> bool:
        match exc:
            case InvalidResponseError() if not self._settings.retry_invalid_responses:
                return False
            case _:
                return exc.retryable
