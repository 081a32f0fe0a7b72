"""Error taxonomy for the analysis pipeline.

Every error the pipeline raises derives from FoodAnalysisError. The
``retryable`` marker tells the inference invoker whether a failure inside an
attempt should consume a retry or surface immediately.
"""
from food_lens.constants import (
    KEYWORD_API_KEY,
    KEYWORD_FILE_NOT_FOUND,
    KEYWORD_VALID_JSON,
    MSG_MISSING_FIELD,
    MSG_MISSING_NUTRIENTS,
    MSG_UNKNOWN_ERROR,
    MSG_USER_ANALYSIS,
    MSG_USER_AUTH,
    MSG_USER_GENERIC,
    MSG_USER_IMAGE_ACCESS,
    REQUIRED_NUTRIENTS,
)


class FoodAnalysisError(Exception):
    retryable: bool = False

    @property
    def user_message(self) -> str:
        return describe_failure(self)


# ── loader errors (never retried) ─────────────────────────────────────────────


class InputError(FoodAnalysisError):
    """Missing or invalid image reference."""


class NotFoundError(InputError):
    """The image reference points at nothing."""


class ReadError(FoodAnalysisError):
    """The image exists but its bytes could not be read."""


# ── attempt errors (consume a retry) ──────────────────────────────────────────


class AuthenticationError(FoodAnalysisError):
    retryable = True


class TransportError(FoodAnalysisError):
    """Any remote-call failure not otherwise classified."""

    retryable = True


class InvalidResponseError(FoodAnalysisError):
    """Model text could not be turned into a valid AnalysisResult."""

    retryable = True


class MalformedResponseError(InvalidResponseError):

    def __init__(self, message: str, reason: str) -> None:
        super().__init__(message)
        self.reason = reason


class MissingFieldError(InvalidResponseError):

    def __init__(self, fields: tuple[str, ...]) -> None:
        self.fields = fields
        match fields:
            case (field,) if field not in REQUIRED_NUTRIENTS:
                message = MSG_MISSING_FIELD % field
            case _:
                message = MSG_MISSING_NUTRIENTS % ", ".join(fields)
        super().__init__(message)


# ── caller-facing classification ──────────────────────────────────────────────


def describe_failure(exc: BaseException) -> str:
    """Map a pipeline failure to the message shown to the caller."""
    text = str(exc)
    lowered = text.lower()
    match exc:
        case AuthenticationError():
            return MSG_USER_AUTH
        case InputError() | ReadError():
            return MSG_USER_IMAGE_ACCESS
        case MalformedResponseError():
            return MSG_USER_ANALYSIS
        case _ if KEYWORD_API_KEY in lowered:
            return MSG_USER_AUTH
        case _ if KEYWORD_FILE_NOT_FOUND in lowered:
            return MSG_USER_IMAGE_ACCESS
        case _ if KEYWORD_VALID_JSON in lowered:
            return MSG_USER_ANALYSIS
        case _:
            return MSG_USER_GENERIC % (text or MSG_UNKNOWN_ERROR)
