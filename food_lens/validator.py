"""Response validator — untrusted model text → AnalysisResult or a classified error."""
import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from food_lens.constants import (
    MSG_INVALID_JSON,
    MSG_NO_JSON_PATTERN,
    REASON_INVALID_JSON,
    REASON_NO_JSON,
    REQUIRED_NUTRIENTS,
)
from food_lens.errors import MalformedResponseError, MissingFieldError
from food_lens.schema import AnalysisResult

logger = logging.getLogger(__name__)

# Greedy: first "{" to last "}" so nested objects stay intact.
_JSON_OBJECT = re.compile(r"\{.*\}", flags=re.S)


def extract_json(text: str) -> Any:
    """Parse the whole text as JSON, else the outermost brace pair inside it."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, RecursionError):
        pass

    match _JSON_OBJECT.search(text):
        case None:
            logger.debug("Non-JSON response: %s", text[:300])
            raise MalformedResponseError(MSG_NO_JSON_PATTERN, REASON_NO_JSON)
        case m:
            try:
                return json.loads(m.group(0))
            except (json.JSONDecodeError, RecursionError) as exc:
                logger.debug("Embedded JSON did not parse: %s", text[:300])
                raise MalformedResponseError(MSG_INVALID_JSON, REASON_INVALID_JSON) from exc


def _missing_fields(exc: ValidationError) -> tuple[str, ...]:
    """Reduce pydantic errors to the required fields that are absent, in check order."""
    locs = [err["loc"] for err in exc.errors()]
    match locs:
        case _ if any(loc in ((), ("food",)) for loc in locs):
            return ("food",)
        case _ if ("nutritionInfo",) in locs:
            return ("nutritionInfo",)
        case _:
            nutrients = {loc[1] for loc in locs if loc[:1] == ("nutritionInfo",) and len(loc) > 1}
            return tuple(n for n in REQUIRED_NUTRIENTS if n in nutrients)


def validate_response(text: str, *, include_raw: bool = False) -> AnalysisResult:
    payload = extract_json(text)
    try:
        result = AnalysisResult.model_validate(payload)
    except ValidationError as exc:
        match _missing_fields(exc):
            case ():
                raise MalformedResponseError(str(exc), REASON_INVALID_JSON) from exc
            case fields:
                raise MissingFieldError(fields) from exc
    return result.model_copy(update={"raw_response": text if include_raw else None})
