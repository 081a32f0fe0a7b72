"""GeminiVisionClient — Google Gemini backend via the google-genai SDK."""
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from food_lens.constants import GEMINI_VISION_MODEL, KEYWORD_API_KEY, MSG_API_KEY_REJECTED
from food_lens.errors import AuthenticationError
from food_lens.image_loader import EncodedImage
from food_lens.vision.client import VisionClient

_AUTH_STATUS_CODES = (401, 403)


def _is_auth_failure(exc: genai_errors.ClientError) -> bool:
    # An invalid key comes back as 400 INVALID_ARGUMENT, so check the text too.
    return exc.code in _AUTH_STATUS_CODES or KEYWORD_API_KEY in str(exc).lower()


class GeminiVisionClient(VisionClient):
    name = "google"

    def __init__(self, api_key: str, model: str = GEMINI_VISION_MODEL) -> None:
        self._api_key = api_key
        self._model = model

    async def generate(self, prompt: str, image: EncodedImage) -> str:
        client = genai.Client(api_key=self._api_key)
        try:
            response = await client.aio.models.generate_content(
                model=self._model,
                contents=[
                    prompt,
                    genai_types.Part.from_bytes(data=image.to_bytes(), mime_type=image.mime_type),
                ],
            )
        except genai_errors.ClientError as exc:
            if _is_auth_failure(exc):
                raise AuthenticationError(MSG_API_KEY_REJECTED % (self.name, exc)) from exc
            raise
        text = response.text
        return text.strip() if text else ""
