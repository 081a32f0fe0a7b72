"""OpenAIVisionClient — OpenAI GPT-4o vision backend."""
from openai import AsyncOpenAI
from openai import AuthenticationError as OpenAIAuthError

from food_lens.constants import MSG_API_KEY_REJECTED, OPENAI_VISION_MODEL
from food_lens.errors import AuthenticationError
from food_lens.image_loader import EncodedImage
from food_lens.vision.client import VisionClient


class OpenAIVisionClient(VisionClient):
    name = "openai"

    def __init__(self, api_key: str, model: str = OPENAI_VISION_MODEL) -> None:
        self._api_key = api_key
        self._model = model

    async def generate(self, prompt: str, image: EncodedImage) -> str:
        client = AsyncOpenAI(api_key=self._api_key)
        try:
            response = await client.chat.completions.create(
                model=self._model,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": prompt},
                            {
                                "type": "image_url",
                                "image_url": {"url": f"data:{image.mime_type};base64,{image.data}"},
                            },
                        ],
                    }
                ],
            )
        except OpenAIAuthError as exc:
            raise AuthenticationError(MSG_API_KEY_REJECTED % (self.name, exc)) from exc
        content = response.choices[0].message.content
        return content.strip() if content else ""
