"""ClaudeVisionClient — Anthropic Claude vision backend."""
from anthropic import AsyncAnthropic
from anthropic import AuthenticationError as AnthropicAuthError

from food_lens.constants import CLAUDE_MAX_TOKENS, CLAUDE_VISION_MODEL, MSG_API_KEY_REJECTED
from food_lens.errors import AuthenticationError
from food_lens.image_loader import EncodedImage
from food_lens.vision.client import VisionClient


class ClaudeVisionClient(VisionClient):
    name = "anthropic"

    def __init__(self, api_key: str, model: str = CLAUDE_VISION_MODEL) -> None:
        self._api_key = api_key
        self._model = model

    async def generate(self, prompt: str, image: EncodedImage) -> str:
        client = AsyncAnthropic(api_key=self._api_key)
        try:
            message = await client.messages.create(
                model=self._model,
                max_tokens=CLAUDE_MAX_TOKENS,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": prompt},
                            {
                                "type": "image",
                                "source": {
                                    "type": "base64",
                                    "media_type": image.mime_type,
                                    "data": image.data,
                                },
                            },
                        ],
                    }
                ],
            )
        except AnthropicAuthError as exc:
            raise AuthenticationError(MSG_API_KEY_REJECTED % (self.name, exc)) from exc
        return message.content[0].text.strip()
