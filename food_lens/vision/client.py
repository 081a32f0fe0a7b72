"""VisionClient — abstract base for remote multimodal backends."""
from abc import ABC, abstractmethod

from food_lens.image_loader import EncodedImage


class VisionClient(ABC):
    name: str

    @abstractmethod
    async def generate(self, prompt: str, image: EncodedImage) -> str:
        """Send prompt + inline image, return the model's text. Raises on failure."""
        ...
