"""Image loader — local image reference → base64 payload for the model."""
import asyncio
import base64
import errno
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote, urlparse

from food_lens.constants import (
    FILE_URI_SCHEME,
    IMAGE_MIME_TYPE,
    MSG_IMAGE_INVALID,
    MSG_IMAGE_LOADED,
    MSG_IMAGE_NOT_FOUND,
    MSG_IMAGE_READ_FAILED,
    MSG_IMAGE_REQUIRED,
)
from food_lens.errors import InputError, NotFoundError, ReadError

logger = logging.getLogger(__name__)

ImageRef = str | os.PathLike


@dataclass(frozen=True)
class EncodedImage:
    data: str
    mime_type: str = IMAGE_MIME_TYPE

    def to_bytes(self) -> bytes:
        return base64.standard_b64decode(self.data)


def resolve_path(ref: ImageRef | None) -> Path:
    """Turn a path or ``file://`` URI into a local Path. Raises InputError."""
    match ref:
        case None | "":
            raise InputError(MSG_IMAGE_REQUIRED)
        case str() as s if urlparse(s).scheme == FILE_URI_SCHEME:
            return Path(unquote(urlparse(s).path))
        case str() | os.PathLike():
            return Path(ref)
        case _:
            raise InputError(MSG_IMAGE_REQUIRED)


async def load_image(ref: ImageRef | None) -> EncodedImage:
    path = resolve_path(ref)
    try:
        exists = path.exists()
    except OSError as exc:
        match exc.errno:
            case errno.ENAMETOOLONG:
                raise InputError(MSG_IMAGE_INVALID % exc) from exc
            case _:
                raise ReadError(MSG_IMAGE_READ_FAILED % exc) from exc
    if not exists:
        raise NotFoundError(MSG_IMAGE_NOT_FOUND % path)
    try:
        raw = await asyncio.to_thread(path.read_bytes)
    except OSError as exc:
        raise ReadError(MSG_IMAGE_READ_FAILED % exc) from exc
    logger.debug(MSG_IMAGE_LOADED, path, len(raw))
    return EncodedImage(data=base64.standard_b64encode(raw).decode())
