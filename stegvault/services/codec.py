"""Pillow-backed image codec.

Decoding always yields an RGB image; the canonical output format served to
browsers is JPEG.
"""
from __future__ import annotations

import io
import logging

from PIL import Image, UnidentifiedImageError

from stegvault.errors import DecodeError, EncodeError
from stegvault.models import ResizeStep

logger = logging.getLogger(__name__)

_RESAMPLING = {
    "downsample": Image.Resampling.NEAREST,
    "resize": Image.Resampling.LANCZOS,
}


class PillowCodec:  # pylint: disable=too-few-public-methods
    """Decode, resize and JPEG-encode images with Pillow."""

    def __init__(self, *, quality: int = 85) -> None:
        self._quality = quality

    def decode(self, data: bytes) -> Image.Image:
        try:
            with Image.open(io.BytesIO(data)) as img:
                img.load()
                return img.convert("RGB")
        except (UnidentifiedImageError, Image.DecompressionBombError) as exc:
            raise DecodeError(f"Unsupported or oversized image: {exc}") from exc
        except (OSError, EOFError, SyntaxError, ValueError) as exc:
            raise DecodeError(f"Malformed image data: {exc}") from exc

    def apply(self, img: Image.Image, step: ResizeStep) -> Image.Image:
        logger.debug("%s %sx%s -> %sx%s", step.kind, img.width, img.height, step.width, step.height)
        return img.resize(step.size, _RESAMPLING[step.kind])

    def encode(self, img: Image.Image) -> bytes:
        buffer = io.BytesIO()
        try:
            img.save(buffer, format="JPEG", quality=self._quality)
        except (OSError, ValueError) as exc:
            raise EncodeError(f"JPEG encoding failed: {exc}") from exc
        return buffer.getvalue()
