"""Embed text annotations in image pixels.

The payload ``MAGIC + uint32 length + UTF-8 text`` is written one bit per
channel byte into the least-significant bits of the RGB raster, most
significant payload bit first. The result is encoded as PNG because any
lossy re-encode would destroy the payload.
"""
from __future__ import annotations

import io
import struct

from PIL import Image

from stegvault.errors import DecodeError, EncodeError

MAGIC = b"SVA1"
_HEADER = struct.Struct(">4sI")


def _bits(payload: bytes):
    for byte in payload:
        for shift in range(7, -1, -1):
            yield (byte >> shift) & 1


def _read_bytes(raster: bytes, offset: int, count: int) -> bytes:
    out = bytearray()
    for start in range(offset, offset + count * 8, 8):
        value = 0
        for channel in raster[start:start + 8]:
            value = (value << 1) | (channel & 1)
        out.append(value)
    return bytes(out)


class LsbAnnotator:
    """Least-significant-bit annotating encoder."""

    @staticmethod
    def capacity(img: Image.Image) -> int:
        """Number of annotation bytes ``img`` can carry."""

        return max(0, img.width * img.height * 3 // 8 - _HEADER.size)

    def encode(self, img: Image.Image, text: str) -> bytes:
        message = text.encode("utf-8")
        if len(message) > self.capacity(img):
            raise EncodeError(
                f"Annotation of {len(message)} bytes does not fit a "
                f"{img.width}x{img.height} image ({self.capacity(img)} bytes max)"
            )

        raster = bytearray(img.convert("RGB").tobytes())
        payload = _HEADER.pack(MAGIC, len(message)) + message
        for index, bit in enumerate(_bits(payload)):
            raster[index] = (raster[index] & 0xFE) | bit

        buffer = io.BytesIO()
        try:
            Image.frombytes("RGB", img.size, bytes(raster)).save(buffer, format="PNG")
        except (OSError, ValueError) as exc:
            raise EncodeError(f"PNG encoding failed: {exc}") from exc
        return buffer.getvalue()

    def reveal(self, data: bytes) -> str:
        """Return the annotation embedded by :meth:`encode`."""

        try:
            with Image.open(io.BytesIO(data)) as img:
                raster = img.convert("RGB").tobytes()
        except (OSError, EOFError, SyntaxError, ValueError) as exc:
            raise DecodeError(f"Malformed image data: {exc}") from exc

        header_bits = _HEADER.size * 8
        if len(raster) < header_bits:
            raise DecodeError("Image is too small to carry an annotation")
        magic, length = _HEADER.unpack(_read_bytes(raster, 0, _HEADER.size))
        if magic != MAGIC or header_bits + length * 8 > len(raster):
            raise DecodeError("Image carries no annotation")
        try:
            return _read_bytes(raster, header_bits, length).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError("Annotation is not valid UTF-8") from exc
