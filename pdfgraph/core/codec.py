"""Bitmap codec used by image recompression."""

from __future__ import annotations

import io
from typing import Protocol

from PIL import Image, UnidentifiedImageError

from .exceptions import DecodeError


class ImageCodec(Protocol):
    """Decode, resize and encode bitmaps for the recompression pass."""

    def decode(self, data: bytes) -> Image.Image:
        ...

    def resize(self, bitmap: Image.Image, width: int, height: int) -> Image.Image:
        ...

    def encode(self, bitmap: Image.Image, quality: int) -> bytes:
        ...


class PillowCodec:
    """:class:`ImageCodec` backed by Pillow; emits baseline JPEG."""

    def decode(self, data: bytes) -> Image.Image:
        try:
            with Image.open(io.BytesIO(data)) as img:
                img.load()
                return img.copy()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError, SyntaxError) as exc:
            raise DecodeError(f"Unable to decode image: {exc}") from exc

    def resize(self, bitmap: Image.Image, width: int, height: int) -> Image.Image:
        return bitmap.resize((max(1, width), max(1, height)), Image.LANCZOS)

    def encode(self, bitmap: Image.Image, quality: int) -> bytes:
        buffer = io.BytesIO()
        try:
            if bitmap.mode != "RGB":
                bitmap = bitmap.convert("RGB")
            bitmap.save(buffer, format="JPEG", quality=quality)
        except (OSError, ValueError) as exc:
            raise DecodeError(f"Unable to encode image: {exc}") from exc
        return buffer.getvalue()


__all__ = ["ImageCodec", "PillowCodec"]
