"""Image stream recompression."""

from .recompressor import (
    DEFAULT_SETTINGS,
    CompressionResult,
    RecompressionReport,
    RecompressionSettings,
    recompress_images,
    recompress_pdf,
)

__all__ = [
    "DEFAULT_SETTINGS",
    "CompressionResult",
    "RecompressionReport",
    "RecompressionSettings",
    "recompress_images",
    "recompress_pdf",
]
