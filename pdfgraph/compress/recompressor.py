"""Re-encode embedded images as downscaled JPEG."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path

from ..core.codec import ImageCodec, PillowCodec
from ..core.document import Document
from ..core.exceptions import DecodeError, InvalidArgumentError
from ..core.graph import nullify_dangling
from ..core.objects import Name, ObjectId, Stream
from ..core.parser import load
from ..core.validator import ensure_output_parent, ensure_pdf_exists, find_integrity_issues
from ..core.writer import save

_LOGGER = logging.getLogger("pdfgraph.compress")

# Entries describing the previous encoding of the pixel data
_STALE_IMAGE_KEYS = ("DecodeParms", "Decode", "SMaskInData")


@dataclasses.dataclass(slots=True, frozen=True)
class RecompressionSettings:
    """JPEG quality (1-100) and the factor applied to both image dimensions."""

    quality: int = 75
    scale: float = 0.75

    def __post_init__(self) -> None:
        if isinstance(self.quality, bool) or not isinstance(self.quality, int) or not 1 <= self.quality <= 100:
            raise InvalidArgumentError(f"JPEG quality must be between 1 and 100, got {self.quality!r}")
        if not 0 < self.scale <= 1:
            raise InvalidArgumentError(f"Scale must be within (0, 1], got {self.scale!r}")


DEFAULT_SETTINGS = RecompressionSettings()


@dataclasses.dataclass(slots=True)
class RecompressionReport:
    """Identifiers of image streams that were rewritten or left alone."""

    recompressed: list[ObjectId] = dataclasses.field(default_factory=list)
    skipped: list[ObjectId] = dataclasses.field(default_factory=list)


@dataclasses.dataclass(slots=True)
class CompressionResult:
    """Represents the outcome of a recompression run."""

    input_path: Path
    output_path: Path
    original_size: int
    compressed_size: int
    recompressed: int
    skipped: int

    @property
    def bytes_saved(self) -> int:
        return max(self.original_size - self.compressed_size, 0)

    @property
    def compression_ratio(self) -> float:
        if self.original_size == 0:
            return 1.0
        return self.compressed_size / self.original_size


def is_image_xobject(stream: Stream) -> bool:
    subtype = stream.dictionary.get("Subtype")
    return stream.has_type("XObject") and isinstance(subtype, Name) and subtype.value == "Image"


def _transcode(stream: Stream, settings: RecompressionSettings, codec: ImageCodec) -> None:
    bitmap = codec.decode(stream.data)
    width = max(1, int(bitmap.width * settings.scale))
    height = max(1, int(bitmap.height * settings.scale))
    encoded = codec.encode(codec.resize(bitmap, width, height), settings.quality)

    dictionary = stream.dictionary
    for key in _STALE_IMAGE_KEYS:
        dictionary.remove(key)
    dictionary["Filter"] = Name("DCTDecode")
    dictionary["ColorSpace"] = Name("DeviceRGB")
    dictionary["BitsPerComponent"] = 8
    dictionary["Width"] = width
    dictionary["Height"] = height
    stream.data = encoded
    stream.compressible = True


def recompress_images(
    document: Document,
    settings: RecompressionSettings = DEFAULT_SETTINGS,
    codec: ImageCodec | None = None,
) -> RecompressionReport:
    """Rewrite every decodable image XObject of *document* in place.

    Images the codec cannot decode are left untouched and reported as
    skipped; no object is added, removed or reordered.
    """

    codec = codec or PillowCodec()
    report = RecompressionReport()
    for object_id, stream in document.streams():
        if not is_image_xobject(stream):
            continue
        try:
            _transcode(stream, settings, codec)
        except DecodeError as exc:
            _LOGGER.warning("Leaving image %s unchanged: %s", object_id, exc)
            report.skipped.append(object_id)
            continue
        _LOGGER.debug("Recompressed image %s", object_id)
        report.recompressed.append(object_id)
    return report


def recompress_pdf(
    input: str | Path,
    output: str | Path,
    settings: RecompressionSettings | None = None,
    *,
    codec: ImageCodec | None = None,
) -> CompressionResult:
    """Recompress the images of *input* and write the result to *output*.

    Raises:
        LoadError: If *input* cannot be read.
        SaveError: If *output* cannot be written.
    """

    settings = settings or DEFAULT_SETTINGS
    source_path = ensure_pdf_exists(input)
    output_path = ensure_output_parent(output)
    original_size = source_path.stat().st_size

    document = load(source_path)
    report = recompress_images(document, settings, codec)
    nullify_dangling(document)
    for issue in find_integrity_issues(document):
        _LOGGER.warning("%s: %s", source_path, issue)
    save(document, output_path, compress=True)

    result = CompressionResult(
        input_path=source_path,
        output_path=output_path,
        original_size=original_size,
        compressed_size=output_path.stat().st_size,
        recompressed=len(report.recompressed),
        skipped=len(report.skipped),
    )
    _LOGGER.info(
        "Recompressed %d image(s), skipped %d; %s -> %s bytes",
        result.recompressed,
        result.skipped,
        result.original_size,
        result.compressed_size,
    )
    return result


__all__ = [
    "RecompressionSettings",
    "RecompressionReport",
    "CompressionResult",
    "DEFAULT_SETTINGS",
    "is_image_xobject",
    "recompress_images",
    "recompress_pdf",
]
