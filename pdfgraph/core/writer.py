"""Write a :class:`~pdfgraph.core.document.Document` out through pypdf.

The object model is turned back into pypdf generic objects (the reverse of
the conversion done by :mod:`pdfgraph.core.parser`) and placed on a
:class:`pypdf.PdfWriter` at the same object numbers, so references keep
pointing where they did.  pypdf writes every object with generation 0 and
a classic cross-reference table; gaps in the numbering become free
entries.  With ``compress=True`` every compressible stream that carries no
``Filter`` is Flate-encoded by pypdf before writing.

The whole file is produced in memory before the destination is opened, so
a failure while building never leaves a half-written file behind.
"""

from __future__ import annotations

import io
import logging
import math
from pathlib import Path
from typing import Any, Iterable

from pypdf import PdfWriter
from pypdf.generic import (
    ArrayObject,
    BooleanObject,
    ByteStringObject,
    DictionaryObject,
    FloatObject,
    IndirectObject,
    NameObject,
    NullObject,
    NumberObject,
    PdfObject,
    StreamObject,
)

from .document import Document
from .exceptions import SaveError
from .objects import Name, ObjectId, Reference, Stream, String

LOGGER = logging.getLogger("pdfgraph.writer")


class _Builder:
    """Converts model values into pypdf generic objects bound to *writer*."""

    def __init__(self, writer: PdfWriter | None = None, *, compress: bool = False) -> None:
        self.writer = writer
        self.compress = compress

    def convert(self, value: Any) -> PdfObject:
        if value is None:
            return NullObject()
        if isinstance(value, bool):
            return BooleanObject(value)
        if isinstance(value, int):
            return NumberObject(value)
        if isinstance(value, float):
            if not math.isfinite(value):
                raise SaveError(f"Cannot write non-finite number {value!r}")
            return FloatObject(value)
        if isinstance(value, Name):
            return NameObject("/" + value.value)
        if isinstance(value, String):
            return ByteStringObject(value.value)
        if isinstance(value, Reference):
            # pypdf numbers every written object with generation 0
            return IndirectObject(value.target.number, 0, self.writer)
        if isinstance(value, Stream):
            raise SaveError("Streams must be indirect objects")
        if isinstance(value, dict):
            return self.dictionary(value)
        if isinstance(value, list):
            return ArrayObject(self.convert(item) for item in value)
        raise SaveError(f"Unsupported value type: {type(value).__name__}")

    def dictionary(self, value: dict[str, Any]) -> DictionaryObject:
        result = DictionaryObject()
        for key, item in value.items():
            result[NameObject("/" + key)] = self.convert(item)
        return result

    def stream(self, value: Stream) -> StreamObject:
        entries: dict[Any, Any] = dict(self.dictionary(value.dictionary))
        entries["__streamdata__"] = value.data
        result = StreamObject.initialize_from_dictionary(entries)
        if self.compress and value.compressible and "Filter" not in value.dictionary:
            result = result.flate_encode()
        return result

    def indirect(self, obj: Any) -> PdfObject:
        if isinstance(obj, Stream):
            return self.stream(obj)
        return self.convert(obj)


def serialize_object(value: Any) -> bytes:
    """Return the PDF syntax pypdf writes for a direct object."""

    buffer = io.BytesIO()
    _Builder().convert(value).write_to_stream(buffer)
    return buffer.getvalue()


def _check_unique_numbers(object_ids: Iterable[ObjectId]) -> None:
    numbers: set[int] = set()
    for object_id in object_ids:
        if object_id.number in numbers:
            raise SaveError(f"Object number {object_id.number} is used more than once")
        if object_id.number < 1:
            raise SaveError(f"Invalid object number {object_id.number}")
        numbers.add(object_id.number)


def _resolve_slot(writer: PdfWriter, value: Any, key: str) -> PdfObject:
    if not isinstance(value, Reference):
        raise SaveError(f"Trailer {key} must be an indirect reference")
    number = value.target.number
    if number > len(writer._objects) or writer._objects[number - 1] is None:
        raise SaveError(f"Trailer {key} points to missing object {value.target}")
    obj = writer._objects[number - 1]
    obj.indirect_reference = IndirectObject(number, 0, writer)
    return obj


def build_writer(document: Document, *, compress: bool = False) -> PdfWriter:
    """Return a :class:`PdfWriter` holding every object of *document*.

    Raises:
        SaveError: If the document cannot be expressed as a PDF file.
    """

    _check_unique_numbers(document.objects)
    if "Root" not in document.trailer:
        raise SaveError("Document trailer has no Root entry")

    writer = PdfWriter()
    builder = _Builder(writer, compress=compress)
    # drop the catalog, pages and info objects PdfWriter starts with
    writer._objects = [None] * max((oid.number for oid in document.objects), default=0)
    for object_id, obj in document.iter_objects():
        writer._objects[object_id.number - 1] = builder.indirect(obj)

    writer._root_object = _resolve_slot(writer, document.trailer["Root"], "Root")

    info = document.trailer.get("Info")
    if isinstance(info, dict):
        info_object = builder.dictionary(info)
        writer._objects.append(info_object)
        info_object.indirect_reference = IndirectObject(len(writer._objects), 0, writer)
        writer._info_obj = info_object
    elif info is not None:
        writer._info_obj = _resolve_slot(writer, info, "Info")
    else:
        writer._info_obj = None

    identifier = document.trailer.get("ID")
    if isinstance(identifier, list) and len(identifier) == 2 and all(isinstance(v, String) for v in identifier):
        writer._ID = ArrayObject(ByteStringObject(v.value) for v in identifier)
    else:
        writer._ID = None

    writer.pdf_header = f"%PDF-{document.version}"
    return writer


def serialize(document: Document, *, compress: bool = False) -> bytes:
    """Return the complete PDF file for *document*."""

    buffer = io.BytesIO()
    build_writer(document, compress=compress).write(buffer)
    return buffer.getvalue()


def save(document: Document, destination: str | Path, *, compress: bool = False) -> Path:
    """Write *document* to *destination* and return the path.

    Raises:
        SaveError: If the document cannot be serialised or the destination
            cannot be written.
    """

    path = Path(destination)
    data = serialize(document, compress=compress)
    try:
        path.write_bytes(data)
    except OSError as exc:
        LOGGER.error("Failed to write PDF to %s: %s", path, exc)
        raise SaveError(f"Failed to write PDF to {path}: {exc}") from exc
    LOGGER.debug("Wrote %d bytes to %s (compress=%s)", len(data), path, compress)
    return path


__all__ = ["build_writer", "serialize", "serialize_object", "save"]
