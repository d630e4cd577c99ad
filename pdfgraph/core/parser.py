"""Load PDF files into the pdfgraph object model using :mod:`pypdf`.

pypdf does the tokenizing, cross-reference resolution and decryption; this
module walks everything reachable from the trailer and converts pypdf's
generic objects into :mod:`pdfgraph.core.objects` values, keeping the
original object numbers and the still-encoded stream payloads.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Any

from pypdf import PdfReader
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
    StreamObject,
    TextStringObject,
)

from .document import Document
from .exceptions import LoadError
from .objects import Dictionary, Name, ObjectId, Reference, Stream, String

LOGGER = logging.getLogger("pdfgraph.parser")

_TRAILER_KEYS = ("/Root", "/Info", "/ID")


def _read_source(source: str | Path | bytes) -> tuple[bytes, str]:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source), "<bytes>"
    path = Path(source)
    try:
        return path.read_bytes(), str(path)
    except OSError as exc:
        raise LoadError(f"Unable to read PDF file {path}: {exc}") from exc


def _open_reader(raw: bytes, label: str) -> PdfReader:
    reader = PdfReader(io.BytesIO(raw), strict=False)
    if reader.is_encrypted:
        LOGGER.debug("Attempting to decrypt encrypted PDF %s", label)
        reader.decrypt("")
    return reader


def _header_version(reader: PdfReader) -> str:
    header = reader.pdf_header or ""
    if header.startswith("%PDF-"):
        return header[5:].strip() or "1.7"
    return "1.7"


def _is_metadata(stream: StreamObject) -> bool:
    # XMP packets are expected to stay readable as plain text
    return stream.get("/Type") == "/Metadata"


class _Converter:
    """Converts pypdf generic objects, queuing indirect objects as found."""

    def __init__(self, reader: PdfReader) -> None:
        self.reader = reader
        self.pending: list[ObjectId] = []
        self.seen: set[ObjectId] = set()

    def reference(self, indirect: IndirectObject) -> Reference:
        object_id = ObjectId(indirect.idnum, indirect.generation)
        if object_id not in self.seen:
            self.seen.add(object_id)
            self.pending.append(object_id)
        return Reference(object_id)

    def convert(self, value: Any) -> Any:
        if isinstance(value, IndirectObject):
            return self.reference(value)
        if value is None or isinstance(value, NullObject):
            return None
        if isinstance(value, BooleanObject):
            return bool(value.value)
        if isinstance(value, NameObject):
            return Name(str(value)[1:])
        if isinstance(value, NumberObject):
            return int(value)
        if isinstance(value, FloatObject):
            return float(value)
        if isinstance(value, TextStringObject):
            return String(bytes(value.original_bytes))
        if isinstance(value, ByteStringObject):
            return String(bytes(value))
        if isinstance(value, StreamObject):
            return Stream(
                dictionary=self.dictionary(value),
                data=bytes(value._data or b""),
                compressible=not _is_metadata(value),
            )
        if isinstance(value, DictionaryObject):
            return self.dictionary(value)
        if isinstance(value, ArrayObject):
            return [self.convert(item) for item in value]
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return int(value)
        if isinstance(value, float):
            return float(value)
        if isinstance(value, str):
            return String.from_text(value)
        if isinstance(value, bytes):
            return String(value)
        raise LoadError(f"Unsupported PDF object type: {type(value).__name__}")

    def dictionary(self, value: DictionaryObject) -> Dictionary:
        result = Dictionary()
        # items() yields unresolved IndirectObjects, unlike __getitem__
        for key, item in value.items():
            result[str(key).lstrip("/")] = self.convert(item)
        return result

    def resolve(self, object_id: ObjectId) -> Any:
        return IndirectObject(object_id.number, object_id.generation, self.reader).get_object()


def load(source: str | Path | bytes) -> Document:
    """Load *source* (a path or raw bytes) into a :class:`Document`.

    Raises:
        LoadError: If the data cannot be read or parsed.
    """

    raw, label = _read_source(source)
    try:
        reader = _open_reader(raw, label)
        converter = _Converter(reader)
        trailer = Dictionary()
        for key in _TRAILER_KEYS:
            if key in reader.trailer:
                trailer[key[1:]] = converter.convert(reader.trailer.raw_get(key))
        if not isinstance(trailer.get("Root"), Reference):
            raise LoadError(f"PDF trailer has no Root reference: {label}")

        objects: dict[ObjectId, Any] = {}
        while converter.pending:
            object_id = converter.pending.pop()
            resolved = converter.resolve(object_id)
            if resolved is None or isinstance(resolved, NullObject):
                LOGGER.debug("Object %s is missing from %s", object_id, label)
                continue
            objects[object_id] = converter.convert(resolved)
        version = _header_version(reader)
    except LoadError:
        raise
    except Exception as exc:  # malformed input surfaces as many exception types
        LOGGER.error("Failed to parse PDF %s: %s", label, exc)
        raise LoadError(f"Unable to parse PDF {label}: {exc}") from exc

    LOGGER.debug("Loaded %d object(s) from %s", len(objects), label)
    return Document(objects=objects, trailer=trailer, version=version)


__all__ = ["load"]
