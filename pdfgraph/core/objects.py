"""PDF object primitives used by the pdfgraph engines.

PDF values map onto Python values as follows:

========== ===========================================
Null       ``None``
Boolean    ``bool``
Integer    ``int``
Real       ``float``
String     :class:`String` (raw bytes)
Name       :class:`Name` (stored without the leading slash)
Array      ``list``
Dictionary :class:`Dictionary`
Stream     :class:`Stream`
Reference  :class:`Reference`
========== ===========================================

Indirect objects are only ever linked through :class:`Reference` values,
which hold an :class:`ObjectId` and are resolved through the owning
:class:`~pdfgraph.core.document.Document`.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass, field
from typing import Any, NamedTuple, Union

from .exceptions import MissingKeyError, TypeMismatchError


class ObjectId(NamedTuple):
    """Identifier of an indirect object (``number``, ``generation``)."""

    number: int
    generation: int = 0

    def __str__(self) -> str:
        return f"{self.number} {self.generation} R"


@dataclass(frozen=True)
class Name:
    """A PDF name object such as ``/Page``."""

    value: str

    def __str__(self) -> str:
        return f"/{self.value}"


@dataclass(frozen=True)
class String:
    """A PDF string object holding raw bytes."""

    value: bytes

    @classmethod
    def from_text(cls, text: str) -> "String":
        try:
            return cls(text.encode("latin-1"))
        except UnicodeEncodeError:
            return cls(codecs.BOM_UTF16_BE + text.encode("utf-16-be"))

    def to_text(self) -> str:
        if self.value.startswith(codecs.BOM_UTF16_BE):
            return self.value[2:].decode("utf-16-be", errors="replace")
        return self.value.decode("latin-1")


@dataclass(frozen=True)
class Reference:
    """Non-owning link to an indirect object."""

    target: ObjectId

    @classmethod
    def to(cls, number: int, generation: int = 0) -> "Reference":
        return cls(ObjectId(number, generation))


class Dictionary(dict):
    """Mapping of name strings to PDF objects.

    Indexing an absent key raises :class:`MissingKeyError`; ``get`` keeps the
    usual mapping semantics for optional entries.
    """

    def __missing__(self, key: str) -> Any:
        raise MissingKeyError(key)

    def set(self, key: str, value: Any) -> None:
        self[key] = value

    def remove(self, key: str) -> None:
        self.pop(key, None)

    def get_dict(self, key: str) -> "Dictionary":
        return as_dict(self[key])

    def get_array(self, key: str) -> list:
        return as_array(self[key])

    def get_int(self, key: str) -> int:
        return as_int(self[key])

    def get_name(self, key: str) -> str:
        return as_name(self[key])

    def get_reference(self, key: str) -> ObjectId:
        return as_reference(self[key])

    def has_type(self, type_name: str) -> bool:
        value = self.get("Type")
        return isinstance(value, Name) and value.value == type_name

    def copy(self) -> "Dictionary":
        return Dictionary(self)


@dataclass
class Stream:
    """A stream object: a dictionary plus its (still encoded) payload.

    ``compressible`` marks the stream as eligible for Flate compression when
    the document is saved in compressed mode.
    """

    dictionary: Dictionary = field(default_factory=Dictionary)
    data: bytes = b""
    compressible: bool = True

    def has_type(self, type_name: str) -> bool:
        return self.dictionary.has_type(type_name)


PdfObject = Union[None, bool, int, float, String, Name, list, Dictionary, Stream, Reference]


def _variant(obj: Any) -> str:
    if obj is None:
        return "Null"
    if isinstance(obj, bool):
        return "Boolean"
    if isinstance(obj, int):
        return "Integer"
    if isinstance(obj, float):
        return "Real"
    if isinstance(obj, Stream):
        return "Stream"
    if isinstance(obj, dict):
        return "Dictionary"
    if isinstance(obj, list):
        return "Array"
    return type(obj).__name__


def _mismatch(expected: str, obj: Any) -> TypeMismatchError:
    return TypeMismatchError(f"Expected {expected}, found {_variant(obj)}")


def as_dict(obj: Any) -> Dictionary:
    if isinstance(obj, Dictionary):
        return obj
    raise _mismatch("Dictionary", obj)


def as_stream(obj: Any) -> Stream:
    if isinstance(obj, Stream):
        return obj
    raise _mismatch("Stream", obj)


def as_array(obj: Any) -> list:
    if isinstance(obj, list):
        return obj
    raise _mismatch("Array", obj)


def as_int(obj: Any) -> int:
    if isinstance(obj, int) and not isinstance(obj, bool):
        return obj
    raise _mismatch("Integer", obj)


def as_real(obj: Any) -> float:
    if isinstance(obj, float):
        return obj
    raise _mismatch("Real", obj)


def as_bool(obj: Any) -> bool:
    if isinstance(obj, bool):
        return obj
    raise _mismatch("Boolean", obj)


def as_name(obj: Any) -> str:
    if isinstance(obj, Name):
        return obj.value
    raise _mismatch("Name", obj)


def as_string(obj: Any) -> bytes:
    if isinstance(obj, String):
        return obj.value
    raise _mismatch("String", obj)


def as_reference(obj: Any) -> ObjectId:
    if isinstance(obj, Reference):
        return obj.target
    raise _mismatch("Reference", obj)


def type_name(obj: Any) -> str | None:
    """Return the ``/Type`` of a dictionary or stream, if it has one."""

    if isinstance(obj, Stream):
        obj = obj.dictionary
    if isinstance(obj, Dictionary):
        value = obj.get("Type")
        if isinstance(value, Name):
            return value.value
    return None


__all__ = [
    "ObjectId",
    "Name",
    "String",
    "Reference",
    "Dictionary",
    "Stream",
    "PdfObject",
    "as_dict",
    "as_stream",
    "as_array",
    "as_int",
    "as_real",
    "as_bool",
    "as_name",
    "as_string",
    "as_reference",
    "type_name",
]
