"""Object model, graph algorithms and the parser/serializer collaborators."""

from .document import Document
from .exceptions import (
    DecodeError,
    InvalidArgumentError,
    LoadError,
    MissingKeyError,
    MissingObjectError,
    PdfGraphError,
    SaveError,
    StructuralError,
    TypeMismatchError,
)
from .graph import closure, remap, renumber
from .objects import Dictionary, Name, ObjectId, Reference, Stream, String
from .parser import load
from .writer import save, serialize

__all__ = [
    "Document",
    "Dictionary",
    "Name",
    "ObjectId",
    "Reference",
    "Stream",
    "String",
    "closure",
    "remap",
    "renumber",
    "load",
    "save",
    "serialize",
    "PdfGraphError",
    "LoadError",
    "StructuralError",
    "InvalidArgumentError",
    "SaveError",
    "DecodeError",
    "TypeMismatchError",
    "MissingKeyError",
    "MissingObjectError",
]
