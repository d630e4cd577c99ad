"""
Custom exceptions for pdfgraph.

Every failure raised by the engines derives from :class:`PdfGraphError` so
callers can handle the whole family with a single ``except`` clause.
"""

from __future__ import annotations


class PdfGraphError(Exception):
    """Base exception for all pdfgraph errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown PDF graph error occurred."


class LoadError(PdfGraphError):
    """Raised when a source document cannot be read or parsed."""

    @property
    def default_message(self) -> str:
        return "Unable to load PDF document."


class StructuralError(PdfGraphError):
    """Raised when a document lacks a Catalog or page tree, or has no pages."""

    @property
    def default_message(self) -> str:
        return "PDF document structure is invalid."


class InvalidArgumentError(PdfGraphError, ValueError):
    """Raised when an operation is called with an unusable argument."""

    @property
    def default_message(self) -> str:
        return "Invalid argument."


class SaveError(PdfGraphError):
    """Raised when the destination cannot be written."""

    @property
    def default_message(self) -> str:
        return "Unable to save PDF document."


class DecodeError(PdfGraphError):
    """Raised when an image payload cannot be transcoded."""

    @property
    def default_message(self) -> str:
        return "Unable to decode image data."


class TypeMismatchError(PdfGraphError, TypeError):
    """Raised when an object is read as the wrong variant."""

    @property
    def default_message(self) -> str:
        return "Object has an unexpected type."


class MissingKeyError(PdfGraphError, KeyError):
    """Raised when a dictionary lookup by name finds nothing."""

    def __init__(self, key: str, message: str = "") -> None:
        self.key = key
        super().__init__(message or f"Dictionary has no key /{key}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self.message


class MissingObjectError(PdfGraphError, LookupError):
    """Raised when a reference is dereferenced but its target is absent."""

    @property
    def default_message(self) -> str:
        return "Referenced object does not exist."


__all__ = [
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
