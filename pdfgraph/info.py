"""Summaries of a document's object graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .compress.recompressor import is_image_xobject
from .core.document import Document
from .core.outline import read_titles
from .core.parser import load
from .core.validator import ensure_pdf_exists, find_integrity_issues


@dataclass
class DocumentInfo:
    """Facts about a loaded document.

    Attributes:
        version: Header version.
        page_count: Number of page leaves.
        object_count: Number of indirect objects reachable from the trailer.
        image_count: Number of image XObject streams.
        outline_titles: Titles of the top-level bookmarks.
        issues: Broken graph invariants, if any.
    """

    version: str
    page_count: int
    object_count: int
    image_count: int
    outline_titles: list[str] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)

    @property
    def has_outlines(self) -> bool:
        return bool(self.outline_titles)


def describe(document: Document) -> DocumentInfo:
    return DocumentInfo(
        version=document.version,
        page_count=len(document.get_pages()),
        object_count=len(document),
        image_count=sum(1 for _, stream in document.streams() if is_image_xobject(stream)),
        outline_titles=read_titles(document),
        issues=find_integrity_issues(document),
    )


def describe_pdf(path: str | Path) -> DocumentInfo:
    return describe(load(ensure_pdf_exists(path)))


__all__ = ["DocumentInfo", "describe", "describe_pdf"]
