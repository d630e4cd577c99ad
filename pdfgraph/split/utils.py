"""Utility helpers for the :mod:`pdfgraph.split` package."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List

from ..core.exceptions import InvalidArgumentError

OUTPUT_DIRECTORY_SUFFIX = "-pages"
_RANGE_PATTERN = re.compile(r"^(\d+)\s*-\s*(\d+)$")


def resolve_output_directory(source: Path, output_dir: str | Path) -> Path:
    """Return the directory that receives the pages of *source*.

    The pages go into a ``<stem>-pages`` folder inside *output_dir*, unless
    *output_dir* already is that folder.
    """

    base = Path(output_dir).expanduser().resolve()
    folder_name = f"{source.stem}{OUTPUT_DIRECTORY_SUFFIX}"
    if base.name == folder_name:
        return base
    return base / folder_name


def page_filename(page_number: int) -> str:
    return f"page-{page_number}.pdf"


def parse_page_spec(spec: str) -> List[int]:
    """Parse ``"1,3,5-7"`` into a sorted list of unique page numbers.

    Raises:
        InvalidArgumentError: If a token is not a positive number or range.
    """

    pages: set[int] = set()
    for token in (part.strip() for part in spec.split(",")):
        if not token:
            continue
        match = _RANGE_PATTERN.match(token)
        if match:
            start, end = int(match.group(1)), int(match.group(2))
            if start < 1 or start > end:
                raise InvalidArgumentError(f"Invalid page range: {token}")
            pages.update(range(start, end + 1))
            continue
        if not token.isdigit() or int(token) < 1:
            raise InvalidArgumentError(f"Invalid page number: {token}")
        pages.add(int(token))
    if not pages:
        raise InvalidArgumentError(f"No pages selected: {spec!r}")
    return sorted(pages)


__all__ = ["resolve_output_directory", "page_filename", "parse_page_spec"]
