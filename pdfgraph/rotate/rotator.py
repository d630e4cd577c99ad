"""Rotate pages by rewriting their ``Rotate`` attribute."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable

from ..core.document import Document
from ..core.exceptions import InvalidArgumentError, SaveError
from ..core.graph import nullify_dangling
from ..core.objects import ObjectId
from ..core.parser import load
from ..core.validator import ensure_output_parent, ensure_pdf_exists, find_integrity_issues
from ..core.writer import save

LOGGER = logging.getLogger("pdfgraph.rotate")


def normalize_rotation(degrees: int) -> int:
    """Return *degrees* in ``[0, 360)``.

    Raises:
        InvalidArgumentError: If *degrees* is not an integer multiple of 90.
    """

    if isinstance(degrees, bool) or not isinstance(degrees, int):
        raise InvalidArgumentError(f"Rotation must be an integer, got {degrees!r}")
    normalized = degrees % 360
    if normalized % 90 != 0:
        raise InvalidArgumentError("Rotation must be a multiple of 90 degrees")
    return normalized


def _current_rotation(document: Document, page_id: ObjectId) -> int:
    value = document.effective_attribute(page_id, "Rotate")
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return 0


def rotate_pages(document: Document, degrees: int, pages: Iterable[int] | None = None) -> list[int]:
    """Add *degrees* to the rotation of *pages* (1-based; all when ``None``).

    Page numbers past the end of the document are ignored. Returns the page
    numbers that were rotated.

    Raises:
        InvalidArgumentError: If *degrees* is not a multiple of 90 or a page
            number is below 1.
    """

    delta = normalize_rotation(degrees)
    page_map = document.get_pages()
    if pages is None:
        selected = list(page_map)
    else:
        selected = sorted(set(pages))
        invalid = [number for number in selected if number < 1]
        if invalid:
            raise InvalidArgumentError(f"Page numbers must be 1 or greater: {invalid}")
        beyond = [number for number in selected if number not in page_map]
        if beyond:
            LOGGER.warning("Ignoring pages beyond the end of the document: %s", beyond)
        selected = [number for number in selected if number in page_map]

    for number in selected:
        page_id = page_map[number]
        rotation = (_current_rotation(document, page_id) + delta) % 360
        document.get_dictionary(page_id)["Rotate"] = rotation
        LOGGER.debug("Page %d rotated to %d", number, rotation)
    return selected


def rotate_pdf(
    input: str | Path,
    output: str | Path,
    degrees: int,
    pages: Iterable[int] | None = None,
) -> Path:
    """Rotate pages of *input* and write the result to *output*.

    A rotation that normalizes to 0 copies *input* unchanged.

    Raises:
        InvalidArgumentError: If *degrees* is not a multiple of 90.
        LoadError: If *input* cannot be read.
        SaveError: If *output* cannot be written.
    """

    delta = normalize_rotation(degrees)
    source_path = ensure_pdf_exists(input)
    output_path = ensure_output_parent(output)

    if delta == 0:
        if output_path != source_path:
            try:
                shutil.copyfile(source_path, output_path)
            except OSError as exc:
                raise SaveError(f"Failed to copy PDF to {output_path}: {exc}") from exc
        LOGGER.info("Rotation of 0 degrees; copied %s to %s", source_path, output_path)
        return output_path

    document = load(source_path)
    rotated = rotate_pages(document, delta, pages)
    # references to missing objects become null
    nullify_dangling(document)
    for issue in find_integrity_issues(document):
        LOGGER.warning("%s: %s", source_path, issue)
    save(document, output_path, compress=False)
    LOGGER.info("Rotated %d page(s) of %s by %d degrees", len(rotated), source_path, delta)
    return output_path


__all__ = ["normalize_rotation", "rotate_pages", "rotate_pdf"]
