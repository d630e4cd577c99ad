"""Plain-text extraction."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from pypdf import PdfReader

from ..core.exceptions import LoadError, SaveError
from ..core.validator import ensure_output_parent, ensure_pdf_exists

LOGGER = logging.getLogger("pdfgraph.text")


def _load_reader(path: Path) -> PdfReader:
    try:
        reader = PdfReader(str(path), strict=False)
        if reader.is_encrypted:
            LOGGER.debug("Attempting to decrypt encrypted PDF %s", path)
            reader.decrypt("")
    except Exception as exc:  # malformed input surfaces as many exception types
        raise LoadError(f"Unable to open PDF {path}: {exc}") from exc
    return reader


def extract_page_texts(input: str | Path) -> List[str]:
    """Return the text of each page of *input*, in page order."""

    source_path = ensure_pdf_exists(input)
    reader = _load_reader(source_path)
    try:
        return [page.extract_text() or "" for page in reader.pages]
    except Exception as exc:  # pragma: no cover - content stream errors vary
        raise LoadError(f"Unable to extract text from {source_path}: {exc}") from exc


def extract_text(input: str | Path, output: str | Path) -> Path:
    """Write the UTF-8 text of every page of *input* to *output*."""

    texts = extract_page_texts(input)
    lines: List[str] = []
    for index, text in enumerate(texts, start=1):
        if index > 1:
            lines.append("")
        lines.extend(line.rstrip() for line in text.splitlines())

    output_path = ensure_output_parent(output)
    try:
        output_path.write_text("\n".join(lines).rstrip() + "\n", encoding="utf-8")
    except OSError as exc:
        raise SaveError(f"Failed to write text to {output_path}: {exc}") from exc
    LOGGER.info("Extracted text of %d page(s) into %s", len(texts), output_path)
    return output_path


__all__ = ["extract_page_texts", "extract_text"]
