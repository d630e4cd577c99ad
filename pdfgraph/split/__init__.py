"""Split a PDF document into single-page documents."""

from .splitter import SplitResult, extract_page_document, split_document, split_pdf
from .utils import parse_page_spec, resolve_output_directory

__all__ = [
    "SplitResult",
    "extract_page_document",
    "split_document",
    "split_pdf",
    "parse_page_spec",
    "resolve_output_directory",
]
