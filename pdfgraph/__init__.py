"""Object-graph level PDF toolkit: merge, split, rotate and image recompression."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

from .compress import CompressionResult, RecompressionSettings, recompress_images, recompress_pdf
from .core import (
    DecodeError,
    Document,
    InvalidArgumentError,
    LoadError,
    MissingKeyError,
    MissingObjectError,
    PdfGraphError,
    SaveError,
    StructuralError,
    TypeMismatchError,
    closure,
    load,
    remap,
    renumber,
    save,
)
from .info import DocumentInfo, describe, describe_pdf
from .jobs import JobOutcome, JobRunner
from .merge import build_merged_document, merge_pdfs
from .rotate import rotate_pages, rotate_pdf
from .split import SplitResult, parse_page_spec, split_document, split_pdf
from .text import extract_text
from .tools import load_builtin_plugins
from .tools.common.interfaces import ConversionContext
from .tools.common.pipeline import ToolRegistry, register_tool, registry

__version__ = "1.0.0"

load_builtin_plugins()

__all__ = [
    "Document",
    "load",
    "save",
    "closure",
    "remap",
    "renumber",
    "build_merged_document",
    "merge_pdfs",
    "split_document",
    "split_pdf",
    "SplitResult",
    "rotate_pages",
    "rotate_pdf",
    "parse_page_spec",
    "recompress_images",
    "recompress_pdf",
    "RecompressionSettings",
    "CompressionResult",
    "extract_text",
    "describe",
    "describe_pdf",
    "DocumentInfo",
    "JobOutcome",
    "JobRunner",
    "ConversionContext",
    "ToolRegistry",
    "registry",
    "register_tool",
    "PdfGraphError",
    "LoadError",
    "StructuralError",
    "InvalidArgumentError",
    "SaveError",
    "DecodeError",
    "TypeMismatchError",
    "MissingKeyError",
    "MissingObjectError",
    "merge_documents",
    "split_pdf_document",
    "rotate_document",
    "recompress_document",
    "extract_document_text",
]


def merge_documents(inputs: Iterable[str | Path], output: str | Path) -> Path:
    """Convenience wrapper around the merge plugin."""

    context = ConversionContext(output_path=output, config={"inputs": list(inputs)})
    tool = registry.create("merge", context)
    return tool.run()


def split_pdf_document(input: str | Path, output_dir: str | Path) -> SplitResult:
    """Convenience wrapper around the split plugin."""

    context = ConversionContext(input_path=input, output_path=output_dir)
    tool = registry.create("split", context)
    return tool.run()


def rotate_document(
    input: str | Path,
    output: str | Path,
    degrees: int,
    *,
    pages: Sequence[int] | str | None = None,
) -> Path:
    """Convenience wrapper around the rotate plugin."""

    context = ConversionContext(
        input_path=input,
        output_path=output,
        config={"degrees": degrees, "pages": pages},
    )
    tool = registry.create("rotate", context)
    return tool.run()


def recompress_document(
    input: str | Path,
    output: str | Path,
    *,
    settings: RecompressionSettings | None = None,
) -> CompressionResult:
    """Convenience wrapper around the compression plugin."""

    context = ConversionContext(input_path=input, output_path=output, config={"settings": settings})
    tool = registry.create("compress", context)
    return tool.run()


def extract_document_text(input: str | Path, output: str | Path) -> Path:
    """Convenience wrapper around the text extraction plugin."""

    context = ConversionContext(input_path=input, output_path=output)
    tool = registry.create("extract_text", context)
    return tool.run()
