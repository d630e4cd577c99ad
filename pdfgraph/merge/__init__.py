"""Combine several PDF documents into one."""

from .merger import build_merged_document, merge_pdfs

__all__ = ["build_merged_document", "merge_pdfs"]
