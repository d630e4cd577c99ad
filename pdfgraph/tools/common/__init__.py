"""Shared building blocks for pdfgraph tools."""

from .interfaces import BaseTool, ConversionContext
from .pipeline import ToolRegistry, register_tool, registry

__all__ = ["BaseTool", "ConversionContext", "ToolRegistry", "register_tool", "registry"]
