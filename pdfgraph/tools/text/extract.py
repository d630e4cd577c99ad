"""Plugin exposing text extraction through the registry."""

from __future__ import annotations

from pathlib import Path

from ...core.utils import get_logger
from ...text.extractor import extract_text
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("pdfgraph.tools.text")


@register_tool("extract_text")
class ExtractTextTool(BaseTool):
    name = "extract_text"

    def run(self) -> Path:
        LOGGER.debug("Extracting text from %s", self.context.input_path)
        result = extract_text(self.require_input(), self.require_output())
        self.context.resources["result"] = result
        return result
