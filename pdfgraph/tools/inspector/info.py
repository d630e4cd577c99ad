"""Plugin exposing document summaries through the registry."""

from __future__ import annotations

from ...core.utils import get_logger
from ...info import DocumentInfo, describe
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("pdfgraph.tools.info")


@register_tool("info")
class InfoTool(BaseTool):
    name = "info"

    def run(self) -> DocumentInfo:
        document = self.context.ensure_document()
        result = describe(document)
        if result.issues:
            LOGGER.warning("%s has %d integrity issue(s)", self.context.input_path, len(result.issues))
        self.context.resources["result"] = result
        return result
