"""Plugin exposing the page splitter through the registry."""

from __future__ import annotations

from ...core.utils import get_logger
from ...split.splitter import SplitResult, split_pdf
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("pdfgraph.tools.split")


@register_tool("split")
class SplitTool(BaseTool):
    name = "split"

    def run(self) -> SplitResult:
        source = self.require_input()
        output_dir = self.require_output()
        LOGGER.debug("Splitting %s into %s", source, output_dir)
        result = split_pdf(source, output_dir)
        if result.failures:
            LOGGER.warning("%d page(s) could not be extracted", len(result.failures))
        self.context.resources["result"] = result
        return result
