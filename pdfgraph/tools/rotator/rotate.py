"""Plugin exposing page rotation through the registry."""

from __future__ import annotations

from pathlib import Path

from ...core.utils import get_logger
from ...rotate.rotator import rotate_pdf
from ...split.utils import parse_page_spec
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("pdfgraph.tools.rotate")


@register_tool("rotate")
class RotateTool(BaseTool):
    name = "rotate"

    def run(self) -> Path:
        config = self.context.config
        degrees = config.get("degrees", 90)
        pages = config.get("pages")
        if isinstance(pages, str):
            pages = parse_page_spec(pages)

        LOGGER.debug("Rotating %s by %s degrees (pages=%s)", self.context.input_path, degrees, pages)
        result = rotate_pdf(self.require_input(), self.require_output(), degrees, pages)
        self.context.resources["result"] = result
        return result
