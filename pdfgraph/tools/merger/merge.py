"""Plugin exposing PDF merge capabilities through the registry."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ...core.exceptions import InvalidArgumentError
from ...core.utils import get_logger
from ...merge.merger import merge_pdfs
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("pdfgraph.tools.merge")


@register_tool("merge")
class MergeTool(BaseTool):
    name = "merge"

    def run(self) -> Path:
        context = self.context
        inputs: Iterable[str | Path] | None = context.config.get("inputs")
        if inputs is None:
            if context.input_path is None:
                raise InvalidArgumentError("No input PDFs provided")
            inputs = [context.input_path]

        output = self.require_output()
        inputs_list = list(inputs)
        LOGGER.debug("Merging %d input(s) into %s", len(inputs_list), output)
        result = merge_pdfs(inputs_list, output)
        context.resources["result"] = result
        return result
