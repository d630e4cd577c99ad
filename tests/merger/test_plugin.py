from __future__ import annotations

from pathlib import Path

import pytest

from pdfgraph.core.exceptions import InvalidArgumentError
from pdfgraph.tools import load_builtin_plugins
from pdfgraph.tools.common.interfaces import ConversionContext
from pdfgraph.tools.common.pipeline import registry


def setup_module(module):
    load_builtin_plugins()


def test_merge_tool(sample_pdfs: list[Path], tmp_path: Path) -> None:
    output = tmp_path / "merged.pdf"
    context = ConversionContext(output_path=output, config={"inputs": sample_pdfs})
    tool = registry.create("merge", context)
    result = tool.run()
    assert result == output
    assert output.exists()
    assert context.resources["result"] == output


def test_merge_tool_requires_inputs(tmp_path: Path) -> None:
    context = ConversionContext(output_path=tmp_path / "merged.pdf")
    with pytest.raises(InvalidArgumentError):
        registry.create("merge", context).run()
