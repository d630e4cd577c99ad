"""Core interfaces and context objects shared by pdfgraph tools."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ...core.document import Document
from ...core.exceptions import InvalidArgumentError
from ...core.parser import load
from ...core.utils import resolve_path


@dataclass
class ConversionContext:
    """Holds shared execution state for a tool invocation."""

    input_path: Path | None = None
    output_path: Path | None = None
    document: Document | None = None
    resources: dict[str, Any] = field(default_factory=dict)
    config: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.input_path, (str, Path)):
            self.input_path = resolve_path(self.input_path)
        if isinstance(self.output_path, (str, Path)):
            self.output_path = resolve_path(self.output_path)

    def ensure_document(self) -> Document:
        if self.document is None:
            if self.input_path is None:
                raise InvalidArgumentError("ConversionContext requires an input_path to load a document")
            self.document = load(self.input_path)
        return self.document

    def with_updates(
        self,
        *,
        input_path: str | Path | None = None,
        output_path: str | Path | None = None,
        config: dict[str, Any] | None = None,
    ) -> "ConversionContext":
        data = ConversionContext(
            input_path=input_path or self.input_path,
            output_path=output_path or self.output_path,
            document=self.document if input_path is None else None,
            resources=dict(self.resources),
            config=dict(self.config),
        )
        if config:
            data.config.update(config)
        return data


class BaseTool:
    """Base class for all pluggable pdfgraph tools."""

    name: str

    def __init__(self, context: ConversionContext) -> None:
        self.context = context

    def require_input(self) -> Path:
        if self.context.input_path is None:
            raise InvalidArgumentError(f"{self.name} tool requires an input path")
        return self.context.input_path

    def require_output(self) -> Path:
        if self.context.output_path is None:
            raise InvalidArgumentError(f"{self.name} tool requires an output path")
        return self.context.output_path

    def run(self) -> Any:  # pragma: no cover - to be implemented by subclasses
        raise NotImplementedError
