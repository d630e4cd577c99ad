"""Name-to-tool registry used by the CLI, the job runner and the wrappers."""

from __future__ import annotations

from typing import Any, Dict, Iterable

from ...core.exceptions import InvalidArgumentError
from ...core.utils import get_logger
from .interfaces import BaseTool, ConversionContext

LOGGER = get_logger("pdfgraph.tools")


class ToolRegistry:
    """Maps operation names such as ``"merge"`` to :class:`BaseTool` classes."""

    def __init__(self) -> None:
        self._tools: Dict[str, type[BaseTool]] = {}

    def register(self, name: str, tool_class: type[BaseTool]) -> None:
        if not name:
            raise ValueError("Tool name must not be empty")
        if name in self._tools:
            raise ValueError(f"Tool '{name}' is already registered")
        self._tools[name] = tool_class

    def create(self, name: str, context: ConversionContext) -> BaseTool:
        """Instantiate the tool registered as *name* for *context*.

        Raises:
            InvalidArgumentError: If no tool is registered under *name*.
        """

        tool_class = self._tools.get(name)
        if tool_class is None:
            available = ", ".join(self.names()) or "none"
            raise InvalidArgumentError(f"Unknown tool '{name}' (available: {available})")
        return tool_class(context)

    def run(self, name: str, context: ConversionContext) -> Any:
        LOGGER.debug("Running tool %s", name)
        return self.create(name, context).run()

    def names(self) -> Iterable[str]:
        return sorted(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools


registry = ToolRegistry()


def register_tool(name: str):
    def decorator(cls: type[BaseTool]) -> type[BaseTool]:
        registry.register(name, cls)
        return cls

    return decorator


__all__ = ["ToolRegistry", "registry", "register_tool", "ConversionContext", "BaseTool"]
