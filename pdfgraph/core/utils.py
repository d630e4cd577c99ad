"""Logging, path and size-formatting helpers for the pdfgraph plugins and CLI."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .exceptions import InvalidArgumentError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str, level: int | None = None) -> logging.Logger:
    """Return a logger under the ``pdfgraph`` namespace with one stream handler."""

    if name != "pdfgraph" and not name.startswith("pdfgraph."):
        name = f"pdfgraph.{name}"
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    if level is not None:
        logger.setLevel(level)
    return logger


def resolve_path(path: str | os.PathLike[str] | None) -> Path:
    """Expand ``~`` and return an absolute path.

    Raises:
        InvalidArgumentError: If *path* is ``None`` or empty.
    """

    if path is None or str(path) == "":
        raise InvalidArgumentError("A file path is required")
    return Path(path).expanduser().resolve()


def format_file_size(size: int) -> str:
    value = float(size)
    for unit in ("B", "KB", "MB", "GB"):
        if value < 1024 or unit == "GB":
            return f"{value:.0f} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"
