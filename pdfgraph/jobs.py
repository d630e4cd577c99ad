"""Run one tool at a time off the caller's thread.

A front-end submits a job, keeps its own event loop running and polls for
the :class:`JobOutcome`, which arrives through a single-slot queue. The
worker never touches caller state; everything it produces travels in the
outcome.
"""

from __future__ import annotations

import queue
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

from .core.exceptions import PdfGraphError
from .core.utils import get_logger
from .tools.common.interfaces import ConversionContext
from .tools.common.pipeline import ToolRegistry, registry as default_registry

LOGGER = get_logger("pdfgraph.jobs")


@dataclass(frozen=True)
class JobOutcome:
    """Result of a finished job: a value on success, an error otherwise."""

    tool: str
    value: Any = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.value


class JobRunner:
    """Dispatch registry tools onto a single background worker."""

    def __init__(self, registry: ToolRegistry | None = None) -> None:
        self._registry = registry or default_registry
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="pdfgraph-job")
        self._outcomes: "queue.Queue[JobOutcome]" = queue.Queue(maxsize=1)
        self._pending = False

    @property
    def busy(self) -> bool:
        """``True`` from submission until the outcome has been collected."""

        return self._pending

    def submit(self, name: str, context: ConversionContext) -> None:
        if self._pending:
            raise RuntimeError("A job is already running")
        tool = self._registry.create(name, context)
        self._pending = True
        LOGGER.debug("Submitting job %s", name)
        self._executor.submit(self._run, name, tool)

    def _run(self, name: str, tool: Any) -> None:
        try:
            outcome = JobOutcome(name, value=tool.run())
        except PdfGraphError as exc:
            LOGGER.error("Job %s failed: %s", name, exc)
            outcome = JobOutcome(name, error=exc)
        except Exception as exc:  # worker boundary: every failure must reach the caller
            LOGGER.exception("Job %s crashed", name)
            outcome = JobOutcome(name, error=exc)
        self._outcomes.put(outcome)

    def poll(self) -> JobOutcome | None:
        """Return the outcome if the job has finished, else ``None``."""

        try:
            outcome = self._outcomes.get_nowait()
        except queue.Empty:
            return None
        self._pending = False
        return outcome

    def wait(self, timeout: float | None = None) -> JobOutcome:
        """Block until the outcome arrives.

        Raises:
            queue.Empty: If *timeout* elapses first.
        """

        outcome = self._outcomes.get(timeout=timeout)
        self._pending = False
        return outcome

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "JobRunner":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()


__all__ = ["JobOutcome", "JobRunner"]
