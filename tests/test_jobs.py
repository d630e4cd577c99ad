from __future__ import annotations

import threading
from pathlib import Path

import pytest

from pdfgraph.core.exceptions import InvalidArgumentError, LoadError
from pdfgraph.jobs import JobOutcome, JobRunner
from pdfgraph.tools.common.interfaces import BaseTool, ConversionContext
from pdfgraph.tools.common.pipeline import ToolRegistry


class _BlockingTool(BaseTool):
    name = "blocking"
    release = threading.Event()

    def run(self) -> str:
        self.release.wait(timeout=5)
        return "done"


class _CrashingTool(BaseTool):
    name = "crashing"

    def run(self) -> None:
        raise ZeroDivisionError("boom")


@pytest.fixture()
def local_registry() -> ToolRegistry:
    local = ToolRegistry()
    local.register("blocking", _BlockingTool)
    local.register("crashing", _CrashingTool)
    return local


def test_job_runner_delivers_result(tmp_path: Path, sample_pdf: Path) -> None:
    with JobRunner() as runner:
        runner.submit("split", ConversionContext(input_path=sample_pdf, output_path=tmp_path))
        outcome = runner.wait(timeout=30)

    assert outcome.ok
    assert outcome.tool == "split"
    assert outcome.unwrap().page_count == 5
    assert not runner.busy


def test_job_runner_delivers_errors(tmp_path: Path) -> None:
    with JobRunner() as runner:
        runner.submit("info", ConversionContext(input_path=tmp_path / "missing.pdf"))
        outcome = runner.wait(timeout=30)

    assert not outcome.ok
    assert isinstance(outcome.error, LoadError)
    with pytest.raises(LoadError):
        outcome.unwrap()


def test_job_runner_reports_unexpected_exceptions(local_registry: ToolRegistry) -> None:
    with JobRunner(local_registry) as runner:
        runner.submit("crashing", ConversionContext())
        outcome = runner.wait(timeout=5)

    assert isinstance(outcome.error, ZeroDivisionError)


def test_job_runner_runs_one_job_at_a_time(local_registry: ToolRegistry) -> None:
    _BlockingTool.release.clear()
    with JobRunner(local_registry) as runner:
        runner.submit("blocking", ConversionContext())
        assert runner.busy
        assert runner.poll() is None
        with pytest.raises(RuntimeError):
            runner.submit("blocking", ConversionContext())

        _BlockingTool.release.set()
        outcome = runner.wait(timeout=5)

        assert outcome == JobOutcome("blocking", value="done")
        assert not runner.busy
        assert runner.poll() is None


def test_unknown_tool_is_rejected_before_submission(local_registry: ToolRegistry) -> None:
    with JobRunner(local_registry) as runner:
        with pytest.raises(InvalidArgumentError):
            runner.submit("missing", ConversionContext())
        assert not runner.busy
