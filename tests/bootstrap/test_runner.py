"""Tests for the sequential bootstrap step runner.

External commands are never executed: ``subprocess.run`` and
``shutil.which`` are patched in every test that runs steps.
"""

import subprocess
from unittest.mock import patch

import pytest

from seedling.bootstrap import BootstrapStep, StepResult, StepRunner, failed_required
from seedling.errors import BootstrapError


def _step(name, required=True, tool="tool"):
    return BootstrapStep(
        name=name,
        description=f"{name} step",
        command=[tool, name],
        tool=tool,
        required=required,
        remediation=f"fix {name}",
        timeout=5,
    )


def _completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def which():
    with patch("seedling.bootstrap.runner.shutil.which", return_value="/usr/bin/tool") as mock:
        yield mock


@pytest.fixture
def run():
    with patch("seedling.bootstrap.runner.subprocess.run", return_value=_completed()) as mock:
        yield mock


class TestRunStep:
    def test_success(self, tmp_path, which, run):
        result = StepRunner(tmp_path).run_step(_step("a"))

        assert result.status == "ok"
        assert result.ok
        assert result.returncode == 0
        args, kwargs = run.call_args
        assert args[0] == ["tool", "a"]
        assert kwargs["cwd"] == tmp_path
        assert kwargs["timeout"] == 5
        assert kwargs["capture_output"] is True

    def test_failure_keeps_output_tail(self, tmp_path, which, run):
        lines = "\n".join(f"line {i}" for i in range(50))
        run.return_value = _completed(returncode=2, stdout=lines, stderr="boom")

        result = StepRunner(tmp_path).run_step(_step("a"))

        assert result.status == "failed"
        assert result.returncode == 2
        assert result.message == "exited with status 2"
        assert result.output.splitlines()[-1] == "boom"
        assert "line 0" not in result.output
        assert len(result.output.splitlines()) == 20

    def test_missing_tool_skipped(self, tmp_path, run):
        with patch("seedling.bootstrap.runner.shutil.which", return_value=None):
            result = StepRunner(tmp_path).run_step(_step("a", tool="uv"))

        assert result.status == "skipped"
        assert "'uv' not found on PATH" in result.message
        run.assert_not_called()

    def test_timeout(self, tmp_path, which, run):
        run.side_effect = subprocess.TimeoutExpired(cmd=["tool"], timeout=5)
        result = StepRunner(tmp_path).run_step(_step("a"))
        assert result.status == "failed"
        assert result.message == "timed out after 5s"

    def test_cannot_start(self, tmp_path, which, run):
        run.side_effect = PermissionError("denied")
        result = StepRunner(tmp_path).run_step(_step("a"))
        assert result.status == "failed"
        assert result.message.startswith("could not start")

    def test_dry_run_executes_nothing(self, tmp_path, which, run):
        result = StepRunner(tmp_path, dry_run=True).run_step(_step("a"))
        assert result.status == "planned"
        assert result.ok
        run.assert_not_called()

    def test_extra_env_passed(self, tmp_path, which, run):
        StepRunner(tmp_path, env={"SEEDLING_TEST": "1"}).run_step(_step("a"))
        assert run.call_args.kwargs["env"]["SEEDLING_TEST"] == "1"

    def test_project_relative_executable_anchored_at_cwd(self, tmp_path, run):
        step = BootstrapStep(
            name="install",
            description="install",
            command=[".venv/bin/python", "-m", "pip", "install", "-e", "."],
        )

        result = StepRunner(tmp_path).run_step(step)

        assert result.status == "ok"
        assert run.call_args.args[0] == [
            str(tmp_path / ".venv/bin/python"),
            "-m",
            "pip",
            "install",
            "-e",
            ".",
        ]


class TestRun:
    def test_all_steps_run_in_order(self, tmp_path, which, run):
        results = StepRunner(tmp_path).run([_step("a"), _step("b"), _step("c")])

        assert [r.step.name for r in results] == ["a", "b", "c"]
        assert all(r.status == "ok" for r in results)
        assert [c.args[0][1] for c in run.call_args_list] == ["a", "b", "c"]

    def test_required_failure_stops_run(self, tmp_path, which, run):
        run.side_effect = [_completed(), _completed(returncode=1), _completed()]

        results = StepRunner(tmp_path).run([_step("a"), _step("b"), _step("c")])

        assert [r.status for r in results] == ["ok", "failed", "skipped"]
        assert results[2].message == "not run: 'b' did not succeed"
        assert results[2].blocked_by == "b"
        assert run.call_count == 2
        assert failed_required(results) == [results[1]]

    def test_optional_failure_continues(self, tmp_path, which, run):
        run.side_effect = [_completed(returncode=1), _completed()]

        results = StepRunner(tmp_path).run([_step("hooks", required=False), _step("b")])

        assert [r.status for r in results] == ["failed", "ok"]
        assert failed_required(results) == []

    def test_skipped_required_step_blocks(self, tmp_path, run):
        with patch(
            "seedling.bootstrap.runner.shutil.which",
            side_effect=lambda tool: None if tool == "git" else "/usr/bin/" + tool,
        ):
            results = StepRunner(tmp_path).run([_step("init", tool="git"), _step("b")])

        assert [r.status for r in results] == ["skipped", "skipped"]
        run.assert_not_called()

    def test_on_result_callback(self, tmp_path, which, run):
        seen = []
        StepRunner(tmp_path).run([_step("a"), _step("b")], on_result=seen.append)
        assert [r.step.name for r in seen] == ["a", "b"]

    def test_check_raises_with_results(self, tmp_path, which, run):
        run.return_value = _completed(returncode=1)

        with pytest.raises(BootstrapError, match="Required step 'a' failed") as exc_info:
            StepRunner(tmp_path).run([_step("a"), _step("b")], check=True)

        assert [r.status for r in exc_info.value.results] == ["failed", "skipped"]

    def test_check_passes_when_only_optional_fails(self, tmp_path, which, run):
        run.return_value = _completed(returncode=1)
        results = StepRunner(tmp_path).run([_step("a", required=False)], check=True)
        assert results[0].status == "failed"

    def test_empty(self, tmp_path):
        assert StepRunner(tmp_path).run([]) == []


class TestStepResult:
    def test_blocking(self):
        required = _step("a")
        optional = _step("b", required=False)
        assert StepResult(required, "failed").blocking
        assert StepResult(required, "skipped").blocking
        assert not StepResult(required, "ok").blocking
        assert not StepResult(optional, "failed").blocking
        assert not StepResult(required, "skipped", blocked_by="a").blocking

    def test_repr(self):
        assert repr(StepResult(_step("a"), "ok")) == "StepResult(a, ok)"


def test_logger_is_component_logger():
    from seedling.bootstrap import runner

    assert runner.logger.component_name == "bootstrap"
