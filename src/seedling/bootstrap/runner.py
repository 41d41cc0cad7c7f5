"""Sequential execution of bootstrap steps.

The runner executes steps one at a time in the project directory, captures
their output and classifies each outcome:

- ``ok``: command exited with status 0
- ``failed``: non-zero exit status, timeout, or the command could not start
- ``skipped``: tool not on PATH, or an earlier required step failed
- ``planned``: dry run, nothing executed

A failed or skipped *required* step stops the run; every remaining step is
reported as ``skipped``.
"""

import os
import shutil
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path

from seedling.bootstrap.steps import BootstrapStep
from seedling.errors import BootstrapError
from seedling.utils.logger import get_logger

logger = get_logger("bootstrap")

# Lines of captured output kept on a result
OUTPUT_TAIL_LINES = 20


@dataclass
class StepResult:
    """Outcome of one bootstrap step."""

    step: BootstrapStep
    status: str  # "ok", "failed", "skipped", "planned"
    returncode: int | None = None
    output: str = ""
    message: str = ""
    duration: float = 0.0
    blocked_by: str | None = None  # name of the step that stopped the run

    @property
    def ok(self) -> bool:
        return self.status in ("ok", "planned")

    @property
    def blocking(self) -> bool:
        """True when this result stops the remaining steps."""
        return (
            self.step.required
            and self.blocked_by is None
            and self.status in ("failed", "skipped")
        )

    def __repr__(self):
        return f"StepResult({self.step.name}, {self.status})"


def _tail(text: str, lines: int = OUTPUT_TAIL_LINES) -> str:
    return "\n".join(text.strip().splitlines()[-lines:])


class StepRunner:
    """Run bootstrap steps sequentially in a project directory.

    Args:
        cwd: Working directory for every command (the new project)
        dry_run: Report steps as ``planned`` without executing them
        env: Extra environment variables for the commands
    """

    def __init__(self, cwd: Path, *, dry_run: bool = False, env: dict[str, str] | None = None):
        self.cwd = Path(cwd)
        self.dry_run = dry_run
        self.env = {**os.environ, **(env or {})}

    def _resolve_command(self, command: list[str]) -> list[str]:
        """Anchor a project-relative executable (e.g. the venv interpreter) at cwd."""
        if command and not os.path.isabs(command[0]) and (
            "/" in command[0] or os.sep in command[0]
        ):
            return [str(self.cwd / command[0]), *command[1:]]
        return list(command)

    def run_step(self, step: BootstrapStep) -> StepResult:
        """Run a single step and classify the outcome."""
        if self.dry_run:
            return StepResult(step, "planned", message=step.display_command)

        if step.tool and not shutil.which(step.tool):
            logger.warning(f"{step.tool} not found, skipping '{step.name}'")
            return StepResult(step, "skipped", message=f"'{step.tool}' not found on PATH")

        logger.debug(f"Running {step.display_command} in {self.cwd}")
        start = time.monotonic()
        try:
            result = subprocess.run(
                self._resolve_command(step.command),
                cwd=self.cwd,
                env=self.env,
                capture_output=True,
                text=True,
                timeout=step.timeout,
            )
        except subprocess.TimeoutExpired:
            return StepResult(
                step,
                "failed",
                message=f"timed out after {step.timeout}s",
                duration=time.monotonic() - start,
            )
        except OSError as e:
            return StepResult(
                step, "failed", message=f"could not start: {e}", duration=time.monotonic() - start
            )

        duration = time.monotonic() - start
        logger.timing(f"{step.name} finished in {duration:.1f}s")
        output = _tail("\n".join(part for part in (result.stdout, result.stderr) if part))

        if result.returncode == 0:
            return StepResult(step, "ok", result.returncode, output, duration=duration)

        return StepResult(
            step,
            "failed",
            result.returncode,
            output,
            message=f"exited with status {result.returncode}",
            duration=duration,
        )

    def run(
        self, steps: list[BootstrapStep], on_result=None, check: bool = False
    ) -> list[StepResult]:
        """Run steps in order, stopping after a blocking result.

        Args:
            steps: Steps to execute
            on_result: Optional callback invoked with each StepResult as it completes
            check: Raise BootstrapError when a required step did not succeed

        Returns:
            One result per step, in the same order

        Raises:
            BootstrapError: If ``check`` and a required step failed or was skipped
        """
        results: list[StepResult] = []
        stopped_by: StepResult | None = None

        for step in steps:
            if stopped_by is not None:
                result = StepResult(
                    step,
                    "skipped",
                    message=f"not run: '{stopped_by.step.name}' did not succeed",
                    blocked_by=stopped_by.step.name,
                )
            else:
                result = self.run_step(step)
                if result.blocking:
                    stopped_by = result
                    logger.error(f"Required step '{step.name}' {result.status}: {result.message}")

            results.append(result)
            if on_result is not None:
                on_result(result)

        if check and stopped_by is not None:
            raise BootstrapError(
                f"Required step '{stopped_by.step.name}' {stopped_by.status}: {stopped_by.message}",
                results,
            )
        return results


def failed_required(results: list[StepResult]) -> list[StepResult]:
    """Return the results that stopped the run."""
    return [r for r in results if r.blocking]
