"""Project verification command.

This module provides the 'seedling check' command which verifies that a
bootstrapped project contains the files the checklist promises and that the
external tools it relies on are installed. Nothing is executed inside the
project; tools are only looked up on PATH.
"""

import shutil
import sys
import tomllib
from pathlib import Path
from typing import Any

import click
from rich.markup import escape
from rich.panel import Panel

from seedling.cli.styles import Messages, Styles, console
from seedling.utils.logger import get_logger

from .project_utils import load_pyproject, resolve_project_path

logger = get_logger("check")

# Feature name -> files the feature must have produced
FEATURE_FILES = {
    "github_actions": [".github/workflows/ci.yml"],
    "pre_commit": [".pre-commit-config.yaml"],
}


class CheckResult:
    """Result of a single project check."""

    def __init__(self, name: str, status: str, message: str = "", details: str = ""):
        self.name = name
        self.status = status  # "ok", "warning", "error"
        self.message = message
        self.details = details

    def __repr__(self):
        return f"CheckResult({self.name}, {self.status})"


class ProjectChecker:
    """Verify the structure and tooling of a generated project."""

    def __init__(self, project_path: Path, verbose: bool = False):
        self.cwd = Path(project_path)
        self.verbose = verbose
        self.results: list[CheckResult] = []
        self.pyproject: dict[str, Any] = {}

    def add_result(self, name: str, status: str, message: str = "", details: str = ""):
        self.results.append(CheckResult(name, status, message, details))
        message, details = escape(message), escape(details)
        if status == "ok":
            console.print(f"  {Messages.success(message)}")
        elif status == "warning":
            console.print(f"  {Messages.warning(message)}")
        else:
            console.print(f"  {Messages.error(message)}")
        if details and (self.verbose or status == "error"):
            console.print(f"     [dim]{details}[/dim]")

    def check_all(self) -> bool:
        """Run every check and return True if none reported an error."""
        console.print(f"\n{Messages.header('🔍 Seedling - Project Check')}")
        console.print(f"   {Messages.path(str(self.cwd))}")

        self.check_pyproject()
        self.check_files()
        self.check_tools()

        self.display_results()
        return self.error_count == 0

    @property
    def error_count(self) -> int:
        return sum(1 for r in self.results if r.status == "error")

    @property
    def warning_count(self) -> int:
        return sum(1 for r in self.results if r.status == "warning")

    def _table(self, *keys: str) -> dict[str, Any]:
        """Nested pyproject table, or {} when missing or not a table."""
        table: Any = self.pyproject
        for key in keys:
            table = table.get(key) if isinstance(table, dict) else None
        return table if isinstance(table, dict) else {}

    @property
    def package_name(self) -> str | None:
        package = self._table("tool", "seedling").get("package")
        if package and isinstance(package, str):
            return package
        name = self._table("project").get("name")
        if not name or not isinstance(name, str):
            return None
        from seedling.placeholders import derive_package_name

        return derive_package_name(name)

    @property
    def features(self) -> list[str]:
        features = self._table("tool", "seedling").get("features")
        return [f for f in features if isinstance(f, str)] if isinstance(features, list) else []

    def check_pyproject(self):
        """Check that pyproject.toml exists, parses and names the project."""
        console.print("\n[bold]Configuration[/bold]")

        try:
            self.pyproject = load_pyproject(self.cwd)
        except FileNotFoundError:
            self.add_result("pyproject", "error", "pyproject.toml not found")
            return
        except tomllib.TOMLDecodeError as e:
            self.add_result("pyproject", "error", "pyproject.toml is not valid TOML", str(e))
            return

        name = self._table("project").get("name")
        if name:
            self.add_result("pyproject", "ok", f"pyproject.toml valid (project: {name})")
        else:
            self.add_result("pyproject", "error", "pyproject.toml has no [project].name")

        if not isinstance(self._table("tool").get("seedling"), dict):
            self.add_result(
                "seedling_table",
                "warning",
                "No [tool.seedling] table",
                "Project was not generated by seedling; feature files are not checked",
            )

    def check_files(self):
        """Check the files every generated project must contain."""
        console.print("\n[bold]Files[/bold]")

        package = self.package_name
        if package:
            self._check_path(f"src/{package}/__init__.py", "package")
        else:
            self.add_result("package", "error", "Cannot determine package name")

        self._check_path("tests", "tests", directory=True)
        self._check_path("README.md", "readme")
        self._check_path(".gitignore", "gitignore")
        self._check_path("CLAUDE.md", "agent_instructions", missing_status="warning")

        for feature in self.features:
            for rel_path in FEATURE_FILES.get(feature, []):
                self._check_path(rel_path, f"feature_{feature}")

    def _check_path(
        self, rel_path: str, name: str, directory: bool = False, missing_status: str = "error"
    ):
        path = self.cwd / rel_path
        exists = path.is_dir() if directory else path.is_file()
        if exists:
            self.add_result(name, "ok", f"{rel_path} found")
        else:
            self.add_result(name, missing_status, f"{rel_path} not found", str(path))

    def check_tools(self):
        """Check that the external tools used by the checklist are on PATH."""
        console.print("\n[bold]Tools[/bold]")

        if shutil.which("git"):
            self.add_result("git", "ok", "git available")
        else:
            self.add_result(
                "git", "error", "git not found", "Install git: https://git-scm.com/downloads"
            )

        if shutil.which("uv"):
            self.add_result("package_manager", "ok", "uv available")
        elif shutil.which("pip") or shutil.which("pip3"):
            self.add_result(
                "package_manager", "ok", "pip available", "uv not found; pip will be used"
            )
        else:
            self.add_result(
                "package_manager",
                "error",
                "No package manager found",
                "Install uv: https://docs.astral.sh/uv/",
            )

        if "pre_commit" in self.features:
            git_hook = self.cwd / ".git" / "hooks" / "pre-commit"
            if shutil.which("pre-commit") or git_hook.exists():
                self.add_result("pre_commit", "ok", "pre-commit available")
            else:
                self.add_result(
                    "pre_commit",
                    "warning",
                    "pre-commit not found",
                    "Install dev dependencies, then run 'pre-commit install'",
                )

    def display_results(self):
        """Display summary of check results."""
        console.print()

        ok_count = sum(1 for r in self.results if r.status == "ok")
        total_count = len(self.results)

        summary = f"Summary: {ok_count}/{total_count} checks passed"
        if self.warning_count:
            summary += f" ({self.warning_count} warning{'s' if self.warning_count > 1 else ''})"
        if self.error_count:
            summary += f" ({self.error_count} error{'s' if self.error_count > 1 else ''})"
        panel_content = [summary]

        if self.verbose and (self.warning_count or self.error_count):
            panel_content.append("")
            panel_content.append("Details:")
            for result in self.results:
                if result.status in ("warning", "error"):
                    symbol = "⚠️ " if result.status == "warning" else "❌"
                    panel_content.append(f"  {symbol} {result.name}: {escape(result.message)}")
                    if result.details:
                        panel_content.append(f"     {escape(result.details)}")

        console.print(
            Panel(
                "\n".join(panel_content),
                title="🔍 Seedling Check Results",
                border_style=Styles.BORDER_DIM,
                expand=False,
                padding=(1, 2),
            )
        )


@click.command()
@click.option(
    "--project",
    "-p",
    type=click.Path(exists=True, file_okay=False, dir_okay=True),
    help="Project directory (default: current directory or SEEDLING_PROJECT env var)",
)
@click.option(
    "--verbose", "-v", is_flag=True, help="Show detailed information about warnings and errors"
)
def check(project: str | None, verbose: bool):
    """Verify a bootstrapped project.

    Checks that the generated files exist and that the tools used by the
    bootstrap checklist are installed:

    \b
      • pyproject.toml parses and names the project
      • src/<package>/__init__.py, tests/, README.md, .gitignore
      • feature files recorded in [tool.seedling] (CI workflow, pre-commit)
      • git, uv or pip, pre-commit

    Exit Codes:
    \b
      0 - All checks passed
      1 - Some warnings detected (non-critical)
      2 - Errors detected (critical issues)

    Examples:

    \b
      $ seedling check
      $ seedling check --project ~/projects/my-lib --verbose
    """
    try:
        project_path = resolve_project_path(project)
        checker = ProjectChecker(project_path, verbose=verbose)
        checker.check_all()

        if checker.error_count > 0:
            console.print(f"\n{Messages.error('Project check failed with errors')}")
            sys.exit(2)
        elif checker.warning_count > 0:
            console.print(f"\n{Messages.warning('Project check completed with warnings')}")
            sys.exit(1)
        else:
            console.print(f"\n{Messages.success('All project checks passed!')}")
            sys.exit(0)

    except KeyboardInterrupt:
        console.print(f"\n\n{Messages.warning('Project check interrupted')}")
        sys.exit(130)
    except OSError as e:
        console.print(f"\n{Messages.error(f'Project check failed: {e}')}")
        if verbose:
            console.print_exception()
        sys.exit(3)
