"""Project initialization command.

This module provides the 'seedling init' command which renders a new project
from the bundled templates and then runs the bootstrap checklist (git init,
dependency install, pre-commit hooks, first test run).
"""

import functools
import shutil
import sys
from pathlib import Path
from typing import Any

import click
from rich.markup import escape

from seedling.bootstrap import (
    StepResult,
    StepRunner,
    default_steps,
    detect_package_manager,
)
from seedling.bootstrap.steps import venv_python
from seedling.errors import BootstrapError, SeedlingError
from seedling.placeholders import build_context
from seedling.utils.config import get_config

from .styles import Messages, Styles, console
from .templates import TemplateManager

STATUS_SYMBOLS = {
    "ok": "[success]✓[/success]",
    "failed": "[error]✗[/error]",
    "skipped": "[warning]–[/warning]",
    "planned": "[info]•[/info]",
}


def template_options(func):
    """Placeholder and overlay options shared by ``init`` and ``plan``."""

    @click.argument("project_name", required=False)
    @click.option(
        "--package-name",
        default=None,
        help="Importable package name (default: derived from PROJECT_NAME)",
    )
    @click.option("--description", "-d", default=None, help="One-line project description")
    @click.option(
        "--python-version",
        default=None,
        help="Target Python version, e.g. 3.12 (default: from config, else 3.12)",
    )
    @click.option(
        "--layout",
        "-l",
        default=None,
        help="Source layout: library or cli (default: from config, else library)",
    )
    @click.option(
        "--feature",
        "-F",
        "features",
        multiple=True,
        help="Feature to include (repeatable). Replaces the configured feature list.",
    )
    @click.option("--no-ci", is_flag=True, help="Leave out the GitHub Actions workflow")
    @click.option("--no-pre-commit", is_flag=True, help="Leave out pre-commit configuration")
    @click.option(
        "--package-manager",
        type=click.Choice(["auto", "uv", "pip"], case_sensitive=False),
        default=None,
        help="Package manager for dependency installation (default: from config, else auto)",
    )
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        return func(*args, **kwargs)

    return wrapper


def resolve_selection(
    defaults: dict[str, Any],
    layout: str | None,
    features: tuple[str, ...],
    no_ci: bool,
    no_pre_commit: bool,
) -> tuple[str, list[str]]:
    """Combine CLI overlay options with configured defaults.

    Explicit ``--feature`` values replace the configured list; ``--no-ci`` and
    ``--no-pre-commit`` remove their feature from whichever list applies.
    """
    chosen_layout = layout or defaults.get("layout") or "library"
    chosen = list(features) if features else list(defaults.get("features") or [])

    excluded = set()
    if no_ci:
        excluded.add("github_actions")
    if no_pre_commit:
        excluded.add("pre_commit")

    # Keep order, drop duplicates and exclusions
    result: list[str] = []
    for name in chosen:
        if name not in excluded and name not in result:
            result.append(name)
    return chosen_layout, result


def print_step_result(result: StepResult) -> None:
    """Print one bootstrap step outcome, with remediation when it did not succeed."""
    symbol = STATUS_SYMBOLS.get(result.status, "?")
    command = Messages.command(escape(result.step.display_command))
    line = f"  {symbol} {result.step.description} {command}"
    if result.status == "ok":
        line += f" [dim]({result.duration:.1f}s)[/dim]"
    console.print(line)

    if result.status in ("failed", "skipped"):
        if result.message:
            console.print(f"     {escape(result.message)}", style=Styles.DIM)
        if result.output:
            for output_line in result.output.splitlines()[-5:]:
                console.print(f"     │ {output_line}", style=Styles.DIM, markup=False)
        if result.step.remediation and result.blocked_by is None:
            console.print(f"     💡 {escape(result.step.remediation)}", style=Styles.DIM)


@click.command()
@template_options
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False),
    default=".",
    help="Output directory for project (default: current directory)",
)
@click.option(
    "--force", "-f", is_flag=True, help="Force overwrite if project directory already exists"
)
@click.option("--no-git", is_flag=True, help="Do not initialise a git repository")
@click.option("--no-install", is_flag=True, help="Do not install dependencies")
@click.option("--no-hooks", is_flag=True, help="Do not install pre-commit hooks")
@click.option("--no-tests", is_flag=True, help="Do not run the generated test suite")
@click.option("--commit", is_flag=True, help="Create an initial git commit")
@click.option(
    "--interactive", "-i", is_flag=True, help="Prompt for values not given on the command line"
)
def init(
    project_name: str | None,
    package_name: str | None,
    description: str | None,
    python_version: str | None,
    layout: str | None,
    features: tuple[str, ...],
    no_ci: bool,
    no_pre_commit: bool,
    package_manager: str | None,
    output_dir: str,
    force: bool,
    no_git: bool,
    no_install: bool,
    no_hooks: bool,
    no_tests: bool,
    commit: bool,
    interactive: bool,
):
    """Create a new Python project.

    Renders pyproject.toml, a src/ package, tests, CI workflow, pre-commit
    configuration and agent instructions, then runs the bootstrap checklist
    in the new directory.

    PROJECT_NAME: Name of the project directory (e.g., my-tool, data-pipeline)

    Layouts:

    \b
      - library (default): Installable package with a pytest suite
      - cli: click application with a console script entry point

    Features:

    \b
      - github_actions: .github/workflows/ci.yml and docs/cicd/GITHUB_ACTIONS.md
      - pre_commit: .pre-commit-config.yaml and docs/cicd/PRE_COMMIT.md

    Bootstrap checklist (in order, each step can be disabled):

    \b
      1. git init                    (--no-git)
      2. uv sync / venv + pip install (--no-install)
      3. pre-commit install          (--no-hooks)
      4. pytest                      (--no-tests)
      5. initial commit              (only with --commit)

    Examples:

    \b
      # Library with CI and pre-commit (defaults)
      $ seedling init my-lib

      # Command-line application for Python 3.11
      $ seedling init my-tool --layout cli --python-version 3.11

      # Only files, no external commands
      $ seedling init my-lib --no-git --no-install

      # Only the GitHub Actions feature
      $ seedling init my-lib -F github_actions

      # Ask for everything interactively
      $ seedling init --interactive
    """
    try:
        config = get_config()
        defaults = config.get("defaults", {}) or {}
        bootstrap_cfg = config.get("bootstrap", {}) or {}
        manager = TemplateManager()

        chosen_layout, chosen_features = resolve_selection(
            defaults, layout, features, no_ci, no_pre_commit
        )

        if interactive:
            from .prompts import prompt_missing

            answers = prompt_missing(
                {
                    "project_name": project_name,
                    "package_name": package_name,
                    "description": description,
                    "python_version": python_version,
                    "layout": chosen_layout,
                    "features": chosen_features,
                },
                layouts={n: manager.describe("layouts", n) for n in manager.list_layouts()},
                features={n: manager.describe("features", n) for n in manager.list_features()},
            )
            if answers is None:
                console.print("\n⚠️  Operation cancelled", style=Styles.WARNING)
                raise click.Abort()
            project_name = answers["project_name"]
            package_name = answers["package_name"] or None
            description = answers["description"]
            python_version = answers["python_version"]
            chosen_layout = answers["layout"]
            chosen_features = answers["features"]

        if not project_name:
            raise click.UsageError("Missing argument 'PROJECT_NAME' (or use --interactive).")

        console.print(f"🌱 Creating project: [header]{escape(project_name)}[/header]")

        ctx = build_context(
            project_name,
            package_name=package_name,
            description=description,
            python_version=python_version,
            defaults=defaults,
        )
        manager.validate_selection(chosen_layout, chosen_features)

        console.print(f"  📦 Package: [accent]{ctx['package_name']}[/accent]")
        console.print(f"  🐍 Python: [accent]{ctx['python_version']}[/accent]")
        console.print(f"  📋 Layout: [accent]{chosen_layout}[/accent]")
        console.print(
            f"  🧩 Features: [accent]{', '.join(chosen_features) or 'none'}[/accent]"
        )

        # Handle existing directory
        output_path = Path(output_dir).resolve()
        project_path = output_path / ctx["project_name"]

        if project_path.exists():
            if force:
                msg = Messages.warning(f"Removing existing directory: {project_path}")
                console.print(f"  {msg}")
                shutil.rmtree(project_path)
                console.print(f"  {Messages.success('Removed existing directory')}")
            else:
                console.print(
                    f"❌ Directory '{project_path}' already exists.\n"
                    f"   Use --force to overwrite, or choose a different name.",
                    style=Styles.ERROR,
                )
                raise click.Abort()

        project_path = manager.create_project(
            project_name=ctx["project_name"],
            output_dir=output_path,
            context=ctx,
            layout=chosen_layout,
            features=chosen_features,
        )
        console.print("  ✓ Rendered project files", style=Styles.SUCCESS)

        pm = detect_package_manager(package_manager or bootstrap_cfg.get("package_manager"))
        steps = default_steps(
            {**ctx, "features": chosen_features},
            package_manager=pm,
            git=bool(bootstrap_cfg.get("git", True)) and not no_git,
            install=bool(bootstrap_cfg.get("install", True)) and not no_install,
            hooks=bool(bootstrap_cfg.get("hooks", True)) and not no_hooks,
            run_tests=bool(bootstrap_cfg.get("run_tests", True)) and not no_tests,
            initial_commit=commit,
            timeout=int(bootstrap_cfg.get("timeout", 600)),
        )

        results: list[StepResult] = []
        if steps:
            console.print("\n🔧 [bold]Bootstrapping:[/bold]")
            try:
                results = StepRunner(project_path).run(
                    steps, on_result=print_step_result, check=True
                )
            except BootstrapError as e:
                console.print(f"\n❌ Bootstrap stopped: {e}", style=Styles.ERROR)
                console.print(
                    f"   Project files were kept at: {project_path}\n"
                    "   Fix the problem above, then continue with docs/BOOTSTRAP.md.",
                    style=Styles.DIM,
                )
                sys.exit(1)

        console.print(f"\n✅ Project created successfully at: [bold]{project_path}[/bold]")

        # Show next steps
        installed = any(r.step.name == "install" and r.status == "ok" for r in results)
        console.print("\n📋 [bold]Next steps:[/bold]")
        cd_command = f"cd {ctx['project_name']}"
        test_command = "uv run pytest" if pm == "uv" else f"{venv_python()} -m pytest"
        console.print(f"  1. {Messages.command(cd_command)}")
        if installed:
            console.print(f"  2. {Messages.command(test_command)}")
        else:
            console.print("  2. Follow docs/BOOTSTRAP.md to install dependencies")
        console.print("  3. Read CLAUDE.md before handing the project to a coding agent")

    except (ValueError, SeedlingError) as e:
        console.print(f"❌ Error: {e}", style=Styles.ERROR)
        raise click.Abort() from e
    except (click.Abort, click.UsageError):
        raise
    except Exception as e:
        console.print(f"❌ Unexpected error: {e}", style=Styles.ERROR)
        import traceback

        console.print(traceback.format_exc(), style=Styles.DIM, markup=False)
        raise click.Abort() from e


if __name__ == "__main__":
    init()
