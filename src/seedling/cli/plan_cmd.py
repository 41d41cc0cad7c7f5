"""Dry-run command.

Shows the files ``seedling init`` would write and the bootstrap commands it
would run, without touching the file system or executing anything.
"""

import click
from rich.markup import escape
from rich.table import Table

from seedling.bootstrap import StepRunner, default_steps, detect_package_manager
from seedling.errors import SeedlingError
from seedling.placeholders import build_context
from seedling.utils.config import get_config

from .init_cmd import resolve_selection, template_options
from .styles import Messages, Styles, console
from .templates import TemplateManager


@click.command()
@template_options
def plan(
    project_name: str | None,
    package_name: str | None,
    description: str | None,
    python_version: str | None,
    layout: str | None,
    features: tuple[str, ...],
    no_ci: bool,
    no_pre_commit: bool,
    package_manager: str | None,
):
    """Preview a project without creating it.

    Accepts the same template options as 'seedling init' and prints the
    resolved placeholders, every file that would be written (and the
    template it comes from), and the bootstrap commands in order.

    Examples:

    \b
      $ seedling plan my-lib
      $ seedling plan my-tool --layout cli --no-pre-commit
    """
    if not project_name:
        raise click.UsageError("Missing argument 'PROJECT_NAME'.")

    try:
        config = get_config()
        defaults = config.get("defaults", {}) or {}
        bootstrap_cfg = config.get("bootstrap", {}) or {}

        chosen_layout, chosen_features = resolve_selection(
            defaults, layout, features, no_ci, no_pre_commit
        )
        ctx = build_context(
            project_name,
            package_name=package_name,
            description=description,
            python_version=python_version,
            defaults=defaults,
            extra={"layout": chosen_layout, "features": chosen_features},
        )

        manager = TemplateManager()
        planned = manager.plan_project(ctx, chosen_layout, chosen_features)

        console.print(f"\n{Messages.header(f'📐 Plan for {project_name}')}\n")
        for key in ("project_name", "package_name", "description", "python_version"):
            console.print(f"  {Messages.label_value(key, escape(str(ctx[key])))}")
        console.print(f"  {Messages.label_value('layout', chosen_layout)}")
        console.print(
            f"  {Messages.label_value('features', ', '.join(chosen_features) or 'none')}"
        )

        table = Table(title=f"Files ({len(planned)})", border_style=Styles.BORDER_DIM)
        table.add_column("Output", style=Styles.PATH)
        table.add_column("Source", style=Styles.DIM)
        table.add_column("Mode")
        for item in planned:
            table.add_row(
                f"{ctx['project_name']}/{item.output}",
                item.template,
                "render" if item.rendered else "copy",
            )
        console.print()
        console.print(table)

        pm = detect_package_manager(package_manager or bootstrap_cfg.get("package_manager"))
        steps = default_steps(
            ctx,
            package_manager=pm,
            git=bool(bootstrap_cfg.get("git", True)),
            install=bool(bootstrap_cfg.get("install", True)),
            hooks=bool(bootstrap_cfg.get("hooks", True)),
            run_tests=bool(bootstrap_cfg.get("run_tests", True)),
            timeout=int(bootstrap_cfg.get("timeout", 600)),
        )
        results = StepRunner(ctx["project_name"], dry_run=True).run(steps)

        console.print(f"\n[bold]Bootstrap commands ({pm}):[/bold]")
        if not results:
            console.print("  (none)", style=Styles.DIM)
        for index, result in enumerate(results, 1):
            optional = "" if result.step.required else " [dim](optional)[/dim]"
            console.print(
                f"  {index}. {Messages.command(escape(result.step.display_command))}"
                f" - {result.step.description}{optional}"
            )

        console.print(f"\n{Messages.info('Nothing was written. Run seedling init to create it.')}")

    except (ValueError, SeedlingError) as e:
        console.print(f"❌ Error: {e}", style=Styles.ERROR)
        raise click.Abort() from e
