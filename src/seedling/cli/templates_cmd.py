"""List bundled layouts and features."""

import click
from rich.table import Table

from .styles import Styles, console
from .templates import TemplateManager


@click.command()
@click.option(
    "--files",
    "name",
    metavar="NAME",
    default=None,
    help="Also list the files a layout or feature contributes",
)
def templates(name: str | None):
    """List available project layouts and features.

    Layouts are mutually exclusive (pick one with --layout); features can
    be combined (--feature, repeatable).

    Examples:

    \b
      $ seedling templates
      $ seedling templates --files pre_commit
    """
    manager = TemplateManager()

    table = Table(border_style=Styles.BORDER_DIM)
    table.add_column("Kind", style=Styles.DIM)
    table.add_column("Name", style=Styles.ACCENT)
    table.add_column("Description")
    for layout in manager.list_layouts():
        table.add_row("layout", layout, manager.describe("layouts", layout))
    for feature in manager.list_features():
        table.add_row("feature", feature, manager.describe("features", feature))
    console.print(table)

    if name is None:
        return

    if name in manager.list_layouts():
        group = "layouts"
    elif name in manager.list_features():
        group = "features"
    else:
        console.print(f"❌ Error: Unknown layout or feature '{name}'", style=Styles.ERROR)
        raise click.Abort()

    console.print(f"\n[bold]Files in {group}/{name}:[/bold]")
    for path in manager.overlay_files(group, name):
        console.print(f"  {path}", style=Styles.PATH)
