"""Configuration commands.

This module provides the 'seedling config' command group for inspecting the
user-level configuration that supplies defaults to 'seedling init'.

Commands:
    - config show: Display the effective configuration (defaults merged with the user file)
    - config export: Export the built-in defaults as a starting config file
"""

import json
from pathlib import Path

import click
import yaml
from rich.syntax import Syntax

from seedling.cli.styles import Styles, console
from seedling.errors import ConfigurationError
from seedling.utils.config import DEFAULT_CONFIG, ConfigBuilder


def _dump(data: dict, format: str) -> str:
    if format == "yaml":
        return yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return json.dumps(data, indent=2, ensure_ascii=False)


@click.group(name="config", invoke_without_command=True)
@click.pass_context
def config(ctx):
    """Inspect seedling configuration.

    Configuration is optional. It is read from SEEDLING_CONFIG, then
    $XDG_CONFIG_HOME/seedling/config.yml, then ~/.config/seedling/config.yml.

    Examples:

    \b
      # Display effective configuration
      seedling config show

      # Write the defaults to your config file and edit them
      seedling config export -o ~/.config/seedling/config.yml
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@config.command(name="show")
@click.option(
    "--config-file",
    "-c",
    type=click.Path(dir_okay=False),
    help="Configuration file (default: SEEDLING_CONFIG or ~/.config/seedling/config.yml)",
)
@click.option(
    "--format",
    type=click.Choice(["yaml", "json"]),
    default="yaml",
    help="Output format (default: yaml)",
)
def show(config_file: str | None, format: str):
    """Display the effective configuration.

    Shows built-in defaults merged with the user file, after environment
    variable expansion.

    Examples:

    \b
      seedling config show
      seedling config show --format json
    """
    try:
        builder = ConfigBuilder(config_file)
    except ConfigurationError as e:
        console.print(f"❌ {e}", style=Styles.ERROR)
        raise click.Abort() from e

    source = builder.config_path if builder.config_path.exists() else None
    if source:
        console.print(f"\n[bold]Configuration:[/bold] {source}\n")
    else:
        console.print(
            f"\n[bold]Configuration:[/bold] built-in defaults "
            f"[dim](no file at {builder.config_path})[/dim]\n"
        )

    syntax = Syntax(
        _dump(builder.to_dict(), format), format, theme="monokai", line_numbers=False, word_wrap=True
    )
    console.print(syntax)


@config.command(name="export")
@click.option("--output", "-o", type=click.Path(), help="Output file (default: print to console)")
@click.option(
    "--format",
    type=click.Choice(["yaml", "json"]),
    default="yaml",
    help="Output format (default: yaml)",
)
def export(output: str | None, format: str):
    """Export the built-in default configuration.

    Examples:

    \b
      # Display to console with syntax highlighting
      seedling config export

      # Save as your user configuration
      seedling config export -o ~/.config/seedling/config.yml
    """
    output_str = _dump(DEFAULT_CONFIG, format)

    if output:
        output_path = Path(output).expanduser()
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(output_str, encoding="utf-8")
        except OSError as e:
            console.print(f"❌ Failed to export configuration: {e}", style=Styles.ERROR)
            raise click.Abort() from e
        console.print(f"✅ Configuration exported to: [bold]{output_path}[/bold]")
    else:
        console.print("\n[bold]Seedling Default Configuration:[/bold]\n")
        syntax = Syntax(output_str, format, theme="monokai", line_numbers=False, word_wrap=True)
        console.print(syntax)
        console.print("\n[dim]💡 Tip: Save to file with --output flag[/dim]")
