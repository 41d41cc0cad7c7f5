"""Main CLI entry point for seedling.

This module provides the main CLI group that organizes all seedling
commands under the `seedling` command namespace. Subcommands are imported
only when invoked, so `seedling --help` does not load Jinja2 or questionary.
"""

import importlib
import sys

import click

from seedling import __version__

# Command name -> (module path, attribute)
COMMANDS = {
    "init": ("seedling.cli.init_cmd", "init"),
    "plan": ("seedling.cli.plan_cmd", "plan"),
    "templates": ("seedling.cli.templates_cmd", "templates"),
    "check": ("seedling.cli.check_cmd", "check"),
    "config": ("seedling.cli.config_cmd", "config"),
}


class LazyGroup(click.Group):
    """Click group that lazily loads subcommands only when invoked."""

    def get_command(self, ctx, cmd_name):
        """Lazily import and return the command when it's invoked."""
        if cmd_name not in COMMANDS:
            return None

        module_path, attr = COMMANDS[cmd_name]
        mod = importlib.import_module(module_path)
        return getattr(mod, attr)

    def list_commands(self, ctx):
        """Return list of available commands (for --help)."""
        return list(COMMANDS)


@click.group(cls=LazyGroup)
@click.version_option(version=__version__, prog_name="seedling")
def cli():
    """Seedling - bootstrap a Python project that is ready for an agent.

    Renders pyproject.toml, a src/ package, tests, CI and pre-commit
    configuration from bundled templates, then runs the bootstrap
    checklist (git init, dependency sync, hooks, first test run).

    Use 'seedling COMMAND --help' for more information on a specific command.

    Examples:

    \b
      seedling init my-project        Create a new project
      seedling plan my-project        Preview files and commands
      seedling templates              List layouts and features
      seedling check                  Verify the current project
      seedling config show            Display configuration
    """
    # Theme loading is best-effort; the default theme is used on failure
    try:
        from .styles import initialize_theme_from_config

        initialize_theme_from_config()
    except Exception:
        pass


def main():
    """Entry point for the seedling CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nGoodbye!", err=True)
        sys.exit(130)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
