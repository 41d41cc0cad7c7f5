"""Command-line interface for seedling.

This package provides the CLI, organizing all commands under a single
'seedling' entry point.

Commands:
    - init: Create a new project and run the bootstrap checklist
    - plan: Preview files and commands without writing anything
    - templates: List available layouts and features
    - check: Verify a bootstrapped project
    - config: Inspect configuration (show, export)

Architecture:
    Uses Click for command-line parsing with a group-based structure.
    Each command is implemented in its own module and lazy-loaded.
"""

from .main import cli, main

__all__ = ["cli", "main"]
