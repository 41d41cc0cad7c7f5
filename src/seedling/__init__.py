"""Seedling - Python project bootstrapper.

Renders bundled templates into a new Python project and runs the
bootstrap checklist (version control, dependency sync, pre-commit hooks,
first test run).

This package contains:
- Placeholder validation and template context building
- Template discovery and rendering
- Bootstrap step definitions and a sequential step runner
- Configuration and logging utilities
- The ``seedling`` command-line interface
"""

# Version information
__version__ = "0.4.1"

__all__ = ["__version__"]
