"""Utilities for project path resolution.

Supports the --project flag and the SEEDLING_PROJECT environment variable
for commands that inspect an existing project.
"""

import os
import tomllib
from pathlib import Path
from typing import Any


def resolve_project_path(project_arg: str | None = None) -> Path:
    """Resolve project directory from multiple sources.

    Resolution priority:
    1. --project CLI argument (if provided)
    2. SEEDLING_PROJECT environment variable (if set)
    3. Current working directory (default)

    Args:
        project_arg: Project directory from --project flag (optional)

    Returns:
        Resolved project directory as Path object

    Examples:
        >>> resolve_project_path("~/projects/my-tool")
        PosixPath('/Users/user/projects/my-tool')
    """
    if project_arg:
        return Path(project_arg).expanduser().resolve()

    env_project = os.environ.get("SEEDLING_PROJECT")
    if env_project:
        return Path(env_project).expanduser().resolve()

    return Path.cwd()


def load_pyproject(project_path: Path) -> dict[str, Any]:
    """Load ``pyproject.toml`` from a project directory.

    Raises:
        FileNotFoundError: If the project has no pyproject.toml
        tomllib.TOMLDecodeError: If the file is not valid TOML
    """
    with open(project_path / "pyproject.toml", "rb") as f:
        return tomllib.load(f)
