"""Template placeholders and render context.

Every generated project is described by four placeholders:

============== ==================================
Placeholder    Meaning
============== ==================================
project_name   target directory name
package_name   importable package name
description    one-line project description
python_version target runtime version string
============== ==================================

:func:`build_context` validates them, derives the remaining template
variables (author, CI version matrix, ...) and returns the dictionary handed
to Jinja2. :func:`substitute` performs the literal ``{name}`` replacement used
for template *paths* such as ``src/{package_name}/__init__.py.j2``.
"""

from __future__ import annotations

import datetime
import keyword
import re
import subprocess
from dataclasses import dataclass
from typing import Any

from seedling.errors import PlaceholderError

# Newest CPython minor release the generated CI matrix targets
LATEST_PYTHON_MINOR = 13
MIN_PYTHON_MINOR = 9
DEFAULT_PYTHON_VERSION = "3.12"

_PROJECT_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")
_PYTHON_VERSION_RE = re.compile(r"^(\d+)\.(\d+)$")
_TOKEN_RE = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


@dataclass(frozen=True)
class Placeholder:
    """A named template placeholder."""

    name: str
    meaning: str
    rule: str
    required: bool = False


PLACEHOLDERS: tuple[Placeholder, ...] = (
    Placeholder(
        "project_name",
        "target directory name",
        "letters, digits, '-', '_' or '.', starting with a letter or digit",
        required=True,
    ),
    Placeholder(
        "package_name",
        "importable package name",
        "lowercase Python identifier, derived from project_name when omitted",
    ),
    Placeholder(
        "description",
        "one-line project description",
        "single line of text",
    ),
    Placeholder(
        "python_version",
        "target runtime version string",
        f"3.MINOR with MINOR >= {MIN_PYTHON_MINOR}",
    ),
)


def derive_package_name(project_name: str) -> str:
    """Derive an importable package name from a project name.

    Examples:
        >>> derive_package_name("My-Project")
        'my_project'
        >>> derive_package_name("acme.tools")
        'acme_tools'
    """
    name = re.sub(r"[-.\s]+", "_", project_name.strip()).lower()
    if name and name[0].isdigit():
        name = f"_{name}"
    return name


def validate_project_name(value: str) -> str:
    name = (value or "").strip()
    if not name:
        raise PlaceholderError("Project name cannot be empty", "project_name")
    if "/" in name or "\\" in name:
        raise PlaceholderError(
            f"Project name '{name}' must be a directory name, not a path", "project_name"
        )
    if not _PROJECT_NAME_RE.match(name):
        raise PlaceholderError(
            f"Invalid project name '{name}': use letters, digits, '-', '_' or '.', "
            "starting with a letter or digit",
            "project_name",
        )
    return name


def validate_package_name(value: str) -> str:
    name = (value or "").strip()
    if not name.isidentifier():
        raise PlaceholderError(
            f"Invalid package name '{name}': must be a valid Python identifier", "package_name"
        )
    if keyword.iskeyword(name):
        raise PlaceholderError(
            f"Invalid package name '{name}': '{name}' is a Python keyword", "package_name"
        )
    if name != name.lower():
        raise PlaceholderError(
            f"Invalid package name '{name}': package names must be lowercase", "package_name"
        )
    return name


def validate_description(value: str) -> str:
    text = (value or "").strip()
    if "\n" in text or "\r" in text:
        raise PlaceholderError("Description must be a single line", "description")
    return text


def validate_python_version(value: str) -> str:
    version = str(value or "").strip()
    match = _PYTHON_VERSION_RE.match(version)
    if not match:
        raise PlaceholderError(
            f"Invalid Python version '{version}': expected MAJOR.MINOR (e.g. 3.12)",
            "python_version",
        )
    major, minor = int(match.group(1)), int(match.group(2))
    if major != 3 or minor < MIN_PYTHON_MINOR:
        raise PlaceholderError(
            f"Unsupported Python version '{version}': requires 3.{MIN_PYTHON_MINOR} or newer",
            "python_version",
        )
    return f"{major}.{minor}"


def python_version_matrix(python_version: str) -> list[str]:
    """List the CPython versions from ``python_version`` up to the newest supported one.

    Examples:
        >>> python_version_matrix("3.11")
        ['3.11', '3.12', '3.13']
    """
    minor = int(validate_python_version(python_version).split(".")[1])
    last = max(minor, LATEST_PYTHON_MINOR)
    return [f"3.{m}" for m in range(minor, last + 1)]


def _git_config(key: str) -> str:
    try:
        result = subprocess.run(
            ["git", "config", "--get", key], capture_output=True, text=True, timeout=5
        )
    except (FileNotFoundError, subprocess.TimeoutExpired, OSError):
        return ""
    return result.stdout.strip() if result.returncode == 0 else ""


def detect_author() -> tuple[str, str]:
    """Return ``(name, email)`` from the user's git configuration, or empty strings."""
    return _git_config("user.name"), _git_config("user.email")


def build_context(
    project_name: str,
    *,
    package_name: str | None = None,
    description: str | None = None,
    python_version: str | None = None,
    defaults: dict[str, Any] | None = None,
    extra: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Validate placeholders and build the template render context.

    Args:
        project_name: Target directory name
        package_name: Importable package name (derived from project_name if None)
        description: One-line description (generic text if None)
        python_version: Target Python version (``defaults['python_version']`` if None)
        defaults: The ``defaults`` section of the user configuration
        extra: Additional context values (layout, features, ...) merged last

    Returns:
        Render context dictionary

    Raises:
        PlaceholderError: If any placeholder value is invalid
    """
    from seedling import __version__

    defaults = defaults or {}

    project_name = validate_project_name(project_name)
    package_name = validate_package_name(package_name or derive_package_name(project_name))
    description = validate_description(
        description if description is not None else f"{project_name} - a Python project"
    )
    python_version = validate_python_version(
        python_version or defaults.get("python_version") or DEFAULT_PYTHON_VERSION
    )

    author = defaults.get("author") or ""
    author_email = defaults.get("author_email") or ""
    if not author or not author_email:
        git_name, git_email = detect_author()
        author = author or git_name
        author_email = author_email or git_email

    ctx: dict[str, Any] = {
        "project_name": project_name,
        "package_name": package_name,
        "description": description,
        "python_version": python_version,
        "python_version_nodot": python_version.replace(".", ""),
        "python_versions": python_version_matrix(python_version),
        "author": author,
        "author_email": author_email,
        "license": defaults.get("license") or "MIT",
        "year": datetime.date.today().year,
        "seedling_version": __version__,
        **(extra or {}),
    }
    return ctx


def substitute(text: str, values: dict[str, Any], *, strict: bool = True) -> str:
    """Replace literal ``{name}`` tokens with values.

    Args:
        text: Text containing ``{name}`` tokens
        values: Mapping of placeholder names to values
        strict: Raise on tokens without a value instead of leaving them untouched

    Raises:
        PlaceholderError: If ``strict`` and a token has no value

    Examples:
        >>> substitute("src/{package_name}/__init__.py", {"package_name": "demo"})
        'src/demo/__init__.py'
    """

    def replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in values:
            return str(values[name])
        if strict:
            raise PlaceholderError(f"Unknown placeholder '{{{name}}}' in '{text}'", name)
        return match.group(0)

    return _TOKEN_RE.sub(replace, text)
