"""Interactive prompts for ``seedling init --interactive``.

Asks only for values not already given on the command line. Every prompt
returns ``None`` when the user cancels (Ctrl+C / ESC), which callers treat
as an abort.
"""

from typing import Any

import questionary
from questionary import Choice

from seedling.cli.styles import get_questionary_style
from seedling.errors import PlaceholderError
from seedling.placeholders import (
    DEFAULT_PYTHON_VERSION,
    derive_package_name,
    validate_package_name,
    validate_project_name,
    validate_python_version,
)


def _validator(func):
    """Adapt a placeholder validator to questionary's True-or-message protocol."""

    def validate(value: str):
        try:
            func(value)
        except PlaceholderError as e:
            return str(e)
        return True

    return validate


def ask_project_name(default: str = "my-project") -> str | None:
    return questionary.text(
        "Project name:",
        default=default,
        validate=_validator(validate_project_name),
        style=get_questionary_style(),
    ).ask()


def ask_package_name(project_name: str) -> str | None:
    return questionary.text(
        "Package name:",
        default=derive_package_name(project_name),
        validate=_validator(validate_package_name),
        style=get_questionary_style(),
    ).ask()


def ask_description(project_name: str) -> str | None:
    return questionary.text(
        "One-line description:",
        default=f"{project_name} - a Python project",
        style=get_questionary_style(),
    ).ask()


def ask_python_version(default: str = DEFAULT_PYTHON_VERSION) -> str | None:
    return questionary.text(
        "Python version:",
        default=default,
        validate=_validator(validate_python_version),
        style=get_questionary_style(),
    ).ask()


def select_layout(layouts: dict[str, str], default: str = "library") -> str | None:
    """Interactive layout selection.

    Args:
        layouts: Mapping of layout name to description
        default: Pre-selected layout
    """
    choices = [Choice(f"{name:10} - {desc}", value=name) for name, desc in layouts.items()]
    return questionary.select(
        "Source layout:",
        choices=choices,
        default=next((c for c in choices if c.value == default), None),
        style=get_questionary_style(),
    ).ask()


def select_features(features: dict[str, str], enabled: list[str]) -> list[str] | None:
    """Interactive feature selection (checkbox)."""
    choices = [
        Choice(f"{name:16} - {desc}", value=name, checked=name in enabled)
        for name, desc in features.items()
    ]
    return questionary.checkbox(
        "Features:", choices=choices, style=get_questionary_style()
    ).ask()


def prompt_missing(values: dict[str, Any], layouts: dict[str, str], features: dict[str, str]):
    """Fill ``None`` entries of ``values`` interactively.

    ``values`` holds project_name, package_name, description, python_version,
    layout and features. Returns the completed dict, or None if cancelled.
    """
    result = dict(values)

    if not result.get("project_name"):
        result["project_name"] = ask_project_name()
        if not result["project_name"]:
            return None

    if result.get("package_name") is None:
        result["package_name"] = ask_package_name(result["project_name"])
        if result["package_name"] is None:
            return None

    if result.get("description") is None:
        result["description"] = ask_description(result["project_name"])
        if result["description"] is None:
            return None

    if result.get("python_version") is None:
        result["python_version"] = ask_python_version()
        if result["python_version"] is None:
            return None

    layout = select_layout(layouts, default=result.get("layout") or "library")
    if layout is None:
        return None
    result["layout"] = layout

    selected = select_features(features, list(result.get("features") or []))
    if selected is None:
        return None
    result["features"] = selected

    return result
