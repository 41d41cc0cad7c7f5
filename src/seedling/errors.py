"""Exception hierarchy for Seedling.

All errors raised deliberately by seedling derive from :class:`SeedlingError`.
Validation-type errors also derive from :class:`ValueError` so that callers
(the CLI in particular) can treat "bad input" uniformly.

.. seealso::
   :mod:`seedling.placeholders` : Raises :class:`PlaceholderError`
   :mod:`seedling.cli.templates` : Raises :class:`TemplateError`
   :mod:`seedling.bootstrap.runner` : Raises :class:`BootstrapError`
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from seedling.bootstrap.runner import StepResult


class SeedlingError(Exception):
    """Base exception for all seedling errors."""

    pass


class ConfigurationError(SeedlingError):
    """Exception for configuration-related errors.

    Raised when the user configuration file is unreadable or does not
    contain a mapping at its top level.
    """

    pass


class PlaceholderError(SeedlingError, ValueError):
    """Exception for invalid or unknown template placeholders.

    Raised when a placeholder value fails validation (e.g. a package name
    that is not a Python identifier) or when strict substitution meets a
    token that has no value.
    """

    def __init__(self, message: str, placeholder: str | None = None):
        super().__init__(message)
        self.placeholder = placeholder


class TemplateError(SeedlingError, ValueError):
    """Exception for template discovery and rendering errors.

    Raised for unknown layouts or features, Jinja2 rendering failures and
    target directories that already exist.
    """

    pass


class BootstrapError(SeedlingError):
    """Exception for a failed required bootstrap step.

    Carries the full list of step results so callers can report what ran,
    what failed and what was skipped.
    """

    def __init__(self, message: str, results: list[StepResult] | None = None):
        super().__init__(message)
        self.results = list(results or [])
