"""Tests for the exception hierarchy."""

from seedling.bootstrap import BootstrapStep, StepResult
from seedling.errors import (
    BootstrapError,
    ConfigurationError,
    PlaceholderError,
    SeedlingError,
    TemplateError,
)


def test_all_errors_share_base():
    for cls in (ConfigurationError, PlaceholderError, TemplateError, BootstrapError):
        assert issubclass(cls, SeedlingError)


def test_input_errors_are_value_errors():
    assert issubclass(PlaceholderError, ValueError)
    assert issubclass(TemplateError, ValueError)
    assert not issubclass(BootstrapError, ValueError)


def test_placeholder_error_carries_name():
    err = PlaceholderError("bad", "python_version")
    assert err.placeholder == "python_version"
    assert str(err) == "bad"


def test_bootstrap_error_carries_results():
    result = StepResult(BootstrapStep("git-init", "Init"), "failed")
    err = BootstrapError("stopped", [result])
    assert err.results == [result]
    assert BootstrapError("stopped").results == []
