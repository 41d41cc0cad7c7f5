"""
Pytest configuration and shared test utilities.

Every test runs against an isolated configuration: ``SEEDLING_CONFIG`` points
at a file inside ``tmp_path`` (absent unless a test writes it) and the cached
configuration is reset around each test.
"""

import pytest
from click.testing import CliRunner

from seedling.cli import styles
from seedling.placeholders import build_context
from seedling.utils.config import reset_config

SEEDLING_ENV_VARS = (
    "SEEDLING_CONFIG",
    "SEEDLING_PROJECT",
    "SEEDLING_PACKAGE_MANAGER",
    "SEEDLING_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point seedling at a per-test config file and forget cached config."""
    for var in SEEDLING_ENV_VARS:
        monkeypatch.delenv(var, raising=False)

    config_file = tmp_path / "seedling-config.yml"
    monkeypatch.setenv("SEEDLING_CONFIG", str(config_file))
    # Author detection would otherwise read the developer's git config
    monkeypatch.setattr("seedling.placeholders.detect_author", lambda: ("", ""))

    reset_config()
    yield config_file
    reset_config()


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    """Stop Rich from wrapping long temporary paths in captured output."""
    monkeypatch.setattr(styles.console, "width", 200)


@pytest.fixture
def write_config(isolated_config):
    """Write YAML text to the isolated config file."""

    def _write(text: str):
        isolated_config.write_text(text)
        reset_config()
        return isolated_config

    return _write


@pytest.fixture
def cli_runner():
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def make_context():
    """Factory for template contexts with sensible defaults."""

    def _make(project_name: str = "my-lib", **overrides):
        extra = {
            "layout": overrides.pop("layout", "library"),
            "features": overrides.pop("features", ["github_actions", "pre_commit"]),
        }
        return build_context(project_name, extra=extra, **overrides)

    return _make
