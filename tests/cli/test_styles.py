"""Tests for CLI themes and message helpers."""

import pytest

from seedling.cli import styles
from seedling.cli.styles import (
    DEFAULT_THEME,
    MONO_THEME,
    ColorTheme,
    Messages,
    get_active_theme,
    load_theme_from_config,
    set_theme,
)


@pytest.fixture(autouse=True)
def restore_theme():
    yield
    set_theme(DEFAULT_THEME)


class TestThemes:
    def test_derived_colors(self):
        theme = ColorTheme(primary="#646464")
        assert theme.header == "#646464"
        assert theme.subheader == "#555555"

    def test_default_theme_from_empty_config(self):
        assert load_theme_from_config() is DEFAULT_THEME

    def test_named_theme(self, write_config):
        write_config("cli:\n  theme: mono\n")
        assert load_theme_from_config() is MONO_THEME

    def test_unknown_theme_falls_back(self, write_config):
        write_config("cli:\n  theme: neon\n")
        assert load_theme_from_config() is DEFAULT_THEME

    def test_custom_theme(self, write_config):
        write_config("cli:\n  theme: custom\n  custom_theme:\n    primary: '#123456'\n")
        theme = load_theme_from_config()
        assert theme.primary == "#123456"
        assert theme.success == DEFAULT_THEME.success

    def test_custom_theme_invalid_color(self, write_config):
        write_config("cli:\n  theme: custom\n  custom_theme:\n    primary: red\n")
        assert load_theme_from_config() is DEFAULT_THEME

    def test_custom_theme_unknown_key(self, write_config):
        write_config("cli:\n  theme: custom\n  custom_theme:\n    sparkle: '#123456'\n")
        assert load_theme_from_config() is DEFAULT_THEME

    def test_set_theme_keeps_console_instance(self):
        console = styles.console
        set_theme(MONO_THEME)
        assert styles.console is console
        assert get_active_theme() is MONO_THEME
        assert styles.get_questionary_style() is styles.custom_style


class TestMessages:
    def test_markup(self):
        assert Messages.success("done") == "[success]✓ done[/success]"
        assert Messages.error("bad") == "[error]✗ bad[/error]"
        assert Messages.command("uv sync") == "[command]uv sync[/command]"
        assert Messages.label_value("a", "b") == "[label]a:[/label] [value]b[/value]"
