"""Centralized color and style management for the seedling CLI.

This module provides a unified color scheme and styling utilities for all CLI
commands, ensuring consistent visual appearance.

Design Philosophy:
- Semantic color names (success, error, warning) rather than direct colors
- Theme-based approach allowing easy theme switching
- Rich console markup helpers for inline styling
- Questionary style integration for interactive prompts
"""

import sys
from dataclasses import dataclass

from questionary import Style as QuestionaryStyle
from rich.console import Console
from rich.theme import Theme

from seedling.utils.logger import get_logger

logger = get_logger("cli")


# ============================================================================
# THEME CONFIGURATION
# ============================================================================


@dataclass
class ColorTheme:
    """Defines a complete color theme for the CLI.

    Fixed standard colors (error, warning) follow UI conventions; the rest
    define the visual identity and can be customized from ``cli.custom_theme``.
    """

    # === FIXED STANDARD COLORS (UI Conventions) ===
    error: str = "#ff0000"
    warning: str = "#ffaa00"

    # === CONFIGURABLE THEME COLORS ===
    primary: str = "#5FA04E"
    success: str = "#7FB069"
    accent: str = "#E6AA68"
    command: str = "#8FB8DE"
    path: str = "#A2AE9D"
    info: str = "#8FB8DE"

    # === NEUTRAL COLORS ===
    text_primary: str = "#ffffff"
    text_secondary: str = "#888888"
    text_dim: str = "#666666"
    border_default: str = "#555555"
    border_dim: str = "#444444"

    def __post_init__(self):
        """Calculate derived colors from theme colors."""
        self.primary_dark = self._adjust_brightness(self.primary, 0.85)
        self.header = self.primary
        self.subheader = self.primary_dark

    @staticmethod
    def _adjust_brightness(hex_color: str, factor: float) -> str:
        """Adjust brightness of a hex color by a factor.

        Args:
            hex_color: Hex color string (e.g., "#ff0000")
            factor: Brightness multiplier (0.0-1.0 darkens, >1.0 lightens)

        Returns:
            Adjusted hex color string
        """
        hex_color = hex_color.lstrip("#")
        r, g, b = int(hex_color[0:2], 16), int(hex_color[2:4], 16), int(hex_color[4:6], 16)
        r = max(0, min(255, int(r * factor)))
        g = max(0, min(255, int(g * factor)))
        b = max(0, min(255, int(b * factor)))
        return f"#{r:02x}{g:02x}{b:02x}"


DEFAULT_THEME = ColorTheme()

# Plain theme for terminals with poor true-color support
MONO_THEME = ColorTheme(
    primary="#ffffff",
    success="#00ff00",
    accent="#ffff00",
    command="#00ffff",
    path="#aaaaaa",
    info="#00ffff",
)

THEME_REGISTRY = {
    "default": DEFAULT_THEME,
    "mono": MONO_THEME,
}


# ============================================================================
# ACTIVE THEME MANAGEMENT
# ============================================================================

_active_theme = DEFAULT_THEME
_theme_pushed = False


def get_active_theme() -> ColorTheme:
    """Get the currently active color theme."""
    return _active_theme


def _build_console(theme: ColorTheme) -> Console:
    # On Windows, force UTF-8 encoding to support Unicode characters
    if sys.platform == "win32":
        return Console(theme=_build_rich_theme(theme), force_terminal=True, legacy_windows=False)
    return Console(theme=_build_rich_theme(theme))


def set_theme(theme: ColorTheme):
    """Set a new active theme and rebuild console/styles.

    Args:
        theme: The ColorTheme to activate
    """
    global _active_theme, custom_style, _theme_pushed
    _active_theme = theme
    # Command modules hold a reference to ``console``; swap its theme in place
    if _theme_pushed:
        console.pop_theme()
    console.push_theme(_build_rich_theme(theme))
    _theme_pushed = True
    custom_style = _build_questionary_style(theme)


def load_theme_from_config(config_path: str | None = None) -> ColorTheme:
    """Resolve the theme named by ``cli.theme`` in the user configuration.

    ``custom`` builds a theme from ``cli.custom_theme``; unknown names and
    invalid colors fall back to the default theme with a warning.
    """
    from seedling.utils.config import get_config_value

    theme_name = get_config_value("cli.theme", "default", config_path)

    if theme_name == "custom":
        custom_colors = get_config_value("cli.custom_theme", {}, config_path) or {}
        for key, value in custom_colors.items():
            if not isinstance(value, str) or not value.startswith("#"):
                logger.warning(f"Invalid color format for {key}: {value}, using default")
                return DEFAULT_THEME
        try:
            return ColorTheme(**custom_colors)
        except TypeError as e:
            logger.warning(f"Failed to create custom theme: {e}, using default")
            return DEFAULT_THEME

    theme = THEME_REGISTRY.get(theme_name)
    if theme is None:
        logger.warning(f"Unknown theme '{theme_name}', using default")
        theme = DEFAULT_THEME
    return theme


def initialize_theme_from_config(config_path: str | None = None):
    """Initialize and apply theme from configuration.

    Called at CLI startup. Falls back to the default theme on any failure.
    """
    try:
        set_theme(load_theme_from_config(config_path))
    except Exception as e:
        logger.debug(f"Failed to load theme from config: {e}, using default")
        set_theme(DEFAULT_THEME)


def _build_rich_theme(theme: ColorTheme) -> Theme:
    return Theme(
        {
            # Status styles
            "success": f"bold {theme.success}",
            "error": f"bold {theme.error}",
            "warning": f"bold {theme.warning}",
            "info": f"bold {theme.info}",
            # Text styles
            "primary": f"bold {theme.primary}",
            "secondary": theme.text_secondary,
            "dim": theme.text_dim,
            # Component-specific styles
            "header": f"bold {theme.header}",
            "subheader": f"bold {theme.subheader}",
            "label": "bold",
            "value": theme.success,
            "path": theme.path,
            "command": theme.command,
            "accent": theme.accent,
            # Borders
            "border": theme.border_default,
            "border_dim": theme.border_dim,
        }
    )


def _build_questionary_style(theme: ColorTheme) -> QuestionaryStyle:
    return QuestionaryStyle(
        [
            ("qmark", f"fg:{theme.accent} bold"),
            ("question", "bold"),
            ("answer", f"fg:{theme.primary} bold"),
            ("pointer", f"fg:{theme.primary} bold"),
            ("highlighted", f"fg:{theme.primary} bold"),
            ("selected", f"fg:{theme.accent}"),
            ("separator", f"fg:{theme.text_dim}"),
            ("instruction", f"fg:{theme.text_dim} italic"),
            ("text", f"fg:{theme.text_secondary}"),
            ("disabled", f"fg:{theme.text_dim}"),
        ]
    )


# ============================================================================
# CONSOLE INSTANCE
# ============================================================================

console = _build_console(_active_theme)
custom_style = _build_questionary_style(_active_theme)


def get_questionary_style() -> QuestionaryStyle:
    """Get the Questionary style of the active theme."""
    return custom_style


# ============================================================================
# STYLE HELPERS
# ============================================================================


class Styles:
    """Reusable style names defined in the Rich theme."""

    # Status indicators
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    # Text styles
    BOLD = "bold"
    DIM = "dim"
    PRIMARY = "primary"
    SECONDARY = "secondary"

    # Component styles
    HEADER = "header"
    SUBHEADER = "subheader"
    LABEL = "label"
    VALUE = "value"
    PATH = "path"
    COMMAND = "command"
    ACCENT = "accent"

    # Borders
    BORDER = "border"
    BORDER_DIM = "border_dim"


class Messages:
    """Pre-formatted message helpers for common patterns."""

    @staticmethod
    def success(text: str) -> str:
        """Format a success message with checkmark."""
        return f"[success]✓ {text}[/success]"

    @staticmethod
    def error(text: str) -> str:
        """Format an error message with X mark."""
        return f"[error]✗ {text}[/error]"

    @staticmethod
    def warning(text: str) -> str:
        """Format a warning message with warning symbol."""
        return f"[warning]⚠️  {text}[/warning]"

    @staticmethod
    def info(text: str) -> str:
        """Format an info message with info symbol."""
        return f"[info]ℹ️  {text}[/info]"

    @staticmethod
    def header(text: str) -> str:
        return f"[header]{text}[/header]"

    @staticmethod
    def label_value(label: str, value: str) -> str:
        return f"[label]{label}:[/label] [value]{value}[/value]"

    @staticmethod
    def command(text: str) -> str:
        return f"[command]{text}[/command]"

    @staticmethod
    def path(text: str) -> str:
        return f"[path]{text}[/path]"


__all__ = [
    "ColorTheme",
    "DEFAULT_THEME",
    "MONO_THEME",
    "THEME_REGISTRY",
    "get_active_theme",
    "set_theme",
    "load_theme_from_config",
    "initialize_theme_from_config",
    "console",
    "custom_style",
    "get_questionary_style",
    "Styles",
    "Messages",
]
