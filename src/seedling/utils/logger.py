"""
Component Logger

Provides colored logging for seedling components with:
- Rich terminal output with component-specific colors
- Graceful fallbacks when configuration is unavailable
- Simple, clear interface

Usage:
    logger = get_logger("templates")
    logger.info("Rendering pyproject.toml")
    logger.debug("Detailed trace")
    logger.success("Project created")
    logger.warning("Something to note")
    logger.error("Something went wrong")
    logger.timing("git init took 0.1 seconds")

    # Custom loggers with explicit parameters
    logger = get_logger(name="custom_component", color="blue")
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from seedling.utils.config import get_config_value


class ComponentLogger:
    """
    Rich-formatted logger for seedling components with color coding.

    Message Types:
    - key_info: Important operational information
    - info: Normal operational messages
    - debug: Detailed tracing information
    - warning: Warning messages
    - error: Error messages
    - success: Success messages
    - timing: Timing information
    """

    def __init__(self, base_logger: logging.Logger, component_name: str, color: str = "white"):
        """
        Initialize component logger.

        Args:
            base_logger: Underlying Python logger
            component_name: Name of the component (e.g., 'templates', 'bootstrap')
            color: Rich color name for this component
        """
        self.base_logger = base_logger
        self.component_name = component_name
        self.color = color

    def _format_message(self, message: str, style: str, emoji: str = "") -> str:
        """Format message with Rich markup and emoji prefix."""
        prefix = f"{emoji}{self.component_name.title()}: "
        if style:
            return f"[{style}]{prefix}{message}[/{style}]"
        return f"{prefix}{message}"

    def key_info(self, message: str) -> None:
        """Important operational information."""
        formatted = self._format_message(message, f"bold {self.color}", "")
        self.base_logger.info(formatted)

    def info(self, message: str) -> None:
        formatted = self._format_message(message, self.color, "")
        self.base_logger.info(formatted)

    def debug(self, message: str) -> None:
        formatted = self._format_message(message, f"dim {self.color}", "🔍 ")
        self.base_logger.debug(formatted)

    def warning(self, message: str) -> None:
        formatted = self._format_message(message, "bold yellow", "⚠️  ")
        self.base_logger.warning(formatted)

    def error(self, message: str, exc_info: bool = False) -> None:
        formatted = self._format_message(message, "bold red", "❌ ")
        self.base_logger.error(formatted, exc_info=exc_info)

    def success(self, message: str) -> None:
        formatted = self._format_message(message, "bold green", "✅ ")
        self.base_logger.info(formatted)

    def timing(self, message: str) -> None:
        formatted = self._format_message(message, "bold white", "🕒 ")
        self.base_logger.info(formatted)

    def exception(self, message: str, *args, **kwargs) -> None:
        formatted = self._format_message(message, "bold red", "❌ ")
        self.base_logger.exception(formatted, *args, **kwargs)

    # Properties for compatibility
    @property
    def level(self) -> int:
        return self.base_logger.level

    @property
    def name(self) -> str:
        return self.base_logger.name

    def setLevel(self, level: int) -> None:
        self.base_logger.setLevel(level)

    def isEnabledFor(self, level: int) -> bool:
        return self.base_logger.isEnabledFor(level)


def _resolve_level() -> int:
    """Resolve the root log level from SEEDLING_LOG_LEVEL or ``logging.level``."""
    raw = os.environ.get("SEEDLING_LOG_LEVEL")
    if not raw:
        try:
            raw = get_config_value("logging.level", "WARNING")
        except Exception:
            raw = "WARNING"
    level = logging.getLevelName(str(raw).upper())
    return level if isinstance(level, int) else logging.WARNING


def _setup_rich_logging() -> None:
    """Configure Rich logging for the root logger (called once)."""
    root_logger = logging.getLogger()

    # Prevent duplicate handler registration
    for handler in root_logger.handlers:
        if isinstance(handler, RichHandler):
            return

    root_logger.setLevel(_resolve_level())

    try:
        rich_tracebacks = get_config_value("logging.rich_tracebacks", True)
        show_traceback_locals = get_config_value("logging.show_traceback_locals", False)
    except Exception:
        # Secure defaults when configuration system is unavailable
        rich_tracebacks = True
        show_traceback_locals = False

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=rich_tracebacks,
        markup=True,  # Enable [bold], [green], etc. in log messages
        show_path=False,
        show_time=True,
        show_level=True,
        tracebacks_show_locals=show_traceback_locals,
    )
    root_logger.addHandler(handler)


def get_logger(
    component_name: str = None,
    *,
    name: str = None,
    color: str = None,
) -> ComponentLogger:
    """
    Get a component logger.

    Args:
        component_name: Component name (e.g., 'templates', 'bootstrap')
        name: Direct logger name (keyword-only, bypasses color lookup)
        color: Rich color override (keyword-only)

    Returns:
        ComponentLogger instance

    Examples:
        logger = get_logger("bootstrap")
        logger.info("Running git init")

        logger = get_logger(name="test_logger", color="blue")
    """
    _setup_rich_logging()

    if name is not None:
        return ComponentLogger(logging.getLogger(name), name, color or "white")

    if component_name is None:
        raise ValueError(
            "Component name is required. Usage: get_logger('component_name') or "
            "get_logger(name='custom_name', color='blue')"
        )

    base_logger = logging.getLogger(f"seedling.{component_name}")

    try:
        color = get_config_value(f"logging.logging_colors.{component_name}") or "white"
    except Exception:
        # Logging continues even with config issues
        color = "white"

    return ComponentLogger(base_logger, component_name, color)
