"""Configuration and logging utilities.

Modules:
    config: User configuration loading and dot-path access
    logger: Rich component logging
"""

from . import config, logger

__all__ = ["config", "logger"]
