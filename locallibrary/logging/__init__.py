"""
Logging for the application.

- Formatters: colorized console output or JSON lines
- Setup: root logger configuration and module logger lookup
"""

from locallibrary.logging.setup import get_logger, setup_logging
from locallibrary.logging.formatters import JSONFormatter, ColorizedFormatter

__all__ = ["get_logger", "setup_logging", "JSONFormatter", "ColorizedFormatter"]
