import logging
import sys
from typing import Any, Dict, Optional, Union

from locallibrary.core.config import Settings, get_settings
from locallibrary.logging.formatters import ColorizedFormatter, JSONFormatter

__all__ = ["get_logger", "setup_logging"]

_HANDLER_NAME = "locallibrary-console"


def get_logger(
    name: str, extra: Optional[Dict[str, Any]] = None
) -> Union[logging.Logger, logging.LoggerAdapter]:
    """
    Get a logger for a module.

    Handlers live on the root logger (see ``setup_logging``), so module loggers
    only carry their name.

    Args:
        name: Logger name
        extra: Extra fields attached to every message

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    if extra:
        return logging.LoggerAdapter(logger, extra)
    return logger


def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure the root logger once for the application.

    Args:
        settings: Settings to read LOG_LEVEL, LOG_FORMAT and DATABASE_ECHO from
    """
    settings = settings or get_settings()
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    if settings.LOG_FORMAT == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = ColorizedFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Replace only our own handler so pytest's capture handlers survive
    for handler in list(root_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.set_name(_HANDLER_NAME)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if not settings.DATABASE_ECHO:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
