"""
Logging configuration for the Admin Gateway
"""
import logging
import sys
from pathlib import Path
from typing import List

from admin_gateway.core.config import settings


def setup_logging() -> None:
    """
    Set up logging configuration
    """
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Configure logging level based on environment
    log_level = logging.DEBUG if settings.DEBUG else logging.INFO

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    # File logging is optional; an empty LOG_DIR disables it
    if settings.LOG_DIR:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / "admin_gateway.log"))

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=handlers,
    )

    # Set specific loggers
    logging.getLogger("uvicorn.access").disabled = True
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance for a specific module

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
