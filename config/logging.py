"""Logging configuration for the signer and its HTTP adapter."""
import logging
import sys
from typing import Optional, Union

from config.settings import get_settings


def configure_logging(level: Optional[Union[int, str]] = None):
    """
    Configure logging:
    - WARNING for the HTTP client libs
    - requested level for our app (DEBUG shows signature messages)
    - single stdout handler

    Args:
        level: Logging level; defaults to BTCCHINA_LOG_LEVEL from settings
    """
    if level is None:
        level = get_settings().log_level

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)

    # Silence verbose external libs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    # Our app logs
    logging.getLogger("api").setLevel(level)
    logging.getLogger("config").setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)

    # Remove existing handlers and add ours
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
