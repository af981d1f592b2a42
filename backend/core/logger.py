import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from core.config import settings

_configured = set()


def setup_logger(name: Optional[str] = None, log_level: Optional[str] = None) -> logging.Logger:
    """
    Sets up a logger with console output and, when LOG_FILE is configured,
    a rotating file handler. Calling it again returns the same logger untouched.
    """
    logger = logging.getLogger(name)
    level = logging.getLevelName(log_level or settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO
    logger.setLevel(level)

    # Prevent adding handlers multiple times
    if name in _configured:
        return logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s [%(name)s] %(message)s"))
    logger.addHandler(console_handler)

    if settings.log_file:
        log_file = Path(settings.log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"  # 5 MB
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)

    _configured.add(name)
    return logger
