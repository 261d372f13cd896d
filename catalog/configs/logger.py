"""File logging helper shared by every module."""

from logging import INFO, Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pythonjsonlogger.json import JsonFormatter

from catalog.configs.settings import settings

LOG_FILE_NAME = "catalog.log"
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 5


def file_logger(logger: Logger) -> Logger:
    """
    Attach a rotating JSON file handler to ``logger``.

    Does nothing when ``LOG_TO_FILE`` is off or the handler is already attached,
    so modules can call it unconditionally at import time.

    Args:
        logger: Logger returned by ``logging.getLogger(__name__)``.

    Returns:
        The same logger, for chaining.
    """
    if not settings.LOG_TO_FILE:
        return logger

    if any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        return logger

    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(INFO)
    handler.setFormatter(JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
    return logger
