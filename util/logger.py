# util/logger.py
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from config.settings import settings

logging.captureWarnings(True)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

# Third-party loggers that chatter at INFO (httpx logs every Gemini request)
_NOISY_LOGGERS = ("httpx", "httpcore", "multipart", "python_multipart")
_UVICORN_LOGGERS = ("uvicorn.error", "uvicorn.access")

_LEVEL_COLORS = {
    logging.DEBUG: "\033[37m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[41m",
}
_RESET = "\033[0m"


class ColoredFormatter(logging.Formatter):
    """Colors the level name. Works on a copy so other handlers see it plain."""

    def format(self, record: logging.LogRecord) -> str:
        tinted = logging.makeLogRecord(record.__dict__)
        color = _LEVEL_COLORS.get(record.levelno, _RESET)
        tinted.levelname = f"{color}{record.levelname}{_RESET}"
        return super().format(tinted)


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _file_handler(level: int) -> logging.Handler:
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    handler = RotatingFileHandler(
        os.path.join(settings.LOG_DIR, settings.LOG_FILE_NAME),
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def init_logger() -> logging.Logger:
    """
    Configure the root logger once per process.

    Console output always goes to stdout with colored levels. A rotating
    plain-text file under LOG_DIR is added when LOG_TO_FILE is set.
    """
    root = logging.getLogger()
    app_logger = logging.getLogger(settings.LOGGER_NAME)
    if getattr(root, "_veritas_inited", False):
        return app_logger

    level = logging.getLevelName((settings.LOG_LEVEL or "INFO").upper())
    if not isinstance(level, int):
        level = logging.INFO
    root.setLevel(level)

    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(_console_handler(level))
    if settings.LOG_TO_FILE:
        root.addHandler(_file_handler(level))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    for name in _UVICORN_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO)

    root._veritas_inited = True  # type: ignore[attr-defined]
    app_logger.debug("logger.init level=%s file=%s", logging.getLevelName(level), settings.LOG_TO_FILE)
    return app_logger
