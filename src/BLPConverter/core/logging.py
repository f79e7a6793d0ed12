"""Logging setup for the converter."""

import logging
import logging.handlers
import os
import threading

logger = logging.getLogger("blp_converter")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Rotate converter logs at 5 MB, keep 3 backups
_LOG_MAX_BYTES = 5 * 1024 * 1024
_LOG_BACKUP_COUNT = 3
_setup_lock = threading.Lock()


def _resolve_level(level: str) -> int:
    numeric = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric, int):
        print(f"Warning: Invalid log level '{level}', defaulting to INFO")
        return logging.INFO
    return numeric


def _open_log_file(log_file: str) -> logging.Handler:
    os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=_LOG_MAX_BYTES, backupCount=_LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def setup_logging(level: str = "INFO", log_file: str = None, force: bool = False):
    """Configure console (and optional rotating file) logging.

    When the root logger has no handlers, or *force* is set, the root logger
    is configured. Otherwise the converter is running inside a host
    application: only the ``blp_converter`` logger is touched, and a log file
    is attached to it at most once.
    """
    numeric_level = _resolve_level(level)
    with _setup_lock:
        root = logging.getLogger()
        if force or not root.handlers:
            handlers = [logging.StreamHandler()]
            if log_file:
                handlers.append(_open_log_file(log_file))
            logging.basicConfig(level=numeric_level, format=LOG_FORMAT,
                                handlers=handlers, force=force)
            return

        logger.setLevel(numeric_level)
        if not log_file:
            return
        target = os.path.abspath(log_file)
        if any(getattr(h, "baseFilename", None) == target for h in logger.handlers):
            return
        logger.addHandler(_open_log_file(log_file))
        logger.info("Logging to %s", target)
