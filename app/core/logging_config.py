import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Library loggers that drown out bracket output at INFO
NOISY_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "celery": logging.INFO,
    "kombu": logging.WARNING,
    "redis": logging.WARNING,
}


def _resolve_level(log_level):
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "INFO")
    if isinstance(log_level, str):
        level = logging.getLevelName(log_level.upper())
        return level if isinstance(level, int) else logging.INFO
    return log_level


def setup_logging(log_level=None):
    """
    Configure the root logger for the CLI, API and worker.

    Args:
        log_level: A logging level or level name; defaults to $LOG_LEVEL or INFO
    """
    level = _resolve_level(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Re-running setup (e.g. uvicorn reload) must not stack handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root_logger.addHandler(console_handler)

    for name, noisy_level in NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(max(noisy_level, level))

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
