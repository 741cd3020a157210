"""
Logging configuration for the explorer.

Every module logs through logging.getLogger(__name__), so all records end
up under the package logger configured here.
"""

import logging
import logging.handlers


LOGGER_NAME = "mandelbrot_explorer"


def get_logger():
    """Return the package logger."""
    return logging.getLogger(LOGGER_NAME)


def configure_logging(level=logging.INFO, console=True, log_file=None,
                      rotate_bytes=1024 * 1024, rotate_count=3):
    """
    Install fresh handlers on the package logger.

    Handlers from a previous call are closed and removed first, so calling
    this again reconfigures rather than duplicates output.

    Args:
        level: Level for the logger and its handlers
        console: Log to stderr
        log_file: Path of a rotating log file (None = no file)
        rotate_bytes, rotate_count: Rotation size and number of backups

    Returns:
        The configured package logger
    """
    logger = get_logger()
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(threadName)s %(levelname)s %(name)s - %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    handlers = []
    if console:
        handlers.append(logging.StreamHandler())
    if log_file:
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file, maxBytes=rotate_bytes, backupCount=rotate_count, encoding="utf-8"
        ))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


def level_from_name(name):
    """Map a level name like 'debug' to its logging constant. Raises ValueError."""
    level = logging.getLevelName(str(name).upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name}")
    return level
