"""
Logging configuration using loguru.

``configure_from_config`` reads the ``logging`` section (level, file,
format) and is what the CLI commands call; ``setup_logging`` is the
lower-level entry point for library consumers.
"""

import sys

from loguru import logger

DEFAULT_FORMAT = "<level>[{level.name}]</level> {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{line} | {message}"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    fmt: str = DEFAULT_FORMAT,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Replace loguru's default DEBUG sink with a stderr sink and an optional file.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR).
        log_file: Path to log file. If None, only logs to stderr.
        fmt: Loguru format string for the stderr sink.
        rotation: Log file rotation size.
        retention: How long to keep rotated logs.
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=fmt)

    if log_file:
        logger.add(
            log_file,
            level=level.upper(),
            format=FILE_FORMAT,
            rotation=rotation,
            retention=retention,
        )


def configure_from_config(config, level: str | None = None) -> None:
    """Set up logging from a :class:`~healthsync.core.config.Config`.

    ``level`` (e.g. a ``--log-level`` flag) wins over ``logging.level``.
    """
    setup_logging(
        level=level or config.get("logging.level") or "WARNING",
        log_file=config.get("logging.file") or None,
        fmt=config.get("logging.format") or DEFAULT_FORMAT,
    )
