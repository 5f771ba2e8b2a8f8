"""Logging setup for the pairs league server and CLI."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = 'fplpairs'

# Connection-pool chatter from requests
NOISY_LIBRARY_LOGGERS = ('urllib3',)

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(threadName)s] - %(message)s'
CONSOLE_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def _file_handler(log_dir: Path, level: int) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f'fplpairs_{datetime.now().strftime("%Y%m%d_%H%M%S")}.log'
    handler = logging.FileHandler(log_file, encoding='utf-8')
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    return handler


def _console_handler(level: int) -> logging.Handler:
    # stdout is reserved for command output such as `score --json`
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
    return handler


def setup_logging(
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
    log_to_file: bool = False,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Configure the ``fplpairs`` logger hierarchy.

    Safe to call more than once; previous handlers are replaced. Unless
    ``level`` is DEBUG, HTTP library loggers are held at WARNING.

    Args:
        log_dir: Directory for log files (default: ./logs)
        level: Logging level (default: INFO)
        log_to_file: Also write a timestamped log file
        log_to_console: Log to stderr

    Returns:
        The package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in logger.handlers:
        handler.close()
    logger.handlers = []

    if log_to_file:
        logger.addHandler(_file_handler(log_dir or Path('logs'), level))
    if log_to_console:
        logger.addHandler(_console_handler(level))

    library_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    return logger
