"""
Centralized logging configuration for the Rattle fit engine.

Engine modules only emit DEBUG records through ``get_logger``; handlers are
attached once by the entry point (CLI or host application) via ``init_logger``.
"""

import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Optional

LOGGER_NAME = "rattle_fit"


def setup_logging(
    log_dir: Optional[Path] = None,
    log_level: str = "INFO",
    log_to_file: bool = True,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Set up logging configuration.

    Args:
        log_dir: Directory where log files will be stored (file logging is
            skipped when None)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Whether to log to file
        log_to_console: Whether to log to console

    Returns:
        Configured logger instance
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Clear existing handlers
    logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)8s] %(name)s:%(funcName)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    simple_formatter = logging.Formatter(
        fmt="[%(levelname)s] %(message)s",
        datefmt="%H:%M:%S"
    )

    # File handler - detailed logs
    if log_to_file and log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"rattle_fit_{timestamp}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)  # File gets everything
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)

    # Console handler goes to stderr so JSON on stdout stays parseable
    if log_to_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(simple_formatter)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Optional logger name (defaults to 'rattle_fit')

    Returns:
        Logger instance
    """
    if name:
        return logging.getLogger(f"{LOGGER_NAME}.{name}")
    return logging.getLogger(LOGGER_NAME)


# Initialize default logger (will be configured by main.py)
_logger: Optional[logging.Logger] = None


def init_logger(log_dir: Optional[Path] = None, log_level: str = "INFO", log_to_file: bool = False) -> logging.Logger:
    """Initialize the global logger."""
    global _logger
    _logger = setup_logging(log_dir, log_level, log_to_file=log_to_file)
    return _logger
