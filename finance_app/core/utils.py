"""Shared utility functions for the Personal Finance Tracker project."""

import logging
from datetime import UTC, date, datetime
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path

import colorlog

LOGGER_NAME = "finance-tracker"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
CENTS = Decimal("0.01")


def get_logger(name: str) -> logging.Logger:
    """Get a logger with a colorized format for the project.

    Loggers below the ``finance-tracker`` namespace hand their records to the project logger, so the
    file handler installed by ``setup_logging`` sees them too.
    """
    if name.startswith(f"{LOGGER_NAME}."):
        get_logger(LOGGER_NAME)
        return logging.getLogger(name)
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = colorlog.ColoredFormatter(
            "%(log_color)s" + LOG_FORMAT,
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.propagate = False
    return logger


def setup_logging(log_file: str | None, level: str = "INFO") -> logging.Logger:
    """Configure the project logger for console output and, optionally, a persistent log file."""
    logger = get_logger(LOGGER_NAME)
    logger.setLevel(level.upper())
    if log_file and not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        ensure_dir(Path(log_file).parent)
        # File output is not colorized
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level.upper())
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)
    return logger


def ensure_dir(path: str | Path) -> None:
    """Ensure a directory exists (like mkdir -p)."""
    Path(path).mkdir(parents=True, exist_ok=True)


def round_money(value: Decimal) -> Decimal:
    """Round an accumulated amount to cents for display."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def month_key(value: date) -> str:
    """Return the ``YYYY-MM`` month string a calendar date falls in."""
    return f"{value.year:04d}-{value.month:02d}"


def utcnow() -> datetime:
    """Get the current UTC time."""
    return datetime.now(UTC)
