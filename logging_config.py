"""
Car Rental Desk - Logging Configuration Module

Console output plus one log file per day under Documents/CarRental/Logs/.
Call setup_logging() once from the entry point; modules only call get_logger().
"""

import logging
from pathlib import Path
from datetime import date
from typing import Optional, Union

LOGGER_NAME = 'CarRental'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def default_log_dir() -> Path:
    return Path.home() / 'Documents' / 'CarRental' / 'Logs'


def resolve_level(level: Union[int, str]) -> int:
    """Accept logging.DEBUG or 'debug'; unknown names fall back to INFO."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def daily_log_file(log_dir: Path, day: Optional[date] = None) -> Path:
    """CarRental_YYYY-MM-DD.log inside log_dir."""
    day = day or date.today()
    return log_dir / f"CarRental_{day.isoformat()}.log"


def setup_logging(log_level: Union[int, str] = logging.INFO, log_to_file: bool = True,
                  log_dir: Optional[Path] = None) -> logging.Logger:
    """
    Attach console and daily-file handlers to the CarRental logger.

    Safe to call more than once; handlers are only attached the first time.
    If the log folder cannot be created the desk keeps running with
    console output only.

    Args:
        log_level: Level as an int or its name ('INFO', 'debug', ...)
        log_to_file: Also write to the daily log file
        log_dir: Folder for log files, default_log_dir() when omitted

    Returns:
        The CarRental logger
    """
    level = resolve_level(log_level)
    app_logger = logging.getLogger(LOGGER_NAME)
    app_logger.setLevel(level)
    if app_logger.handlers:
        return app_logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler()]

    file_error = None
    if log_to_file:
        target_dir = Path(log_dir) if log_dir else default_log_dir()
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(daily_log_file(target_dir), encoding='utf-8'))
        except OSError as e:
            file_error = e

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        app_logger.addHandler(handler)

    if file_error is not None:
        app_logger.warning(f"File logging disabled: {file_error}")
    elif log_to_file:
        app_logger.info(f"Logging to file: {handlers[-1].baseFilename}")

    return app_logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Child of the CarRental logger for a module (usually __name__)."""
    return logging.getLogger(f'{LOGGER_NAME}.{name}' if name else LOGGER_NAME)
