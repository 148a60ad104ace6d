"""
Logging utilities for modelSelector.

This module contains logging configuration and utilities.
"""

import logging
import sys
from typing import Optional, Union
from pathlib import Path

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s:%(lineno)d | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Get a logger instance for the given name.

    Args:
        name: Logger name
        level: Logging level

    Returns:
        Logger instance
    """
    logger = logging.getLogger(f"modelSelector.{name}")

    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

        logger.addHandler(console_handler)
        logger.setLevel(level)

        # 允许传播到根logger，以便写入日志文件
        logger.propagate = True

    return logger


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    log_format: Optional[str] = None
) -> Optional[logging.Handler]:
    """
    Setup logging configuration for the entire application.

    Component loggers already write to the console; the root logger only
    receives a file handler when ``log_file`` is given.

    Args:
        level: Logging level
        log_file: Optional log file path
        log_format: Optional custom log format

    Returns:
        The file handler that was added, or None
    """
    if log_format is None:
        log_format = LOG_FORMAT

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith("modelSelector.") and isinstance(logger, logging.Logger):
            logger.setLevel(level)
            for handler in logger.handlers:
                handler.setLevel(level)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(log_format, datefmt=DATE_FORMAT))
        root_logger.addHandler(file_handler)
        return file_handler

    return None
