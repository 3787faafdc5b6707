# Path: bom_pivot/core/logger/ipo_logging.py
"""
IPO-Aware Logging for bom_pivot

Input-Process-Output separated logging for the pivot engine.

This module sets up logging with separate files for:
- INPUT layer (dimension config loader, record readers, CLI arguments)
- PROCESS layer (hierarchy builder, descendant index, composer, filters)
- OUTPUT layer (axis text rendering)
- Full activity (everything combined)
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from constants import LogCategory


LOG_FORMAT = '[%(asctime)s] [%(levelname)s] %(name)s - %(message)s'
CONSOLE_FORMAT = '[%(levelname)s] %(name)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

IPO_LAYERS = tuple(category.value for category in LogCategory)


class IPOFilter(logging.Filter):
    """Filter logs by IPO layer prefix."""

    def __init__(self, layer: str):
        """
        Initialize filter for specific IPO layer.

        Args:
            layer: 'input', 'process', or 'output'
        """
        super().__init__()
        self.layer = layer

    def filter(self, record: logging.LogRecord) -> bool:
        """Keep only records whose logger name starts with the layer."""
        return record.name.startswith(self.layer)


def _file_handler(path: Path, formatter: logging.Formatter) -> logging.FileHandler:
    handler = logging.FileHandler(path)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def setup_ipo_logging(
    log_dir: Optional[Path],
    log_level: str = 'INFO',
    console_output: bool = True
) -> None:
    """
    Set up IPO-aware logging for bom_pivot.

    Creates one log file per layer (input_activity.log,
    process_activity.log, output_activity.log) and full_activity.log
    with everything combined. Without a log_dir only the console
    handler is installed.

    Args:
        log_dir: Directory for log files, or None
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_output: Whether to also output to console

    Example:
        setup_ipo_logging(
            log_dir=Path('/var/log/bom_pivot'),
            log_level='DEBUG',
            console_output=False
        )
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        root_logger.addHandler(_file_handler(log_dir / 'full_activity.log', formatter))

        for layer in IPO_LAYERS:
            handler = _file_handler(log_dir / f'{layer}_activity.log', formatter)
            handler.addFilter(IPOFilter(layer))
            root_logger.addHandler(handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        root_logger.addHandler(console_handler)


def get_input_logger(name: str) -> logging.Logger:
    """
    Get logger for INPUT layer.

    Args:
        name: Logger name (e.g., 'dimension_loader', 'record_reader')

    Returns:
        Logger named 'input.<name>'
    """
    return logging.getLogger(f'input.{name}')


def get_process_logger(name: str) -> logging.Logger:
    """
    Get logger for PROCESS layer.

    Args:
        name: Logger name (e.g., 'hierarchy.tree_builder', 'pivot.composer')

    Returns:
        Logger named 'process.<name>'

    Example:
        logger = get_process_logger('hierarchy.tree_builder')
        logger.info("Building hierarchy for le")
    """
    return logging.getLogger(f'process.{name}')


def get_output_logger(name: str) -> logging.Logger:
    """
    Get logger for OUTPUT layer.

    Args:
        name: Logger name (e.g., 'axis_text')

    Returns:
        Logger named 'output.<name>'
    """
    return logging.getLogger(f'output.{name}')


__all__ = [
    'IPOFilter',
    'setup_ipo_logging',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]
