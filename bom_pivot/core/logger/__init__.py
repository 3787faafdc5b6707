# Path: bom_pivot/core/logger/__init__.py
"""
bom_pivot Logger Package

IPO-aware logging for the pivot engine.

Provides separate log streams for:
- INPUT layer (dimension configuration, record files)
- PROCESS layer (hierarchies, expansion, composition, filtering)
- OUTPUT layer (text rendering)
"""

from .ipo_logging import (
    setup_ipo_logging,
    get_input_logger,
    get_process_logger,
    get_output_logger,
)

__all__ = [
    'setup_ipo_logging',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]
