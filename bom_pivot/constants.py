# Path: bom_pivot/constants.py
"""
System-Wide Constants for bom_pivot

Central repository for constant values shared by the CLI, the loaders
and the output layer. Engine-level constants (root id, axes, build
states) live in process/hierarchy/constants.py.

Constants are organized by category:
- Record file formats
- Dimension config keys
- Display formatting
- Logging categories
"""

from enum import Enum
from typing import Final


# ==============================================================================
# RECORD FILE FORMATS
# ==============================================================================

class RecordFormat(str, Enum):
    """File formats accepted by the record reader."""
    JSON = 'json'
    NDJSON = 'ndjson'
    CSV = 'csv'


RECORD_FILE_SUFFIXES: Final[dict[str, RecordFormat]] = {
    '.json': RecordFormat.JSON,
    '.ndjson': RecordFormat.NDJSON,
    '.jsonl': RecordFormat.NDJSON,
    '.csv': RecordFormat.CSV,
}


# ==============================================================================
# DIMENSION CONFIG KEYS
# ==============================================================================

class DimensionConfigKeys:
    """
    Keys used in the dimension YAML file.
    """
    DIMENSIONS: Final[str] = 'dimensions'
    KEY: Final[str] = 'key'
    LABEL: Final[str] = 'label'
    PATH_FIELD: Final[str] = 'path_field'
    LEAF_ID_FIELD: Final[str] = 'leaf_id_field'
    LEAF_DISPLAY_FIELD: Final[str] = 'leaf_display_field'
    SEPARATOR: Final[str] = 'separator'
    FACT_FIELD: Final[str] = 'fact_field'
    ROOT_LABEL: Final[str] = 'root_label'
    HIERARCHICAL: Final[str] = 'hierarchical'


# ==============================================================================
# DISPLAY FORMATTING
# ==============================================================================

# Menu formatting
MENU_WIDTH: Final[int] = 60
MENU_SEPARATOR: Final[str] = '-' * MENU_WIDTH
MENU_HEADER: Final[str] = '=' * MENU_WIDTH

# Indentation for rendered trees and axes
TEXT_INDENT_SIZE: Final[int] = 2

# Number formatting
PERCENTAGE_PLACES: Final[int] = 1

# Status indicators (ASCII only - no emojis)
STATUS_OK: Final[str] = '[OK]'
STATUS_FAIL: Final[str] = '[FAIL]'
STATUS_WARN: Final[str] = '[WARN]'
STATUS_INFO: Final[str] = '[INFO]'


# ==============================================================================
# LOGGING CATEGORIES
# ==============================================================================

class LogCategory(str, Enum):
    """
    IPO logging categories for bom_pivot.
    """
    INPUT = 'input'
    PROCESS = 'process'
    OUTPUT = 'output'


# ==============================================================================
# EXPORTS
# ==============================================================================

__all__ = [
    'RecordFormat',
    'RECORD_FILE_SUFFIXES',
    'DimensionConfigKeys',
    'MENU_WIDTH',
    'MENU_SEPARATOR',
    'MENU_HEADER',
    'TEXT_INDENT_SIZE',
    'PERCENTAGE_PLACES',
    'STATUS_OK',
    'STATUS_FAIL',
    'STATUS_WARN',
    'STATUS_INFO',
    'LogCategory',
]
