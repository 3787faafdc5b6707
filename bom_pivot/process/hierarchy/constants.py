# Path: bom_pivot/process/hierarchy/constants.py
"""
Constants for the Hierarchy Engine

Defines the canonical root id, pivot axes, build states and the
defaults used while turning dimension records into trees.
"""

from enum import Enum
from typing import Final


# ==============================================================================
# ROOT IDENTIFICATION
# ==============================================================================
ROOT_ID: Final[str] = "ROOT"
"""Canonical id of every hierarchy root; always present in nodes_map."""

ROOT_FALLBACK_LABEL: Final[str] = "All"
"""Literal root label when neither an override nor a dimension label exists."""

ROOT_LABEL_PREFIX: Final[str] = "All"
"""Prefix of the synthesized root label, e.g. 'All Legal Entities'."""


# ==============================================================================
# PATH PARSING
# ==============================================================================
DEFAULT_PATH_SEPARATOR: Final[str] = "//"
"""Separator used by the dimension tables of the cost/BOM warehouse."""

NODE_ID_JOINER: Final[str] = "/"
"""Joins a parent id and an escaped path segment into a child id."""

NODE_ID_ESCAPE: Final[str] = "\\"
"""Escape character protecting NODE_ID_JOINER inside raw segments."""


# ==============================================================================
# COMPOSITION
# ==============================================================================
DEFAULT_COMPOSITE_ID_DELIMITER: Final[str] = "|"
"""Joins component node ids into a composite row/column id."""


# ==============================================================================
# AXES
# ==============================================================================
class Axis(str, Enum):
    """
    Pivot axes a dimension can be placed on.

    Expansion state is tracked separately per axis.
    """
    ROW = "row"
    COLUMN = "column"


# ==============================================================================
# BUILD STATE
# ==============================================================================
class BuildState(Enum):
    """
    Lifecycle of one dimension hierarchy.

    UNBUILT -> BUILDING -> BUILT | FALLBACK. New source data resets
    the state to UNBUILT; the hierarchy is replaced, never patched.
    """
    UNBUILT = "unbuilt"
    BUILDING = "building"
    BUILT = "built"
    FALLBACK = "fallback"


# ==============================================================================
# OUTPUT
# ==============================================================================
DEFAULT_INDENT_SIZE: Final[int] = 2
"""Default indentation spaces for text representation."""

MAX_CHILDREN_WARNING: Final[int] = 500
"""Warn if a node has more than this many direct children."""


__all__ = [
    'ROOT_ID',
    'ROOT_FALLBACK_LABEL',
    'ROOT_LABEL_PREFIX',
    'DEFAULT_PATH_SEPARATOR',
    'NODE_ID_JOINER',
    'NODE_ID_ESCAPE',
    'DEFAULT_COMPOSITE_ID_DELIMITER',
    'Axis',
    'BuildState',
    'DEFAULT_INDENT_SIZE',
    'MAX_CHILDREN_WARNING',
]
