# Path: bom_pivot/process/hierarchy/__init__.py
"""
Hierarchy Package for bom_pivot

Builds navigable dimension trees from flat dimension records whose
position is stored as a delimited path string.

Components:
- parse_path: Splits a delimited path into trimmed segments
- HierarchyNode: Individual node in the hierarchy tree
- Hierarchy: Complete dimension hierarchy with id index
- HierarchyBuilder: Generic builder driven by a dimension definition
- precompute_descendant_fact_ids: Bottom-up fact id aggregation
- create_fallback_hierarchy: Root-only hierarchy for failed builds

Example:
    from process.hierarchy import HierarchyBuilder, precompute_descendant_fact_ids

    builder = HierarchyBuilder()
    hierarchy = builder.build(records, definition)
    precompute_descendant_fact_ids(hierarchy)
"""

from process.hierarchy.constants import (
    ROOT_ID,
    Axis,
    BuildState,
    DEFAULT_PATH_SEPARATOR,
    DEFAULT_COMPOSITE_ID_DELIMITER,
)
from process.hierarchy.path_parser import parse_path, has_separator
from process.hierarchy.node import HierarchyNode, create_root_node
from process.hierarchy.hierarchy import Hierarchy
from process.hierarchy.builder_utils import natural_sort_key, make_child_id
from process.hierarchy.tree_builder import HierarchyBuilder, field_accessor
from process.hierarchy.descendant_index import precompute_descendant_fact_ids
from process.hierarchy.fallback import create_fallback_hierarchy

__all__ = [
    # Constants
    'ROOT_ID',
    'Axis',
    'BuildState',
    'DEFAULT_PATH_SEPARATOR',
    'DEFAULT_COMPOSITE_ID_DELIMITER',
    # Parsing
    'parse_path',
    'has_separator',
    # Structures
    'HierarchyNode',
    'create_root_node',
    'Hierarchy',
    # Building
    'natural_sort_key',
    'make_child_id',
    'HierarchyBuilder',
    'field_accessor',
    'precompute_descendant_fact_ids',
    'create_fallback_hierarchy',
]
