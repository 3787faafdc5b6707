# Path: bom_pivot/process/pivot/__init__.py
"""
Pivot Package for bom_pivot

Turns built hierarchies into pivot axes and fact subsets.

Components:
- ExpansionStateStore: Expanded flags per dimension and axis
- flatten_hierarchy: Visible-node sequence of one dimension
- compose_axis: Cartesian product of several dimensions on one axis
- filter_by_node / preserving_filter_by_node: Fact records of a node
- FilterSelection: Excluded node ids per dimension
- PivotWorkspace: Session object tying everything together
- build_dimension_mapping: Dimension/fact coverage report
"""

from process.pivot.expansion import ExpansionStateStore
from process.pivot.flattener import FlatRow, flatten_hierarchy, visible_leaf_nodes
from process.pivot.composer import CompositeEntry, compose_axis
from process.pivot.filtering import (
    StructuralEmpty,
    is_structural_empty,
    filter_by_node,
    preserving_filter_by_node,
    filter_by_composite,
    preserving_filter_by_composite,
    apply_selection,
)
from process.pivot.selection import FilterSelection
from process.pivot.mapping import (
    DimensionMapping,
    build_dimension_mapping,
    verify_fact_sample,
)
from process.pivot.workspace import PivotWorkspace

__all__ = [
    'ExpansionStateStore',
    'FlatRow',
    'flatten_hierarchy',
    'visible_leaf_nodes',
    'CompositeEntry',
    'compose_axis',
    'StructuralEmpty',
    'is_structural_empty',
    'filter_by_node',
    'preserving_filter_by_node',
    'filter_by_composite',
    'preserving_filter_by_composite',
    'apply_selection',
    'FilterSelection',
    'DimensionMapping',
    'build_dimension_mapping',
    'verify_fact_sample',
    'PivotWorkspace',
]
