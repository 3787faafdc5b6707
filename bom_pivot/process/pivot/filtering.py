# Path: bom_pivot/process/pivot/filtering.py
"""
Hierarchy Filter - fact records matching a node, a composite or a selection.

Matching uses the node's own and descendant fact ids against one
correlated field of the fact records. Which field belongs to which
dimension comes from the correlation map; nothing here knows dimension
names.

Two contracts:
- Destructive (filter_by_node): an empty match is an empty list
- Preserving (preserving_filter_by_node): an empty match is a
  StructuralEmpty marker, so the branch stays on screen
"""

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Union

from core.logger import get_process_logger
from process.hierarchy.hierarchy import Hierarchy
from process.hierarchy.node import HierarchyNode
from process.hierarchy.tree_builder import field_accessor
from process.pivot.composer import CompositeEntry
from process.pivot.flattener import FlatRow

logger = get_process_logger('pivot.filtering')


@dataclass(frozen=True)
class StructuralEmpty:
    """
    Marker for a branch that matched no fact records.

    Falsy and empty like a list, but distinguishable by type so a
    renderer can keep drawing the branch (e.g. greyed out).
    """
    node_id: Optional[str] = None
    dimension: Optional[str] = None

    def __bool__(self) -> bool:
        return False

    def __len__(self) -> int:
        return 0

    def __iter__(self):
        return iter(())


FilterResult = Union[list[Any], StructuralEmpty]


def is_structural_empty(result: Any) -> bool:
    """Check whether a filter result is the structural-empty marker."""
    return isinstance(result, StructuralEmpty)


def _as_node(node: Union[HierarchyNode, FlatRow]) -> HierarchyNode:
    return node.node if isinstance(node, FlatRow) else node


def matching_fact_ids(node: HierarchyNode) -> set:
    """
    Fact ids a node stands for: its own plus its descendants'.

    Before the descendant index ran, only the node's own fact ids are
    used (leaf-only matching) and a warning is logged.
    """
    if node.is_indexed:
        return node.own_fact_ids | node.descendant_fact_ids

    logger.warning(
        f"Descendant index missing for node '{node.id}'; "
        f"falling back to leaf-only matching"
    )
    return node.own_fact_ids


def filter_by_node(
    node: Union[HierarchyNode, FlatRow],
    facts: Iterable[Any],
    fact_field: str,
) -> list[Any]:
    """
    Fact records correlated with a node.

    Args:
        node: Hierarchy node (or flattened row) to filter by
        facts: Fact records
        fact_field: Fact field holding the dimension's correlated id

    Returns:
        Matching records; a root node returns every record unchanged
    """
    node = _as_node(node)
    facts = list(facts or [])

    if node.is_root:
        return facts

    wanted = matching_fact_ids(node)
    if not wanted:
        return []

    value_of = field_accessor(fact_field)
    return [record for record in facts if value_of(record) in wanted]


def preserving_filter_by_node(
    node: Union[HierarchyNode, FlatRow],
    facts: Iterable[Any],
    fact_field: str,
    dimension: Optional[str] = None,
) -> FilterResult:
    """
    Like filter_by_node, but no match yields a StructuralEmpty marker.

    Empty input yields the marker as well, even for the root.
    """
    if isinstance(node, FlatRow) and dimension is None:
        dimension = node.dimension
    node = _as_node(node)
    facts = list(facts or [])

    if not facts:
        return StructuralEmpty(node.id, dimension)

    matched = filter_by_node(node, facts, fact_field)
    if not matched:
        return StructuralEmpty(node.id, dimension)
    return matched


def _component_field(correlation: Mapping[str, str], dimension: str) -> str:
    if dimension not in correlation:
        raise KeyError(f"No fact field configured for dimension '{dimension}'")
    return correlation[dimension]


def filter_by_composite(
    entry: Union[CompositeEntry, FlatRow],
    facts: Iterable[Any],
    correlation: Mapping[str, str],
) -> list[Any]:
    """
    Fact records matching every component of a composite entry.

    Components are applied in axis order, each narrowing the previous
    result.

    Raises:
        KeyError: If a component's dimension has no correlated field
    """
    components = entry.components if isinstance(entry, CompositeEntry) else (entry,)
    result = list(facts or [])
    for component in components:
        result = filter_by_node(
            component, result, _component_field(correlation, component.dimension)
        )
    return result


def preserving_filter_by_composite(
    entry: Union[CompositeEntry, FlatRow],
    facts: Iterable[Any],
    correlation: Mapping[str, str],
) -> FilterResult:
    """
    Preserving variant of filter_by_composite.

    Stops at the first component without matches and returns its
    StructuralEmpty marker; later components are not evaluated.
    """
    components = entry.components if isinstance(entry, CompositeEntry) else (entry,)
    result: FilterResult = list(facts or [])
    for component in components:
        result = preserving_filter_by_node(
            component, result, _component_field(correlation, component.dimension)
        )
        if is_structural_empty(result):
            return result
    return result


# ==============================================================================
# SELECTIONS
# ==============================================================================
def _collect_subtree_fact_ids(node: HierarchyNode) -> set:
    fact_ids = set()
    for descendant in node.iter_preorder():
        fact_ids |= descendant.own_fact_ids
    return fact_ids


def excluded_fact_ids(
    excluded_ids: Iterable[str],
    hierarchy: Optional[Hierarchy] = None,
) -> set:
    """
    Fact ids removed by a set of excluded node ids.

    Each excluded node contributes its own and descendant fact ids,
    collected by walking its subtree when the index is missing. Ids
    that resolve to no node are taken as fact ids themselves.
    """
    result = set()
    for node_id in excluded_ids:
        node = hierarchy.get_node(node_id) if hierarchy is not None else None
        if node is None:
            result.add(node_id)
        elif node.is_indexed:
            result |= node.own_fact_ids | node.descendant_fact_ids
        else:
            result |= _collect_subtree_fact_ids(node)
    return result


def apply_selection(
    facts: Iterable[Any],
    excluded_ids: Iterable[str],
    fact_field: str,
    hierarchy: Optional[Hierarchy] = None,
) -> list[Any]:
    """
    Remove the fact records of excluded nodes.

    With nothing excluded every record is kept. Otherwise a record is
    kept only if it has a value in fact_field and that value is not
    excluded.

    Args:
        facts: Fact records
        excluded_ids: Excluded node ids of one dimension
        fact_field: Fact field holding the dimension's correlated id
        hierarchy: Hierarchy resolving node ids to fact ids

    Returns:
        Remaining records
    """
    facts = list(facts or [])
    excluded_ids = set(excluded_ids or ())
    if not excluded_ids:
        return facts

    excluded = excluded_fact_ids(excluded_ids, hierarchy)
    value_of = field_accessor(fact_field)

    kept = []
    for record in facts:
        value = value_of(record)
        if value is not None and value not in excluded:
            kept.append(record)

    logger.debug(
        f"Selection on '{fact_field}' kept {len(kept)} of {len(facts)} records"
    )
    return kept


__all__ = [
    'StructuralEmpty',
    'is_structural_empty',
    'matching_fact_ids',
    'filter_by_node',
    'preserving_filter_by_node',
    'filter_by_composite',
    'preserving_filter_by_composite',
    'excluded_fact_ids',
    'apply_selection',
]
