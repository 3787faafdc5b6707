# Path: bom_pivot/process/pivot/flattener.py
"""
Hierarchy Flattener - visible-node sequence of one dimension on one axis.

Pre-order depth-first walk: every reached node is emitted, and a node's
children are reached only if the node is expanded at the moment it is
visited. The expanded flag is looked up, never written, so flattening
leaves the hierarchy untouched.
"""

from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Union

from process.hierarchy.hierarchy import Hierarchy
from process.hierarchy.node import HierarchyNode


ExpansionLookup = Union[Mapping[str, bool], Callable[[str], bool]]


@dataclass(frozen=True)
class FlatRow:
    """
    One visible node of a flattened axis.

    Attributes:
        node: The hierarchy node
        expanded: Expanded flag seen when the node was visited
        dimension: Key of the dimension the node belongs to
    """
    node: HierarchyNode
    expanded: bool = False
    dimension: str = ""

    @property
    def id(self) -> str:
        return self.node.id

    @property
    def label(self) -> str:
        return self.node.label

    @property
    def level(self) -> int:
        return self.node.level

    @property
    def is_leaf(self) -> bool:
        return self.node.is_leaf

    @property
    def has_children(self) -> bool:
        return self.node.has_children


def _as_predicate(expanded: Optional[ExpansionLookup]) -> Callable[[str], bool]:
    if expanded is None:
        return lambda node_id: False
    if callable(expanded):
        return expanded
    return lambda node_id: bool(expanded.get(node_id, False))


def flatten_hierarchy(
    start: Union[Hierarchy, HierarchyNode, None],
    expanded: Optional[ExpansionLookup] = None,
    dimension: Optional[str] = None,
) -> list[FlatRow]:
    """
    Flatten a hierarchy into its ordered visible nodes.

    Args:
        start: Hierarchy (flattened from its root) or a start node
        expanded: Node id -> flag mapping (absence = collapsed) or a
            predicate such as ExpansionStateStore.view()
        dimension: Dimension key recorded on every row; defaults to the
            hierarchy's own key

    Returns:
        Visible rows in pre-order, starting with the start node itself;
        empty for an empty hierarchy

    Example:
        >>> rows = flatten_hierarchy(hierarchy, {'ROOT': True})
        >>> [row.label for row in rows]
        ['All Regions', 'EU', 'NA']
    """
    if isinstance(start, Hierarchy):
        if dimension is None:
            dimension = start.dimension
        start = start.root
    if start is None:
        return []

    is_expanded = _as_predicate(expanded)
    dimension = dimension or ""

    rows = []
    stack = [start]
    while stack:
        node = stack.pop()
        node_expanded = bool(is_expanded(node.id))
        rows.append(FlatRow(node=node, expanded=node_expanded, dimension=dimension))
        if node_expanded and node.children:
            stack.extend(reversed(node.children))

    return rows


def visible_leaf_nodes(rows: list[FlatRow]) -> list[FlatRow]:
    """Only the leaf entries of a flattened sequence."""
    return [row for row in rows if row.is_leaf]


__all__ = [
    'FlatRow',
    'flatten_hierarchy',
    'visible_leaf_nodes',
]
