# Path: bom_pivot/process/pivot/expansion.py
"""
Expansion State Store - which nodes are expanded, per dimension and axis.

State lives outside the hierarchy nodes so the same Hierarchy can be
flattened for rows and columns (or by several views) without
interference. Absence of a flag means collapsed, except for the root on
the column axis, which is expanded by default.
"""

from typing import Callable, Optional, Union

from core.logger import get_process_logger
from process.hierarchy.constants import ROOT_ID, Axis
from process.hierarchy.node import HierarchyNode

logger = get_process_logger('pivot.expansion')


def to_axis(axis: Union[Axis, str]) -> Axis:
    """
    Normalize an axis argument.

    Raises:
        ValueError: If the value names no known axis
    """
    if isinstance(axis, Axis):
        return axis
    return Axis(str(axis).lower())


class ExpansionStateStore:
    """
    Expanded flags keyed by dimension, axis and node id.

    Toggling a node never touches the stored flags of its descendants;
    whether they are visible is decided while flattening, by checking
    that every ancestor on the way down is expanded.

    Example:
        store = ExpansionStateStore()
        store.set_expanded('le', 'row', 'ROOT', True)
        rows = flatten_hierarchy(hierarchy, store.view('le', 'row'))
    """

    def __init__(self, column_root_expanded: bool = True):
        """
        Initialize an empty store.

        Args:
            column_root_expanded: Treat the column-axis root as expanded
                until a flag is stored for it
        """
        self.column_root_expanded = column_root_expanded
        self._state: dict[str, dict[Axis, dict[str, bool]]] = {}

    def _slice(self, dimension: str, axis: Union[Axis, str]) -> dict[str, bool]:
        axis = to_axis(axis)
        return self._state.setdefault(dimension, {}).setdefault(axis, {})

    def _default(self, axis: Axis, node_id: str) -> bool:
        return (
            self.column_root_expanded
            and axis is Axis.COLUMN
            and node_id == ROOT_ID
        )

    # =========================================================================
    # QUERIES
    # =========================================================================

    def is_expanded(self, dimension: str, axis: Union[Axis, str], node_id: str) -> bool:
        """Current expanded flag of one node."""
        axis = to_axis(axis)
        flags = self._state.get(dimension, {}).get(axis, {})
        if node_id in flags:
            return flags[node_id]
        return self._default(axis, node_id)

    def view(self, dimension: str, axis: Union[Axis, str]) -> Callable[[str], bool]:
        """
        Predicate over node ids for one dimension/axis.

        The predicate reads the store on every call, so a flatten always
        sees the current flags.
        """
        axis = to_axis(axis)

        def _is_expanded(node_id: str) -> bool:
            return self.is_expanded(dimension, axis, node_id)

        return _is_expanded

    def expanded_ids(self, dimension: str, axis: Union[Axis, str]) -> set[str]:
        """Ids explicitly stored as expanded."""
        flags = self._state.get(dimension, {}).get(to_axis(axis), {})
        return {node_id for node_id, expanded in flags.items() if expanded}

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def set_expanded(
        self,
        dimension: str,
        axis: Union[Axis, str],
        node_id: str,
        expanded: bool,
    ) -> None:
        """Store the expanded flag of one node."""
        self._slice(dimension, axis)[node_id] = bool(expanded)

    def toggle(self, dimension: str, axis: Union[Axis, str], node_id: str) -> bool:
        """
        Flip the expanded flag of one node.

        Returns:
            The new flag
        """
        expanded = not self.is_expanded(dimension, axis, node_id)
        self.set_expanded(dimension, axis, node_id, expanded)
        logger.debug(f"{dimension}/{to_axis(axis).value}: {node_id} expanded={expanded}")
        return expanded

    def expand_to(self, dimension: str, axis: Union[Axis, str], node: HierarchyNode) -> None:
        """Expand every ancestor of a node so the node becomes visible."""
        flags = self._slice(dimension, axis)
        for ancestor in node.ancestors:
            flags[ancestor.id] = True

    def collapse_all(self, dimension: str, axis: Optional[Union[Axis, str]] = None) -> None:
        """
        Forget stored flags of a dimension, for one axis or both.

        Defaults apply again afterwards.
        """
        if axis is None:
            self._state.pop(dimension, None)
        else:
            self._state.get(dimension, {}).pop(to_axis(axis), None)

    def clear(self) -> None:
        """Forget every stored flag."""
        self._state.clear()


__all__ = ['ExpansionStateStore', 'to_axis']
