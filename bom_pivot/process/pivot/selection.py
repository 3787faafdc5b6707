# Path: bom_pivot/process/pivot/selection.py
"""
Filter Selection - per-dimension sets of excluded node ids.

The representation is inverted: a dimension with an empty set, or with
no entry at all, has everything included. "Select all" clears the set,
"clear all" fills it with every node id of the hierarchy.
"""

from typing import Any, Iterable, Mapping, Optional

from core.logger import get_process_logger
from process.hierarchy.hierarchy import Hierarchy
from process.pivot.filtering import apply_selection

logger = get_process_logger('pivot.selection')


class FilterSelection:
    """
    Excluded node ids keyed by dimension.

    Example:
        selection = FilterSelection()
        selection.exclude('le', ['ROOT/EU'])
        facts = selection.apply(facts, hierarchies, correlation)
    """

    def __init__(self):
        self._excluded: dict[str, set[str]] = {}

    # =========================================================================
    # QUERIES
    # =========================================================================

    def excluded(self, dimension: str) -> frozenset[str]:
        """Excluded ids of a dimension (empty when nothing is recorded)."""
        return frozenset(self._excluded.get(dimension, ()))

    def is_excluded(self, dimension: str, node_id: str) -> bool:
        return node_id in self._excluded.get(dimension, ())

    def is_all_selected(self, dimension: str) -> bool:
        """True when nothing is excluded; no entry counts as all selected."""
        return not self._excluded.get(dimension)

    def selected_count(self, dimension: str, total: int) -> int:
        """Number of selected items out of total, counted as total - excluded."""
        return total - len(self._excluded.get(dimension, ()))

    def selection_summary(self, dimension: str, node_ids: Iterable[str]) -> dict[str, Any]:
        """
        Both views of "everything selected" for one dimension.

        all_selected checks for an empty exclusion set; count_matches_total
        checks that none of the given node ids (e.g. the visible leaves)
        is excluded. They disagree when only ids outside node_ids are
        excluded; a warning is logged then and neither view is preferred.

        Args:
            dimension: Dimension key
            node_ids: Ids making up the total (e.g. all or visible nodes)
        """
        node_ids = set(node_ids)
        excluded = self._excluded.get(dimension, set())
        total = len(node_ids)
        selected_in_view = len(node_ids - excluded)

        summary = {
            'dimension': dimension,
            'total': total,
            'excluded': len(excluded),
            'selected_count': self.selected_count(dimension, total),
            'selected_in_view': selected_in_view,
            'all_selected': self.is_all_selected(dimension),
            'count_matches_total': selected_in_view == total,
        }
        summary['consistent'] = summary['all_selected'] == summary['count_matches_total']

        if not summary['consistent']:
            logger.warning(
                f"Selection of '{dimension}' is ambiguous: all_selected={summary['all_selected']} "
                f"but {selected_in_view} of {total} counted as selected"
            )
        return summary

    @property
    def dimensions(self) -> list[str]:
        """Dimensions with at least one excluded id."""
        return [key for key, ids in self._excluded.items() if ids]

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def exclude(self, dimension: str, node_ids: Iterable[str]) -> None:
        self._excluded.setdefault(dimension, set()).update(node_ids)

    def include(self, dimension: str, node_ids: Iterable[str]) -> None:
        self._excluded.get(dimension, set()).difference_update(node_ids)

    def toggle(self, dimension: str, node_id: str) -> bool:
        """
        Flip one node between included and excluded.

        Returns:
            True if the node is included afterwards
        """
        excluded = self._excluded.setdefault(dimension, set())
        if node_id in excluded:
            excluded.discard(node_id)
            return True
        excluded.add(node_id)
        return False

    def select_all(self, dimension: str) -> None:
        """Include everything: clear the exclusion set."""
        self._excluded[dimension] = set()

    def clear_all(self, dimension: str, hierarchy: Hierarchy) -> None:
        """Exclude everything: every node id of the hierarchy."""
        self._excluded[dimension] = hierarchy.all_node_ids()

    def reset(self, dimension: Optional[str] = None) -> None:
        """Drop recorded selections of one dimension, or of all."""
        if dimension is None:
            self._excluded.clear()
        else:
            self._excluded.pop(dimension, None)

    # =========================================================================
    # APPLICATION
    # =========================================================================

    def apply(
        self,
        facts: Iterable[Any],
        hierarchies: Mapping[str, Hierarchy],
        correlation: Mapping[str, str],
    ) -> list[Any]:
        """
        Remove the fact records excluded by any dimension.

        Args:
            facts: Fact records
            hierarchies: Dimension key -> hierarchy resolving node ids
            correlation: Dimension key -> fact field

        Returns:
            Remaining records

        Raises:
            KeyError: If a dimension with exclusions has no fact field
        """
        result = list(facts or [])
        for dimension in self.dimensions:
            if dimension not in correlation:
                raise KeyError(f"No fact field configured for dimension '{dimension}'")
            result = apply_selection(
                result,
                self._excluded[dimension],
                correlation[dimension],
                hierarchies.get(dimension),
            )
        return result


__all__ = ['FilterSelection']
