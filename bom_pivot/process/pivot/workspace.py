# Path: bom_pivot/process/pivot/workspace.py
"""
Pivot Workspace - the state of one pivot view, passed explicitly.

Owns, for one view:
- The dimension definitions and their correlation map
- One hierarchy per dimension, with its build state
- Expansion state per dimension and axis
- The filter selection
- Which dimensions sit on which axis

Hierarchies are never patched: loading new records for a dimension
resets it to UNBUILT and replaces the hierarchy.

Example:
    workspace = PivotWorkspace(definitions)
    workspace.load_dimension('le', le_records)
    workspace.place('le', Axis.ROW)
    rows = workspace.axis_entries(Axis.ROW)
"""

from typing import Any, Iterable, Mapping, Optional, Union

from config_loader import ConfigLoader
from core.logger import get_process_logger
from loaders.dimension_loader import correlation_map
from loaders.dimension_models import DimensionDefinition
from process.hierarchy.builder_utils import synthesize_root_label
from process.hierarchy.constants import Axis, BuildState
from process.hierarchy.descendant_index import precompute_descendant_fact_ids
from process.hierarchy.fallback import create_fallback_hierarchy
from process.hierarchy.hierarchy import Hierarchy
from process.hierarchy.tree_builder import HierarchyBuilder
from process.pivot.composer import CompositeEntry, compose_axis
from process.pivot.expansion import ExpansionStateStore, to_axis
from process.pivot.filtering import (
    FilterResult,
    filter_by_composite,
    preserving_filter_by_composite,
)
from process.pivot.flattener import FlatRow, flatten_hierarchy
from process.pivot.selection import FilterSelection

logger = get_process_logger('pivot.workspace')


class PivotWorkspace:
    """
    Session object holding every hierarchy and UI state of one view.

    Attributes:
        definitions: Dimension key -> DimensionDefinition
        expansion: Expansion flags per dimension and axis
        selection: Excluded node ids per dimension
        delimiter: Joins composite ids
        warning_threshold: Composite size that triggers a warning
    """

    def __init__(
        self,
        definitions: Union[Mapping[str, DimensionDefinition], Iterable[DimensionDefinition]],
        config: Optional[ConfigLoader] = None,
        builder: Optional[HierarchyBuilder] = None,
        delimiter: Optional[str] = None,
        warning_threshold: Optional[int] = None,
        fallback_label: Optional[str] = None,
        separator: Optional[str] = None,
    ):
        if not isinstance(definitions, Mapping):
            definitions = {definition.key: definition for definition in definitions}
        self.definitions: dict[str, DimensionDefinition] = dict(definitions)

        if None in (delimiter, warning_threshold, fallback_label, separator):
            config = config or ConfigLoader()
            if delimiter is None:
                delimiter = config.get('composite_id_delimiter')
            if warning_threshold is None:
                warning_threshold = config.get('composite_warning_threshold')
            if fallback_label is None:
                fallback_label = config.get('root_fallback_label')
            if separator is None:
                separator = config.get('path_separator')

        self.delimiter = delimiter
        self.warning_threshold = warning_threshold
        self.fallback_label = fallback_label
        self.builder = builder or HierarchyBuilder(
            separator=separator, fallback_label=fallback_label
        )

        self.expansion = ExpansionStateStore()
        self.selection = FilterSelection()

        self._hierarchies: dict[str, Hierarchy] = {}
        self._states: dict[str, BuildState] = {key: BuildState.UNBUILT for key in self.definitions}
        self._axes: dict[Axis, list[str]] = {Axis.ROW: [], Axis.COLUMN: []}

    def _definition(self, dimension: str) -> DimensionDefinition:
        if dimension not in self.definitions:
            raise KeyError(f"Unknown dimension: {dimension}")
        return self.definitions[dimension]

    @property
    def correlation(self) -> dict[str, str]:
        """Dimension key -> correlated fact field."""
        return correlation_map(self.definitions)

    # =========================================================================
    # BUILDING
    # =========================================================================

    def load_dimension(self, dimension: str, records: Iterable[Any]) -> Hierarchy:
        """
        Build (or rebuild) a dimension's hierarchy from new records.

        The previous hierarchy is discarded. A build that yields nothing
        usable, or fails unexpectedly, is replaced by a root-only
        fallback and the state becomes FALLBACK. Built hierarchies are
        indexed before they are returned.

        Raises:
            KeyError: If the dimension is not defined
        """
        definition = self._definition(dimension)
        self.invalidate(dimension)
        self._states[dimension] = BuildState.BUILDING

        try:
            hierarchy = self.builder.build(records, definition)
        except Exception as e:
            logger.error(f"Building '{dimension}' failed: {e}")
            hierarchy = None

        if hierarchy is None or not hierarchy.is_valid:
            label = synthesize_root_label(
                definition.root_label, definition.label, self.fallback_label
            )
            hierarchy = create_fallback_hierarchy(label, dimension=dimension)
            self._states[dimension] = BuildState.FALLBACK
        else:
            precompute_descendant_fact_ids(hierarchy)
            self._states[dimension] = BuildState.BUILT

        self._hierarchies[dimension] = hierarchy
        return hierarchy

    def invalidate(self, dimension: str) -> None:
        """Discard a dimension's hierarchy; its state returns to UNBUILT."""
        self._definition(dimension)
        self._hierarchies.pop(dimension, None)
        self._states[dimension] = BuildState.UNBUILT

    def state(self, dimension: str) -> BuildState:
        """Build state of a dimension."""
        self._definition(dimension)
        return self._states.get(dimension, BuildState.UNBUILT)

    def hierarchy(self, dimension: str) -> Hierarchy:
        """
        Current hierarchy of a dimension.

        Raises:
            KeyError: If the dimension is unknown or not loaded yet
        """
        self._definition(dimension)
        if dimension not in self._hierarchies:
            raise KeyError(f"Dimension not loaded: {dimension}")
        return self._hierarchies[dimension]

    @property
    def hierarchies(self) -> dict[str, Hierarchy]:
        return dict(self._hierarchies)

    def is_indexed(self, dimension: str) -> bool:
        """True when the dimension is built and its descendant index exists."""
        return dimension in self._hierarchies and self._hierarchies[dimension].is_indexed

    # =========================================================================
    # AXES
    # =========================================================================

    def place(self, dimension: str, axis: Union[Axis, str]) -> None:
        """Put a dimension at the end of an axis, removing it from the other."""
        self._definition(dimension)
        axis = to_axis(axis)
        self.remove(dimension)
        self._axes[axis].append(dimension)

    def remove(self, dimension: str) -> None:
        for placed in self._axes.values():
            if dimension in placed:
                placed.remove(dimension)

    def dimensions_on(self, axis: Union[Axis, str]) -> list[str]:
        return list(self._axes[to_axis(axis)])

    # =========================================================================
    # VIEW
    # =========================================================================

    def toggle_expansion(self, dimension: str, axis: Union[Axis, str], node_id: str) -> bool:
        """Flip a node's expanded flag on one axis; returns the new flag."""
        self._definition(dimension)
        return self.expansion.toggle(dimension, axis, node_id)

    def flatten(self, dimension: str, axis: Union[Axis, str]) -> list[FlatRow]:
        """Visible rows of one dimension on one axis."""
        return flatten_hierarchy(
            self.hierarchy(dimension),
            self.expansion.view(dimension, axis),
            dimension,
        )

    def axis_entries(
        self,
        axis: Union[Axis, str],
        dimensions: Optional[list[str]] = None,
    ) -> Union[list[FlatRow], list[CompositeEntry]]:
        """
        Entries of one axis.

        One dimension gives its FlatRows, several give CompositeEntry
        objects in axis order.
        """
        axis = to_axis(axis)
        dimensions = dimensions if dimensions is not None else self._axes[axis]
        return compose_axis(
            [self.flatten(dimension, axis) for dimension in dimensions],
            delimiter=self.delimiter,
            warning_threshold=self.warning_threshold,
        )

    # =========================================================================
    # FILTERING
    # =========================================================================

    def filter_facts(
        self,
        entry: Union[FlatRow, CompositeEntry],
        facts: Iterable[Any],
        preserving: bool = False,
    ) -> FilterResult:
        """
        Fact records belonging to one axis entry.

        Args:
            entry: FlatRow or CompositeEntry from axis_entries()
            facts: Fact records
            preserving: Return StructuralEmpty instead of an empty list
        """
        if preserving:
            return preserving_filter_by_composite(entry, facts, self.correlation)
        return filter_by_composite(entry, facts, self.correlation)

    def apply_selections(self, facts: Iterable[Any]) -> list[Any]:
        """Fact records left after removing every excluded node's records."""
        return self.selection.apply(facts, self._hierarchies, self.correlation)


__all__ = ['PivotWorkspace']
