# Path: bom_pivot/process/hierarchy/tree_builder.py
"""
Hierarchy Builder - turns flat dimension records into a Hierarchy.

One generic builder serves every dimension. What differs between
dimensions (which field holds the path, which holds the leaf id, the
separator, the root label) is data, supplied either as a
DimensionDefinition or as plain accessor callables.

Build steps:
1. Classify - one distinct first segment becomes the root label and
   that level is not materialized; otherwise a root label is synthesized
2. Insert - walk/create nodes per record, keyed by parent id + segment
3. Normalize - sort children naturally, register the canonical ROOT

Example:
    builder = HierarchyBuilder()
    hierarchy = builder.build(records, definition)

    hierarchy = builder.build_from_accessors(
        records,
        path_of=lambda r: r['PATH'],
        leaf_id_of=lambda r: r['ID'],
    )
"""

from typing import Any, Callable, Iterable, Optional

from core.logger import get_process_logger
from process.hierarchy.builder_utils import (
    make_child_id,
    sort_children_recursive,
    synthesize_root_label,
)
from process.hierarchy.constants import (
    ROOT_ID,
    ROOT_FALLBACK_LABEL,
    DEFAULT_PATH_SEPARATOR,
)
from process.hierarchy.hierarchy import Hierarchy
from process.hierarchy.node import HierarchyNode, create_root_node
from process.hierarchy.path_parser import parse_path, has_separator

logger = get_process_logger('hierarchy.tree_builder')


Accessor = Callable[[Any], Any]


def field_accessor(field_name: Optional[str]) -> Optional[Accessor]:
    """
    Build an accessor reading one field from a record.

    Works for mappings and for objects exposing the field as attribute.
    Returns None when no field name is configured.
    """
    if not field_name:
        return None

    def _get(record: Any) -> Any:
        if isinstance(record, dict):
            return record.get(field_name)
        return getattr(record, field_name, None)

    return _get


class HierarchyBuilder:
    """
    Builds dimension hierarchies from flat records.

    The builder never raises for data problems: records with unusable
    paths are skipped, and a build without a single usable record
    returns Hierarchy.empty() so the caller can substitute a fallback.

    Attributes:
        separator: Default path separator when a build does not pass one
        fallback_label: Root label used when nothing better is known
    """

    def __init__(
        self,
        separator: str = DEFAULT_PATH_SEPARATOR,
        fallback_label: str = ROOT_FALLBACK_LABEL,
    ):
        """Initialize the hierarchy builder."""
        self.separator = separator
        self.fallback_label = fallback_label
        self._build_count = 0
        self._last_error: Optional[str] = None

    # =========================================================================
    # PUBLIC BUILD METHODS
    # =========================================================================

    def build(self, records: Iterable[Any], definition: Any) -> Hierarchy:
        """
        Build the hierarchy of one configured dimension.

        Args:
            records: Dimension records (dicts or objects)
            definition: DimensionDefinition describing the record fields

        Returns:
            Built Hierarchy, or Hierarchy.empty() when nothing was usable
        """
        path_of = field_accessor(definition.path_field) if definition.hierarchical else None

        return self.build_from_accessors(
            records,
            path_of=path_of,
            leaf_id_of=field_accessor(definition.leaf_id_field),
            display_of=field_accessor(definition.leaf_display_field),
            separator=definition.separator,
            root_label=definition.root_label,
            dimension_label=definition.label,
            dimension=definition.key,
        )

    def build_from_accessors(
        self,
        records: Iterable[Any],
        path_of: Optional[Accessor],
        leaf_id_of: Accessor,
        display_of: Optional[Accessor] = None,
        separator: Optional[str] = None,
        root_label: Optional[str] = None,
        dimension_label: Optional[str] = None,
        dimension: str = "",
    ) -> Hierarchy:
        """
        Build a hierarchy from records and accessor callables.

        Without a path accessor, or when no path contains the separator,
        the dimension is built flat: one level of leaves under the root.

        Args:
            records: Dimension records
            path_of: Returns the delimited path of a record (None = flat)
            leaf_id_of: Returns the fact id correlating a leaf to facts
            display_of: Optional, returns the display label of a leaf
            separator: Path separator (defaults to the builder's)
            root_label: Explicit root label override
            dimension_label: Human label of the dimension
            dimension: Dimension key stored on the result

        Returns:
            Built Hierarchy, or Hierarchy.empty() when nothing was usable
        """
        records = [record for record in (records or []) if record is not None]
        separator = separator or self.separator

        if not records:
            self._last_error = f"No records for dimension '{dimension}'"
            logger.warning(self._last_error)
            return Hierarchy.empty(records, dimension)

        if path_of is None or not any(has_separator(path_of(r), separator) for r in records):
            hierarchy = self._build_flat(
                records, leaf_id_of, display_of, root_label, dimension_label, dimension
            )
        else:
            hierarchy = self._build_tree(
                records, path_of, leaf_id_of, display_of, separator,
                root_label, dimension_label, dimension
            )

        if hierarchy.is_empty:
            self._last_error = f"No usable records for dimension '{dimension}'"
            logger.warning(self._last_error)
            return hierarchy

        self._build_count += 1
        logger.info(
            f"Built '{dimension}' hierarchy: {hierarchy.node_count} nodes, "
            f"{hierarchy.leaf_count} leaves from {len(records)} records"
        )
        return hierarchy

    # =========================================================================
    # TREE BUILD
    # =========================================================================

    def _build_tree(
        self,
        records: list[Any],
        path_of: Accessor,
        leaf_id_of: Accessor,
        display_of: Optional[Accessor],
        separator: str,
        root_label: Optional[str],
        dimension_label: Optional[str],
        dimension: str,
    ) -> Hierarchy:
        """Classify, insert and normalize a path-based hierarchy."""
        parsed = []
        skipped = 0
        for record in records:
            segments = parse_path(path_of(record), separator)
            if segments:
                parsed.append((record, segments))
            else:
                skipped += 1
                logger.debug(f"Skipping record with unusable path: {path_of(record)!r}")

        if not parsed:
            return Hierarchy.empty(records, dimension)

        first_segments = {segments[0] for _, segments in parsed}
        single_top = len(first_segments) == 1

        if single_top:
            label = next(iter(first_segments))
            skip_levels = 1
        else:
            label = synthesize_root_label(root_label, dimension_label, self.fallback_label)
            skip_levels = 0

        root = create_root_node(label)
        nodes_map: dict[str, HierarchyNode] = {ROOT_ID: root}

        for record, segments in parsed:
            remaining = segments[skip_levels:]
            if not remaining:
                skipped += 1
                logger.debug(f"Skipping record that only names the root: {segments}")
                continue
            self._insert(root, nodes_map, record, remaining, leaf_id_of, display_of)

        if not root.has_children:
            return Hierarchy.empty(records, dimension)

        sort_children_recursive(root)

        return Hierarchy(
            root=root,
            nodes_map=nodes_map,
            flat_data=records,
            dimension=dimension,
            metadata={
                'record_count': len(records),
                'skipped_records': skipped,
                'single_top_segment': single_top,
            },
        )

    def _insert(
        self,
        root: HierarchyNode,
        nodes_map: dict[str, HierarchyNode],
        record: Any,
        segments: list[str],
        leaf_id_of: Accessor,
        display_of: Optional[Accessor],
    ) -> None:
        """Walk/create the nodes of one record's path below root."""
        current = root
        current_segment = None
        last_index = len(segments) - 1

        for index, segment in enumerate(segments):
            node_id = make_child_id(current.id, segment)
            node = nodes_map.get(node_id)

            if node is None:
                node = HierarchyNode(id=node_id, label=segment)
                if current.is_leaf and current_segment is not None:
                    # Interior nodes are labelled by their raw segment
                    current.label = current_segment
                    current.data = None
                current.add_child(node)
                nodes_map[node_id] = node

            if index == last_index:
                node.add_fact_id(leaf_id_of(record))
                if not node.has_children:
                    node.is_leaf = True
                    if node.data is None:
                        node.data = record
                        display = display_of(record) if display_of else None
                        if display not in (None, ''):
                            node.label = str(display)

            current = node
            current_segment = segment

    # =========================================================================
    # FLAT BUILD
    # =========================================================================

    def _build_flat(
        self,
        records: list[Any],
        leaf_id_of: Accessor,
        display_of: Optional[Accessor],
        root_label: Optional[str],
        dimension_label: Optional[str],
        dimension: str,
    ) -> Hierarchy:
        """One level of deduplicated leaves, one per distinct leaf id."""
        label = synthesize_root_label(root_label, dimension_label, self.fallback_label)
        root = create_root_node(label)
        nodes_map: dict[str, HierarchyNode] = {ROOT_ID: root}

        for record in records:
            leaf_id = leaf_id_of(record)
            if leaf_id in (None, ''):
                continue

            node_id = make_child_id(ROOT_ID, leaf_id)
            if node_id in nodes_map:
                continue

            display = display_of(record) if display_of else None
            node = HierarchyNode(
                id=node_id,
                label=str(display) if display not in (None, '') else str(leaf_id),
                is_leaf=True,
                fact_id=leaf_id,
                data=record,
            )
            root.add_child(node)
            nodes_map[node_id] = node

        if not root.has_children:
            return Hierarchy.empty(records, dimension)

        sort_children_recursive(root)

        return Hierarchy(
            root=root,
            nodes_map=nodes_map,
            flat_data=records,
            dimension=dimension,
            is_flat=True,
            metadata={'record_count': len(records)},
        )

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def last_error(self) -> Optional[str]:
        """Get the last error message."""
        return self._last_error

    @property
    def build_count(self) -> int:
        """Get number of successful builds."""
        return self._build_count

    def reset_stats(self) -> None:
        """Reset build statistics."""
        self._build_count = 0
        self._last_error = None


__all__ = ['HierarchyBuilder', 'field_accessor']
