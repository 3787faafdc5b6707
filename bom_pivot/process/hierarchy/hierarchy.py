# Path: bom_pivot/process/hierarchy/hierarchy.py
"""
Hierarchy - one dimension's navigable tree plus its id index.

Wraps the root HierarchyNode with the id -> node map used for lookups,
the source records it was built from and the empty/flat flags, and
provides validation and export helpers.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from core.logger import get_process_logger
from process.hierarchy.builder_utils import natural_sort_key
from process.hierarchy.constants import (
    ROOT_ID,
    DEFAULT_INDENT_SIZE,
    MAX_CHILDREN_WARNING,
)
from process.hierarchy.node import HierarchyNode

logger = get_process_logger('hierarchy.hierarchy')


@dataclass
class Hierarchy:
    """
    A complete dimension hierarchy.

    Attributes:
        root: Root node, None only for the empty marker
        nodes_map: Node id -> node; 'ROOT' always maps to root
        flat_data: Source dimension records
        dimension: Key of the dimension this hierarchy belongs to
        is_empty: True when building produced nothing usable
        is_flat: True when built as one level of leaves under the root
        is_fallback: True when produced by the fallback factory
        metadata: Additional metadata (record counts, skipped records)

    Example:
        hierarchy = builder.build(records, definition)
        if hierarchy.is_valid:
            node = hierarchy.get_node('ROOT/NA')
    """
    root: Optional[HierarchyNode]
    nodes_map: dict[str, HierarchyNode] = field(default_factory=dict)
    flat_data: list[Any] = field(default_factory=list, repr=False)
    dimension: str = ""
    is_empty: bool = False
    is_flat: bool = False
    is_fallback: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def empty(cls, flat_data: Optional[list[Any]] = None, dimension: str = "") -> 'Hierarchy':
        """Explicit marker for a build that produced nothing usable."""
        return cls(
            root=None,
            nodes_map={},
            flat_data=list(flat_data or []),
            dimension=dimension,
            is_empty=True,
        )

    # ===========================================================================
    # VALIDATION
    # ===========================================================================
    @property
    def is_valid(self) -> bool:
        """Quick structural check: non-empty, canonical root registered."""
        return (
            not self.is_empty
            and self.root is not None
            and self.nodes_map.get(ROOT_ID) is self.root
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the hierarchy invariants.

        Checks the canonical root entry, path prefixes, leaf/children
        exclusivity and child ordering.

        Returns:
            Tuple of (is_valid, list of warning/error messages)
        """
        messages = []

        if not self.is_valid:
            messages.append("Hierarchy has no canonical ROOT entry")
            return False, messages

        is_valid = True
        for node in self.root.iter_preorder():
            if node.is_leaf and node.has_children:
                messages.append(f"Node '{node.id}' is both leaf and parent")
                is_valid = False

            if node.parent is not None and node.path != node.parent.path + [node.id]:
                messages.append(f"Node '{node.id}' path does not extend its parent's")
                is_valid = False

            keys = [natural_sort_key(child.label) for child in node.children]
            if keys != sorted(keys):
                messages.append(f"Children of '{node.id}' are not sorted")
                is_valid = False

            if node.child_count > MAX_CHILDREN_WARNING:
                messages.append(
                    f"Node '{node.label}' has {node.child_count} children "
                    f"(exceeds {MAX_CHILDREN_WARNING})"
                )

        if messages:
            logger.info(f"Validation messages for '{self.dimension}': {messages}")

        return is_valid, messages

    # ===========================================================================
    # LOOKUP
    # ===========================================================================
    def get_node(self, node_id: str) -> Optional[HierarchyNode]:
        """
        Get a node by id.

        Args:
            node_id: Id of the node

        Returns:
            The node, or None if this hierarchy has no such id
        """
        return self.nodes_map.get(node_id)

    def all_node_ids(self) -> set[str]:
        """Ids of every node reachable from the root."""
        if self.root is None:
            return set()
        return {node.id for node in self.root.iter_preorder()}

    # ===========================================================================
    # STATISTICS
    # ===========================================================================
    @property
    def node_count(self) -> int:
        """Total number of nodes in hierarchy."""
        if self.root is None:
            return 0
        return self.root.descendant_count + 1

    @property
    def leaf_count(self) -> int:
        """Number of leaf nodes."""
        if self.root is None:
            return 0
        return self.root.leaf_count

    @property
    def max_depth(self) -> int:
        """Maximum depth of the hierarchy."""
        if self.root is None:
            return 0
        return self.root.max_depth

    @property
    def is_indexed(self) -> bool:
        """True once the descendant index has populated the tree."""
        return self.root is not None and self.root.is_indexed

    def get_statistics(self) -> dict[str, Any]:
        """Summary numbers used in log lines and the CLI."""
        return {
            'dimension': self.dimension,
            'node_count': self.node_count,
            'leaf_count': self.leaf_count,
            'max_depth': self.max_depth,
            'source_records': len(self.flat_data),
            'is_flat': self.is_flat,
            'is_fallback': self.is_fallback,
            'is_indexed': self.is_indexed,
        }

    # ===========================================================================
    # EXPORT
    # ===========================================================================
    def to_dict(self) -> dict[str, Any]:
        """
        Convert hierarchy to dictionary.

        Returns:
            Dictionary representation
        """
        return {
            'metadata': dict(self.metadata),
            'statistics': self.get_statistics(),
            'hierarchy': self.root.to_dict(include_children=True) if self.root else None,
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert hierarchy to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, default=str)

    def to_text(self, indent_size: int = DEFAULT_INDENT_SIZE) -> str:
        """Indented text of the whole tree."""
        if self.root is None:
            return ""
        return self.root.to_text(indent_size)

    # ===========================================================================
    # SPECIAL METHODS
    # ===========================================================================
    def __len__(self) -> int:
        """Number of nodes."""
        return self.node_count

    def __iter__(self) -> Iterator[HierarchyNode]:
        """Iterate over all nodes in pre-order."""
        if self.root is None:
            return iter(())
        return self.root.iter_preorder()

    def __contains__(self, node_id: str) -> bool:
        """Check if a node id exists in hierarchy."""
        return node_id in self.nodes_map


__all__ = ['Hierarchy']
