# Path: bom_pivot/process/hierarchy/node.py
"""
Hierarchy Node - Individual node in a dimension hierarchy.

Each node represents one path segment of a dimension (a region, a
cost element group, a product code ...). Leaves carry the fact id that
correlates them to fact records; every node carries the precomputed
set of fact ids reachable below it once the descendant index ran.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Hashable, Iterator, Optional

from process.hierarchy.constants import (
    ROOT_ID,
    DEFAULT_INDENT_SIZE,
)


@dataclass(eq=False)
class HierarchyNode:
    """
    A single node in a dimension hierarchy tree.

    Attributes:
        id: Unique id within the hierarchy ("ROOT" for the root)
        label: Display label (raw path segment, or leaf display value)
        level: Depth in the hierarchy (0 = root)
        path: Ids from the root down to and including this node
        is_leaf: True when a record path ends at this node
        fact_id: Leaf identifier; a list when several records share the leaf
        descendant_fact_ids: Fact ids reachable below this node, or None
            while the descendant index has not been computed
        data: Source record of the first record that created the leaf
        parent: Reference to parent node
        children: Ordered child nodes
        designated_root: Set by create_root_node for roots with another id

    Example:
        root = create_root_node("All Legal Entities")
        na = HierarchyNode(id="ROOT/NA", label="NA")
        root.add_child(na)
    """
    # Core identification
    id: str
    label: str

    # Position in hierarchy
    level: int = 0
    path: list[str] = field(default_factory=list)

    # Leaf data
    is_leaf: bool = False
    fact_id: Any = None
    descendant_fact_ids: Optional[set] = field(default=None, repr=False)
    data: Optional[dict[str, Any]] = field(default=None, repr=False)

    # Relationships
    parent: Optional[HierarchyNode] = field(default=None, repr=False)
    children: list[HierarchyNode] = field(default_factory=list, repr=False)
    designated_root: bool = field(default=False, repr=False)

    def __post_init__(self) -> None:
        if not self.path:
            self.path = [self.id]

    # ===========================================================================
    # TREE NAVIGATION
    # ===========================================================================
    def add_child(self, child: HierarchyNode) -> None:
        """
        Attach a child node, fixing its level and path.

        A node that gains a child stops being a leaf.

        Args:
            child: Node to add as child

        Raises:
            ValueError: If child is this node or one of its ancestors
        """
        if child is self or any(node is child for node in self.ancestors):
            raise ValueError(f"Cannot add '{child.id}' below '{self.id}': cycle")

        child.parent = self
        child.level = self.level + 1
        child.path = self.path + [child.id]
        self.children.append(child)
        self.is_leaf = False

    # ===========================================================================
    # FACT IDS
    # ===========================================================================
    def add_fact_id(self, value: Hashable) -> None:
        """
        Attach a fact id, accumulating instead of overwriting.

        The first id is stored as a scalar; a second distinct id turns
        fact_id into a list holding both in arrival order.
        """
        if value is None:
            return
        if self.fact_id is None:
            self.fact_id = value
        elif isinstance(self.fact_id, list):
            if value not in self.fact_id:
                self.fact_id.append(value)
        elif self.fact_id != value:
            self.fact_id = [self.fact_id, value]

    @property
    def own_fact_ids(self) -> set:
        """Fact ids attached directly to this node."""
        if self.fact_id is None:
            return set()
        if isinstance(self.fact_id, list):
            return set(self.fact_id)
        return {self.fact_id}

    @property
    def is_indexed(self) -> bool:
        """True once the descendant index populated this node."""
        return self.descendant_fact_ids is not None

    # ===========================================================================
    # RELATIONSHIP QUERIES
    # ===========================================================================
    @property
    def is_root(self) -> bool:
        """
        Check if this is a root node.

        Recognizes the canonical id and parentless nodes made by
        create_root_node under another id. A detached node is not a root.
        """
        return self.id == ROOT_ID or (self.parent is None and self.designated_root)

    @property
    def has_children(self) -> bool:
        """Check if this node has child nodes."""
        return len(self.children) > 0

    @property
    def ancestors(self) -> list[HierarchyNode]:
        """Nodes above this one, nearest first (parent ... root)."""
        chain = []
        node = self.parent
        while node:
            chain.append(node)
            node = node.parent
        return chain

    # ===========================================================================
    # TREE ITERATION
    # ===========================================================================
    def iter_preorder(self) -> Iterator[HierarchyNode]:
        """
        Walk the subtree depth-first, each node before its children.

        Iterative, so deep product hierarchies do not hit the recursion
        limit. Children are visited in their stored (sorted) order.
        """
        pending = [self]
        while pending:
            node = pending.pop()
            yield node
            pending.extend(reversed(node.children))

    def iter_leaves(self) -> Iterator[HierarchyNode]:
        """Leaf nodes of the subtree, in pre-order."""
        return (node for node in self.iter_preorder() if node.is_leaf)

    # ===========================================================================
    # STATISTICS
    # ===========================================================================
    @property
    def child_count(self) -> int:
        """Number of direct children."""
        return len(self.children)

    @property
    def descendant_count(self) -> int:
        """Total number of nodes below this one."""
        return sum(1 for _ in self.iter_preorder()) - 1

    @property
    def leaf_count(self) -> int:
        """Number of leaf nodes in subtree."""
        return sum(1 for _ in self.iter_leaves())

    @property
    def max_depth(self) -> int:
        """Maximum level of any node in subtree."""
        return max(node.level for node in self.iter_preorder())

    # ===========================================================================
    # CONVERSION AND REPRESENTATION
    # ===========================================================================
    def to_dict(self, include_children: bool = True) -> dict[str, Any]:
        """
        Convert node to dictionary.

        Args:
            include_children: Whether to include children recursively

        Returns:
            Dictionary representation
        """
        result: dict[str, Any] = {
            'id': self.id,
            'label': self.label,
            'level': self.level,
            'path': list(self.path),
            'is_leaf': self.is_leaf,
            'has_children': self.has_children,
        }

        if self.fact_id is not None:
            result['fact_id'] = self.fact_id
        if self.descendant_fact_ids is not None:
            result['descendant_fact_ids'] = sorted(self.descendant_fact_ids, key=str)

        if include_children and self.children:
            result['children'] = [
                child.to_dict(include_children=True)
                for child in self.children
            ]

        return result

    def to_text(self, indent_size: int = DEFAULT_INDENT_SIZE) -> str:
        """
        Convert subtree to indented text representation.

        Args:
            indent_size: Spaces per indentation level

        Returns:
            Multi-line text representation
        """
        lines = []
        for node in self.iter_preorder():
            indent = ' ' * (node.level * indent_size)
            fact_str = f" [{node.fact_id}]" if node.is_leaf else ""
            lines.append(f"{indent}{node.label}{fact_str}")
        return '\n'.join(lines)

    def __repr__(self) -> str:
        kind = "leaf" if self.is_leaf else f"{len(self.children)} children"
        return f"HierarchyNode({self.id!r}, {self.label!r}, level={self.level}, {kind})"


# ==============================================================================
# FACTORY FUNCTIONS
# ==============================================================================
def create_root_node(label: str, node_id: str = ROOT_ID) -> HierarchyNode:
    """
    Create a root node for a hierarchy.

    Args:
        label: Label for the root (e.g., "All Legal Entities")
        node_id: Id of the root (default "ROOT")

    Returns:
        New root node
    """
    return HierarchyNode(id=node_id, label=label, level=0, designated_root=True)


__all__ = [
    'HierarchyNode',
    'create_root_node',
]
