# Path: bom_pivot/process/hierarchy/builder_utils.py
"""
Shared Utility Functions for the Hierarchy Builder.

Contains the small operations the builder and the fallback factory share:
- Natural (case-insensitive, numeric-aware) label ordering
- Tree sorting
- Collision-proof child id generation
- Root label synthesis
"""

import re
from typing import Any, Optional

from process.hierarchy.constants import (
    NODE_ID_ESCAPE,
    NODE_ID_JOINER,
    ROOT_FALLBACK_LABEL,
    ROOT_LABEL_PREFIX,
)
from process.hierarchy.node import HierarchyNode


_DIGIT_RUN = re.compile(r'(\d+)')


def natural_sort_key(label: Any) -> tuple:
    """
    Build a case-insensitive, numeric-aware sort key for a label.

    Digit runs compare by value, text compares case-folded, and the raw
    label breaks remaining ties so ordering is total and deterministic.

    Example:
        >>> sorted(['Plant 10', 'plant 9', 'Plant 1'], key=natural_sort_key)
        ['Plant 1', 'plant 9', 'Plant 10']
    """
    text = '' if label is None else str(label)
    tokens = []
    for token in _DIGIT_RUN.split(text):
        if not token:
            continue
        if token.isdigit():
            tokens.append((0, int(token), ''))
        else:
            tokens.append((1, 0, token.casefold()))
    return (tuple(tokens), text)


def sort_children_recursive(node: HierarchyNode) -> None:
    """
    Sort children by label, recursively through entire tree.

    Args:
        node: Node whose children to sort
    """
    if node.children:
        node.children.sort(key=lambda n: natural_sort_key(n.label))
        for child in node.children:
            sort_children_recursive(child)


def escape_segment(segment: str) -> str:
    """Escape the id joiner inside a raw path segment."""
    return (
        segment
        .replace(NODE_ID_ESCAPE, NODE_ID_ESCAPE * 2)
        .replace(NODE_ID_JOINER, NODE_ID_ESCAPE + NODE_ID_JOINER)
    )


def make_child_id(parent_id: str, segment: Any) -> str:
    """
    Derive a child id from its parent id and raw segment.

    Two siblings only share an id if they share the raw segment, in
    which case they are the same node.

    Example:
        >>> make_child_id('ROOT', 'NA')
        'ROOT/NA'
        >>> make_child_id('ROOT', 'A/B')
        'ROOT/A\\\\/B'
    """
    return f"{parent_id}{NODE_ID_JOINER}{escape_segment(str(segment))}"


def synthesize_root_label(
    root_label: Optional[str] = None,
    dimension_label: Optional[str] = None,
    fallback_label: str = ROOT_FALLBACK_LABEL,
) -> str:
    """
    Pick the label of a synthesized root.

    Order: explicit override, then 'All <dimension label>', then the
    literal fallback.

    Args:
        root_label: Explicit override from the dimension definition
        dimension_label: Human label of the dimension (e.g. 'Legal Entities')
        fallback_label: Literal used when nothing else is known

    Returns:
        Root label
    """
    if root_label:
        return root_label
    if dimension_label:
        return f"{ROOT_LABEL_PREFIX} {dimension_label.replace('_', ' ')}"
    return fallback_label


__all__ = [
    'natural_sort_key',
    'sort_children_recursive',
    'escape_segment',
    'make_child_id',
    'synthesize_root_label',
]
