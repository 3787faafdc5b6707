# Path: bom_pivot/process/hierarchy/descendant_index.py
"""
Descendant Index - bottom-up aggregation of reachable fact ids.

After indexing, every node's descendant_fact_ids holds the fact ids of
all leaves below it (a leaf holds its own), so filtering by a node is a
set lookup instead of a subtree walk.
"""

from collections import defaultdict

from core.logger import get_process_logger
from process.hierarchy.hierarchy import Hierarchy

logger = get_process_logger('hierarchy.descendant_index')


def precompute_descendant_fact_ids(hierarchy: Hierarchy) -> int:
    """
    Compute descendant_fact_ids for every node of a hierarchy, in place.

    Nodes are grouped by level; leaves start with their own fact ids,
    other nodes with an empty set, and levels are processed deepest
    first so each parent unions finished child sets. Always a full
    recomputation; earlier results are discarded.

    Args:
        hierarchy: Built hierarchy to index

    Returns:
        Number of nodes indexed (0 for an empty hierarchy)
    """
    if hierarchy is None or hierarchy.root is None:
        logger.warning("Cannot index descendant fact ids: hierarchy has no root")
        return 0

    by_level = defaultdict(list)
    for node in hierarchy.root.iter_preorder():
        by_level[node.level].append(node)
        node.descendant_fact_ids = set(node.own_fact_ids) if node.is_leaf else set()

    for level in sorted(by_level, reverse=True):
        for node in by_level[level]:
            if node.is_leaf:
                continue
            for child in node.children:
                node.descendant_fact_ids |= child.descendant_fact_ids

    count = sum(len(nodes) for nodes in by_level.values())
    logger.debug(
        f"Indexed {count} nodes of '{hierarchy.dimension}' "
        f"({len(hierarchy.root.descendant_fact_ids)} fact ids under root)"
    )
    return count


__all__ = ['precompute_descendant_fact_ids']
