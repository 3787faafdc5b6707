# Path: bom_pivot/process/hierarchy/fallback.py
"""
Fallback Factory - minimal valid hierarchy for failed builds.

Downstream code (flattening, composing, filtering) always receives a
usable Hierarchy: when building fails, a root-only hierarchy stands in.
"""

from core.logger import get_process_logger
from process.hierarchy.constants import ROOT_ID, ROOT_FALLBACK_LABEL
from process.hierarchy.hierarchy import Hierarchy
from process.hierarchy.node import create_root_node

logger = get_process_logger('hierarchy.fallback')


def create_fallback_hierarchy(
    label: str = ROOT_FALLBACK_LABEL,
    root_id: str = ROOT_ID,
    dimension: str = "",
) -> Hierarchy:
    """
    Create a root-only hierarchy.

    The root is registered under the supplied id and under the
    canonical 'ROOT' key. It carries an empty descendant set, so
    filtering by it is valid immediately.

    Args:
        label: Root label
        root_id: Root id (default 'ROOT')
        dimension: Dimension key stored on the result

    Returns:
        Valid single-node Hierarchy flagged is_fallback
    """
    root = create_root_node(label, node_id=root_id)
    root.descendant_fact_ids = set()

    nodes_map = {root_id: root, ROOT_ID: root}

    logger.warning(f"Using fallback hierarchy for '{dimension}' (root '{label}')")

    return Hierarchy(
        root=root,
        nodes_map=nodes_map,
        flat_data=[],
        dimension=dimension,
        is_fallback=True,
        metadata={'fallback': True},
    )


__all__ = ['create_fallback_hierarchy']
