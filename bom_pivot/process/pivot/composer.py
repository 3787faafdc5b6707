# Path: bom_pivot/process/pivot/composer.py
"""
Multi-Dimension Composer - cartesian product of flattened axes.

When several hierarchical dimensions share one pivot axis, every
visible node of the first is combined with every visible node of the
second, and so on. The result has exactly prod(len(sequence)) entries.
Nothing caps that size: callers placing many large dimensions on one
axis pay for it, and the composer only logs a warning above a
configurable threshold.
"""

from dataclasses import dataclass
from math import prod
from typing import Optional, Sequence, Union

from core.logger import get_process_logger
from process.hierarchy.constants import DEFAULT_COMPOSITE_ID_DELIMITER
from process.pivot.flattener import FlatRow

logger = get_process_logger('pivot.composer')


@dataclass(frozen=True)
class CompositeEntry:
    """
    One composite row/column: a node from each dimension, in axis order.

    Attributes:
        id: Component node ids joined with the delimiter
        components: One FlatRow per dimension
    """
    id: str
    components: tuple[FlatRow, ...]

    @property
    def dimensions(self) -> list[str]:
        """Dimension keys in axis order."""
        return [component.dimension for component in self.components]

    @property
    def labels(self) -> list[str]:
        """Component labels in axis order."""
        return [component.label for component in self.components]

    @property
    def node_ids(self) -> list[str]:
        return [component.id for component in self.components]

    def component(self, dimension: str) -> Optional[FlatRow]:
        """Component of one dimension, or None."""
        for component in self.components:
            if component.dimension == dimension:
                return component
        return None

    def __len__(self) -> int:
        return len(self.components)


AxisEntries = Union[list[FlatRow], list[CompositeEntry]]


def compose_axis(
    sequences: Sequence[list[FlatRow]],
    delimiter: str = DEFAULT_COMPOSITE_ID_DELIMITER,
    warning_threshold: Optional[int] = None,
) -> AxisEntries:
    """
    Combine the flattened sequences of the dimensions on one axis.

    A left fold: the first sequence seeds one-component entries, each
    following sequence multiplies every running entry by each of its
    rows. A root row that is not the first row of a later sequence is
    not emitted again, so each later dimension contributes a single
    "all values" entry per running entry.

    Args:
        sequences: Flattener output per dimension, in axis order
        delimiter: Joins component ids into the composite id
        warning_threshold: Log a warning when the product exceeds it

    Returns:
        The single sequence unchanged when only one dimension is given,
        otherwise CompositeEntry objects; empty when nothing is given

    Example:
        >>> entries = compose_axis([le_rows, ce_rows])
        >>> len(entries) == len(le_rows) * len(ce_rows)
        True
    """
    if not sequences:
        return []

    if len(sequences) == 1:
        return sequences[0]

    expected = prod(len(sequence) for sequence in sequences)
    if warning_threshold is not None and expected > warning_threshold:
        logger.warning(
            f"Composing {len(sequences)} dimensions yields {expected} entries "
            f"(threshold {warning_threshold})"
        )

    composed = [
        CompositeEntry(id=row.id, components=(row,))
        for row in sequences[0]
    ]

    for sequence in sequences[1:]:
        combined = []
        for entry in composed:
            for index, row in enumerate(sequence):
                if index > 0 and row.node.is_root:
                    continue
                combined.append(CompositeEntry(
                    id=f"{entry.id}{delimiter}{row.id}",
                    components=entry.components + (row,),
                ))
        composed = combined

    logger.debug(f"Composed {len(composed)} entries from {len(sequences)} dimensions")
    return composed


__all__ = [
    'CompositeEntry',
    'compose_axis',
]
