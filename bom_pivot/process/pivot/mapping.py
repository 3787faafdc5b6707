# Path: bom_pivot/process/pivot/mapping.py
"""
Dimension/fact coverage.

Reports how well the fact records of a dataset resolve to the leaves of
a dimension hierarchy. Fact values without a leaf never appear in a
filtered view.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable

from core.logger import get_process_logger
from process.hierarchy.hierarchy import Hierarchy
from process.hierarchy.tree_builder import field_accessor

logger = get_process_logger('pivot.mapping')


@dataclass
class DimensionMapping:
    """
    Coverage of one dimension by a fact dataset.

    Attributes:
        dimension: Dimension key
        fact_field: Fact field correlated with the dimension
        known_ids: Fact ids carried by the hierarchy's nodes
        used_ids: Distinct values of fact_field in the facts
        unmapped_ids: Used values with no node in the hierarchy
    """
    dimension: str
    fact_field: str
    known_ids: set = field(default_factory=set)
    used_ids: set = field(default_factory=set)
    unmapped_ids: set = field(default_factory=set)

    @property
    def mapped_ids(self) -> set:
        return self.used_ids - self.unmapped_ids

    @property
    def coverage_percent(self) -> float:
        """Share of used values that resolve to a node (100 when none used)."""
        if not self.used_ids:
            return 100.0
        return 100.0 * len(self.mapped_ids) / len(self.used_ids)

    def to_dict(self) -> dict[str, Any]:
        return {
            'dimension': self.dimension,
            'fact_field': self.fact_field,
            'known': len(self.known_ids),
            'used': len(self.used_ids),
            'unmapped': sorted(self.unmapped_ids, key=str),
            'coverage_percent': self.coverage_percent,
        }


@dataclass
class SampleCheck:
    """Result of checking the first records of a fact dataset."""
    dimension: str
    fact_field: str
    sample_size: int
    matches: int

    @property
    def all_matched(self) -> bool:
        return self.matches == self.sample_size


def build_dimension_mapping(
    hierarchy: Hierarchy,
    facts: Iterable[Any],
    fact_field: str,
) -> DimensionMapping:
    """
    Compare the fact ids of a hierarchy with the values used by facts.

    Args:
        hierarchy: Built dimension hierarchy
        facts: Fact records
        fact_field: Fact field correlated with the dimension

    Returns:
        DimensionMapping with known, used and unmapped ids
    """
    known = set()
    for node in hierarchy:
        known |= node.own_fact_ids

    value_of = field_accessor(fact_field)
    used = {value for value in (value_of(record) for record in facts or []) if value is not None}

    mapping = DimensionMapping(
        dimension=hierarchy.dimension,
        fact_field=fact_field,
        known_ids=known,
        used_ids=used,
        unmapped_ids=used - known,
    )

    if mapping.unmapped_ids:
        logger.warning(
            f"'{mapping.dimension}': {len(mapping.unmapped_ids)} of {len(used)} "
            f"{fact_field} values have no dimension node "
            f"({mapping.coverage_percent:.1f}% coverage)"
        )
    else:
        logger.info(f"'{mapping.dimension}': all {len(used)} {fact_field} values mapped")

    return mapping


def verify_fact_sample(
    hierarchy: Hierarchy,
    facts: list[Any],
    fact_field: str,
    sample_size: int = 10,
) -> SampleCheck:
    """
    Check how many of the first fact records resolve to a node.

    Args:
        hierarchy: Built dimension hierarchy
        facts: Fact records
        fact_field: Fact field correlated with the dimension
        sample_size: Number of leading records to check

    Returns:
        SampleCheck with sample size and number of matches
    """
    sample = list(facts or [])[:sample_size]

    known = set()
    for node in hierarchy:
        known |= node.own_fact_ids

    value_of = field_accessor(fact_field)
    matches = sum(1 for record in sample if value_of(record) in known)

    logger.info(
        f"'{hierarchy.dimension}' mapping: {matches}/{len(sample)} records "
        f"have matching {fact_field}"
    )
    return SampleCheck(
        dimension=hierarchy.dimension,
        fact_field=fact_field,
        sample_size=len(sample),
        matches=matches,
    )


__all__ = [
    'DimensionMapping',
    'SampleCheck',
    'build_dimension_mapping',
    'verify_fact_sample',
]
