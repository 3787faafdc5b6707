# Path: bom_pivot/tests/unit/test_output.py
"""
Unit Tests for the output package (AxisTextFormatter).
"""

import sys
from pathlib import Path

import pytest

# Add bom_pivot to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from output import AxisTextFormatter
from process.hierarchy.hierarchy import Hierarchy
from process.hierarchy.tree_builder import HierarchyBuilder
from process.pivot.composer import compose_axis
from process.pivot.flattener import flatten_hierarchy
from process.pivot.mapping import DimensionMapping


@pytest.fixture
def le_hierarchy(scenario_records):
    return HierarchyBuilder().build_from_accessors(
        scenario_records, path_of=lambda r: r['PATH'], leaf_id_of=lambda r: r['ID'], dimension='le'
    )


class TestFormatHierarchy:
    """Test tree drawing."""

    def test_ascii_tree(self, le_hierarchy):
        text = AxisTextFormatter().format_hierarchy(le_hierarchy)
        assert text.splitlines() == [
            'All',
            '+-- EU',
            '|   `-- FR [L3]',
            '`-- NA',
            '    `-- US',
            '        +-- CA [L1]',
            '        `-- TX [L2]',
        ]

    def test_unicode_tree(self, le_hierarchy):
        text = AxisTextFormatter(use_unicode=True).format_hierarchy(le_hierarchy)
        assert '├── EU' in text
        assert '└── NA' in text

    def test_empty_hierarchy(self):
        text = AxisTextFormatter().format_hierarchy(Hierarchy.empty(dimension='mc'))
        assert text == '(empty hierarchy: mc)'

    def test_leaf_with_several_ids(self):
        hierarchy = HierarchyBuilder().build_from_accessors(
            [{'PATH': 'A//B', 'ID': '1'}, {'PATH': 'A//B', 'ID': '2'}, {'PATH': 'C//D', 'ID': '3'}],
            path_of=lambda r: r['PATH'],
            leaf_id_of=lambda r: r['ID'],
        )
        assert 'B [1, 2]' in AxisTextFormatter().format_hierarchy(hierarchy)


class TestFormatAxis:
    """Test axis listings."""

    def test_rows_with_markers(self, le_hierarchy):
        rows = flatten_hierarchy(le_hierarchy, {'ROOT': True, 'ROOT/EU': True})
        text = AxisTextFormatter().format_axis(rows)
        assert text.splitlines() == [
            '[-] All',
            '  [-] EU',
            '        FR',
            '  [+] NA',
        ]

    def test_counts(self, le_hierarchy):
        rows = flatten_hierarchy(le_hierarchy, {'ROOT': True})
        text = AxisTextFormatter().format_axis(rows, counts=[6, 1, 3])
        assert text.splitlines()[2].endswith('(3)')

    def test_composite_entries(self, le_hierarchy):
        rows = flatten_hierarchy(le_hierarchy, {'ROOT': True})
        entries = compose_axis([rows, rows])
        text = AxisTextFormatter().format_axis(entries)
        assert text.splitlines()[0] == '[-] All | [-] All'
        assert len(text.splitlines()) == 9

    def test_indent_size(self, le_hierarchy):
        rows = flatten_hierarchy(le_hierarchy, {'ROOT': True})
        text = AxisTextFormatter(indent_size=4).format_axis(rows)
        assert text.splitlines()[1] == '    [+] EU'


class TestFormatMapping:
    """Test coverage summaries."""

    def test_mapping_summary(self):
        mapping = DimensionMapping(
            dimension='le', fact_field='LE',
            known_ids={'L1', 'L2', 'L3'}, used_ids={'L1', 'L4'}, unmapped_ids={'L4'},
        )
        text = AxisTextFormatter().format_mapping(mapping)
        assert 'Dimension: le (fact field LE)' in text
        assert 'Coverage: 50.0%' in text
        assert 'Unmapped: L4' in text

    def test_unmapped_truncated(self):
        unmapped = {f'X{i:02d}' for i in range(15)}
        mapping = DimensionMapping(
            dimension='mc', fact_field='MC', used_ids=set(unmapped), unmapped_ids=unmapped
        )
        text = AxisTextFormatter().format_mapping(mapping, max_unmapped=10)
        assert '(+5 more)' in text
        assert 'X09' in text
        assert 'X10' not in text
