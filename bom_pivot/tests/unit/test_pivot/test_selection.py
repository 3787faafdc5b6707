# Path: bom_pivot/tests/unit/test_pivot/test_selection.py
"""
Tests for FilterSelection.
"""

import sys
from pathlib import Path

import pytest

# Add bom_pivot to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from process.hierarchy.descendant_index import precompute_descendant_fact_ids
from process.hierarchy.tree_builder import HierarchyBuilder
from process.pivot.selection import FilterSelection


@pytest.fixture
def le_hierarchy(scenario_records):
    hierarchy = HierarchyBuilder().build_from_accessors(
        scenario_records, path_of=lambda r: r['PATH'], leaf_id_of=lambda r: r['ID'], dimension='le'
    )
    precompute_descendant_fact_ids(hierarchy)
    return hierarchy


@pytest.fixture
def year_hierarchy(year_records):
    return HierarchyBuilder().build_from_accessors(
        year_records, path_of=None, leaf_id_of=lambda r: r['YEAR'], dimension='year'
    )


class TestInvertedRepresentation:
    """Empty or missing exclusion sets mean everything is selected."""

    def test_no_entry_is_all_selected(self):
        selection = FilterSelection()
        assert selection.is_all_selected('le') is True
        assert selection.excluded('le') == frozenset()

    def test_empty_set_is_all_selected(self):
        selection = FilterSelection()
        selection.exclude('le', [])
        assert selection.is_all_selected('le') is True

    def test_select_all_clears(self):
        selection = FilterSelection()
        selection.exclude('le', ['ROOT/NA'])
        selection.select_all('le')
        assert selection.is_all_selected('le') is True

    def test_clear_all_excludes_every_node(self, le_hierarchy):
        selection = FilterSelection()
        selection.clear_all('le', le_hierarchy)
        assert selection.excluded('le') == le_hierarchy.all_node_ids()
        assert selection.selected_count('le', le_hierarchy.node_count) == 0


class TestMutations:
    """Test exclude, include and toggle."""

    def test_exclude_and_include(self):
        selection = FilterSelection()
        selection.exclude('le', ['ROOT/NA', 'ROOT/EU'])
        selection.include('le', ['ROOT/EU'])
        assert selection.excluded('le') == {'ROOT/NA'}

    def test_include_unknown_dimension(self):
        selection = FilterSelection()
        selection.include('le', ['ROOT/NA'])
        assert selection.is_all_selected('le') is True

    def test_toggle(self):
        selection = FilterSelection()
        assert selection.toggle('le', 'ROOT/NA') is False
        assert selection.is_excluded('le', 'ROOT/NA') is True
        assert selection.toggle('le', 'ROOT/NA') is True
        assert selection.is_excluded('le', 'ROOT/NA') is False

    def test_reset_one_dimension(self):
        selection = FilterSelection()
        selection.exclude('le', ['ROOT/NA'])
        selection.exclude('year', ['ROOT/2024'])
        selection.reset('le')
        assert selection.dimensions == ['year']

    def test_reset_everything(self):
        selection = FilterSelection()
        selection.exclude('le', ['ROOT/NA'])
        selection.reset()
        assert selection.dimensions == []

    def test_dimensions_skip_empty_sets(self):
        selection = FilterSelection()
        selection.select_all('le')
        selection.exclude('year', ['ROOT/2024'])
        assert selection.dimensions == ['year']


class TestSummary:
    """Both views of "everything selected"."""

    LEAVES = {'ROOT/NA/US/CA', 'ROOT/NA/US/TX', 'ROOT/EU/FR'}

    def test_selected_count(self):
        selection = FilterSelection()
        selection.exclude('le', ['ROOT/NA'])
        assert selection.selected_count('le', 7) == 6

    def test_consistent_when_nothing_excluded(self):
        summary = FilterSelection().selection_summary('le', self.LEAVES)
        assert summary['all_selected'] is True
        assert summary['count_matches_total'] is True
        assert summary['consistent'] is True

    def test_consistent_when_leaf_excluded(self):
        selection = FilterSelection()
        selection.exclude('le', ['ROOT/EU/FR'])
        summary = selection.selection_summary('le', self.LEAVES)
        assert summary['all_selected'] is False
        assert summary['selected_in_view'] == 2
        assert summary['consistent'] is True

    def test_ambiguous_selection_reported(self, caplog):
        """Only an interior id excluded: the two views disagree."""
        selection = FilterSelection()
        selection.exclude('le', ['ROOT/NA/US'])
        with caplog.at_level('WARNING'):
            summary = selection.selection_summary('le', self.LEAVES)
        assert summary['all_selected'] is False
        assert summary['count_matches_total'] is True
        assert summary['consistent'] is False
        assert 'ambiguous' in caplog.text


class TestApply:
    """Test applying selections of several dimensions."""

    CORRELATION = {'le': 'LE', 'year': 'ZYEAR'}

    def test_nothing_selected_keeps_all(self, fact_records, le_hierarchy):
        result = FilterSelection().apply(fact_records, {'le': le_hierarchy}, self.CORRELATION)
        assert result == fact_records

    def test_two_dimensions(self, fact_records, le_hierarchy, year_hierarchy):
        selection = FilterSelection()
        selection.exclude('le', ['ROOT/NA'])
        selection.exclude('year', ['ROOT/2024'])
        result = selection.apply(
            fact_records, {'le': le_hierarchy, 'year': year_hierarchy}, self.CORRELATION
        )
        assert [(r['LE'], r['ZYEAR']) for r in result] == [('L3', '2025')]

    def test_missing_correlation(self, fact_records, le_hierarchy):
        selection = FilterSelection()
        selection.exclude('mc', ['ROOT/X'])
        with pytest.raises(KeyError):
            selection.apply(fact_records, {'le': le_hierarchy}, self.CORRELATION)
