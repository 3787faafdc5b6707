# Path: bom_pivot/tests/unit/test_pivot/test_workspace.py
"""
Tests for PivotWorkspace.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add bom_pivot to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from process.hierarchy.constants import Axis, BuildState
from process.pivot.composer import CompositeEntry
from process.pivot.filtering import is_structural_empty
from process.pivot.workspace import PivotWorkspace


@pytest.fixture
def workspace(sample_definitions):
    return PivotWorkspace(
        sample_definitions, delimiter='|', warning_threshold=1000, fallback_label='All',
        separator='//',
    )


@pytest.fixture
def loaded(workspace, scenario_records, year_records):
    workspace.load_dimension('le', scenario_records)
    workspace.load_dimension('year', year_records)
    return workspace


class TestConstruction:
    """Test workspace setup."""

    def test_all_dimensions_unbuilt(self, workspace):
        for key in ('le', 'cost_element', 'year'):
            assert workspace.state(key) is BuildState.UNBUILT

    def test_definitions_from_iterable(self, sample_definitions):
        workspace = PivotWorkspace(
            sample_definitions.values(), delimiter='|', warning_threshold=10,
            fallback_label='All', separator='//',
        )
        assert set(workspace.definitions) == {'le', 'cost_element', 'year'}

    def test_settings_from_config(self, sample_definitions, mock_config):
        workspace = PivotWorkspace(sample_definitions, config=mock_config)
        assert workspace.delimiter == '|'
        assert workspace.warning_threshold == 10000
        assert workspace.fallback_label == 'All'

    def test_separator_from_environment(self, sample_definitions, reset_singletons, monkeypatch):
        """BOM_PIVOT_PATH_SEPARATOR reaches the builder."""
        from config_loader import ConfigLoader

        monkeypatch.setenv('BOM_PIVOT_PATH_SEPARATOR', '/')
        workspace = PivotWorkspace(sample_definitions, config=ConfigLoader())
        hierarchy = workspace.load_dimension(
            'le', [{'PATH': 'NA/US', 'ID': '1'}, {'PATH': 'EU/FR', 'ID': '2'}]
        )
        assert hierarchy.is_flat is False
        assert hierarchy.get_node('ROOT/NA/US').fact_id == '1'
        assert hierarchy.get_node('ROOT/EU/FR').fact_id == '2'

    def test_definition_separator_wins(self, sample_definitions):
        definitions = dict(sample_definitions)
        definitions['le'] = definitions['le'].model_copy(update={'separator': '::'})
        workspace = PivotWorkspace(
            definitions, delimiter='|', warning_threshold=10,
            fallback_label='All', separator='/',
        )
        hierarchy = workspace.load_dimension(
            'le', [{'PATH': 'NA::US', 'ID': '1'}, {'PATH': 'EU::FR', 'ID': '2'}]
        )
        assert 'ROOT/NA/US' in hierarchy

    def test_correlation(self, workspace):
        assert workspace.correlation == {
            'le': 'LE', 'cost_element': 'COST_ELEMENT', 'year': 'ZYEAR'
        }

    def test_unknown_dimension(self, workspace):
        with pytest.raises(KeyError):
            workspace.state('mc')


class TestBuildStates:
    """Test the per-dimension build lifecycle."""

    def test_load_builds_and_indexes(self, workspace, scenario_records):
        hierarchy = workspace.load_dimension('le', scenario_records)
        assert workspace.state('le') is BuildState.BUILT
        assert workspace.is_indexed('le') is True
        assert hierarchy.root.label == 'All Legal Entities'
        assert workspace.hierarchy('le') is hierarchy

    def test_empty_records_fall_back(self, workspace):
        hierarchy = workspace.load_dimension('le', [])
        assert workspace.state('le') is BuildState.FALLBACK
        assert hierarchy.is_fallback is True
        assert hierarchy.root.label == 'All Legal Entities'
        assert hierarchy.node_count == 1

    def test_builder_exception_falls_back(self, sample_definitions, scenario_records, caplog):
        builder = MagicMock()
        builder.build.side_effect = RuntimeError('boom')
        workspace = PivotWorkspace(
            sample_definitions, builder=builder,
            delimiter='|', warning_threshold=10, fallback_label='All', separator='//',
        )
        with caplog.at_level('ERROR'):
            hierarchy = workspace.load_dimension('le', scenario_records)
        assert workspace.state('le') is BuildState.FALLBACK
        assert hierarchy.is_valid is True
        assert 'boom' in caplog.text

    def test_reload_replaces_hierarchy(self, workspace, scenario_records, le_records):
        first = workspace.load_dimension('le', scenario_records)
        second = workspace.load_dimension('le', le_records)
        assert second is not first
        assert workspace.hierarchy('le').root.label == 'Group'

    def test_invalidate(self, workspace, scenario_records):
        workspace.load_dimension('le', scenario_records)
        workspace.invalidate('le')
        assert workspace.state('le') is BuildState.UNBUILT
        assert workspace.is_indexed('le') is False
        with pytest.raises(KeyError):
            workspace.hierarchy('le')

    def test_unknown_dimension_load(self, workspace, scenario_records):
        with pytest.raises(KeyError):
            workspace.load_dimension('mc', scenario_records)

    def test_fallback_filters_everything_through(self, workspace, fact_records):
        workspace.load_dimension('le', [])
        rows = workspace.flatten('le', Axis.ROW)
        assert len(rows) == 1
        assert workspace.filter_facts(rows[0], fact_records) == fact_records


class TestAxes:
    """Test dimension placement."""

    def test_place(self, loaded):
        loaded.place('le', Axis.ROW)
        loaded.place('year', 'column')
        assert loaded.dimensions_on(Axis.ROW) == ['le']
        assert loaded.dimensions_on(Axis.COLUMN) == ['year']

    def test_place_moves_between_axes(self, loaded):
        loaded.place('le', Axis.ROW)
        loaded.place('le', Axis.COLUMN)
        assert loaded.dimensions_on(Axis.ROW) == []
        assert loaded.dimensions_on(Axis.COLUMN) == ['le']

    def test_remove(self, loaded):
        loaded.place('le', Axis.ROW)
        loaded.remove('le')
        assert loaded.dimensions_on(Axis.ROW) == []


class TestView:
    """Test flattening and composing through the workspace."""

    def test_rows_start_collapsed(self, loaded):
        assert [row.id for row in loaded.flatten('le', Axis.ROW)] == ['ROOT']

    def test_columns_start_with_root_expanded(self, loaded):
        assert [row.id for row in loaded.flatten('le', Axis.COLUMN)] == [
            'ROOT', 'ROOT/EU', 'ROOT/NA'
        ]

    def test_toggle_expansion(self, loaded):
        assert loaded.toggle_expansion('le', Axis.ROW, 'ROOT') is True
        assert len(loaded.flatten('le', Axis.ROW)) == 3
        assert len(loaded.flatten('le', Axis.COLUMN)) == 3

    def test_single_dimension_axis(self, loaded):
        loaded.place('le', Axis.ROW)
        entries = loaded.axis_entries(Axis.ROW)
        assert [entry.id for entry in entries] == ['ROOT']

    def test_composite_axis(self, loaded):
        loaded.place('le', Axis.COLUMN)
        loaded.place('year', Axis.COLUMN)
        entries = loaded.axis_entries(Axis.COLUMN)
        assert len(entries) == 12
        assert isinstance(entries[0], CompositeEntry)
        assert entries[0].id == 'ROOT|ROOT'

    def test_explicit_dimension_list(self, loaded):
        entries = loaded.axis_entries(Axis.COLUMN, ['year', 'le'])
        assert entries[0].dimensions == ['year', 'le']

    def test_empty_axis(self, loaded):
        assert loaded.axis_entries(Axis.ROW) == []


class TestFiltering:
    """Test filtering through the workspace."""

    def test_filter_composite(self, loaded, fact_records):
        loaded.place('le', Axis.COLUMN)
        loaded.place('year', Axis.COLUMN)
        entry = next(e for e in loaded.axis_entries(Axis.COLUMN) if e.id == 'ROOT/NA|ROOT/2024')
        result = loaded.filter_facts(entry, fact_records)
        assert [r['LE'] for r in result] == ['L1', 'L2']

    def test_preserving_filter(self, loaded, fact_records):
        loaded.place('le', Axis.COLUMN)
        loaded.place('year', Axis.COLUMN)
        entry = next(e for e in loaded.axis_entries(Axis.COLUMN) if e.id == 'ROOT/EU|ROOT/2023')
        assert is_structural_empty(loaded.filter_facts(entry, fact_records, preserving=True))

    def test_apply_selections(self, loaded, fact_records):
        loaded.selection.exclude('le', ['ROOT/NA'])
        result = loaded.apply_selections(fact_records)
        assert [r['LE'] for r in result] == ['L3', 'L4']
