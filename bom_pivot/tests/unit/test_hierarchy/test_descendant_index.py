# Path: bom_pivot/tests/unit/test_hierarchy/test_descendant_index.py
"""
Tests for descendant fact id indexing.
"""

import sys
from pathlib import Path

# Add bom_pivot to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from process.hierarchy.descendant_index import precompute_descendant_fact_ids
from process.hierarchy.hierarchy import Hierarchy
from process.hierarchy.node import HierarchyNode, create_root_node
from process.hierarchy.tree_builder import HierarchyBuilder


def scenario_hierarchy(records):
    """Build the scenario hierarchy."""
    return HierarchyBuilder().build_from_accessors(
        records, path_of=lambda r: r['PATH'], leaf_id_of=lambda r: r['ID']
    )


def hand_built_hierarchy():
    """
    ROOT -> G1 -> {A(leaf 'a'), B -> {C(leaf 'c')}}; ROOT -> G2(leaf 'p').
    """
    root = create_root_node('All')
    p1 = HierarchyNode(id='ROOT/G1', label='G1')
    p2 = HierarchyNode(id='ROOT/G2', label='G2', is_leaf=True, fact_id='p')
    a = HierarchyNode(id='ROOT/G1/A', label='A', is_leaf=True, fact_id='a')
    b = HierarchyNode(id='ROOT/G1/B', label='B')
    c = HierarchyNode(id='ROOT/G1/B/C', label='C', is_leaf=True, fact_id='c')

    root.add_child(p1)
    root.add_child(p2)
    p1.add_child(a)
    p1.add_child(b)
    b.add_child(c)

    nodes = {node.id: node for node in root.iter_preorder()}
    return Hierarchy(root=root, nodes_map=nodes)


class TestPrecompute:
    """Test descendant set computation."""

    def test_scenario_sets(self, scenario_records):
        hierarchy = scenario_hierarchy(scenario_records)
        precompute_descendant_fact_ids(hierarchy)

        assert hierarchy.get_node('ROOT/NA').descendant_fact_ids == {'L1', 'L2'}
        assert hierarchy.get_node('ROOT/EU').descendant_fact_ids == {'L3'}
        assert hierarchy.root.descendant_fact_ids == {'L1', 'L2', 'L3'}

    def test_leaf_holds_own_id(self, scenario_records):
        hierarchy = scenario_hierarchy(scenario_records)
        precompute_descendant_fact_ids(hierarchy)
        assert hierarchy.get_node('ROOT/NA/US/CA').descendant_fact_ids == {'L1'}

    def test_leaf_with_several_ids(self):
        records = [
            {'PATH': 'A//B', 'ID': '1'},
            {'PATH': 'A//B', 'ID': '2'},
            {'PATH': 'C//D', 'ID': '3'},
        ]
        hierarchy = scenario_hierarchy(records)
        precompute_descendant_fact_ids(hierarchy)
        assert hierarchy.get_node('ROOT/A').descendant_fact_ids == {'1', '2'}

    def test_returns_node_count(self, scenario_records):
        hierarchy = scenario_hierarchy(scenario_records)
        assert precompute_descendant_fact_ids(hierarchy) == 7
        assert hierarchy.is_indexed is True

    def test_empty_hierarchy(self):
        assert precompute_descendant_fact_ids(Hierarchy.empty()) == 0

    def test_none_hierarchy(self):
        assert precompute_descendant_fact_ids(None) == 0

    def test_hand_built_sets(self):
        hierarchy = hand_built_hierarchy()
        precompute_descendant_fact_ids(hierarchy)

        assert hierarchy.get_node('ROOT/G1/B').descendant_fact_ids == {'c'}
        assert hierarchy.get_node('ROOT/G1').descendant_fact_ids == {'a', 'c'}
        assert hierarchy.root.descendant_fact_ids == {'a', 'c', 'p'}

    def test_interior_fact_id_not_propagated(self):
        """Only leaf ids are aggregated; an interior node's own id is ignored."""
        hierarchy = hand_built_hierarchy()
        hierarchy.get_node('ROOT/G1/B').fact_id = 'b'
        precompute_descendant_fact_ids(hierarchy)
        assert hierarchy.root.descendant_fact_ids == {'a', 'c', 'p'}


class TestRecomputation:
    """Indexing is a full recomputation."""

    def test_recompute_after_change(self):
        hierarchy = hand_built_hierarchy()
        precompute_descendant_fact_ids(hierarchy)

        b = hierarchy.get_node('ROOT/G1/B')
        d = HierarchyNode(id='ROOT/G1/B/D', label='D', is_leaf=True, fact_id='d')
        b.add_child(d)
        hierarchy.nodes_map[d.id] = d

        precompute_descendant_fact_ids(hierarchy)
        assert hierarchy.root.descendant_fact_ids == {'a', 'c', 'd', 'p'}

    def test_recompute_drops_stale_ids(self):
        hierarchy = hand_built_hierarchy()
        precompute_descendant_fact_ids(hierarchy)

        hierarchy.get_node('ROOT/G1/B/C').fact_id = 'c2'
        precompute_descendant_fact_ids(hierarchy)
        assert hierarchy.get_node('ROOT/G1').descendant_fact_ids == {'a', 'c2'}


class TestIndexProperties:
    """Relationships every indexed hierarchy satisfies."""

    def _indexed(self, records):
        hierarchy = scenario_hierarchy(records)
        precompute_descendant_fact_ids(hierarchy)
        return hierarchy

    def test_interior_is_union_of_children(self, scenario_records, le_records):
        for records in (scenario_records, le_records):
            hierarchy = self._indexed(records)
            for node in hierarchy:
                if node.is_leaf:
                    continue
                union = set()
                for child in node.children:
                    union |= child.descendant_fact_ids
                assert node.descendant_fact_ids == union

    def test_root_covers_all_leaves(self, scenario_records, le_records):
        for records in (scenario_records, le_records):
            hierarchy = self._indexed(records)
            leaf_ids = set()
            for leaf in hierarchy.root.iter_leaves():
                leaf_ids |= leaf.own_fact_ids
            assert hierarchy.root.descendant_fact_ids == leaf_ids

    def test_child_set_within_parent_set(self, scenario_records):
        hierarchy = self._indexed(scenario_records)
        for node in hierarchy:
            for child in node.children:
                assert child.descendant_fact_ids <= node.descendant_fact_ids
