"""Testy hierarchicznej klasyfikacji i filtra redukcji do liści."""

import pytest

from assignment import Item, ReportMode, classify, reduce
from assignment.reduction import ancestor_consistent, leaves_only
from conftest import concept
from ontology import OntologyGraph


def _check_parent_closure(graph, assigned):
    for cid in assigned:
        assert graph.parents_of(cid) <= assigned, cid


class TestChainScenario:

    def test_matches_first_level_only(self, chain_graph, oracle):
        assigned = classify(Item("c1", "P1"), chain_graph, oracle)
        assert assigned == {"R", "A"}

        red = reduce(assigned, chain_graph)
        assert red.all == {"A"}
        assert red.leaves == {"A"}

    def test_matches_both_levels(self, chain_graph, oracle):
        assigned = classify(Item("c2", "P1 P2"), chain_graph, oracle)
        assert assigned == {"R", "A", "B"}

        red = reduce(assigned, chain_graph)
        assert red.all == {"A", "B"}
        assert red.leaves == {"B"}
        assert red.select(ReportMode.ALL) == {"A", "B"}
        assert red.select(ReportMode.LEAVES) == {"B"}

    def test_failed_parent_blocks_child(self, chain_graph, oracle):
        assigned = classify(Item("c3", "P2"), chain_graph, oracle)
        assert assigned == {"R"}
        # B jest odwiedzany, ale nie ewaluowany: rodzic A nie jest przypisany
        assert ("match", "P2", "P2") not in oracle.calls

    def test_idempotent(self, chain_graph, oracle):
        item = Item("c4", "P1 P2")
        assert classify(item, chain_graph, oracle) == classify(item, chain_graph, oracle)


class TestDiamond:

    def test_child_needs_all_parents(self, diamond_graph, oracle):
        assigned = classify(Item("d1", "P1 P4"), diamond_graph, oracle)
        assert assigned == {"R", "A"}

    def test_child_assigned_when_all_parents_match(self, diamond_graph, oracle):
        assigned = classify(Item("d2", "P1 P3 P4"), diamond_graph, oracle)
        assert assigned == {"R", "A", "C", "D"}
        assert reduce(assigned, diamond_graph).leaves == {"D"}

    @pytest.mark.parametrize("structure", ["", "P1", "P3", "P1 P3", "P4", "P1 P3 P4", "P3 P4"])
    def test_parent_closure_invariant(self, diamond_graph, oracle, structure):
        assigned = classify(Item("x", structure), diamond_graph, oracle)
        _check_parent_closure(diamond_graph, assigned)


class TestGroupingConcepts:

    def test_concept_without_patterns_is_auto_assigned(self, oracle):
        graph = OntologyGraph.build([
            concept("R"),
            concept("G", parents=["R"]),
            concept("A", parents=["G"], expressions=["P1"]),
        ])
        assigned = classify(Item("g1", "P1"), graph, oracle)
        assert assigned == {"R", "G", "A"}
        # G bez wzorców nie jest raportowalną klasą
        assert reduce(assigned, graph).all == {"A"}

    def test_root_alone_not_assigned(self, oracle):
        graph = OntologyGraph.build([concept("R")])
        assert classify(Item("r", "P1"), graph, oracle) == frozenset()

    def test_root_with_patterns_is_evaluated(self, oracle):
        graph = OntologyGraph.build([
            concept("R", expressions=["P0"]),
            concept("A", parents=["R"], expressions=["P1"]),
        ])
        assert classify(Item("r1", "P1"), graph, oracle) == frozenset()
        assert classify(Item("r2", "P0 P1"), graph, oracle) == {"R", "A"}


class TestReduction:

    def test_missing_ancestor_dropped(self, chain_graph):
        # niespójny zbiór wejściowy: B bez R
        assert ancestor_consistent({"A", "B"}, chain_graph) == frozenset()
        assert ancestor_consistent({"R", "A", "B"}, chain_graph) == {"A", "B"}

    def test_unknown_concepts_ignored(self, chain_graph):
        assert ancestor_consistent({"R", "A", "ZZZ"}, chain_graph) == {"A"}

    def test_leaves_keep_siblings(self, diamond_graph):
        assert leaves_only(frozenset({"A", "C"}), diamond_graph) == {"A", "C"}

    def test_empty(self, chain_graph):
        red = reduce(frozenset(), chain_graph)
        assert red.all == frozenset() and red.leaves == frozenset()
