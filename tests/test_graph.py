"""Testy grafu ontologii: korzeń, sąsiedztwo, domknięcia."""

import pytest

from conftest import concept
from ontology import ConfigurationError, OntologyData, OntologyGraph


class TestRootDetection:

    def test_two_roots_rejected(self):
        with pytest.raises(ConfigurationError, match="2 korzeni"):
            OntologyGraph.build([concept("R1"), concept("R2"), concept("A", parents=["R1"])])

    def test_no_root_rejected(self):
        with pytest.raises(ConfigurationError, match="Brak korzenia"):
            OntologyGraph.build([
                concept("A", parents=["B"], expressions=["P"]),
                concept("B", parents=["A"], expressions=["P"]),
            ])

    def test_empty_ontology_rejected(self):
        with pytest.raises(ConfigurationError):
            OntologyGraph.build([])

    def test_duplicate_id_rejected(self):
        with pytest.raises(ConfigurationError, match="Zduplikowany"):
            OntologyGraph.build([concept("R"), concept("R")])

    def test_single_root(self, chain_graph):
        assert chain_graph.root == "R"

    def test_accepts_ontology_data(self):
        data = OntologyData()
        data.add(concept("R"))
        data.add(concept("A", parents=["R"], expressions=["P"]))
        graph = OntologyGraph.build(data)
        assert len(graph) == 2
        assert "A" in graph
        assert "X" not in graph


class TestCycles:

    def test_cycle_below_root_rejected(self):
        with pytest.raises(ConfigurationError, match="cykl"):
            OntologyGraph.build([
                concept("R"),
                concept("A", parents=["R", "B"], expressions=["P"]),
                concept("B", parents=["A"], expressions=["P"]),
            ])


class TestAdjacency:

    def test_declared_children_used(self, chain_graph):
        assert chain_graph.children_of("R") == {"A"}
        assert chain_graph.children_of("A") == {"B"}
        assert not chain_graph.children_derived
        assert chain_graph.has_child_adjacency

    def test_children_derived_from_parents(self, diamond_graph):
        assert diamond_graph.children_derived
        assert diamond_graph.children_of("R") == {"A", "C"}
        assert diamond_graph.children_of("A") == {"D"}
        assert diamond_graph.children_of("C") == {"D"}
        assert diamond_graph.children_of("D") == frozenset()

    def test_parents(self, diamond_graph):
        assert diamond_graph.parents_of("D") == {"A", "C"}
        assert diamond_graph.parents_of("R") == frozenset()

    def test_unknown_id_is_empty(self, chain_graph):
        assert chain_graph.parents_of("NOPE") == frozenset()
        assert chain_graph.children_of("NOPE") == frozenset()
        assert chain_graph.ancestors_of("NOPE") == frozenset()

    def test_dangling_references_dropped(self):
        graph = OntologyGraph.build([
            concept("R", children=["A", "GONE"]),
            concept("A", parents=["R", "ALSO_GONE"], expressions=["P"]),
        ])
        assert graph.children_of("R") == {"A"}
        assert graph.parents_of("A") == {"R"}

    def test_root_only_graph_has_no_child_adjacency(self):
        graph = OntologyGraph.build([concept("R")])
        assert not graph.has_child_adjacency


class TestClosures:

    def test_ancestors(self, chain_graph):
        assert chain_graph.ancestors_of("B") == {"A", "R"}
        assert chain_graph.ancestors_of("R") == frozenset()

    def test_descendants(self, chain_graph):
        assert chain_graph.descendants_of("R") == {"A", "B"}
        assert chain_graph.descendants_of("B") == frozenset()

    def test_diamond_closures(self, diamond_graph):
        assert diamond_graph.ancestors_of("D") == {"A", "C", "R"}
        assert diamond_graph.descendants_of("C") == {"D"}

    def test_closures_memoized(self, chain_graph):
        first = chain_graph.ancestors_of("B")
        assert chain_graph.ancestors_of("B") is first

    def test_depth(self, diamond_graph):
        assert diamond_graph.depth_of("R") == 0
        assert diamond_graph.depth_of("A") == 1
        assert diamond_graph.depth_of("D") == 2
