"""
assignment/classifier.py — hierarchiczna klasyfikacja jednego związku.

Przejście ontologii od korzenia w dół, poziom po poziomie:
  - koncept jest pomijany, gdy któryś z jego rodziców nie jest przypisany
  - koncept z wyrażeniami jest przypisywany, gdy evaluate_concept() → True
  - koncept bez wyrażeń (grupujący) jest przypisywany automatycznie,
    o ile graf ma jakiekolwiek sąsiedztwo dzieci
  - dzieci odwiedzonego konceptu trafiają do następnej rundy niezależnie
    od wyniku; blokuje je dopiero sprawdzenie rodziców w kolejnej rundzie
"""

from __future__ import annotations

import logging

from ontology import OntologyGraph

from .expression import evaluate_concept
from .oracle import Oracle
from .types import Item

log = logging.getLogger(__name__)


def classify(item: Item, graph: OntologyGraph, oracle: Oracle) -> frozenset[str]:
    """
    Zwraca zbiór konceptów przypisanych do związku.

    Każdy przypisany koncept ma przypisanych wszystkich rodziców.
    """
    assigned: set[str] = set()
    frontier: list[str] = [graph.root]
    rounds = 0

    while frontier:
        rounds += 1
        next_frontier: dict[str, None] = {}

        for concept_id in frontier:
            if concept_id in assigned:
                continue
            if not graph.parents_of(concept_id) <= assigned:
                continue

            expressions = graph.expressions_of(concept_id)
            if expressions:
                if evaluate_concept(item.structure, expressions, oracle):
                    assigned.add(concept_id)
            elif graph.has_child_adjacency:
                assigned.add(concept_id)

            for child in sorted(graph.children_of(concept_id)):
                next_frontier.setdefault(child)

        frontier = list(next_frontier)

    log.debug("%s: %d konceptów w %d rundach", item.id, len(assigned), rounds)
    return frozenset(assigned)
