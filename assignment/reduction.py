"""
assignment/reduction.py — filtr redukcji do liści.

Z surowego zbioru przypisań powstają dwa widoki:
  all    — koncepty spójne z przodkami: bez korzenia, bez konceptów, którym
           brakuje przypisanego przodka, bez konceptów bez wzorców
  leaves — z widoku all usunięte koncepty mające w nim potomka ze wzorcami
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet

from ontology import OntologyGraph

from .types import ReportMode


@dataclass(frozen=True, slots=True)
class Reduction:
    all:    frozenset[str]
    leaves: frozenset[str]

    def select(self, mode: ReportMode) -> frozenset[str]:
        return self.all if mode is ReportMode.ALL else self.leaves


def ancestor_consistent(assigned: AbstractSet[str], graph: OntologyGraph) -> frozenset[str]:
    kept: set[str] = set()
    for concept_id in assigned:
        if concept_id not in graph:
            continue
        if not graph.parents_of(concept_id):
            continue
        if not graph.expressions_of(concept_id):
            continue
        if not graph.ancestors_of(concept_id) <= assigned:
            continue
        kept.add(concept_id)
    return frozenset(kept)


def leaves_only(consistent: AbstractSet[str], graph: OntologyGraph) -> frozenset[str]:
    """Zostawia tylko najbardziej szczegółowe koncepty."""
    return frozenset(
        concept_id
        for concept_id in consistent
        if not any(
            d in consistent and graph.expressions_of(d)
            for d in graph.descendants_of(concept_id)
        )
    )


def reduce(assigned: AbstractSet[str], graph: OntologyGraph) -> Reduction:
    consistent = ancestor_consistent(assigned, graph)
    return Reduction(all=consistent, leaves=leaves_only(consistent, graph))
