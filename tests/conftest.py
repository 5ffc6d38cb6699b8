"""Wspólne fikstury testów: słownikowa wyrocznia i mała ontologia."""

from __future__ import annotations

import threading

import pytest

from ontology import Concept, OntologyGraph


class FakeOracle:
    """
    Wyrocznia testowa: związek to ciąg tokenów rozdzielonych spacjami,
    liczba wystąpień wzorca = liczba identycznych tokenów.

    Wzorzec "FAIL" zwraca znacznik błędu, "BOOM" rzuca wyjątek.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, str]] = []
        self._lock = threading.Lock()

    def _count(self, method: str, item: str, pattern: str) -> int:
        with self._lock:
            self.calls.append((method, item, pattern))
        if pattern == "FAIL":
            return -1
        if pattern == "BOOM":
            raise RuntimeError("awaria wyroczni")
        return item.split().count(pattern)

    def match(self, item: str, pattern: str) -> int:
        return self._count("match", item, pattern)

    def count(self, item: str, pattern: str) -> int:
        return self._count("count", item, pattern)

    def match_stereo(self, item: str, pattern: str) -> int:
        return self._count("match_stereo", item, pattern)

    def methods(self) -> list[str]:
        return [m for m, _, _ in self.calls]


def concept(cid: str, parents=(), children=(), expressions=(), name=None) -> Concept:
    return Concept(
        id=cid,
        name=name if name is not None else cid.lower(),
        parent_ids=frozenset(parents),
        child_ids=frozenset(children),
        expressions=tuple(expressions),
    )


@pytest.fixture
def oracle() -> FakeOracle:
    return FakeOracle()


@pytest.fixture
def chain_graph() -> OntologyGraph:
    """R (bez wzorców) → A (P1) → B (P2)."""
    return OntologyGraph.build([
        concept("R", children=["A"]),
        concept("A", parents=["R"], children=["B"], expressions=["P1"]),
        concept("B", parents=["A"], expressions=["P2"]),
    ])


@pytest.fixture
def diamond_graph() -> OntologyGraph:
    """
    R → A (P1), R → C (P3), A → D, C → D (D: P4, dwóch rodziców),
    dzieci wyprowadzone z is_a.
    """
    return OntologyGraph.build([
        concept("R"),
        concept("A", parents=["R"], expressions=["P1"]),
        concept("C", parents=["R"], expressions=["P3"]),
        concept("D", parents=["A", "C"], expressions=["P4"]),
    ])
