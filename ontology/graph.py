"""
ontology/graph.py — niemutowalny graf ontologii (arena + indeksy).

Koncepty są numerowane kolejnymi liczbami całkowitymi w kolejności wczytania;
sąsiedztwo rodzic/dziecko trzymane jest jako krotki frozensetów indeksów.
Domknięcia przodków i potomków liczone są leniwie i zapamiętywane na czas
całego przebiegu.

Publiczne API:
  OntologyGraph.build(concepts)   → OntologyGraph  (ConfigurationError gdy brak / wiele korzeni)
  graph.parents_of(id), graph.children_of(id)
  graph.ancestors_of(id), graph.descendants_of(id)
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Iterable, Iterator

from .types import Concept, ConfigurationError, OntologyData

log = logging.getLogger(__name__)

_EMPTY: frozenset[str] = frozenset()


class OntologyGraph:
    """
    Graf konceptów z jednym korzeniem.

    Użycie::

        graph = OntologyGraph.build(ontology_data)
        graph.root                  # "OC:0000001"
        graph.ancestors_of("OC:7")  # frozenset({...})
    """

    def __init__(
        self,
        concepts:         list[Concept],
        parents:          list[frozenset[int]],
        children:         list[frozenset[int]],
        root:             int,
        children_derived: bool,
    ) -> None:
        self._concepts: tuple[Concept, ...]         = tuple(concepts)
        self._index:    dict[str, int]              = {c.id: i for i, c in enumerate(concepts)}
        self._parents:  tuple[frozenset[int], ...]  = tuple(parents)
        self._children: tuple[frozenset[int], ...]  = tuple(children)
        self._root:     int                         = root

        self.children_derived: bool = children_derived
        self.has_child_adjacency: bool = any(self._children)

        self._lock = threading.Lock()
        self._ancestors:   dict[int, frozenset[str]] = {}
        self._descendants: dict[int, frozenset[str]] = {}

    # ------------------------------------------------------------------
    # Budowa
    # ------------------------------------------------------------------

    @classmethod
    def build(cls, concepts: OntologyData | Iterable[Concept]) -> "OntologyGraph":
        """
        Buduje graf z rekordów konceptów.

        Kroki:
          1. numeracja konceptów (arena)
          2. sąsiedztwo rodziców; odwołania do nieznanych id są pomijane
          3. sąsiedztwo dzieci: deklarowane (has_a) albo — gdy żaden koncept
             nie deklaruje dzieci — odwrócenie sąsiedztwa rodziców
          4. walidacja: dokładnie jeden korzeń, brak cykli

        Raises:
            ConfigurationError gdy liczba korzeni != 1 lub graf ma cykl.
        """
        records = list(concepts)
        if not records:
            raise ConfigurationError("Ontologia nie zawiera żadnych konceptów.")

        index: dict[str, int] = {}
        for c in records:
            if c.id in index:
                raise ConfigurationError(f"Zduplikowany identyfikator konceptu: '{c.id}'")
            index[c.id] = len(index)

        dangling = 0

        def resolve(ids: frozenset[str]) -> frozenset[int]:
            nonlocal dangling
            out: set[int] = set()
            for ref in ids:
                i = index.get(ref)
                if i is None:
                    dangling += 1
                else:
                    out.add(i)
            return frozenset(out)

        parents = [resolve(c.parent_ids) for c in records]

        declares_children = any(c.child_ids for c in records)
        if declares_children:
            children = [resolve(c.child_ids) for c in records]
        else:
            inverted: list[set[int]] = [set() for _ in records]
            for child, ps in enumerate(parents):
                for p in ps:
                    inverted[p].add(child)
            children = [frozenset(s) for s in inverted]

        if dangling:
            log.warning("Pominięto %d odwołań do nieznanych konceptów.", dangling)

        roots = [i for i, c in enumerate(records) if not c.parent_ids]
        if len(roots) != 1:
            if not roots:
                raise ConfigurationError("Brak korzenia: każdy koncept ma co najmniej jednego rodzica.")
            ids = ", ".join(records[i].id for i in roots[:10])
            raise ConfigurationError(f"Znaleziono {len(roots)} korzeni (oczekiwano 1): {ids}")

        _check_acyclic(records, parents)

        log.debug(
            "Graf ontologii: %d konceptów, korzeń=%s, dzieci %s",
            len(records), records[roots[0]].id,
            "wyprowadzone z is_a" if not declares_children else "z has_a",
        )
        return cls(records, parents, children, roots[0], children_derived=not declares_children)

    # ------------------------------------------------------------------
    # Dostęp podstawowy
    # ------------------------------------------------------------------

    @property
    def root(self) -> str:
        return self._concepts[self._root].id

    def __len__(self) -> int:
        return len(self._concepts)

    def __contains__(self, concept_id: object) -> bool:
        return concept_id in self._index

    def __iter__(self) -> Iterator[Concept]:
        return iter(self._concepts)

    def concept(self, concept_id: str) -> Concept:
        return self._concepts[self._index[concept_id]]

    def name_of(self, concept_id: str) -> str | None:
        i = self._index.get(concept_id)
        return None if i is None else self._concepts[i].name

    def expressions_of(self, concept_id: str) -> tuple[str, ...]:
        i = self._index.get(concept_id)
        return () if i is None else self._concepts[i].expressions

    def _ids(self, indices: Iterable[int]) -> frozenset[str]:
        return frozenset(self._concepts[i].id for i in indices)

    def parents_of(self, concept_id: str) -> frozenset[str]:
        i = self._index.get(concept_id)
        return _EMPTY if i is None else self._ids(self._parents[i])

    def children_of(self, concept_id: str) -> frozenset[str]:
        i = self._index.get(concept_id)
        return _EMPTY if i is None else self._ids(self._children[i])

    # ------------------------------------------------------------------
    # Domknięcia (memoizowane)
    # ------------------------------------------------------------------

    def ancestors_of(self, concept_id: str) -> frozenset[str]:
        """Wszyscy przodkowie (BFS w górę), bez samego konceptu."""
        i = self._index.get(concept_id)
        if i is None:
            return _EMPTY
        return self._closure(i, self._parents, self._ancestors)

    def descendants_of(self, concept_id: str) -> frozenset[str]:
        """Wszyscy potomkowie (BFS w dół), bez samego konceptu."""
        i = self._index.get(concept_id)
        if i is None:
            return _EMPTY
        return self._closure(i, self._children, self._descendants)

    def _closure(
        self,
        start:     int,
        adjacency: tuple[frozenset[int], ...],
        cache:     dict[int, frozenset[str]],
    ) -> frozenset[str]:
        cached = cache.get(start)
        if cached is not None:
            return cached

        seen: set[int] = set()
        queue = deque(adjacency[start])
        while queue:
            node = queue.popleft()
            if node in seen:
                continue
            seen.add(node)
            queue.extend(adjacency[node] - seen)

        result = self._ids(seen)
        with self._lock:
            return cache.setdefault(start, result)

    def depth_of(self, concept_id: str) -> int:
        """Długość najkrótszej ścieżki od korzenia (korzeń = 0)."""
        depth = 0
        level = {self._index[concept_id]}
        seen: set[int] = set()
        while self._root not in level:
            seen |= level
            level = {p for i in level for p in self._parents[i]} - seen
            if not level:
                return -1
            depth += 1
        return depth


# ---------------------------------------------------------------------------
# Walidacja acykliczności
# ---------------------------------------------------------------------------

def _check_acyclic(records: list[Concept], parents: list[frozenset[int]]) -> None:
    """Algorytm Kahna po krawędziach rodzic → dziecko; podnosi ConfigurationError przy cyklu."""
    indegree = [len(ps) for ps in parents]
    children: list[list[int]] = [[] for _ in records]
    for child, ps in enumerate(parents):
        for p in ps:
            children[p].append(child)

    queue   = deque(i for i, d in enumerate(indegree) if d == 0)
    visited = 0
    while queue:
        node = queue.popleft()
        visited += 1
        for child in children[node]:
            indegree[child] -= 1
            if indegree[child] == 0:
                queue.append(child)

    if visited != len(records):
        in_cycle = [records[i].id for i, d in enumerate(indegree) if d > 0]
        sample = ", ".join(sorted(in_cycle)[:10])
        raise ConfigurationError(
            f"Graf ontologii zawiera cykl ({len(in_cycle)} konceptów), np.: {sample}"
        )
