"""
assignment/scheduler.py — równoległa klasyfikacja partii związków.

Pula wątków tworzona jest na jeden przebieg (w run()) i zamykana po nim.
Każde zadanie klasyfikuje dokładnie jeden związek; graf i wyrocznia są
współdzielone tylko do odczytu. run() blokuje do zakończenia wszystkich zadań;
callback postępu wołany jest w wątku wywołującym, w kolejności kończenia zadań.

Polityka błędów:
  fail_fast=False  błąd jednego związku jest logowany, związek pomijany
                   (trafia do .failures), reszta partii kończy się normalnie
  fail_fast=True   pierwszy błąd anuluje oczekujące zadania i podnosi AssignmentError
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from types import MappingProxyType
from typing import Callable, Iterable

from ontology import ConfigurationError, OntologyGraph

from .classifier import classify
from .oracle import Oracle
from .types import AssignmentError, AssignmentResult, Item

log = logging.getLogger(__name__)

ProgressCallback = Callable[[Item], None]


class ParallelScheduler:
    """
    Użycie::

        scheduler = ParallelScheduler(graph, oracle, n_threads=8)
        result    = scheduler.run(items)
        scheduler.failures   # {item_id: komunikat}
    """

    def __init__(
        self,
        graph:     OntologyGraph,
        oracle:    Oracle,
        n_threads: int = 1,
        fail_fast: bool = False,
    ) -> None:
        if n_threads < 1:
            raise ConfigurationError(f"Liczba wątków musi być >= 1 (podano {n_threads}).")
        self.graph     = graph
        self.oracle    = oracle
        self.n_threads = n_threads
        self.fail_fast = fail_fast
        self.failures: dict[str, str] = {}

    def _classify(self, item: Item) -> frozenset[str]:
        return classify(item, self.graph, self.oracle)

    def run(
        self,
        items:    Iterable[Item],
        progress: ProgressCallback | None = None,
    ) -> AssignmentResult:
        """Klasyfikuje wszystkie związki; zwraca niemutowalną mapę id → koncepty."""
        self.failures = {}
        results: dict[str, frozenset[str]] = {}

        with ThreadPoolExecutor(max_workers=self.n_threads, thread_name_prefix="oca") as pool:
            futures: dict[Future, Item] = {pool.submit(self._classify, item): item for item in items}
            log.info("Klasyfikacja %d związków na %d wątkach", len(futures), self.n_threads)

            for fut in as_completed(futures):
                item = futures[fut]
                exc  = fut.exception()
                if exc is None:
                    results[item.id] = fut.result()
                elif self.fail_fast:
                    for other in futures:
                        other.cancel()
                    raise AssignmentError(item.id, str(exc)) from exc
                else:
                    log.error("Pominięto związek %s: %s", item.id, exc, exc_info=exc)
                    self.failures[item.id] = str(exc)
                if progress is not None:
                    progress(item)

        if self.failures:
            log.warning("%d związków pominiętych z powodu błędów", len(self.failures))
        return MappingProxyType(results)
