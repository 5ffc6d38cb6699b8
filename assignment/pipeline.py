"""
assignment/pipeline.py — pełny przebieg przypisania.

Kroki:
  1. walidacja parametrów
  2. wczytanie ontologii i budowa grafu (jeden korzeń, DAG)
  3. wczytanie związków (opcjonalny limit)
  4. równoległa klasyfikacja hierarchiczna
  5. redukcja do liści i zapis wyników (+ opcjonalne statystyki)
"""

from __future__ import annotations

import logging
import pathlib
import time
from dataclasses import dataclass, field
from typing import Callable

from ontology import OntologyGraph, read_ontology

from .loader import read_items
from .oracle import Oracle, create_oracle
from .params import AssignmentParameters
from .reduction import reduce
from .scheduler import ParallelScheduler, ProgressCallback
from .types import Item
from .writer import EchoCallback, output_path_for, write_assignments, write_statistics

log = logging.getLogger(__name__)


@dataclass
class RunSummary:
    n_concepts:  int
    n_items:     int
    n_assigned:  int
    output_path: pathlib.Path
    stats_path:  pathlib.Path | None
    elapsed_s:   float
    failures:    dict[str, str] = field(default_factory=dict)


def run_assignment(
    params:   AssignmentParameters,
    oracle:   Oracle | None = None,
    progress: ProgressCallback | None = None,
    echo:     EchoCallback | None = None,
    on_start: Callable[[int], None] | None = None,
) -> RunSummary:
    """
    Wykonuje przypisanie wg parametrów.

    Args:
        params:   parametry przebiegu (sprawdzane przez params.check())
        oracle:   wyrocznia; domyślnie tworzona dla params.library
        progress: wywoływane po każdym sklasyfikowanym związku
        echo:     wywoływane dla każdej zapisanej linii (gdy params.echo)
        on_start: wywoływane z liczbą związków przed klasyfikacją

    Raises:
        ConfigurationError przed rozpoczęciem przetwarzania,
        AssignmentError w trybie fail_fast.
    """
    params.check()
    started = time.perf_counter()

    graph = OntologyGraph.build(read_ontology(params.ontology_path, params.effective_smarts_tag))
    items: dict[str, Item] = read_items(params.items_path, params.delimiter, params.max_items)

    if oracle is None:
        oracle = create_oracle(params.library)

    if on_start is not None:
        on_start(len(items))

    scheduler = ParallelScheduler(graph, oracle, params.n_threads, fail_fast=params.fail_fast)
    result    = scheduler.run(items.values(), progress=progress)

    output_path = output_path_for(params.output_path, params.chem_lib.value, params.append_library_suffix)
    counts = write_assignments(
        output_path, items.values(), result, graph,
        mode=params.report_mode,
        echo=echo if params.echo else None,
    )
    if params.stats_path is not None:
        write_statistics(params.stats_path, counts, graph)

    elapsed = time.perf_counter() - started
    log.info("Czas przebiegu: %.1f s", elapsed)

    return RunSummary(
        n_concepts=len(graph),
        n_items=len(items),
        n_assigned=sum(1 for s in result.values() if reduce(s, graph).all),
        output_path=output_path,
        stats_path=params.stats_path,
        elapsed_s=elapsed,
        failures=dict(scheduler.failures),
    )
