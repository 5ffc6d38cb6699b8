"""
assignment/writer.py — zapis wyników przypisania i statystyk.

Plik wyników (dla każdego związku, w kolejności wejścia)::

    OC:C0001<TAB>CC(=O)O
    is_a<TAB>OC:0000042<TAB>carboxylic acid
    <pusta linia>

Plik statystyk::

    OC:0000042<TAB>carboxylic acid<TAB>17

Publiczne API:
  output_path_for(path, library, append_suffix) → pathlib.Path
  format_item(item, concept_ids, graph)         → list[str]
  write_assignments(path, items, result, graph, mode, echo) → dict[str, int]
  write_statistics(path, counts, graph)
"""

from __future__ import annotations

import collections
import logging
import pathlib
from typing import Callable, Iterable

from ontology import OntologyGraph

from .reduction import reduce
from .types import AssignmentResult, Item, ReportMode

log = logging.getLogger(__name__)

EchoCallback = Callable[[str], None]


def output_path_for(path: pathlib.Path | str, library: str, append_suffix: bool) -> pathlib.Path:
    """Opcjonalnie dokleja nazwę biblioteki: wyniki → wyniki_rdkit.tsv."""
    path = pathlib.Path(path)
    if not append_suffix:
        return path
    return path.with_name(f"{path.name}_{library}.tsv")


def format_item(item: Item, concept_ids: Iterable[str], graph: OntologyGraph) -> list[str]:
    """Linie bloku jednego związku (bez końcowej pustej linii)."""
    lines = [f"{item.id}\t{item.structure}"]
    for concept_id in sorted(concept_ids):
        lines.append(f"is_a\t{concept_id}\t{graph.name_of(concept_id) or ''}")
    return lines


def write_assignments(
    path:   pathlib.Path | str,
    items:  Iterable[Item],
    result: AssignmentResult,
    graph:  OntologyGraph,
    mode:   ReportMode = ReportMode.LEAVES,
    echo:   EchoCallback | None = None,
) -> dict[str, int]:
    """
    Zapisuje plik wyników; zwraca liczniki konceptów (widok all) do statystyk.

    Związki bez wyniku (pominięte z powodu błędu) zapisywane są bez linii is_a.
    Błędy zapisu (OSError) propagują z oryginalną ścieżką.
    """
    path   = pathlib.Path(path)
    counts: collections.Counter[str] = collections.Counter()
    n_items = 0

    with path.open("w", encoding="utf-8", newline="\n") as out:
        for item in items:
            n_items += 1
            assigned  = result.get(item.id, frozenset())
            reduction = reduce(assigned, graph)
            counts.update(reduction.all)

            lines = format_item(item, reduction.select(mode), graph)
            for line in lines:
                out.write(line + "\n")
                if echo is not None:
                    echo(line)
            out.write("\n")

    log.info("Zapisano %d związków do %s", n_items, path)
    return dict(counts)


def write_statistics(path: pathlib.Path | str, counts: dict[str, int], graph: OntologyGraph) -> None:
    """Liczba związków na koncept, malejąco; koncepty z zerem pomijane."""
    path = pathlib.Path(path)
    rows = sorted(
        ((cid, n) for cid, n in counts.items() if n > 0),
        key=lambda kv: (-kv[1], kv[0]),
    )
    with path.open("w", encoding="utf-8", newline="\n") as out:
        for concept_id, n in rows:
            out.write(f"{concept_id}\t{graph.name_of(concept_id) or ''}\t{n}\n")
    log.info("Zapisano statystyki %d konceptów do %s", len(rows), path)
