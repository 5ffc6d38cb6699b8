"""
ontology/loader.py — wczytywanie ontologii klas związków z pliku stanz.

Obsługiwany podzbiór formatu::

    [Term]
    id: OC:0000042
    name: carboxylic acid
    is_a: OC:0000007 ! organic acid
    cdk_smarts: [CX3](=O)[OX2H1]
    is_obsolete: false

Reguły:
  - stanza zaczyna się linią "[Term]" i kończy pustą linią
  - linia zaczynająca się od "[" wewnątrz stanzy → OntologyFormatError
  - wartość obcinana przy " !" (komentarz), sekwencje "\\!" i "\\\\" odescapowane
  - brany jest tylko tag *_smarts wybrany dla biblioteki chemicznej
  - stanza z "is_obsolete: true" jest pomijana
  - liście bez wzorców (mają rodzica, nie mają dzieci ani wzorców) są pomijane

Publiczne API:
  read_ontology(path, smarts_tag)   → OntologyData
  parse_ontology(lines, smarts_tag) → OntologyData
"""

from __future__ import annotations

import logging
import pathlib
from typing import Iterable, Iterator

from .types import Concept, ConfigurationError, OntologyData, OntologyFormatError

log = logging.getLogger(__name__)

DEFAULT_SMARTS_TAG = "cdk_smarts"

_COMMENT_SEP = " !"


def _unescape(value: str) -> str:
    return value.replace("\\!", "!").replace("\\\\", "\\")


def _split_tag(line: str) -> tuple[str, str] | None:
    """Zwraca (tag, wartość) albo None dla linii bez poprawnego tagu."""
    off = line.find(":")
    if off < 2:
        return None
    tag   = line[:off]
    value = line[off + 1:].strip()
    comment = value.find(_COMMENT_SEP)
    if comment >= 0:
        value = value[:comment].strip()
    return tag, value


def parse_ontology(
    lines:      Iterable[str],
    smarts_tag: str = DEFAULT_SMARTS_TAG,
    source:     str = "<ontology>",
) -> OntologyData:
    """
    Parsuje linie pliku ontologii.

    Args:
        lines:      linie tekstu (z końcami linii lub bez)
        smarts_tag: tag, z którego czytane są wzorce (np. "cdk_smarts")
        source:     nazwa źródła do komunikatów błędów

    Raises:
        OntologyFormatError przy nowej sekcji bez poprzedzającej pustej linii.
    """
    data    = OntologyData()
    dropped = {"obsolete": 0, "no_id": 0, "empty_leaf": 0}
    numbered: Iterator[tuple[int, str]] = (
        (n, raw.rstrip("\r\n")) for n, raw in enumerate(lines, start=1)
    )

    for _, line in numbered:
        if not line.startswith("[Term]"):
            continue

        concept_id: str | None = None
        name:       str | None = None
        parents:    set[str]   = set()
        children:   set[str]   = set()
        patterns:   list[str]  = []
        obsolete = False

        for line_no, stanza_line in numbered:
            if stanza_line.startswith("["):
                raise OntologyFormatError(
                    source, line_no, "Początek nowej stanzy bez poprzedzającej pustej linii."
                )
            if not stanza_line.strip():
                break

            parsed = _split_tag(stanza_line)
            if parsed is None:
                continue
            tag, value = parsed

            match tag:
                case "id":
                    concept_id = value
                case "name":
                    name = value
                case "is_a":
                    parents.add(value)
                case "has_a":
                    children.add(value)
                case "is_obsolete":
                    obsolete = value.lower() == "true"
                case _ if tag == smarts_tag:
                    if value:
                        patterns.append(_unescape(value))

        if obsolete:
            dropped["obsolete"] += 1
            continue
        if concept_id is None:
            dropped["no_id"] += 1
            continue
        if parents and not patterns and not children:
            # liść bez wzorców nie może zostać przypisany
            dropped["empty_leaf"] += 1
            continue

        data.add(Concept(
            id=concept_id,
            name=name,
            parent_ids=frozenset(parents),
            child_ids=frozenset(children),
            expressions=tuple(patterns),
        ))

    if any(dropped.values()):
        log.info(
            "Pominięte stanze: %d przestarzałych, %d bez id, %d liści bez wzorców",
            dropped["obsolete"], dropped["no_id"], dropped["empty_leaf"],
        )
    return data


def read_ontology(path: pathlib.Path | str, smarts_tag: str = DEFAULT_SMARTS_TAG) -> OntologyData:
    """
    Wczytuje plik ontologii (UTF-8).

    Raises:
        ConfigurationError gdy pliku nie da się odczytać (ścieżka w komunikacie),
        OntologyFormatError przy błędzie formatu.
    """
    path = pathlib.Path(path)
    log.info("Wczytywanie ontologii: %s (tag wzorców: %s)", path, smarts_tag)
    try:
        with path.open(encoding="utf-8") as fh:
            data = parse_ontology(fh, smarts_tag=smarts_tag, source=str(path))
    except OSError as exc:
        raise ConfigurationError(f"Nie można odczytać ontologii {path}: {exc}") from exc
    log.info("Wczytano %d konceptów z %s", len(data), path.name)
    return data
