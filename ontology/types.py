"""
ontology/types.py — podstawowe typy danych ontologii klas związków.

Concept       — pojedynczy węzeł ontologii (klasa strukturalna)
OntologyData  — uporządkowany zbiór konceptów wczytany z pliku
ConfigurationError, OntologyFormatError — błędy konfiguracji (fatalne)
"""

from __future__ import annotations

from dataclasses import dataclass, field


class ConfigurationError(Exception):
    """Błąd konfiguracji wykrywany przed rozpoczęciem przetwarzania."""


class OntologyFormatError(ConfigurationError):
    """Niepoprawny format pliku ontologii (np. stanza bez pustej linii)."""

    def __init__(self, path: str, line_no: int, message: str) -> None:
        self.path    = path
        self.line_no = line_no
        super().__init__(f"{path}:{line_no}: {message}")


@dataclass(frozen=True)
class Concept:
    """
    Koncept ontologii.

    - id:          unikalny identyfikator, np. "OC:0000123"
    - name:        etykieta do raportów (opcjonalna)
    - parent_ids:  identyfikatory rodziców (is_a); puste tylko dla korzenia
    - child_ids:   identyfikatory dzieci (has_a); mogą być puste i wyprowadzone
    - expressions: surowe wyrażenia wzorców (SMARTS z operatorami)
    """
    id:          str
    name:        str | None = None
    parent_ids:  frozenset[str] = frozenset()
    child_ids:   frozenset[str] = frozenset()
    expressions: tuple[str, ...] = ()

    @property
    def has_patterns(self) -> bool:
        return bool(self.expressions)

    @property
    def label(self) -> str:
        return self.name if self.name is not None else self.id


@dataclass
class OntologyData:
    """Zbiór konceptów w kolejności wczytania (id → Concept)."""
    concepts: dict[str, Concept] = field(default_factory=dict)

    def add(self, concept: Concept) -> None:
        self.concepts[concept.id] = concept

    def __len__(self) -> int:
        return len(self.concepts)

    def __iter__(self):
        return iter(self.concepts.values())
