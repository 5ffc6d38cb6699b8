"""
assignment/types.py — typy danych silnika przypisywania związków do klas.

Item             — związek: identyfikator + reprezentacja strukturalna (SMILES)
AssignmentResult — id związku → zbiór przypisanych konceptów
ChemLib          — selektor biblioteki chemicznej (backend wyroczni)
ReportMode       — które koncepty raportować (liście / wszystkie)
AssignmentError  — przerwanie całej partii (tryb fail-fast)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum


@dataclass(frozen=True, slots=True)
class Item:
    """Związek do sklasyfikowania; structure jest dla silnika nieprzezroczyste."""
    id:        str
    structure: str


AssignmentResult = Mapping[str, frozenset[str]]


class ChemLib(StrEnum):
    """Obsługiwane biblioteki chemiczne."""
    RDKIT = "rdkit"

    @property
    def smarts_tag(self) -> str:
        """Tag ontologii, z którego czytane są wzorce dla tej biblioteki."""
        return _SMARTS_TAGS[self]

    @classmethod
    def resolve(cls, name: str | None) -> "ChemLib | None":
        """Zwraca znormalizowaną bibliotekę dla nazwy (bez rozróżniania wielkości liter) lub None."""
        if name is None:
            return None
        try:
            return cls(name.strip().lower())
        except ValueError:
            return None


_SMARTS_TAGS: dict[ChemLib, str] = {
    ChemLib.RDKIT: "cdk_smarts",
}


class ReportMode(StrEnum):
    """Tryb raportowania przodków."""
    LEAVES = "leaves"   # tylko najbardziej szczegółowe koncepty
    ALL    = "all"      # pełny zbiór spójny z przodkami


class AssignmentError(Exception):
    """Klasyfikacja partii przerwana z powodu błędu pojedynczego związku."""

    def __init__(self, item_id: str, message: str) -> None:
        self.item_id = item_id
        super().__init__(f"Błąd klasyfikacji związku '{item_id}': {message}")
