"""
assignment/params.py — parametry przebiegu przypisania.

Wartości domyślne ze zmiennych środowiskowych:
  OCA_THREADS   liczba wątków (domyślnie 1)
  OCA_LIBRARY   biblioteka chemiczna (domyślnie rdkit)
"""

from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass, field

from ontology import ConfigurationError

from .types import ChemLib, ReportMode


def _env_threads() -> int:
    raw = os.getenv("OCA_THREADS", "1")
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"OCA_THREADS nie jest liczbą całkowitą: '{raw}'") from None


def _env_library() -> str:
    return os.getenv("OCA_LIBRARY", ChemLib.RDKIT.value)


@dataclass
class AssignmentParameters:
    """
    Parametry jednego przebiegu.

    Wymagane: library, ontology_path, items_path, output_path.
    """
    ontology_path:         pathlib.Path | None = None
    items_path:            pathlib.Path | None = None
    output_path:           pathlib.Path | None = None
    library:               str = field(default_factory=_env_library)
    n_threads:             int = field(default_factory=_env_threads)
    report_mode:           ReportMode = ReportMode.LEAVES
    stats_path:            pathlib.Path | None = None
    echo:                  bool = False
    append_library_suffix: bool = False
    max_items:             int | None = None
    fail_fast:             bool = False
    smarts_tag:            str | None = None
    delimiter:             str = "\t"

    def check(self) -> None:
        """Podnosi ConfigurationError z listą wszystkich problemów."""
        problems: list[str] = []

        for name in ("ontology_path", "items_path", "output_path"):
            if getattr(self, name) is None:
                problems.append(f"parametr '{name}' nie jest ustawiony")

        if ChemLib.resolve(self.library) is None:
            known = ", ".join(lib.value for lib in ChemLib)
            problems.append(f"nieznana biblioteka '{self.library}' (dostępne: {known})")
        if self.n_threads < 1:
            problems.append(f"liczba wątków musi być >= 1 (podano {self.n_threads})")
        if self.max_items is not None and self.max_items < 0:
            problems.append(f"max_items nie może być ujemne (podano {self.max_items})")
        if not self.delimiter:
            problems.append("separator pól nie może być pusty")

        if problems:
            raise ConfigurationError("Niepoprawne parametry: " + "; ".join(problems))

    @property
    def chem_lib(self) -> ChemLib:
        lib = ChemLib.resolve(self.library)
        if lib is None:
            raise ConfigurationError(f"Nieznana biblioteka chemiczna: '{self.library}'")
        return lib

    @property
    def effective_smarts_tag(self) -> str:
        return self.smarts_tag or self.chem_lib.smarts_tag
