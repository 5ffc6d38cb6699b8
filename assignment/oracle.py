"""
assignment/oracle.py — kontrakt wyroczni dopasowania podstruktur.

Wyrocznia jest zewnętrzną zdolnością: dla związku i pojedynczego wzorca
zwraca nieujemną liczbę wystąpień albo ujemny znacznik błędu.

  match(item, pattern)        → >0 dopasowanie, 0 brak, <0 błąd
  count(item, pattern)        → liczba wystąpień, <0 błąd
  match_stereo(item, pattern) → jak match, z uwzględnieniem stereochemii

Wyjątek rzucony przez wyrocznię też traktowany jest jako błąd — wywołania
przechodzą przez safe_call(), który loguje i zwraca ORACLE_FAILURE.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol

log = logging.getLogger(__name__)

ORACLE_FAILURE = -1


class Oracle(Protocol):
    def match(self, item: str, pattern: str) -> int:
        ...

    def count(self, item: str, pattern: str) -> int:
        ...

    def match_stereo(self, item: str, pattern: str) -> int:
        ...


def safe_call(fn: Callable[[str, str], int], item: str, pattern: str) -> int:
    """Wywołuje metodę wyroczni; błąd (wyjątek lub wynik < 0) → ORACLE_FAILURE."""
    try:
        result = fn(item, pattern)
    except Exception as exc:
        log.warning("Błąd wyroczni dla wzorca %r (%s): %s", pattern, item, exc)
        return ORACLE_FAILURE
    if result < 0:
        log.warning("Wyrocznia zgłosiła błąd dla wzorca %r (%s)", pattern, item)
        return ORACLE_FAILURE
    return result


def create_oracle(library: str) -> Oracle:
    """
    Tworzy wyrocznię dla wybranej biblioteki chemicznej.

    Raises:
        ValueError  dla nieznanej biblioteki,
        ImportError gdy biblioteka nie jest zainstalowana.
    """
    from .types import ChemLib

    lib = ChemLib.resolve(library)
    if lib is ChemLib.RDKIT:
        from .rdkit_oracle import RDKitOracle
        return RDKitOracle()
    raise ValueError(f"Nieznana biblioteka chemiczna: '{library}'")
