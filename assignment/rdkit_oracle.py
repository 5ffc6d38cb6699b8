"""
assignment/rdkit_oracle.py — wyrocznia dopasowania podstruktur oparta o RDKit.

Wymaga pakietu rdkit (opcjonalna zależność: pip install "oca[rdkit]").

Zparsowane cząsteczki i zapytania SMARTS są cache'owane (lru_cache jest
bezpieczny wątkowo); obiekty RDKit są potem tylko czytane.
"""

from __future__ import annotations

import functools
import logging

try:
    from rdkit import Chem, RDLogger
except ImportError as _exc:
    raise ImportError(
        "Brakuje pakietu rdkit. Zainstaluj: pip install rdkit"
    ) from _exc

from .oracle import ORACLE_FAILURE

log = logging.getLogger(__name__)

# błędy parsowania RDKit idą przez logging, nie na stderr
RDLogger.DisableLog("rdApp.*")

MOL_CACHE_SIZE   = 1024
QUERY_CACHE_SIZE = 8192
MAX_MATCHES      = 10_000


@functools.lru_cache(maxsize=MOL_CACHE_SIZE)
def _mol(smiles: str) -> "Chem.Mol | None":
    mol = Chem.MolFromSmiles(smiles)
    if mol is None:
        log.debug("Niepoprawny SMILES: %r", smiles)
    return mol


@functools.lru_cache(maxsize=QUERY_CACHE_SIZE)
def _query(smarts: str) -> "Chem.Mol | None":
    query = Chem.MolFromSmarts(smarts)
    if query is None:
        log.debug("Niepoprawny SMARTS: %r", smarts)
    return query


class RDKitOracle:
    """
    Implementacja protokołu Oracle na RDKit.

    match_stereo dopasowuje z useChirality=True; count zlicza unikalne
    dopasowania (uniquify=True), każde wystąpienie grupy liczone raz.
    """

    def __init__(self, max_matches: int = MAX_MATCHES) -> None:
        self.max_matches = max_matches

    def _pair(self, item: str, pattern: str):
        mol   = _mol(item)
        query = _query(pattern)
        if mol is None or query is None:
            return None
        return mol, query

    def match(self, item: str, pattern: str) -> int:
        pair = self._pair(item, pattern)
        if pair is None:
            return ORACLE_FAILURE
        mol, query = pair
        return 1 if mol.HasSubstructMatch(query) else 0

    def match_stereo(self, item: str, pattern: str) -> int:
        pair = self._pair(item, pattern)
        if pair is None:
            return ORACLE_FAILURE
        mol, query = pair
        return 1 if mol.HasSubstructMatch(query, useChirality=True) else 0

    def count(self, item: str, pattern: str) -> int:
        pair = self._pair(item, pattern)
        if pair is None:
            return ORACLE_FAILURE
        mol, query = pair
        matches = mol.GetSubstructMatches(query, uniquify=True, maxMatches=self.max_matches)
        return len(matches)
