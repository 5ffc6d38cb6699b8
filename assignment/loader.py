"""
assignment/loader.py — wczytywanie związków z pliku rozdzielanego separatorem.

Format (domyślnie TAB)::

    # komentarz
    CC(=O)O<TAB>OC:C0001
    c1ccccc1<TAB>OC:C0002<TAB>dowolne dalsze pola

Pierwsze pole to reprezentacja strukturalna (SMILES), drugie — identyfikator.
Linie zaczynające się od "#", puste i z mniej niż dwoma polami są pomijane.

Publiczne API:
  parse_items(lines, delimiter, limit) → dict[str, Item]
  read_items(path, delimiter, limit)   → dict[str, Item]
"""

from __future__ import annotations

import logging
import pathlib
from typing import Iterable

from ontology import ConfigurationError

from .types import Item

log = logging.getLogger(__name__)

COMMENT_MARK      = "#"
DEFAULT_DELIMITER = "\t"


def parse_items(
    lines:     Iterable[str],
    delimiter: str = DEFAULT_DELIMITER,
    limit:     int | None = None,
) -> dict[str, Item]:
    """
    Zwraca uporządkowaną mapę id → Item (kolejność wejścia).

    Powtórzony identyfikator nadpisuje wcześniejszy wpis. limit ogranicza
    liczbę wczytanych związków (None = bez ograniczeń).
    """
    items: dict[str, Item] = {}
    skipped = 0

    for raw in lines:
        if limit is not None and len(items) >= limit:
            break
        line = raw.rstrip("\r\n")
        if not line.strip() or line.startswith(COMMENT_MARK):
            continue
        fields = line.split(delimiter)
        if len(fields) < 2:
            skipped += 1
            continue
        structure, item_id = fields[0].strip(), fields[1].strip()
        if not structure or not item_id:
            skipped += 1
            continue
        items[item_id] = Item(id=item_id, structure=structure)

    if skipped:
        log.debug("Pominięto %d niepoprawnych linii związków", skipped)
    return items


def read_items(
    path:      pathlib.Path | str,
    delimiter: str = DEFAULT_DELIMITER,
    limit:     int | None = None,
) -> dict[str, Item]:
    """
    Wczytuje plik związków (UTF-8).

    Raises:
        ConfigurationError gdy pliku nie da się odczytać (ścieżka w komunikacie).
    """
    path = pathlib.Path(path)
    log.info("Wczytywanie związków: %s", path)
    try:
        with path.open(encoding="utf-8") as fh:
            items = parse_items(fh, delimiter=delimiter, limit=limit)
    except OSError as exc:
        raise ConfigurationError(f"Nie można odczytać pliku związków {path}: {exc}") from exc
    log.info("Wczytano %d związków z %s", len(items), path.name)
    return items
