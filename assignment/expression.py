"""
assignment/expression.py — język wyrażeń wzorców i jego ewaluacja.

Koncept ma listę surowych wyrażeń. Każde wyrażenie to:

  [!] klauzula                   "!" na początku → wyrażenie NOT, inaczej OR
  klauzula := A XXX B            A stereospecyficzne ∧ B (z krotnością)
            | A . B . C ...      koniunkcja wzorców (każdy z krotnością)
            | A                  pojedynczy wzorzec (z krotnością)
  krotność  := <n>EXACT<wzorzec> liczba wystąpień == n
            | <n>MORE<wzorzec>   liczba wystąpień >= n

Reguła AND („jednolity albo milczący”): klauzula daje werdykt tylko gdy
wyniki wszystkich segmentów są identyczne; wyniki mieszane nie dają
żadnego werdyktu (Verdict.NONE) i nie trafiają do żadnej puli.

Werdykt konceptu:
  pula NOT niepusta → musi być jednolita (inaczej False);
      pula OR pusta     → werdykt = wartość puli NOT
      pula OR niepusta  → NOT ∧ (co najmniej jeden OR prawdziwy)
  pula NOT pusta     → co najmniej jeden OR prawdziwy (pusta pula OR → False)

Publiczne API:
  parse_expression(raw)                       → ParsedExpression
  evaluate_expression(item, parsed, oracle)   → Verdict
  collect_pools(item, expressions, oracle)    → (or_pool, not_pool)
  decide(or_pool, not_pool)                   → bool
  evaluate_concept(item, expressions, oracle) → bool
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Iterable, Sequence

from .oracle import ORACLE_FAILURE, Oracle, safe_call

log = logging.getLogger(__name__)

NEGATION_MARK = "!"
STEREO_SEP    = "XXX"
AND_SEP       = "."


# ---------------------------------------------------------------------------
# Werdykt trójwartościowy
# ---------------------------------------------------------------------------

class Verdict(Enum):
    TRUE  = "true"
    FALSE = "false"
    NONE  = "none"   # brak werdyktu (mieszane wyniki segmentów)

    @classmethod
    def of(cls, value: bool) -> "Verdict":
        return cls.TRUE if value else cls.FALSE

    def negate(self) -> "Verdict":
        if self is Verdict.TRUE:
            return Verdict.FALSE
        if self is Verdict.FALSE:
            return Verdict.TRUE
        return Verdict.NONE


def combine_and(verdicts: Iterable[Verdict]) -> Verdict:
    """Reguła AND: wspólna wartość gdy wszystkie identyczne, inaczej NONE (także dla pustej listy)."""
    values = list(verdicts)
    if not values:
        return Verdict.NONE
    first = values[0]
    if all(v is first for v in values):
        return first
    return Verdict.NONE


# ---------------------------------------------------------------------------
# Parsowanie
# ---------------------------------------------------------------------------

class Multiplicity(StrEnum):
    EXACT = "EXACT"
    MORE  = "MORE"


class Separator(StrEnum):
    NONE   = ""
    STEREO = STEREO_SEP
    AND    = AND_SEP


@dataclass(frozen=True, slots=True)
class AtomicClause:
    """
    Pojedynczy wzorzec wysyłany do wyroczni.

    - raw:       tekst segmentu przed rozbiorem krotności
    - pattern:   wzorzec dla wyroczni
    - directive: EXACT / MORE lub None
    - threshold: próg krotności (gdy directive ustawione)
    - error:     opis błędu rozbioru; klauzula z błędem zawsze daje False
    """
    raw:       str
    pattern:   str
    directive: Multiplicity | None = None
    threshold: int | None = None
    error:     str | None = None


@dataclass(frozen=True, slots=True)
class ParsedExpression:
    raw:       str
    negated:   bool
    separator: Separator
    clauses:   tuple[AtomicClause, ...]

    @property
    def is_stereo(self) -> bool:
        return self.separator is Separator.STEREO


def _segments(text: str, sep: str) -> list[str]:
    """Dzieli po separatorze, przycina i pomija puste segmenty."""
    return [s.strip() for s in text.split(sep) if s.strip()]


def parse_clause(text: str, multiplicity: bool = True) -> AtomicClause:
    """Rozbiera segment na wzorzec i ewentualną dyrektywę krotności (EXACT przed MORE)."""
    text = text.strip()
    if not text:
        return AtomicClause(raw=text, pattern="", error="pusty wzorzec")
    if not multiplicity:
        return AtomicClause(raw=text, pattern=text)

    for directive in (Multiplicity.EXACT, Multiplicity.MORE):
        if directive.value not in text:
            continue
        parts = _segments(text, directive.value)
        if len(parts) < 2:
            return AtomicClause(
                raw=text, pattern="", directive=directive,
                error=f"dyrektywa {directive.value} bez progu lub wzorca",
            )
        try:
            threshold = int(parts[0])
        except ValueError:
            return AtomicClause(
                raw=text, pattern=parts[1], directive=directive,
                error=f"nieliczbowy próg {directive.value}: {parts[0]!r}",
            )
        if threshold < 0:
            return AtomicClause(
                raw=text, pattern=parts[1], directive=directive,
                error=f"ujemny próg {directive.value}: {threshold}",
            )
        return AtomicClause(raw=text, pattern=parts[1], directive=directive, threshold=threshold)

    return AtomicClause(raw=text, pattern=text)


def parse_expression(raw: str) -> ParsedExpression:
    """
    Parsuje surowe wyrażenie.

    Przykłady::

        "[OX2H]"                 → OR,  1 klauzula
        "!c1ccccc1"              → NOT, 1 klauzula
        "[C@H](N)C(=O)OXXXC=O"   → OR,  stereo ∧ zwykła
        "C(=O)O.N"               → OR,  2 klauzule połączone kropką
        "2EXACT[OX2H]"           → OR,  dokładnie 2 wystąpienia
    """
    negated = raw.startswith(NEGATION_MARK)
    body = raw[len(NEGATION_MARK):] if negated else raw

    if STEREO_SEP in body:
        parts = _segments(body, STEREO_SEP)
        if len(parts) >= 2:
            clauses = [parse_clause(parts[0], multiplicity=False)]
            clauses.extend(parse_clause(p) for p in parts[1:])
            return ParsedExpression(raw, negated, Separator.STEREO, tuple(clauses))
        body = parts[0] if parts else ""

    if AND_SEP in body:
        parts = _segments(body, AND_SEP)
        return ParsedExpression(raw, negated, Separator.AND, tuple(parse_clause(p) for p in parts))

    return ParsedExpression(raw, negated, Separator.NONE, (parse_clause(body),))


# ---------------------------------------------------------------------------
# Ewaluacja
# ---------------------------------------------------------------------------

def evaluate_clause(item: str, clause: AtomicClause, oracle: Oracle, stereo: bool = False) -> bool:
    """Jedno wywołanie wyroczni; każdy błąd → False."""
    if clause.error is not None:
        log.warning("Niepoprawny wzorzec %r: %s", clause.raw, clause.error)
        return False

    if stereo:
        return safe_call(oracle.match_stereo, item, clause.pattern) > 0

    if clause.directive is None:
        return safe_call(oracle.match, item, clause.pattern) > 0

    count = safe_call(oracle.count, item, clause.pattern)
    if count == ORACLE_FAILURE:
        return False
    if clause.directive is Multiplicity.EXACT:
        return count == clause.threshold
    return count >= clause.threshold


def evaluate_expression(item: str, parsed: ParsedExpression, oracle: Oracle) -> Verdict:
    """Werdykt klauzuli (przed uwzględnieniem negacji) wg reguły AND."""
    results = [
        Verdict.of(evaluate_clause(item, clause, oracle, stereo=parsed.is_stereo and i == 0))
        for i, clause in enumerate(parsed.clauses)
    ]
    return combine_and(results)


def collect_pools(
    item:        str,
    expressions: Sequence[str],
    oracle:      Oracle,
) -> tuple[list[Verdict], list[Verdict]]:
    """
    Zwraca (pula OR, pula NOT).

    Wyrażenie NOT dodaje dopełnienie swojego werdyktu; werdykt NONE
    nie trafia do żadnej puli.
    """
    or_pool:  list[Verdict] = []
    not_pool: list[Verdict] = []
    for raw in expressions:
        parsed  = parse_expression(raw)
        verdict = evaluate_expression(item, parsed, oracle)
        if verdict is Verdict.NONE:
            continue
        if parsed.negated:
            not_pool.append(verdict.negate())
        else:
            or_pool.append(verdict)
    return or_pool, not_pool


def decide(or_pool: Sequence[Verdict], not_pool: Sequence[Verdict]) -> bool:
    """Końcowy werdykt konceptu z pul OR i NOT."""
    any_or = Verdict.TRUE in or_pool
    if not_pool:
        not_value = combine_and(not_pool)
        if not_value is Verdict.NONE:
            return False
        if not or_pool:
            return not_value is Verdict.TRUE
        return not_value is Verdict.TRUE and any_or
    return any_or


def evaluate_concept(item: str, expressions: Sequence[str], oracle: Oracle) -> bool:
    """Czy związek należy do konceptu opisanego listą wyrażeń."""
    or_pool, not_pool = collect_pools(item, expressions, oracle)
    return decide(or_pool, not_pool)
