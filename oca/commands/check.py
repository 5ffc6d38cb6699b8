"""Komenda: oca check — sprawdzenie poprawności ontologii."""

from __future__ import annotations

import argparse
import sys

from rich import box
from rich.console import Console
from rich.table import Table

from oca._load import load_data, smarts_tag_for

console = Console()


def _dangling(data) -> list[tuple[str, str, str]]:
    """Zwraca (koncept, tag, nieznany_id) dla odwołań poza ontologią."""
    out: list[tuple[str, str, str]] = []
    for c in data:
        for ref in sorted(c.parent_ids):
            if ref not in data.concepts:
                out.append((c.id, "is_a", ref))
        for ref in sorted(c.child_ids):
            if ref not in data.concepts:
                out.append((c.id, "has_a", ref))
    return out


def _bad_expressions(data) -> list[tuple[str, str, str]]:
    """Zwraca (koncept, wyrażenie, błąd) dla wyrażeń z błędami rozbioru."""
    from assignment.expression import parse_expression

    out: list[tuple[str, str, str]] = []
    for c in data:
        for raw in c.expressions:
            parsed = parse_expression(raw)
            for clause in parsed.clauses:
                if clause.error is not None:
                    out.append((c.id, raw, clause.error))
    return out


def run(args: argparse.Namespace) -> None:
    from ontology import ConfigurationError, OntologyGraph

    data = load_data(args.obo, smarts_tag_for(args.library, args.smarts_tag))

    errors:   list[tuple[str, str, str]] = []
    warnings: list[str] = []

    graph = None
    try:
        graph = OntologyGraph.build(data)
    except ConfigurationError as e:
        errors.append(("E_GRAPH", "-", str(e)))

    for concept_id, raw, message in _bad_expressions(data):
        errors.append(("E_EXPRESSION", concept_id, f"{raw!r}: {message}"))

    dangling = _dangling(data)
    for concept_id, tag, ref in dangling[: args.limit]:
        warnings.append(f"{concept_id}: {tag} → nieznany koncept {ref}")
    if len(dangling) > args.limit:
        warnings.append(f"... oraz {len(dangling) - args.limit} dalszych nieznanych odwołań")

    grouping = sum(1 for c in data if not c.has_patterns)

    # --- Wynik na konsoli ------------------------------------------------
    console.print(
        f"Ontologia: [bold]{args.obo}[/bold]  "
        f"{len(data)} konceptów, {grouping} grupujących (bez wzorców)"
        + (f", korzeń: [cyan]{graph.root}[/cyan]" if graph is not None else "")
    )

    if errors:
        console.print(f"[red]BŁĄD[/red]  {len(errors)} błąd(ów).")
        table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
        table.add_column("Kod",      style="yellow", no_wrap=True)
        table.add_column("Koncept",  style="cyan",   no_wrap=True)
        table.add_column("Komunikat")
        for code, concept_id, message in errors:
            table.add_row(code, concept_id, message)
        console.print(table)
    else:
        console.print("[green]OK[/green]  Ontologia jest poprawna.")

    if warnings:
        console.print("[yellow]Ostrzeżenia:[/yellow]")
        for w in warnings:
            console.print(f"  [yellow]·[/yellow] {w}")

    if errors:
        sys.exit(1)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "check",
        help="Sprawdza poprawność ontologii (korzeń, cykle, wyrażenia).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Sprawdza plik ontologii:

  - dokładnie jeden korzeń (koncept bez is_a)
  - brak cykli w hierarchii
  - poprawność dyrektyw krotności (EXACT / MORE) w wyrażeniach
  - odwołania is_a / has_a do nieistniejących konceptów (ostrzeżenia)

Przykłady:
  oca check -c klasy.obo
  oca check -c klasy.obo --smarts-tag oc_smarts
        """,
    )
    p.add_argument(
        "--obo", "-c",
        metavar="PLIK",
        required=True,
        help="Plik ontologii.",
    )
    p.add_argument(
        "--library", "-m",
        metavar="BIBLIOTEKA",
        default=None,
        help="Biblioteka chemiczna (wybiera tag wzorców).",
    )
    p.add_argument(
        "--smarts-tag",
        metavar="TAG",
        default=None,
        dest="smarts_tag",
        help="Tag ontologii z wzorcami (nadpisuje wybór z biblioteki).",
    )
    p.add_argument(
        "--limit",
        type=int,
        metavar="N",
        default=20,
        help="Maksymalna liczba wypisanych ostrzeżeń o odwołaniach (domyślnie 20).",
    )
    p.set_defaults(func=run)
