"""Komenda: oca concepts — listowanie konceptów ontologii."""

from __future__ import annotations

import argparse

from rich.console import Console
from rich.table import Table
from rich import box

from oca._load import load_graph, smarts_tag_for

console = Console(width=200)


def _fmt_ids(ids: frozenset[str], max_items: int = 3) -> str:
    if not ids:
        return "[dim]-[/dim]"
    ordered = sorted(ids)
    text = ", ".join(ordered[:max_items])
    if len(ordered) > max_items:
        text += f" [dim](+{len(ordered) - max_items})[/dim]"
    return text


def run(args: argparse.Namespace) -> None:
    graph = load_graph(args.obo, smarts_tag_for(args.library, args.smarts_tag))

    concepts = list(graph)
    if args.search:
        needle = args.search.lower()
        concepts = [
            c for c in concepts
            if needle in c.id.lower() or needle in (c.name or "").lower()
        ]
    if args.no_patterns:
        concepts = [c for c in concepts if not c.has_patterns]
    if args.max_depth is not None:
        concepts = [c for c in concepts if 0 <= graph.depth_of(c.id) <= args.max_depth]

    if not concepts:
        console.print("[yellow]Brak konceptów spełniających kryteria.[/yellow]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("ID",        no_wrap=True, style="bold cyan")
    table.add_column("NAZWA",     no_wrap=False, max_width=50)
    table.add_column("GŁ",        justify="right", no_wrap=True)
    table.add_column("RODZICE",   no_wrap=True, max_width=40)
    table.add_column("DZIECI",    justify="right", no_wrap=True)
    table.add_column("WZORCE",    justify="right", no_wrap=True)
    if args.detail:
        table.add_column("WYRAŻENIA", no_wrap=False, max_width=70)

    for c in concepts:
        row = [
            c.id,
            c.name or "[dim]-[/dim]",
            str(graph.depth_of(c.id)),
            _fmt_ids(graph.parents_of(c.id)),
            str(len(graph.children_of(c.id))),
            str(len(c.expressions)) if c.expressions else "[yellow]0[/yellow]",
        ]
        if args.detail:
            row.append("\n".join(c.expressions) or "[dim](grupujący)[/dim]")
        table.add_row(*row)

    console.print()
    console.print(table)
    console.print(
        f"  [dim]{len(concepts)} z {len(graph)} konceptów, korzeń: {graph.root}"
        + (", dzieci wyprowadzone z is_a" if graph.children_derived else "")
        + "[/dim]\n"
    )


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "concepts",
        help="Listuje koncepty ontologii.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wczytuje ontologię i wyświetla tabelę konceptów: identyfikator, nazwę,
głębokość od korzenia, rodziców, liczbę dzieci i liczbę wyrażeń wzorców.

Przykłady:
  oca concepts -c klasy.obo
  oca concepts -c klasy.obo --search acid --detail
  oca concepts -c klasy.obo --no-patterns --max-depth 2
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
        "--search",
        metavar="TEKST",
        help="Filtr po id lub nazwie (bez rozróżniania wielkości liter).",
    )
    p.add_argument(
        "--no-patterns",
        action="store_true",
        dest="no_patterns",
        help="Tylko koncepty bez wzorców (grupujące).",
    )
    p.add_argument(
        "--max-depth",
        type=int,
        metavar="N",
        default=None,
        dest="max_depth",
        help="Tylko koncepty do głębokości N.",
    )
    p.add_argument(
        "--detail",
        action="store_true",
        help="Pokaż pełne wyrażenia wzorców.",
    )
    p.set_defaults(func=run)
