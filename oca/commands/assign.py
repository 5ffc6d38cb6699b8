"""Komenda: oca assign — hierarchiczne przypisanie związków do klas ontologii."""

from __future__ import annotations

import argparse
import pathlib

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table   import Table
from rich         import box

from assignment.types import ChemLib, ReportMode

console = Console()


def _params_from_args(args: argparse.Namespace):
    from assignment import AssignmentParameters

    params = AssignmentParameters(
        ontology_path=pathlib.Path(args.obo) if args.obo else None,
        items_path=pathlib.Path(args.smiles) if args.smiles else None,
        output_path=pathlib.Path(args.output) if args.output else None,
        report_mode=ReportMode(args.mode),
        stats_path=pathlib.Path(args.stats) if args.stats else None,
        echo=args.echo,
        append_library_suffix=args.append_library,
        max_items=args.max_items,
        fail_fast=args.fail_fast,
        smarts_tag=args.smarts_tag,
        delimiter=args.delimiter,
    )
    if args.library is not None:
        params.library = args.library
    if args.threads is not None:
        params.n_threads = args.threads
    return params


def _show_summary(summary) -> None:
    table = Table(box=box.SIMPLE_HEAD, show_header=False)
    table.add_column("", style="bold cyan", no_wrap=True)
    table.add_column("")
    table.add_row("Koncepty",          str(summary.n_concepts))
    table.add_row("Związki",           str(summary.n_items))
    table.add_row("Z przypisaniem",    str(summary.n_assigned))
    table.add_row("Pominięte (błędy)", str(len(summary.failures)))
    table.add_row("Wyniki",            str(summary.output_path))
    if summary.stats_path is not None:
        table.add_row("Statystyki",    str(summary.stats_path))
    table.add_row("Czas",              f"{summary.elapsed_s:.1f} s")
    console.print(table)

    if summary.failures:
        console.print("[yellow]Związki pominięte z powodu błędów:[/yellow]")
        for item_id, message in sorted(summary.failures.items())[:20]:
            console.print(f"  [yellow]·[/yellow] {item_id}: [dim]{message}[/dim]")


# ---------------------------------------------------------------------------
# Główna logika
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    from assignment import AssignmentError, run_assignment
    from ontology import ConfigurationError

    try:
        params = _params_from_args(args)
        params.check()
    except ConfigurationError as e:
        console.print(f"[red]Błąd konfiguracji:[/red] {e}")
        raise SystemExit(1)

    console.print(
        f"Ontologia: [bold]{params.ontology_path}[/bold]  "
        f"związki: [bold]{params.items_path}[/bold]  "
        f"biblioteka=[cyan]{params.chem_lib}[/cyan]  "
        f"wątki=[cyan]{params.n_threads}[/cyan]  "
        f"tryb=[cyan]{params.report_mode}[/cyan]"
    )

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
        disable=params.echo or args.no_progress,
    )
    task_id = None

    def on_start(total: int) -> None:
        nonlocal task_id
        task_id = progress.add_task("Klasyfikacja", total=total)

    def on_item(_item) -> None:
        if task_id is not None:
            progress.advance(task_id)

    try:
        with progress:
            summary = run_assignment(
                params,
                progress=on_item,
                echo=lambda line: console.print(line, markup=False, highlight=False),
                on_start=on_start,
            )
    except ConfigurationError as e:
        console.print(f"[red]Błąd konfiguracji:[/red] {e}")
        raise SystemExit(1)
    except ImportError as e:
        console.print(f"[red]Brak biblioteki chemicznej:[/red] {e}")
        raise SystemExit(1)
    except AssignmentError as e:
        console.print(f"[red]Przebieg przerwany:[/red] {e}")
        raise SystemExit(1)
    except OSError as e:
        console.print(f"[red]Błąd zapisu:[/red] {e}")
        raise SystemExit(1)

    _show_summary(summary)


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "assign",
        help="Przypisuje związki z pliku do klas ontologii.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wczytuje ontologię klas (stanze [Term] ze wzorcami SMARTS) i plik związków
(SMILES<TAB>ID), przechodzi ontologię od korzenia w dół dla każdego związku
i zapisuje przypisane klasy.

Format wyjścia (dla każdego związku):
  ID<TAB>SMILES
  is_a<TAB>ID_KLASY<TAB>NAZWA_KLASY
  <pusta linia>

Zmienne środowiskowe:
  OCA_THREADS   domyślna liczba wątków
  OCA_LIBRARY   domyślna biblioteka chemiczna

Przykłady:
  oca assign -c klasy.obo -s zwiazki.tsv -o wyniki.tsv
  oca assign -c klasy.obo -s zwiazki.tsv -o wyniki.tsv -t 8 --mode all
  oca assign -c klasy.obo -s zwiazki.tsv -o wyniki --append-library --stats statystyki.tsv
        """,
    )
    p.add_argument(
        "--obo", "-c",
        metavar="PLIK",
        help="Plik ontologii z klasami związków i wzorcami SMARTS.",
    )
    p.add_argument(
        "--smiles", "-s",
        metavar="PLIK",
        help="Plik związków: SMILES w pierwszej kolumnie, ID w drugiej.",
    )
    p.add_argument(
        "--output", "-o",
        metavar="PLIK",
        help="Plik wyników przypisania.",
    )
    p.add_argument(
        "--library", "-m",
        metavar="BIBLIOTEKA",
        choices=[lib.value for lib in ChemLib],
        default=None,
        help="Biblioteka chemiczna (domyślnie: OCA_LIBRARY lub rdkit).",
    )
    p.add_argument(
        "--threads", "-t",
        type=int,
        metavar="N",
        default=None,
        help="Liczba wątków (domyślnie: OCA_THREADS lub 1).",
    )
    p.add_argument(
        "--mode",
        choices=[m.value for m in ReportMode],
        default=ReportMode.LEAVES.value,
        help="Raportuj tylko najbardziej szczegółowe klasy (leaves) lub wszystkie spójne (all).",
    )
    p.add_argument(
        "--stats",
        metavar="PLIK",
        default=None,
        help="Plik statystyk: ID_KLASY<TAB>NAZWA<TAB>LICZBA_ZWIĄZKÓW.",
    )
    p.add_argument(
        "--echo",
        action="store_true",
        help="Wypisuj zapisywane linie również na konsolę.",
    )
    p.add_argument(
        "--append-library",
        action="store_true",
        dest="append_library",
        help="Dołącz nazwę biblioteki do nazwy pliku wyników (<plik>_<biblioteka>.tsv).",
    )
    p.add_argument(
        "--max-items",
        type=int,
        metavar="N",
        default=None,
        dest="max_items",
        help="Przetwórz co najwyżej N pierwszych związków.",
    )
    p.add_argument(
        "--fail-fast",
        action="store_true",
        dest="fail_fast",
        help="Przerwij cały przebieg przy pierwszym błędzie klasyfikacji związku.",
    )
    p.add_argument(
        "--smarts-tag",
        metavar="TAG",
        default=None,
        dest="smarts_tag",
        help="Tag ontologii z wzorcami (domyślnie zależny od biblioteki, np. cdk_smarts).",
    )
    p.add_argument(
        "--delimiter",
        metavar="ZNAK",
        default="\t",
        help="Separator pól w pliku związków (domyślnie TAB).",
    )
    p.add_argument(
        "--no-progress",
        action="store_true",
        dest="no_progress",
        help="Nie pokazuj paska postępu.",
    )
    p.set_defaults(func=run)
