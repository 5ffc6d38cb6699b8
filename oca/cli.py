"""
oca — narzędzie CLI do przypisywania związków do klas ontologii.

Użycie:
  oca <komenda> [opcje]

Komendy:
  assign     Przypisuje związki z pliku do klas ontologii (pełny przebieg).
  concepts   Listuje koncepty ontologii.
  check      Sprawdza poprawność ontologii (korzeń, cykle, wzorce).
"""

from __future__ import annotations

import argparse
import sys

# Windows: wymuszenie UTF-8 dla polskich znaków w tekstach pomocy.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from oca import __version__
from oca._logging import setup_logging
from oca.commands import assign as cmd_assign
from oca.commands import concepts as cmd_concepts
from oca.commands import check as cmd_check


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="oca",
        description="oca — przypisywanie związków do klas ontologii.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"oca {__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Więcej komunikatów (-v: INFO, -vv: DEBUG).",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Tylko ostrzeżenia i błędy.",
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_assign.add_parser(subparsers)
    cmd_concepts.add_parser(subparsers)
    cmd_check.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.quiet)
    args.func(args)


if __name__ == "__main__":
    main()
