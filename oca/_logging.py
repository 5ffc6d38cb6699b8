"""Konfiguracja logowania CLI — RichHandler na stderr."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_stderr = Console(stderr=True)


def setup_logging(verbose: int = 0, quiet: bool = False) -> None:
    if quiet:
        level = logging.WARNING
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_stderr, show_path=False, rich_tracebacks=True)],
        force=True,
    )
