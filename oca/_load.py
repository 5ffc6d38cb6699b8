"""Wczytanie ontologii dla komend CLI — błąd konfiguracji kończy program kodem 1."""

from __future__ import annotations

import pathlib

from rich.console import Console

from assignment.types import ChemLib
from ontology import ConfigurationError, OntologyData, OntologyGraph, read_ontology

console = Console()


def smarts_tag_for(library: str | None, smarts_tag: str | None) -> str:
    if smarts_tag:
        return smarts_tag
    lib = ChemLib.resolve(library) or ChemLib.RDKIT
    return lib.smarts_tag


def load_data(path: str, smarts_tag: str) -> OntologyData:
    obo_path = pathlib.Path(path)
    if not obo_path.exists():
        console.print(f"[red]Brak pliku ontologii:[/red] {obo_path}")
        raise SystemExit(1)
    try:
        return read_ontology(obo_path, smarts_tag)
    except ConfigurationError as e:
        console.print(f"[red]Błąd wczytywania ontologii:[/red] {e}")
        raise SystemExit(1)


def load_graph(path: str, smarts_tag: str) -> OntologyGraph:
    data = load_data(path, smarts_tag)
    try:
        return OntologyGraph.build(data)
    except ConfigurationError as e:
        console.print(f"[red]Błąd ontologii:[/red] {e}")
        raise SystemExit(1)
