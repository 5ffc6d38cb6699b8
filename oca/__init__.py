"""oca — narzędzie CLI do hierarchicznego przypisywania związków do klas ontologii."""

__version__ = "0.1.0"
