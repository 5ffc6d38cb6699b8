"""
ontology — model ontologii klas związków dla oca.

Publiczne API:
  read_ontology(path, smarts_tag)     → OntologyData
  parse_ontology(lines, smarts_tag)   → OntologyData
  OntologyGraph.build(concepts)       → OntologyGraph
  Concept, OntologyData               typy danych
  ConfigurationError, OntologyFormatError
"""

from .graph  import OntologyGraph
from .loader import read_ontology, parse_ontology, DEFAULT_SMARTS_TAG
from .types  import Concept, OntologyData, ConfigurationError, OntologyFormatError

__all__ = [
    "OntologyGraph",
    "read_ontology",
    "parse_ontology",
    "DEFAULT_SMARTS_TAG",
    "Concept",
    "OntologyData",
    "ConfigurationError",
    "OntologyFormatError",
]
