"""
assignment — silnik hierarchicznego przypisywania związków do klas ontologii.

Publiczne API:
  classify(item, graph, oracle)                → frozenset[str]
  evaluate_concept(item, expressions, oracle)  → bool
  parse_expression(raw)                        → ParsedExpression
  ParallelScheduler(graph, oracle, n_threads)  równoległa klasyfikacja partii
  reduce(assigned, graph)                      → Reduction (all / leaves)
  read_items(path, delimiter, limit)           → dict[str, Item]
  write_assignments(...), write_statistics(...)
  run_assignment(params, oracle)               → RunSummary
  Oracle, create_oracle, ORACLE_FAILURE        kontrakt wyroczni
"""

from .classifier import classify
from .expression import (
    Verdict,
    ParsedExpression,
    AtomicClause,
    Multiplicity,
    combine_and,
    parse_expression,
    evaluate_concept,
    collect_pools,
    decide,
)
from .loader    import read_items, parse_items
from .oracle    import Oracle, ORACLE_FAILURE, create_oracle
from .params    import AssignmentParameters
from .pipeline  import RunSummary, run_assignment
from .reduction import Reduction, reduce, ancestor_consistent, leaves_only
from .scheduler import ParallelScheduler
from .types     import Item, AssignmentResult, ChemLib, ReportMode, AssignmentError
from .writer    import write_assignments, write_statistics, output_path_for

__all__ = [
    "classify",
    "Verdict",
    "ParsedExpression",
    "AtomicClause",
    "Multiplicity",
    "combine_and",
    "parse_expression",
    "evaluate_concept",
    "collect_pools",
    "decide",
    "read_items",
    "parse_items",
    "Oracle",
    "ORACLE_FAILURE",
    "create_oracle",
    "AssignmentParameters",
    "RunSummary",
    "run_assignment",
    "Reduction",
    "reduce",
    "ancestor_consistent",
    "leaves_only",
    "ParallelScheduler",
    "Item",
    "AssignmentResult",
    "ChemLib",
    "ReportMode",
    "AssignmentError",
    "write_assignments",
    "write_statistics",
    "output_path_for",
]
