from __future__ import annotations

from typing import Optional

from .compiler import PendingOperators, Program, compile_proposition
from .config import DEFAULT_SETTINGS, STYLES, Settings
from .errors import MalformedExpression, PropositionError, TooManyVariables, UnknownToken
from .evaluator import Row, TruthTable, assignments, build_table, evaluate, header_labels, render, run
from .operators import OPERATORS, Operator

__all__ = [
    "OPERATORS", "Operator", "PendingOperators", "Program", "Row", "TruthTable",
    "Settings", "DEFAULT_SETTINGS", "STYLES",
    "PropositionError", "MalformedExpression", "UnknownToken", "TooManyVariables",
    "compile_proposition", "header_labels", "assignments", "evaluate", "run",
    "build_table", "render", "generate_truth_table",
]


def generate_truth_table(proposition: str, settings: Optional[Settings] = None) -> str:
    """Compila y renderiza en un paso: devuelve la tabla en markdown."""
    return render(compile_proposition(proposition, settings), settings)
