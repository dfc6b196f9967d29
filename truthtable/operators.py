from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Callable, Dict


@dataclass(frozen=True)
class Operator:
    symbol: str
    name: str
    precedence: int          # más alto = se evalúa antes
    arity: int
    latex: str
    unicode: str
    fn: Callable[..., bool]


def _implies(a: bool, b: bool) -> bool:
    # solo es falsa con antecedente verdadero y consecuente falso
    return not (a and not b)


# Precedencias: NOT > AND > OR/XOR > IMP > IFF
# OR y XOR comparten nivel; mezclarlos sin paréntesis queda a cargo de quien escribe.
OPERATORS: Dict[str, Operator] = {
    "~": Operator("~", "NOT", 5, 1, "\\overline", "¬", operator.not_),
    "&": Operator("&", "AND", 4, 2, "\\land{}", "∧", operator.and_),
    "|": Operator("|", "OR", 3, 2, "\\lor{}", "∨", operator.or_),
    "^": Operator("^", "XOR", 3, 2, "\\oplus{}", "⊕", operator.xor),
    ">": Operator(">", "IMPLIES", 2, 2, "\\implies{}", "→", _implies),
    "<": Operator("<", "IFF", 1, 2, "\\iff{}", "↔", operator.eq),
}

LPAREN = "("
RPAREN = ")"
