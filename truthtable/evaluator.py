from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .compiler import Program
from .config import DEFAULT_SETTINGS, Settings
from .errors import MalformedExpression, TooManyVariables
from .operators import OPERATORS

logger = logging.getLogger(__name__)

# =========================
# Encabezados (recorrido simbólico)
# =========================

def _label(op_symbol: str, operands: List[Tuple[str, bool]], style: str) -> str:
    op = OPERATORS[op_symbol]
    if style == "latex":
        # formato markdown de siempre: sin paréntesis, la negación como \overline{...}
        if op.arity == 1:
            return f"{op.latex}{{{operands[0][0]}}}"
        return f"{operands[0][0]}{op.latex}{operands[1][0]}"

    glyph = op.unicode if style == "unicode" else op.symbol

    def wrap(item: Tuple[str, bool]) -> str:
        text, composite = item
        return f"({text})" if composite else text

    if op.arity == 1:
        return f"{glyph}{wrap(operands[0])}"
    return f"{wrap(operands[0])}{glyph}{wrap(operands[1])}"


def header_labels(program: Program, style: str = "latex") -> List[str]:
    """Una etiqueta por cada operador del programa, en el mismo orden en que
    la evaluación numérica produce sus valores."""
    st: List[Tuple[str, bool]] = []
    labels: List[str] = []
    for tok in program.tokens:
        if isinstance(tok, int):
            st.append((program.id_to_symbol[tok], False))
            continue
        operands = _pop_operands(st, OPERATORS[tok].arity, tok)
        lbl = _label(tok, operands, style)
        labels.append(lbl)
        st.append((lbl, True))
    return labels


def _pop_operands(st: List[Any], arity: int, tok: str) -> List[Any]:
    if len(st) < arity:
        raise MalformedExpression(f"A '{tok}' le faltan operandos")
    # el primero que sale es el derecho
    operands = [st.pop() for _ in range(arity)]
    operands.reverse()
    return operands


# =========================
# Asignaciones y evaluación
# =========================

def assignments(n: int) -> Iterator[Tuple[bool, ...]]:
    """Genera las 2^n asignaciones: la corrida r es el complemento de r en
    binario (MSB = primera variable). Empieza con todo verdadero y termina
    con todo falso."""
    for r in range(2 ** n):
        yield tuple(not ((r >> (n - i - 1)) & 1) for i in range(n))


def evaluate(program: Program, assignment: Tuple[bool, ...]) -> List[bool]:
    """Ejecuta el programa postfijo; devuelve el valor de cada paso (el último es el resultado)."""
    return run(program, assignment)[0]


def run(program: Program, assignment: Tuple[bool, ...]) -> Tuple[List[bool], bool]:
    """Como evaluate, pero devuelve también el valor que queda en la pila."""
    st: List[bool] = []
    steps: List[bool] = []
    for tok in program.tokens:
        if isinstance(tok, int):
            st.append(assignment[tok - 1])
            continue
        operands = _pop_operands(st, OPERATORS[tok].arity, tok)
        value = bool(OPERATORS[tok].fn(*operands))
        steps.append(value)
        st.append(value)
    if len(st) != 1:
        raise MalformedExpression(f"Expresión inválida: quedan {len(st)} valores en la pila")
    return steps, st[0]


# =========================
# Tabla de verdad
# =========================

@dataclass
class Row:
    assignment: Tuple[bool, ...]
    values: List[bool]
    result: bool


@dataclass
class TruthTable:
    program: Program
    headers: List[str]
    rows: List[Row]
    settings: Settings = DEFAULT_SETTINGS

    @property
    def variables(self) -> List[str]:
        return self.program.variables

    def classify(self) -> str:
        results = [row.result for row in self.rows]
        if all(results):
            return "tautology"
        if not any(results):
            return "contradiction"
        return "contingency"

    def to_markdown(self) -> str:
        s = self.settings
        latex = s.style == "latex"
        out = "| " + ",".join(self.variables) + " |"
        for h in self.headers:
            out += f" ${h}$ |" if latex else f" {h} |"
        out += "\n|-|" + "-|" * len(self.headers)
        for row in self.rows:
            line = "|" + ",".join(s.glyph(v) for v in row.assignment) + "|"
            line += "".join(s.glyph(v) + "|" for v in row.values)
            out += "\n" + line
        return out

    def as_dict(self) -> Dict[str, Any]:
        s = self.settings
        return {
            "proposition": self.program.source,
            "postfix": self.program.symbols(),
            "variables": self.variables,
            "headers": self.headers,
            "rows": [
                {
                    "assignment": [s.glyph(v) for v in row.assignment],
                    "values": [s.glyph(v) for v in row.values],
                    "result": s.glyph(row.result),
                }
                for row in self.rows
            ],
            "classification": self.classify(),
            "markdown": self.to_markdown(),
        }


def build_table(program: Program, settings: Optional[Settings] = None) -> TruthTable:
    settings = settings or DEFAULT_SETTINGS
    n = program.variable_count
    if n > settings.max_variables:
        raise TooManyVariables(
            f"{n} variables exceden el máximo de {settings.max_variables} ({2 ** n} filas)."
        )
    headers = header_labels(program, settings.style)
    rows = [Row(a, *run(program, a)) for a in assignments(n)]
    logger.debug("Tabla de %r: %d columnas, %d filas", program.source, len(headers), len(rows))
    return TruthTable(program, headers, rows, settings)


def render(program: Program, settings: Optional[Settings] = None) -> str:
    return build_table(program, settings).to_markdown()
