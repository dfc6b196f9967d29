from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from .config import DEFAULT_SETTINGS, Settings
from .errors import MalformedExpression, UnknownToken
from .operators import LPAREN, OPERATORS, RPAREN

logger = logging.getLogger(__name__)

# Un token del programa postfijo: id de variable (int) u operador ("~", "&", ...)
Token = Union[int, str]


@dataclass
class Program:
    source: str
    tokens: List[Token] = field(default_factory=list)
    variables: List[str] = field(default_factory=list)        # orden de aparición
    symbol_to_id: Dict[str, int] = field(default_factory=dict)
    id_to_symbol: Dict[int, str] = field(default_factory=dict)

    @property
    def variable_count(self) -> int:
        return len(self.variables)

    @property
    def variable_ids(self) -> List[int]:
        return [self.symbol_to_id[v] for v in self.variables]

    def symbols(self) -> List[str]:
        """Programa postfijo con los ids reemplazados por su símbolo."""
        return [self.id_to_symbol[t] if isinstance(t, int) else t for t in self.tokens]

    def _variable(self, symbol: str) -> int:
        if symbol not in self.symbol_to_id:
            ident = len(self.variables) + 1
            self.variables.append(symbol)
            self.symbol_to_id[symbol] = ident
            self.id_to_symbol[ident] = symbol
        return self.symbol_to_id[symbol]


class PendingOperators:
    """Pilas de operadores pendientes, una por nivel de paréntesis."""

    def __init__(self):
        self.stacks: List[List[str]] = [[]]
        self.level = 0

    @property
    def current(self) -> List[str]:
        return self.stacks[self.level]

    def open(self) -> None:
        self.level += 1
        if len(self.stacks) == self.level:
            self.stacks.append([])

    def close(self) -> List[str]:
        drained = self.drain()
        self.level -= 1
        return drained

    def push(self, op: str) -> List[str]:
        """Apila op; devuelve lo que hubo que emitir antes (precedencia estrictamente mayor)."""
        st = self.current
        out: List[str] = []
        prec = OPERATORS[op].precedence
        while st and OPERATORS[st[-1]].precedence > prec:
            out.append(st.pop())
        st.append(op)
        return out

    def drain(self) -> List[str]:
        st = self.current
        out: List[str] = []
        while st:
            out.append(st.pop())
        return out

    def __repr__(self) -> str:
        return " ".join(f"{i}: {st}" for i, st in enumerate(self.stacks[: self.level + 1]))


def _check_variable(ch: str, pos: int, settings: Settings) -> None:
    if settings.strict and not ch.isalpha():
        raise UnknownToken(f"Símbolo no reconocido: {ch!r}", pos)


def compile_proposition(proposition: str, settings: Optional[Settings] = None) -> Program:
    """Traduce una proposición infija a notación polaca inversa.

    Variante de shunting-yard: cada nivel de paréntesis tiene su propia pila
    de operadores pendientes. Un operador solo desapila a los que tienen
    precedencia *estrictamente* mayor, de modo que operadores de igual
    precedencia se acumulan y salen en orden inverso (``p&q&r`` -> ``p q r & &``).

    Además del algoritmo se valida la forma de la entrada: paréntesis
    balanceados, operandos presentes y nada de operandos contiguos.
    """
    settings = settings or DEFAULT_SETTINGS
    text = (proposition or "").strip()
    prog = Program(source=text)
    pending = PendingOperators()
    expect_operand = True
    last_open: List[int] = []

    if not text:
        raise MalformedExpression("Escribe una proposición.")

    for pos, ch in enumerate(text):
        logger.debug("Procesando token %r (pos %d) pendientes=[%r]", ch, pos, pending)
        if ch == LPAREN:
            if not expect_operand:
                raise MalformedExpression("Falta un operador antes de '('", pos)
            pending.open()
            last_open.append(pos)
            continue
        if ch == RPAREN:
            if not last_open:
                raise MalformedExpression("Paréntesis no balanceados: ')' sin abrir", pos)
            if expect_operand:
                raise MalformedExpression("Falta un operando antes de ')'", pos)
            prog.tokens.extend(pending.close())
            last_open.pop()
            continue
        if ch in OPERATORS:
            unary = OPERATORS[ch].arity == 1
            # ~ es prefijo: va donde se espera operando; los binarios, después de uno
            if unary != expect_operand:
                if unary:
                    raise MalformedExpression(f"'{ch}' no puede seguir a un operando", pos)
                raise MalformedExpression(f"Falta el operando izquierdo de '{ch}'", pos)
            prog.tokens.extend(pending.push(ch))
            expect_operand = True
            continue

        # cualquier otra cosa es una variable
        _check_variable(ch, pos, settings)
        if not expect_operand:
            raise MalformedExpression(f"Falta un operador antes de {ch!r}", pos)
        prog.tokens.append(prog._variable(ch))
        expect_operand = False

    if last_open:
        raise MalformedExpression("Paréntesis no balanceados: '(' sin cerrar", last_open[-1])
    if expect_operand:
        raise MalformedExpression("La proposición termina sin operando", len(text))

    prog.tokens.extend(pending.drain())
    logger.debug("RPN de %r: %s", text, prog.symbols())
    return prog
