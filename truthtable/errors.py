from __future__ import annotations

from typing import Optional


class PropositionError(ValueError):
    """Error base de la compilación/evaluación de una proposición."""

    kind = "PropositionError"

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.position = position

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (columna {self.position})"


class MalformedExpression(PropositionError):
    """Paréntesis no balanceados, operandos faltantes o entrada vacía."""

    kind = "MalformedExpression"


class UnknownToken(PropositionError):
    """Símbolo rechazado como variable en modo estricto."""

    kind = "UnknownToken"


class TooManyVariables(PropositionError):
    kind = "TooManyVariables"
