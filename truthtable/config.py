from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

STYLES = ("latex", "unicode", "ascii")

CONFIG_PREFIX = "TRUTHTABLE_"


@dataclass(frozen=True)
class Settings:
    """Opciones del compilador y del renderizador.

    - max_variables: cota de variables; la tabla tiene 2^N filas.
    - strict: rechaza como variable todo símbolo no alfabético (espacios, dígitos...).
    - style: "latex" (markdown con encabezados LaTeX), "unicode" o "ascii".
    - true_symbol / false_symbol: glifos de verdad en las filas.
    """

    max_variables: int = 12
    strict: bool = False
    style: str = "latex"
    true_symbol: str = "T"
    false_symbol: str = "F"

    def __post_init__(self):
        if self.style not in STYLES:
            raise ValueError(f"Estilo no reconocido: {self.style!r}. Usa uno de: {', '.join(STYLES)}.")
        if self.max_variables < 1:
            raise ValueError("max_variables debe ser positivo.")

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any], **overrides: Any) -> "Settings":
        """Construye Settings desde claves TRUTHTABLE_* (p. ej. app.config de Flask)."""
        values = {}
        for f in fields(cls):
            key = CONFIG_PREFIX + f.name.upper()
            if key in config:
                values[f.name] = config[key]
        values.update({k: v for k, v in overrides.items() if v is not None})
        if "max_variables" in values:
            values["max_variables"] = int(values["max_variables"])
        if isinstance(values.get("strict"), str):
            values["strict"] = values["strict"].lower() in {"1", "true", "yes", "on"}
        return cls(**values)

    def glyph(self, value: bool) -> str:
        return self.true_symbol if value else self.false_symbol


DEFAULT_SETTINGS = Settings()
