from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from flask import Flask, jsonify, render_template, request

from truthtable import (
    OPERATORS,
    STYLES,
    PropositionError,
    Settings,
    build_table,
    compile_proposition,
)

app = Flask(__name__)
app.config.from_mapping(
    TRUTHTABLE_MAX_VARIABLES=12,
    TRUTHTABLE_STRICT=False,
    TRUTHTABLE_STYLE="latex",
)
# FLASK_TRUTHTABLE_MAX_VARIABLES=8, FLASK_TRUTHTABLE_STRICT=true, ...
app.config.from_prefixed_env()

# =========================
# Utilidades
# =========================

def settings_for(style: Optional[str] = None) -> Settings:
    return Settings.from_mapping(app.config, style=style or None)


def pretty_formula(formula: str) -> str:
    """Reemplaza los símbolos de entrada por sus glifos (~ -> ¬, & -> ∧, ...)."""
    return "".join(OPERATORS[c].unicode if c in OPERATORS else c for c in (formula or ""))


def operator_legend() -> list:
    return [(op.symbol, op.name) for op in OPERATORS.values()]


def table_for(formula: str, style: Optional[str] = None) -> Dict[str, Any]:
    settings = settings_for(style)
    program = compile_proposition(formula, settings)
    table = build_table(program, settings)
    result = table.as_dict()
    result["formula_pretty"] = pretty_formula(program.source)
    return result

# =========================
# Rutas
# =========================

@app.route("/", methods=["GET", "POST"])
def index():
    data = {"formula": "", "style": app.config["TRUTHTABLE_STYLE"]}
    resultado = None
    error = None

    if request.method == "POST":
        data["formula"] = request.form.get("formula", "").strip()
        data["style"] = request.form.get("style", data["style"])
        try:
            resultado = table_for(data["formula"], data["style"])
            app.logger.info("Tabla generada para %r (%d filas)", data["formula"], len(resultado["rows"]))
        except PropositionError as e:
            app.logger.info("Proposición rechazada %r: %s", data["formula"], e)
            error = str(e)
        except ValueError as e:
            # estilo no reconocido
            error = str(e)

    return render_template(
        "index.html",
        data=data,
        resultado=resultado,
        error=error,
        styles=STYLES,
        legend=operator_legend(),
    )


@app.route("/api/table", methods=["POST"])
def api_table():
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict) or not isinstance(payload.get("proposition", ""), str):
        return jsonify({
            "error": "InvalidRequest",
            "message": "Se espera un objeto JSON con \"proposition\" de tipo texto.",
            "position": None,
        }), 400
    formula = payload.get("proposition", "")
    try:
        return jsonify(table_for(formula, payload.get("style")))
    except PropositionError as e:
        app.logger.info("Proposición rechazada %r: %s", formula, e)
        return jsonify({"error": e.kind, "message": str(e), "position": e.position}), 400
    except ValueError as e:
        return jsonify({"error": "InvalidSettings", "message": str(e), "position": None}), 400


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.run(debug=True, host="0.0.0.0", port=5000)
