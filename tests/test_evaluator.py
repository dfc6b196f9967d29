"""
Tests de la evaluación: encabezados, orden de filas, operadores y render.
"""

import pytest

from truthtable import (
    MalformedExpression,
    Program,
    Settings,
    TooManyVariables,
    assignments,
    build_table,
    compile_proposition,
    evaluate,
    generate_truth_table,
    header_labels,
    render,
    run,
)

T, F = True, False


def result(text, *values):
    return evaluate(compile_proposition(text), tuple(values))[-1]


class TestAssignments:

    def test_two_variables(self):
        assert list(assignments(2)) == [(T, T), (T, F), (F, T), (F, F)]

    @pytest.mark.parametrize("n", range(1, 7))
    def test_order_and_count(self, n):
        rows = list(assignments(n))
        assert len(rows) == 2 ** n
        assert len(set(rows)) == 2 ** n
        assert rows[0] == (T,) * n
        assert rows[-1] == (F,) * n
        for r, row in enumerate(rows):
            expected = tuple(bit == "0" for bit in format(r, "0%db" % n))
            assert row == expected


class TestOperators:

    def test_not(self):
        assert result("~p", T) is F
        assert result("~p", F) is T

    def test_and(self):
        assert result("p&q", T, F) is F
        assert result("p&q", T, T) is T

    def test_or(self):
        assert result("p|q", F, F) is F
        assert result("p|q", F, T) is T

    def test_xor(self):
        assert result("p^q", T, T) is F
        assert result("p^q", T, F) is T

    def test_implies(self):
        assert result("p>q", T, F) is F
        assert result("p>q", T, T) is T
        assert result("p>q", F, T) is T
        assert result("p>q", F, F) is T

    def test_iff(self):
        assert result("p<q", T, T) is T
        assert result("p<q", F, F) is T
        assert result("p<q", T, F) is F

    def test_worked_example(self):
        prog = compile_proposition("p&q|~(r>s)<t|(~q^~s)")
        steps = evaluate(prog, (T, F, T, F, T))
        assert len(steps) == 9
        assert steps[-1] is T

    def test_steps_follow_program_order(self):
        # p q & r |
        assert evaluate(compile_proposition("p&q|r"), (T, F, T)) == [F, T]


class TestMalformedProgram:

    def test_missing_operand(self):
        prog = Program(source="p&", tokens=[1, "&"], variables=["p"],
                       symbol_to_id={"p": 1}, id_to_symbol={1: "p"})
        with pytest.raises(MalformedExpression):
            evaluate(prog, (T,))
        with pytest.raises(MalformedExpression):
            header_labels(prog)

    def test_leftover_values(self):
        prog = Program(source="pp", tokens=[1, 1], variables=["p"],
                       symbol_to_id={"p": 1}, id_to_symbol={1: "p"})
        with pytest.raises(MalformedExpression):
            evaluate(prog, (T,))


class TestHeaders:

    def test_latex(self):
        assert header_labels(compile_proposition("p&q")) == ["p\\land{}q"]
        assert header_labels(compile_proposition("~p")) == ["\\overline{p}"]
        assert header_labels(compile_proposition("~(p&q)")) == [
            "p\\land{}q",
            "\\overline{p\\land{}q}",
        ]

    def test_latex_worked_example(self):
        labels = header_labels(compile_proposition("p&q|~(r>s)<t|(~q^~s)"))
        assert labels[-1] == (
            "p\\land{}q\\lor{}\\overline{r\\implies{}s}"
            "\\iff{}t\\lor{}\\overline{q}\\oplus{}\\overline{s}"
        )

    def test_unicode(self):
        assert header_labels(compile_proposition("~(p&q)"), "unicode") == ["p∧q", "¬(p∧q)"]

    def test_ascii(self):
        assert header_labels(compile_proposition("p&(q|r)"), "ascii") == ["q|r", "p&(q|r)"]


class TestTable:

    def test_and_rows(self):
        table = build_table(compile_proposition("p&q"))
        assert [row.result for row in table.rows] == [T, F, F, F]

    def test_not_rows(self):
        table = build_table(compile_proposition("~p"))
        assert [(row.assignment, row.result) for row in table.rows] == [((T,), F), ((F,), T)]

    def test_single_variable(self):
        table = build_table(compile_proposition("p"))
        assert table.headers == []
        assert [row.result for row in table.rows] == [T, F]

    def test_result_is_the_value_left_on_the_stack(self):
        prog = Program(source="q", tokens=[2], variables=["p", "q"],
                       symbol_to_id={"p": 1, "q": 2}, id_to_symbol={1: "p", 2: "q"})
        assert run(prog, (T, F)) == ([], F)
        table = build_table(prog)
        assert [row.result for row in table.rows] == [T, F, T, F]
        assert table.classify() == "contingency"

    def test_classify(self):
        assert build_table(compile_proposition("p|~p")).classify() == "tautology"
        assert build_table(compile_proposition("p&~p")).classify() == "contradiction"
        assert build_table(compile_proposition("p&q")).classify() == "contingency"

    def test_variable_guard(self):
        with pytest.raises(TooManyVariables):
            build_table(compile_proposition("a&b&c"), Settings(max_variables=2))

    def test_as_dict(self):
        data = build_table(compile_proposition("~p")).as_dict()
        assert data["postfix"] == ["p", "~"]
        assert data["variables"] == ["p"]
        assert [r["result"] for r in data["rows"]] == ["F", "T"]
        assert data["classification"] == "contingency"


class TestRender:

    def test_and_markdown(self):
        expected = "\n".join([
            "| p,q | $p\\land{}q$ |",
            "|-|-|",
            "|T,T|T|",
            "|T,F|F|",
            "|F,T|F|",
            "|F,F|F|",
        ])
        assert render(compile_proposition("p&q")) == expected

    def test_not_markdown(self):
        expected = "| p | $\\overline{p}$ |\n|-|-|\n|T|F|\n|F|T|"
        assert generate_truth_table("~p") == expected

    def test_plain_style_and_glyphs(self):
        settings = Settings(style="ascii", true_symbol="V", false_symbol="F")
        text = generate_truth_table("p>q", settings)
        assert text.splitlines()[0] == "| p,q | p>q |"
        assert text.splitlines()[3] == "|V,F|F|"

    def test_column_count_matches_headers(self):
        text = generate_truth_table("p&q|~(r>s)<t|(~q^~s)")
        lines = text.splitlines()
        assert len(lines) == 2 + 2 ** 5
        for line in lines[2:]:
            # variables en una celda + 9 pasos
            assert line.count("|") == 11


class TestSettings:

    def test_unknown_style(self):
        with pytest.raises(ValueError):
            Settings(style="html")

    def test_from_mapping(self):
        s = Settings.from_mapping(
            {"TRUTHTABLE_MAX_VARIABLES": "4", "TRUTHTABLE_STRICT": "true", "OTHER": 1},
            style="unicode",
        )
        assert s == Settings(max_variables=4, strict=True, style="unicode")
