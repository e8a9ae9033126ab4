from __future__ import annotations

import pytest

from tests.support.harness import (
    BrookTypeMismatch,
    BrookUndefinedVariable,
    run_program,
    run_runtime_case,
)

SCENARIOS = [
    pytest.param("1 + 2 * 3", ("int", 7), None, id="precedence"),
    pytest.param("(1 + 2) * 3", ("int", 9), None, id="grouping"),
    pytest.param("10 - 4 - 3", ("int", 3), None, id="left-assoc-minus"),
    pytest.param('"foo" + "bar"', ("string", "foobar"), None, id="string-concat"),
    pytest.param('"" + ""', ("string", ""), None, id="empty-concat"),
    pytest.param('"a" + 1', None, BrookTypeMismatch, id="string-plus-int"),
    pytest.param('1 + "a"', None, BrookTypeMismatch, id="int-plus-string"),
    pytest.param('"a" - "b"', None, BrookTypeMismatch, id="string-minus"),
    pytest.param('"a" * 2', None, BrookTypeMismatch, id="string-repeat"),
    pytest.param("true + 1", None, BrookTypeMismatch, id="bool-arith"),
    pytest.param("null + 1", None, BrookTypeMismatch, id="null-arith"),
    # equality
    pytest.param("1 == 1", ("bool", True), None, id="eq-int"),
    pytest.param("1 != 2", ("bool", True), None, id="neq-int"),
    pytest.param("1 == 1.0", ("bool", True), None, id="eq-promotes"),
    pytest.param("2.5 != 2", ("bool", True), None, id="neq-promotes"),
    pytest.param('"a" == "a"', ("bool", True), None, id="eq-string"),
    pytest.param('"a" != "b"', ("bool", True), None, id="neq-string"),
    pytest.param("true == true", ("bool", True), None, id="eq-bool"),
    pytest.param("true != false", ("bool", True), None, id="neq-bool"),
    pytest.param('1 == "1"', None, BrookTypeMismatch, id="eq-int-string"),
    pytest.param("true == 1", None, BrookTypeMismatch, id="eq-bool-int"),
    pytest.param("null == null", None, BrookTypeMismatch, id="eq-null"),
    pytest.param("null != 1", None, BrookTypeMismatch, id="neq-null"),
    # ordering
    pytest.param("1 < 2", ("bool", True), None, id="lt"),
    pytest.param("2 <= 2", ("bool", True), None, id="lte"),
    pytest.param("1 > 2", ("bool", False), None, id="gt"),
    pytest.param("2 >= 3", ("bool", False), None, id="gte"),
    pytest.param("1 < 1.5", ("bool", True), None, id="lt-promotes"),
    pytest.param("2.5 >= 2", ("bool", True), None, id="gte-promotes"),
    pytest.param('"a" < "b"', None, BrookTypeMismatch, id="lt-strings"),
    pytest.param("true > false", None, BrookTypeMismatch, id="gt-bools"),
    # unary
    pytest.param("-5", ("int", -5), None, id="negate"),
    pytest.param("--5", ("int", 5), None, id="double-negate"),
    pytest.param("-(2 - 7)", ("int", 5), None, id="negate-group"),
    pytest.param("!true", ("bool", False), None, id="not"),
    pytest.param("!!false", ("bool", False), None, id="double-not"),
    pytest.param("!1", None, BrookTypeMismatch, id="not-int"),
    pytest.param('-"a"', None, BrookTypeMismatch, id="negate-string"),
    pytest.param("-true", None, BrookTypeMismatch, id="negate-bool"),
    pytest.param("-1.5", None, BrookTypeMismatch, id="negate-float"),
    # logical
    pytest.param("true && false", ("bool", False), None, id="and"),
    pytest.param("false || true", ("bool", True), None, id="or"),
    pytest.param("true || false && false", ("bool", True), None, id="and-binds-tighter"),
    pytest.param("1 < 2 && 2 < 3", ("bool", True), None, id="and-of-comparisons"),
    pytest.param("false && undefined_name", ("bool", False), None, id="and-short-circuit"),
    pytest.param("true || undefined_name", ("bool", True), None, id="or-short-circuit"),
    pytest.param("true && undefined_name", None, BrookUndefinedVariable, id="and-evaluates-right"),
    pytest.param("false || 1", None, BrookTypeMismatch, id="or-non-bool-right"),
    pytest.param("1 && true", None, BrookTypeMismatch, id="and-non-bool-left"),
    pytest.param("false && 1", ("bool", False), None, id="and-skips-bad-right"),
    pytest.param("false && (1 / 0 == 0)", ("bool", False), None, id="and-skips-div-zero"),
    # mixed programs
    pytest.param("10 + 5 * 7", ("int", 45), None, id="mixed-precedence"),
    pytest.param("(10 + 5) * 7", ("int", 105), None, id="mixed-grouping"),
    pytest.param("10 / 5", ("int", 2), None, id="int-div-exact"),
    pytest.param("1 / 5", ("int", 0), None, id="int-div-to-zero"),
    pytest.param("1.0 / 5", ("float", 0.2), None, id="float-div-fraction"),
    pytest.param("let x = 1 { let x = 2 } x", ("int", 1), None, id="one-line-shadow"),
    pytest.param("let x = 1 { x = 2 } x", ("int", 2), None, id="one-line-mutate"),
    pytest.param("if 1 < 2 { 3 } else { 4 }", ("int", 3), None, id="if-picks-then"),
    pytest.param("if 1 > 2 { 3 }", ("null", None), None, id="if-no-else-null"),
]


@pytest.mark.parametrize("source, expectation, expected_exc", SCENARIOS)
def test_operators(source: str, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)


def test_mismatch_names_operator_and_kinds() -> None:
    with pytest.raises(BrookTypeMismatch) as exc_info:
        run_program('1 + "a"')

    err = exc_info.value
    assert err.op == "+"
    assert err.kinds == ("Integer", "String")
    assert "'+'" in str(err)
    assert "Integer and String" in str(err)


def test_unary_mismatch_names_single_kind() -> None:
    with pytest.raises(BrookTypeMismatch) as exc_info:
        run_program("!null")

    assert exc_info.value.kinds == ("Null",)
    assert "operand of type Null" in str(exc_info.value)


def test_logical_side_effects_skipped() -> None:
    result = run_program("let n = 0\nfalse && (n = 1) == 1\nn")
    assert result.value == 0


def test_assignment_yields_value() -> None:
    assert run_program("let a\nlet b\na = b = 4\na + b").value == 8
