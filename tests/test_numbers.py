from __future__ import annotations

import pytest

from tests.support.harness import (
    BrkFloat,
    BrookDivisionByZero,
    BrookIntegerOverflow,
    MalformedNumericLiteral,
    run_program,
    run_runtime_case,
)
from brook.eval.common import truncating_div

INT_MAX = "9223372036854775807"

SCENARIOS = [
    pytest.param("7 / 2", ("int", 3), None, id="int-div-truncates"),
    pytest.param("-7 / 2", ("int", -3), None, id="int-div-negative-dividend"),
    pytest.param("7 / -2", ("int", -3), None, id="int-div-negative-divisor"),
    pytest.param("-7 / -2", ("int", 3), None, id="int-div-both-negative"),
    pytest.param("6 / 3", ("int", 2), None, id="int-div-exact"),
    pytest.param("7.0 / 2", ("float", 3.5), None, id="float-div"),
    pytest.param("7 / 2.0", ("float", 3.5), None, id="int-float-div"),
    pytest.param("1 + 2.5", ("float", 3.5), None, id="promote-left"),
    pytest.param("2.5 + 1", ("float", 3.5), None, id="promote-right"),
    pytest.param("2 * 1.5", ("float", 3.0), None, id="promote-product"),
    pytest.param("3.0 - 1", ("float", 2.0), None, id="promote-minus"),
    pytest.param("0.1 + 0.2", ("float", 0.30000000000000004), None, id="float-sum"),
    pytest.param("1 / 0", None, BrookDivisionByZero, id="int-div-zero"),
    pytest.param("1.0 / 0", None, BrookDivisionByZero, id="float-div-int-zero"),
    pytest.param("1 / 0.0", None, BrookDivisionByZero, id="int-div-float-zero"),
    pytest.param("0.0 / 0.0", None, BrookDivisionByZero, id="float-div-float-zero"),
    pytest.param(INT_MAX, ("int", 2**63 - 1), None, id="int-max-literal"),
    pytest.param(f"{INT_MAX} + 1", None, BrookIntegerOverflow, id="add-overflow"),
    pytest.param(f"-{INT_MAX} - 1", ("int", -(2**63)), None, id="int-min-reachable"),
    pytest.param(f"-{INT_MAX} - 2", None, BrookIntegerOverflow, id="sub-overflow"),
    pytest.param(f"{INT_MAX} * 2", None, BrookIntegerOverflow, id="mul-overflow"),
    pytest.param(
        f"let m = -{INT_MAX} - 1\n-m",
        None,
        BrookIntegerOverflow,
        id="negate-int-min",
    ),
    pytest.param(
        f"let m = -{INT_MAX} - 1\nm / -1",
        None,
        BrookIntegerOverflow,
        id="div-int-min-by-minus-one",
    ),
    pytest.param(f"{INT_MAX} + 1.0", ("float", 9.223372036854776e18), None, id="float-no-overflow"),
    pytest.param("9223372036854775808", None, MalformedNumericLiteral, id="literal-too-large"),
]


@pytest.mark.parametrize("source, expectation, expected_exc", SCENARIOS)
def test_numbers(source: str, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (7, 2, 3),
        (-7, 2, -3),
        (7, -2, -3),
        (-7, -2, 3),
        (0, 5, 0),
        (-1, 2, 0),
    ],
)
def test_truncating_div(a: int, b: int, expected: int) -> None:
    assert truncating_div(a, b) == expected


def test_float_display() -> None:
    result = run_program("1.5 * 2")
    assert isinstance(result, BrkFloat)
    assert repr(result) == "3.0"


def test_overflow_message_names_operator() -> None:
    with pytest.raises(BrookIntegerOverflow) as exc_info:
        run_program(f"{INT_MAX} * 3")

    assert exc_info.value.op == "*"
    assert "Integer overflow in '*'" in str(exc_info.value)
