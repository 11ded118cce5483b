"""Тесты вычислителя формул."""

from __future__ import annotations

import pytest

from metricconv.conversion.exceptions import FormulaError
from metricconv.conversion.formula import (
    evaluate_expression,
    evaluate_formula,
    round_two,
    substitute_placeholders,
)


def test_substitutes_both_placeholders_with_two_decimals() -> None:
    assert substitute_placeholders("(#VALUE / #TOTAL_VALUE) * 100", 3, 8) == "(3.00 / 8.00) * 100"
    assert substitute_placeholders("#TOTAL_VALUE-#VALUE", 1.5, 10) == "10.00-1.50"


def test_percentage_formula() -> None:
    assert evaluate_formula("(#VALUE / #TOTAL_VALUE) * 100", 2, 8) == 25.0


def test_rounding_applied_once_after_evaluation() -> None:
    assert evaluate_formula("#VALUE+0.005", 1, 0) == 1.0


def test_result_rounded_to_two_decimals() -> None:
    assert evaluate_formula("#VALUE / 3", 1, 0) == 0.33
    assert evaluate_formula("#VALUE / 3", 2, 0) == 0.67


def test_formula_without_placeholders_ignores_operands() -> None:
    assert evaluate_formula("42", 1000, 5) == 42.0


def test_operand_precision_is_two_decimals() -> None:
    # 1.004 подставляется как "1.00"
    assert evaluate_formula("#VALUE * 1000", 1.004, 0) == 1000.0


def test_negative_operand() -> None:
    assert evaluate_formula("#TOTAL_VALUE - #VALUE", -5, 10) == 15.0


def test_conditional_and_comparison_supported() -> None:
    assert evaluate_formula("100 if #VALUE > #TOTAL_VALUE else 0", 5, 1) == 100.0
    assert evaluate_formula("100 if #VALUE > #TOTAL_VALUE and #VALUE < 10 else 0", 50, 1) == 0.0


def test_modulo_supported() -> None:
    assert evaluate_formula("#VALUE % 3", 10, 0) == 1.0


@pytest.mark.parametrize(
    "formula",
    [
        "#VALUE +",
        "",
        "   ",
        "(#VALUE",
        "#VALUE ** 2",
        "#VALUE // 2",
        "abs(#VALUE)",
        "#VALUE + x",
        "'text'",
        "#VALUE > 1",
        "#UNKNOWN + 1",
        "#VALUE  # comment",
        "__import__('os')",
        "1j",
    ],
)
def test_invalid_formula_raises(formula: str) -> None:
    with pytest.raises(FormulaError) as info:
        evaluate_formula(formula, 1, 1)
    assert info.value.formula == formula


def test_division_by_zero_raises() -> None:
    with pytest.raises(FormulaError, match="division by zero"):
        evaluate_formula("#VALUE / #TOTAL_VALUE", 1, 0)


def test_non_finite_result_raises() -> None:
    with pytest.raises(FormulaError):
        evaluate_expression("1e308 * 10")


def test_error_message_contains_formula() -> None:
    with pytest.raises(FormulaError) as info:
        evaluate_formula("#VALUE +", 1, 1)
    assert "#VALUE +" in str(info.value)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (1.005, 1.0),
        (0.125, 0.13),
        (-0.125, -0.13),
        (2.5, 2.5),
        (12.3456, 12.35),
        (1024.0, 1024.0),
    ],
)
def test_round_two_half_away_from_zero(value: float, expected: float) -> None:
    assert round_two(value) == expected


def test_evaluation_is_deterministic() -> None:
    results = {evaluate_formula("(#VALUE / #TOTAL_VALUE) * 100", 1, 3) for _ in range(5)}
    assert results == {33.33}


def test_huge_finite_result_is_returned_unrounded() -> None:
    assert evaluate_formula("#VALUE * 1e300", 1e8, 1) == 1e8 * 1e300
    assert evaluate_formula("#VALUE * 1", 1e307, 1) == 1e307
    assert round_two(-1.7e308) == -1.7e308


def test_long_flat_formula_raises_formula_error() -> None:
    formula = "+".join(["#VALUE"] * 3000)
    with pytest.raises(FormulaError):
        evaluate_formula(formula, 1, 1)
