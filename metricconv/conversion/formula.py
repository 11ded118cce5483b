"""Безопасный вычислитель формул метрик.

Формула берётся из конфигурации и содержит два плейсхолдера: ``#VALUE`` и
``#TOTAL_VALUE``. Перед разбором они текстово заменяются числами с двумя
знаками после запятой, затем строка разбирается модулем :mod:`ast` и
вычисляется обходом дерева. Допускаются только числа, арифметика, сравнения,
логические операции и условное выражение; имена, вызовы функций, атрибуты и
строки отклоняются.
"""

from __future__ import annotations

import ast
import logging
import math
import operator
from typing import Any, Callable, Dict, Final, Type

from metricconv.conversion.exceptions import FormulaError

LOGGER = logging.getLogger(__name__)

VALUE_PLACEHOLDER: Final[str] = "#VALUE"
TOTAL_PLACEHOLDER: Final[str] = "#TOTAL_VALUE"

_BINARY_OPERATORS: Dict[Type[ast.operator], Callable[[Any, Any], Any]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.Mod: operator.mod,
}

_ORDERING_OPERATORS: Dict[Type[ast.cmpop], Callable[[Any, Any], bool]] = {
    ast.Lt: operator.lt,
    ast.LtE: operator.le,
    ast.Gt: operator.gt,
    ast.GtE: operator.ge,
}

_EQUALITY_OPERATORS: Dict[Type[ast.cmpop], Callable[[Any, Any], bool]] = {
    ast.Eq: operator.eq,
    ast.NotEq: operator.ne,
}


def round_two(value: float) -> float:
    """Округляет до двух знаков, половину от нуля (как ``round(v*100)/100``)."""

    if not math.isfinite(value):
        return value
    scaled = abs(value) * 100
    if not math.isfinite(scaled):
        return value
    rounded = math.floor(scaled)
    if scaled - rounded >= 0.5:
        rounded += 1
    return math.copysign(rounded / 100, value)


def substitute_placeholders(formula: str, value: float, total: float) -> str:
    """Подставляет операнды вместо ``#VALUE`` и ``#TOTAL_VALUE``."""

    expression = formula.replace(VALUE_PLACEHOLDER, f"{value:.2f}")
    return expression.replace(TOTAL_PLACEHOLDER, f"{total:.2f}")


def evaluate_formula(formula: str, value: float, total: float) -> float:
    """Вычисляет формулу для пары операндов и округляет результат до 2 знаков.

    Raises:
        FormulaError: формула синтаксически некорректна, содержит
            неразрешённый токен или не сводится к числу.
    """

    expression = substitute_placeholders(formula, value, total)
    result = evaluate_expression(expression, formula=formula)
    return round_two(result)


def evaluate_expression(expression: str, *, formula: str | None = None) -> float:
    """Вычисляет уже подставленное выражение без округления."""

    source = formula if formula is not None else expression
    text = expression.strip()
    if not text:
        raise FormulaError(source, "empty expression")
    if "#" in text:
        raise FormulaError(source, "unresolved placeholder")
    try:
        tree = ast.parse(text, mode="eval")
    except (SyntaxError, ValueError) as exc:
        reason = exc.msg if isinstance(exc, SyntaxError) else str(exc)
        raise FormulaError(source, f"syntax error: {reason}") from exc
    except (RecursionError, MemoryError) as exc:
        raise FormulaError(source, "expression too complex") from exc

    try:
        result = _ExpressionEvaluator(source).visit(tree)
    except (RecursionError, MemoryError) as exc:
        raise FormulaError(source, "expression too complex") from exc
    if isinstance(result, bool) or not isinstance(result, (int, float)):
        raise FormulaError(source, f"result is {type(result).__name__}, not a number")
    try:
        result = float(result)
    except OverflowError as exc:
        raise FormulaError(source, "numeric overflow") from exc
    if not math.isfinite(result):
        raise FormulaError(source, f"result is not finite ({result})")
    LOGGER.debug("Formula %r evaluated as %r -> %s", source, text, result)
    return result


class _ExpressionEvaluator(ast.NodeVisitor):
    """Обходит дерево разбора, допуская только разрешённые узлы."""

    def __init__(self, formula: str) -> None:
        self._formula = formula

    def generic_visit(self, node: ast.AST) -> Any:
        raise FormulaError(self._formula, f"unsupported element '{type(node).__name__}'")

    def visit_Expression(self, node: ast.Expression) -> Any:
        return self.visit(node.body)

    def visit_Constant(self, node: ast.Constant) -> Any:
        if isinstance(node.value, (bool, int, float)):
            return node.value
        raise FormulaError(self._formula, f"unsupported literal {node.value!r}")

    def visit_Name(self, node: ast.Name) -> Any:
        raise FormulaError(self._formula, f"unresolved token '{node.id}'")

    def visit_BinOp(self, node: ast.BinOp) -> Any:
        func = _BINARY_OPERATORS.get(type(node.op))
        if func is None:
            raise FormulaError(self._formula, f"unsupported operator '{type(node.op).__name__}'")
        left = self._number(self.visit(node.left))
        right = self._number(self.visit(node.right))
        try:
            return func(left, right)
        except ZeroDivisionError as exc:
            raise FormulaError(self._formula, "division by zero") from exc
        except OverflowError as exc:
            raise FormulaError(self._formula, "numeric overflow") from exc

    def visit_UnaryOp(self, node: ast.UnaryOp) -> Any:
        operand = self.visit(node.operand)
        if isinstance(node.op, ast.Not):
            return not self._boolean(operand)
        if isinstance(node.op, ast.USub):
            return -self._number(operand)
        if isinstance(node.op, ast.UAdd):
            return +self._number(operand)
        raise FormulaError(self._formula, f"unsupported operator '{type(node.op).__name__}'")

    def visit_Compare(self, node: ast.Compare) -> bool:
        left = self.visit(node.left)
        for op, comparator in zip(node.ops, node.comparators):
            right = self.visit(comparator)
            op_type = type(op)
            if op_type in _ORDERING_OPERATORS:
                outcome = _ORDERING_OPERATORS[op_type](self._number(left), self._number(right))
            elif op_type in _EQUALITY_OPERATORS:
                outcome = _EQUALITY_OPERATORS[op_type](left, right)
            else:
                raise FormulaError(self._formula, f"unsupported comparison '{op_type.__name__}'")
            if not outcome:
                return False
            left = right
        return True

    def visit_BoolOp(self, node: ast.BoolOp) -> bool:
        short_circuit = isinstance(node.op, ast.Or)
        for value_node in node.values:
            if self._boolean(self.visit(value_node)) is short_circuit:
                return short_circuit
        return not short_circuit

    def visit_IfExp(self, node: ast.IfExp) -> Any:
        if self._boolean(self.visit(node.test)):
            return self.visit(node.body)
        return self.visit(node.orelse)

    # ----------------------------------------------------------------- helpers
    def _number(self, value: Any) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise FormulaError(self._formula, f"expected a number, got {type(value).__name__}")
        return value

    def _boolean(self, value: Any) -> bool:
        if not isinstance(value, bool):
            raise FormulaError(self._formula, f"expected a boolean, got {type(value).__name__}")
        return value
