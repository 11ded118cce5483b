"""Валидаторы значений настроек и полей определений метрик."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional, Pattern, Tuple

ValidationResult = Tuple[bool, str]


class Validator(ABC):
    """Абстрактный валидатор значения."""

    @abstractmethod
    def validate(self, value: Any) -> ValidationResult:
        """Возвращает (True, "") при успехе либо (False, описание ошибки)."""


class TypeValidator(Validator):
    """Значение должно быть экземпляром указанного типа (или одного из типов).

    ``bool`` не считается числом, даже если ожидается ``int``.
    """

    def __init__(self, expected_type: type | Tuple[type, ...]) -> None:
        self.expected_type = expected_type

    def _expected_types(self) -> Tuple[type, ...]:
        if isinstance(self.expected_type, tuple):
            return self.expected_type
        return (self.expected_type,)

    def validate(self, value: Any) -> ValidationResult:
        expected = self._expected_types()
        if isinstance(value, bool) and bool not in expected:
            matches = False
        else:
            matches = isinstance(value, expected)
        if matches:
            return True, ""
        names = ", ".join(t.__name__ for t in expected)
        return False, f"Expected value of type {names}, got {type(value).__name__}"


class RangeValidator(Validator):
    """Числовое значение в пределах [min_value, max_value]."""

    def __init__(self, min_value: Optional[float] = None, max_value: Optional[float] = None) -> None:
        self.min_value = min_value
        self.max_value = max_value

    def validate(self, value: Any) -> ValidationResult:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False, f"Expected a number, got {type(value).__name__}"
        if (self.min_value is not None and value < self.min_value) or (
            self.max_value is not None and value > self.max_value
        ):
            return False, f"Value {value} is out of range [{self.min_value}, {self.max_value}]"
        return True, ""


class EnumValidator(Validator):
    """Значение из конечного набора."""

    def __init__(self, allowed_values: Iterable[Any]) -> None:
        self.allowed_values = list(allowed_values)

    def validate(self, value: Any) -> ValidationResult:
        if value in self.allowed_values:
            return True, ""
        return False, f"Value {value!r} not in allowed values: {self.allowed_values}"


class NonEmptyStringValidator(Validator):
    """Строка, содержащая хотя бы один непробельный символ."""

    def validate(self, value: Any) -> ValidationResult:
        if not isinstance(value, str):
            return False, f"Expected value of type str, got {type(value).__name__}"
        if not value.strip():
            return False, "Value must not be empty"
        return True, ""


class RegexValidator(Validator):
    def __init__(self, pattern: str | Pattern[str]) -> None:
        self.pattern: Pattern[str] = re.compile(pattern) if isinstance(pattern, str) else pattern

    def validate(self, value: Any) -> ValidationResult:
        if not isinstance(value, str):
            return False, "RegexValidator expects string values"
        if self.pattern.fullmatch(value):
            return True, ""
        return False, f"Value '{value}' does not match pattern {self.pattern.pattern!r}"


class CompositeValidator(Validator):
    """Применяет валидаторы по порядку и возвращает первую ошибку."""

    def __init__(self, validators: Iterable[Validator]) -> None:
        self.validators: List[Validator] = list(validators)

    def validate(self, value: Any) -> ValidationResult:
        for validator in self.validators:
            is_valid, error = validator.validate(value)
            if not is_valid:
                return False, error
        return True, ""
