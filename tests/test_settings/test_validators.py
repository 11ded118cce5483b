"""Проверки валидаторов настроек."""

from __future__ import annotations

import re

from metricconv.settings.validators import (
    CompositeValidator,
    EnumValidator,
    NonEmptyStringValidator,
    RangeValidator,
    RegexValidator,
    TypeValidator,
)


def test_type_validator_success() -> None:
    assert TypeValidator(int).validate(5) == (True, "")
    assert TypeValidator((str, type(None))).validate(None) == (True, "")


def test_type_validator_rejects_bool_for_int() -> None:
    is_valid, error = TypeValidator(int).validate(True)
    assert not is_valid
    assert "bool" in error


def test_range_validator_bounds() -> None:
    validator = RangeValidator(1, 10)
    assert validator.validate(5) == (True, "")
    is_valid, error = validator.validate(11)
    assert not is_valid
    assert "out of range" in error


def test_range_validator_rejects_non_numbers() -> None:
    is_valid, error = RangeValidator(0, 1).validate("0.5")
    assert not is_valid
    assert "number" in error


def test_enum_validator() -> None:
    validator = EnumValidator(["DEBUG", "INFO"])
    assert validator.validate("INFO") == (True, "")
    is_valid, error = validator.validate("TRACE")
    assert not is_valid
    assert "allowed values" in error


def test_non_empty_string_validator() -> None:
    validator = NonEmptyStringValidator()
    assert validator.validate("CPU") == (True, "")
    assert validator.validate("  ")[0] is False
    assert validator.validate(None)[0] is False


def test_regex_validator() -> None:
    validator = RegexValidator(re.compile(r"^[a-z]+\.json$"))
    assert validator.validate("metrics.json") == (True, "")
    assert "does not match" in validator.validate("metrics.yaml")[1]
    assert "string" in validator.validate(1)[1]


def test_composite_validator_stops_on_first_error() -> None:
    validator = CompositeValidator([TypeValidator(int), RangeValidator(0, 10)])
    is_valid, error = validator.validate("not int")
    assert not is_valid
    assert "type" in error
    assert validator.validate(3) == (True, "")
