"""Валидаторы значений конфигурации экспорта.

Каждый валидатор возвращает пару (успех, описание ошибки).
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional, Tuple

Result = Tuple[bool, str]
OK: Result = (True, "")


class Validator(ABC):
    """Абстрактный валидатор значения."""

    @abstractmethod
    def validate(self, value: Any) -> Result:
        """Возвращает (True, \"\") при успехе либо (False, описание ошибки)."""


class TypeValidator(Validator):
    """Проверяет тип; bool не принимается там, где ожидается int."""

    def __init__(self, expected_type: type) -> None:
        self.expected_type = expected_type

    def validate(self, value: Any) -> Result:
        rejected_bool = isinstance(value, bool) and self.expected_type is not bool
        if isinstance(value, self.expected_type) and not rejected_bool:
            return OK
        return False, f"expected {self.expected_type.__name__}, got {type(value).__name__}"


class RangeValidator(Validator):
    """Числовое значение в пределах [minimum, maximum]; None снимает границу."""

    def __init__(self, minimum: Optional[int] = None, maximum: Optional[int] = None) -> None:
        self.minimum = minimum
        self.maximum = maximum

    def validate(self, value: Any) -> Result:
        if self.minimum is not None and value < self.minimum:
            return False, f"must be >= {self.minimum}"
        if self.maximum is not None and value > self.maximum:
            return False, f"must be <= {self.maximum}"
        return OK


class ChoiceValidator(Validator):
    """Значение из конечного набора."""

    def __init__(self, choices: Iterable[Any]) -> None:
        self.choices = tuple(choices)

    def validate(self, value: Any) -> Result:
        if value in self.choices:
            return OK
        return False, f"must be one of {', '.join(map(str, self.choices))}"


class PatternValidator(Validator):
    """Строка, целиком совпадающая с регулярным выражением."""

    def __init__(self, pattern: str, description: str) -> None:
        self.pattern = re.compile(pattern)
        self.description = description

    def validate(self, value: Any) -> Result:
        if isinstance(value, str) and self.pattern.fullmatch(value):
            return OK
        return False, f"must be {self.description}"


class AllOf(Validator):
    """Применяет валидаторы по очереди и останавливается на первой ошибке."""

    def __init__(self, *validators: Validator) -> None:
        self.validators = validators

    def validate(self, value: Any) -> Result:
        for validator in self.validators:
            result = validator.validate(value)
            if not result[0]:
                return result
        return OK


class Nullable(Validator):
    """Пропускает None, иначе делегирует вложенному валидатору."""

    def __init__(self, inner: Validator) -> None:
        self.inner = inner

    def validate(self, value: Any) -> Result:
        return OK if value is None else self.inner.validate(value)


class FiltersValidator(Validator):
    """Фильтры Docker API: dict[str, list[str]]."""

    def validate(self, value: Any) -> Result:
        if not isinstance(value, dict):
            return False, f"expected a mapping, got {type(value).__name__}"
        for key, items in value.items():
            if not isinstance(key, str):
                return False, f"filter name {key!r} is not a string"
            if not isinstance(items, list) or not all(isinstance(item, str) for item in items):
                return False, f"filter '{key}' must be a list of strings"
        return OK
