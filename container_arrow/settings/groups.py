"""Группы настроек: значения по умолчанию из DEFAULT_CONFIG плюс валидаторы ключей."""

from __future__ import annotations

import copy
from typing import Any, ClassVar, Dict, Mapping, Tuple

from container_arrow.exceptions import SettingsNotFoundError, SettingsValidationError
from container_arrow.settings.schemas import DEFAULT_CONFIG
from container_arrow.settings.validators import (
    AllOf,
    ChoiceValidator,
    FiltersValidator,
    Nullable,
    PatternValidator,
    RangeValidator,
    TypeValidator,
    Validator,
)

API_VERSION_PATTERN = r"\d+\.\d+"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SettingsGroup:
    """Именованный набор ключей; каждое присваивание проходит валидатор ключа."""

    group_name: ClassVar[str] = ""
    validators: ClassVar[Dict[str, Validator]] = {}

    def __init__(self) -> None:
        self._values: Dict[str, Any] = {}
        self.reset_to_defaults()

    @property
    def defaults(self) -> Dict[str, Any]:
        return DEFAULT_CONFIG[self.group_name]

    def keys(self) -> Tuple[str, ...]:
        return tuple(self.defaults)

    def get(self, key: str) -> Any:
        try:
            return self._values[key]
        except KeyError:
            raise SettingsNotFoundError(self.group_name, key) from None

    def set(self, key: str, value: Any) -> None:
        if key not in self.defaults:
            raise SettingsNotFoundError(self.group_name, key)
        validator = self.validators.get(key)
        if validator is not None:
            is_valid, reason = validator.validate(value)
            if not is_valid:
                raise SettingsValidationError(f"{self.group_name}.{key}", value, reason)
        self._values[key] = value

    def update(self, values: Mapping[str, Any]) -> None:
        """Применяет значения из config.json; неизвестный ключ считается ошибкой."""

        for key, value in values.items():
            self.set(key, value)

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._values)

    def reset_to_defaults(self) -> None:
        self._values = copy.deepcopy(self.defaults)


class DockerSettings(SettingsGroup):
    """Параметры подключения к Docker engine."""

    group_name = "docker"
    validators = {
        "socket_path": PatternValidator(r"\S+", "a socket path or URL without spaces"),
        "timeout_sec": AllOf(TypeValidator(int), RangeValidator(0, 3600)),
        "api_version": PatternValidator(API_VERSION_PATTERN, "an API version like 1.44"),
    }


class QuerySettings(SettingsGroup):
    """Параметры запроса списка контейнеров."""

    group_name = "query"
    validators = {
        "all": TypeValidator(bool),
        "limit": Nullable(AllOf(TypeValidator(int), RangeValidator(1))),
        "size": TypeValidator(bool),
        "filters": FiltersValidator(),
    }


class OutputSettings(SettingsGroup):
    """Параметры записи потока Arrow IPC."""

    group_name = "output"
    validators = {
        "buffer_size": AllOf(TypeValidator(int), RangeValidator(1024, 64 * 1024 * 1024)),
    }


class LoggingSettings(SettingsGroup):
    """Настройки логирования."""

    group_name = "logging"
    validators = {
        "enabled": TypeValidator(bool),
        "level": ChoiceValidator(LOG_LEVELS),
        "log_dir": Nullable(TypeValidator(str)),
        "max_file_size_mb": AllOf(TypeValidator(int), RangeValidator(1, 1024)),
        "max_archived_files": AllOf(TypeValidator(int), RangeValidator(0, 100)),
    }
