"""Исключения экспорта контейнеров в поток Arrow IPC."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

LOGGER = logging.getLogger(__name__)


class ContainerArrowError(Exception):
    """Единая ошибка «операция не удалась» с поддержкой контекста."""

    def __init__(self, message: str, *, context: Optional[Dict[str, Any]] = None) -> None:
        """Сохраняет сообщение и контекст, логируя ошибку."""

        self.message = message
        self.context = context or {}
        super().__init__(message)
        LOGGER.error("%s | context=%s", message, self.context)


class DockerConnectionError(ContainerArrowError):
    """Docker engine недоступен или согласование версии API не удалось."""

    def __init__(self, socket_path: str, reason: str) -> None:
        self.socket_path = socket_path
        self.reason = reason
        super().__init__(
            f"Cannot connect to Docker engine at '{socket_path}': {reason}",
            context={"socket_path": socket_path, "reason": reason},
        )


class QueryError(ContainerArrowError):
    """Запрос списка контейнеров завершился ошибкой после подключения."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Container list query failed: {reason}", context={"reason": reason})


class SchemaMismatchError(ContainerArrowError):
    """Собранный batch не соответствует схеме."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Record batch does not match schema: {reason}", context={"reason": reason})


class EncodingError(ContainerArrowError):
    """Ошибка записи в поток IPC или в приёмник."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"IPC stream encoding failed: {reason}", context={"reason": reason})


class EncodingInitError(EncodingError):
    """Приёмник отклонил заголовок потока при открытии."""


class DecodingError(ContainerArrowError):
    """Записанный поток Arrow IPC не читается обратно."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"IPC stream decoding failed: {reason}", context={"reason": reason})


class SettingsError(ContainerArrowError):
    """Некорректная конфигурация экспорта."""


class SettingsNotFoundError(SettingsError):
    """Запрошена неизвестная группа или ключ настроек."""

    def __init__(self, group: str, key: Optional[str] = None) -> None:
        self.group = group
        self.key = key
        name = f"{group}.{key}" if key else group
        super().__init__(f"Unknown setting '{name}'", context={"group": group, "key": key})


class SettingsValidationError(SettingsError):
    """Значение настройки не прошло проверку."""

    def __init__(self, key: str, value: Any, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(
            f"Invalid value for '{key}': {reason} (got {value!r})",
            context={"key": key, "value": value, "reason": reason},
        )


class SettingsIOError(SettingsError):
    """Файл конфигурации не читается, не пишется или не является JSON-объектом."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(
            f"Cannot use config file '{path}': {reason}",
            context={"path": str(path), "reason": reason},
        )
