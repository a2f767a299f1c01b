"""Реестр настроек экспорта.

Источники применяются по возрастанию приоритета: значения по умолчанию,
config.json, переменные окружения и, наконец, флаги командной строки
(через set_value).
"""

from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from container_arrow.docker_api.containers import ListContainersOptions
from container_arrow.exceptions import (
    SettingsIOError,
    SettingsNotFoundError,
    SettingsValidationError,
)
from container_arrow.settings.groups import (
    DockerSettings,
    LoggingSettings,
    OutputSettings,
    QuerySettings,
    SettingsGroup,
)
from container_arrow.settings.schemas import DEFAULT_CONFIG, ENV_OVERRIDES

LOGGER = logging.getLogger(__name__)

GROUP_TYPES = (DockerSettings, QuerySettings, OutputSettings, LoggingSettings)


class SettingsRegistry:
    """Все группы настроек одного запуска экспорта."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        self.config_path = config_path
        self._groups: Dict[str, SettingsGroup] = {cls.group_name: cls() for cls in GROUP_TYPES}

    def get_group(self, group: str) -> SettingsGroup:
        try:
            return self._groups[group]
        except KeyError:
            raise SettingsNotFoundError(group) from None

    def get_value(self, group: str, key: str) -> Any:
        return self.get_group(group).get(key)

    def set_value(self, group: str, key: str, value: Any) -> None:
        self.get_group(group).set(key, value)
        LOGGER.debug("Setting %s.%s = %r", group, key, value)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"version": DEFAULT_CONFIG["version"]}
        payload.update((name, group.to_dict()) for name, group in self._groups.items())
        return payload

    def load_from_disk(self, path: Optional[Path] = None) -> None:
        """Читает config.json; отсутствующий файл оставляет значения по умолчанию."""

        target = path or self.config_path
        if target is None:
            return
        if not target.exists():
            LOGGER.info("Config file %s not found, using defaults", target)
            return
        try:
            content = json.loads(target.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise SettingsIOError(target, str(exc)) from exc
        if not isinstance(content, dict):
            raise SettingsIOError(target, "top-level JSON value must be an object")

        for name, values in content.items():
            if name == "version":
                continue
            if not isinstance(values, dict):
                raise SettingsValidationError(name, values, "expected an object")
            self.get_group(name).update(values)
        self.config_path = target
        LOGGER.debug("Loaded settings from %s", target)

    def save_to_disk(self, path: Optional[Path] = None) -> None:
        target = path or self.config_path
        if target is None:
            raise SettingsIOError(Path("."), "no config path given")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        except OSError as exc:
            raise SettingsIOError(target, str(exc)) from exc

    def apply_env_overrides(self, environ: Optional[Mapping[str, str]] = None) -> None:
        """Применяет CONTAINER_ARROW_*; пустые значения игнорируются."""

        env = os.environ if environ is None else environ
        for variable, (group, key, convert) in ENV_OVERRIDES.items():
            raw = env.get(variable)
            if not raw:
                continue
            try:
                value = convert(raw)
            except ValueError as exc:
                raise SettingsValidationError(variable, raw, str(exc)) from exc
            self.set_value(group, key, value)

    def reset_to_defaults(self) -> None:
        for group in self._groups.values():
            group.reset_to_defaults()

    def query_options(self) -> ListContainersOptions:
        """Параметры запроса списка контейнеров из группы query."""

        query = self.get_group("query")
        return ListContainersOptions(
            all=query.get("all"),
            limit=query.get("limit"),
            size=query.get("size"),
            filters=copy.deepcopy(query.get("filters")),
        )
