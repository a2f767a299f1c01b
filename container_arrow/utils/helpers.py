"""Различные вспомогательные функции."""

from __future__ import annotations

from typing import Dict, Iterable, List

_SOCKET_SCHEMES = ("unix://", "tcp://", "npipe://", "http://", "https://", "ssh://")


def normalize_socket_path(raw_value: str) -> str:
    """Возвращает путь сокета с корректным префиксом unix://."""

    value = raw_value.strip()
    if not value:
        return value
    lowered = value.lower()
    if lowered.startswith(_SOCKET_SCHEMES):
        return value
    if value.startswith("/"):
        return f"unix://{value}"
    return value


def parse_filters(items: Iterable[str]) -> Dict[str, List[str]]:
    """Разбирает фильтры вида KEY=VALUE в формат Docker API.

    Повторяющиеся ключи накапливаются: ``status=running status=paused``
    превращается в ``{"status": ["running", "paused"]}``.
    """

    filters: Dict[str, List[str]] = {}
    for item in items:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Filter must look like KEY=VALUE, got {item!r}")
        filters.setdefault(key, []).append(value.strip())
    return filters
