"""Структуры данных для описания объектов Docker."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional

# Ключи ответа /containers/json -> имена полей ContainerSummary
API_FIELD_MAP: Dict[str, str] = {
    "Id": "id",
    "Image": "image",
    "ImageID": "image_id",
    "Command": "command",
    "State": "state",
    "Status": "status",
    "Created": "created",
    "SizeRw": "size_rw",
    "SizeRootFs": "size_root_fs",
}


@dataclass(slots=True)
class ContainerSummary:
    """Краткое описание контейнера из docker ps; любое поле может отсутствовать."""

    id: Optional[str] = None
    image: Optional[str] = None
    image_id: Optional[str] = None
    command: Optional[str] = None
    state: Optional[str] = None
    status: Optional[str] = None
    created: Optional[int] = None  # секунды с начала эпохи
    size_rw: Optional[int] = None
    size_root_fs: Optional[int] = None

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "ContainerSummary":
        """Создаёт модель из элемента ответа Docker API.

        Отсутствующий ключ и JSON null дают ``None``; подстановки
        значений по умолчанию нет.
        """

        return cls(**{field: payload.get(key) for key, field in API_FIELD_MAP.items()})

    def to_dict(self) -> Dict[str, Any]:
        """Сериализует модель в dict с именами колонок."""

        return asdict(self)
