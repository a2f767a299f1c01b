"""Функции для получения списка контейнеров через Docker client."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from container_arrow.docker_api.client import TRANSPORT_ERRORS, DockerClientWrapper
from container_arrow.docker_api.models import ContainerSummary
from container_arrow.exceptions import QueryError

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ListContainersOptions:
    """Параметры запроса /containers/json; передаются в Docker без интерпретации."""

    all: bool = False
    limit: Optional[int] = None
    size: bool = False
    filters: Dict[str, List[str]] = field(default_factory=dict)

    def to_api_kwargs(self) -> Dict[str, Any]:
        """Аргументы для docker.APIClient.containers."""

        kwargs: Dict[str, Any] = {"all": self.all, "size": self.size}
        if self.limit is not None:
            kwargs["limit"] = self.limit
        if self.filters:
            kwargs["filters"] = self.filters
        return kwargs


def fetch_container_summaries(
    client: DockerClientWrapper, options: Optional[ListContainersOptions] = None
) -> List[ContainerSummary]:
    """Синхронно запрашивает контейнеры и сохраняет порядок ответа Docker."""

    kwargs = (options or ListContainersOptions()).to_api_kwargs()
    raw = client.get_raw_client()
    try:
        payload = raw.api.containers(**kwargs)
    except TRANSPORT_ERRORS as exc:
        raise QueryError(str(exc)) from exc
    return [ContainerSummary.from_api(item) for item in payload]


async def list_containers(
    client: DockerClientWrapper, options: Optional[ListContainersOptions] = None
) -> List[ContainerSummary]:
    """Возвращает список контейнеров, не блокируя event loop.

    Повторных попыток нет: первая ошибка поднимается как QueryError.
    """

    summaries = await asyncio.to_thread(fetch_container_summaries, client, options)
    LOGGER.debug("Docker engine reported %d containers", len(summaries))
    return summaries
