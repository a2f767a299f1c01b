"""Сквозной экспорт: Docker -> ContainerSummary -> RecordBatch -> поток IPC.

Этапы выполняются строго последовательно; первая ошибка любого этапа
прерывает экспорт. При сбое во время записи в приёмнике может остаться
обрезанный поток: для атомарности пишите через atomic_output.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, BinaryIO, Iterator, Optional

from container_arrow.arrow_ipc.schema import summary_schema
from container_arrow.arrow_ipc.writer import DEFAULT_BUFFER_SIZE, containers_to_sink
from container_arrow.docker_api.client import DockerClientWrapper, connect
from container_arrow.docker_api.containers import ListContainersOptions, list_containers
from container_arrow.settings.registry import SettingsRegistry

LOGGER = logging.getLogger(__name__)


async def list_containers_and_write(
    client: DockerClientWrapper,
    sink: Any,
    options: Optional[ListContainersOptions] = None,
    *,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> int:
    """Запрашивает контейнеры и пишет их в приёмник одним batch; возвращает число строк."""

    containers = await list_containers(client, options)
    schema = summary_schema()
    return containers_to_sink(containers, sink, schema, buffer_size=buffer_size)


def export_containers(
    settings: SettingsRegistry,
    sink: Any,
    *,
    client: Optional[DockerClientWrapper] = None,
) -> int:
    """Синхронный экспорт по настройкам; закрывает только созданный здесь клиент."""

    owns_client = client is None
    if client is None:
        client = connect(
            socket_path=settings.get_value("docker", "socket_path"),
            timeout_seconds=settings.get_value("docker", "timeout_sec"),
            api_version=settings.get_value("docker", "api_version"),
        )
    try:
        rows = asyncio.run(
            list_containers_and_write(
                client,
                sink,
                settings.query_options(),
                buffer_size=settings.get_value("output", "buffer_size"),
            )
        )
    finally:
        if owns_client:
            client.close()
    LOGGER.info("Exported %d containers", rows)
    return rows


@contextlib.contextmanager
def atomic_output(path: Path) -> Iterator[BinaryIO]:
    """Открывает временный файл рядом с path и переименовывает его только при успехе."""

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            yield handle
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
