"""Обёртка над docker-py: подключение к Docker engine через unix-сокет."""

from __future__ import annotations

import logging
from typing import Any, Optional

import docker
import requests
from docker.constants import DEFAULT_DOCKER_API_VERSION
from docker.errors import DockerException

from container_arrow.exceptions import DockerConnectionError
from container_arrow.utils.helpers import normalize_socket_path

DOCKER_UNIX_PATH_DEFAULT = "/var/run/docker.sock"
DOCKER_CON_TIMEOUT_SECONDS_DEFAULT = 30
DOCKER_CLIENT_VERSION_DEFAULT = DEFAULT_DOCKER_API_VERSION

# Ошибки транспорта docker-py пробрасывает как есть, без обёртки в DockerException
TRANSPORT_ERRORS = (DockerException, requests.exceptions.RequestException)

LOGGER = logging.getLogger(__name__)


class DockerClientWrapper:
    """Управляет созданием и использованием docker API client."""

    def __init__(
        self,
        socket_path: str = DOCKER_UNIX_PATH_DEFAULT,
        timeout_seconds: int = DOCKER_CON_TIMEOUT_SECONDS_DEFAULT,
        api_version: str = DOCKER_CLIENT_VERSION_DEFAULT,
        raw_client: Any | None = None,
    ) -> None:
        if isinstance(timeout_seconds, bool) or not isinstance(timeout_seconds, int):
            raise ValueError(f"timeout_seconds must be an integer, got {timeout_seconds!r}")
        if timeout_seconds < 0:
            raise ValueError(f"timeout_seconds must be non-negative, got {timeout_seconds}")
        self.socket_path = socket_path
        self.base_url = normalize_socket_path(socket_path)
        self.timeout_seconds = timeout_seconds
        self.api_version = api_version
        self._client = raw_client if raw_client is not None else self._create_client()

    def _create_client(self) -> Any:
        try:
            return docker.DockerClient(
                base_url=self.base_url,
                version=self.api_version,
                timeout=self.timeout_seconds,
            )
        except TRANSPORT_ERRORS as exc:
            raise DockerConnectionError(self.socket_path, str(exc)) from exc

    def get_raw_client(self) -> Any:
        """Возвращает внутренний docker client."""

        return self._client

    def ping(self) -> None:
        """Проверяет доступность Docker и согласованность версии API."""

        try:
            self._client.ping()
        except TRANSPORT_ERRORS as exc:
            raise DockerConnectionError(self.socket_path, str(exc)) from exc

    def close(self) -> None:
        """Освобождает HTTP-сессию клиента."""

        close = getattr(self._client, "close", None)
        if callable(close):
            close()


def connect(
    socket_path: str = DOCKER_UNIX_PATH_DEFAULT,
    timeout_seconds: int = DOCKER_CON_TIMEOUT_SECONDS_DEFAULT,
    api_version: Optional[str] = None,
) -> DockerClientWrapper:
    """Открывает соединение с Docker engine и проверяет его ping-запросом."""

    client = DockerClientWrapper(
        socket_path=socket_path,
        timeout_seconds=timeout_seconds,
        api_version=api_version or DOCKER_CLIENT_VERSION_DEFAULT,
    )
    try:
        client.ping()
    except DockerConnectionError:
        client.close()
        raise
    LOGGER.debug(
        "Connected to Docker engine at %s (API %s, timeout %ss)",
        client.base_url,
        client.api_version,
        client.timeout_seconds,
    )
    return client
