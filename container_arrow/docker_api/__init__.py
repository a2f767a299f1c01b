"""Доступ к Docker engine: подключение и список контейнеров."""

from .client import (
    DOCKER_CLIENT_VERSION_DEFAULT,
    DOCKER_CON_TIMEOUT_SECONDS_DEFAULT,
    DOCKER_UNIX_PATH_DEFAULT,
    DockerClientWrapper,
    connect,
)
from .containers import ListContainersOptions, list_containers
from .models import ContainerSummary

__all__ = [
    "DOCKER_CLIENT_VERSION_DEFAULT",
    "DOCKER_CON_TIMEOUT_SECONDS_DEFAULT",
    "DOCKER_UNIX_PATH_DEFAULT",
    "DockerClientWrapper",
    "connect",
    "ListContainersOptions",
    "list_containers",
    "ContainerSummary",
]
