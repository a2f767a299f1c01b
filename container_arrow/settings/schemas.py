"""Определения дефолтной схемы конфигурации."""

from __future__ import annotations

from typing import Any, Dict

from container_arrow.arrow_ipc.writer import DEFAULT_BUFFER_SIZE
from container_arrow.docker_api.client import (
    DOCKER_CLIENT_VERSION_DEFAULT,
    DOCKER_CON_TIMEOUT_SECONDS_DEFAULT,
    DOCKER_UNIX_PATH_DEFAULT,
)

# DEFAULT_CONFIG служит шаблоном для config.json
DEFAULT_CONFIG: Dict[str, Any] = {
    "version": "1.0.0",
    "docker": {
        "socket_path": DOCKER_UNIX_PATH_DEFAULT,
        "timeout_sec": DOCKER_CON_TIMEOUT_SECONDS_DEFAULT,
        "api_version": DOCKER_CLIENT_VERSION_DEFAULT,
    },
    "query": {
        "all": False,
        "limit": None,
        "size": False,
        "filters": {},
    },
    "output": {
        "buffer_size": DEFAULT_BUFFER_SIZE,
    },
    "logging": {
        "enabled": True,
        "level": "INFO",
        "log_dir": None,
        "max_file_size_mb": 10,
        "max_archived_files": 5,
    },
}

# Переменные окружения -> (группа, ключ, приведение типа)
ENV_OVERRIDES: Dict[str, tuple] = {
    "CONTAINER_ARROW_SOCKET": ("docker", "socket_path", str),
    "CONTAINER_ARROW_TIMEOUT": ("docker", "timeout_sec", int),
    "CONTAINER_ARROW_API_VERSION": ("docker", "api_version", str),
    "CONTAINER_ARROW_LOG_LEVEL": ("logging", "level", str.upper),
}
