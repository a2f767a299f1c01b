"""Общие фикстуры: поддельный docker client без реального Docker engine."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

import pytest

from container_arrow.docker_api.client import DockerClientWrapper


class FakeAPI:
    """Имитирует низкоуровневый docker.APIClient."""

    def __init__(self, payload: List[Dict[str, Any]], error: Optional[Exception] = None) -> None:
        self.payload = payload
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def containers(self, **kwargs: Any) -> List[Dict[str, Any]]:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.payload


class FakeRawClient:
    """Имитирует docker.DockerClient."""

    def __init__(self, payload: List[Dict[str, Any]], error: Optional[Exception] = None) -> None:
        self.api = FakeAPI(payload, error)
        self.closed = False

    def ping(self) -> bool:
        return True

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_client() -> Callable[..., DockerClientWrapper]:
    def factory(
        payload: Optional[List[Dict[str, Any]]] = None, error: Optional[Exception] = None
    ) -> DockerClientWrapper:
        return DockerClientWrapper(raw_client=FakeRawClient(payload or [], error))

    return factory


@pytest.fixture
def api_payload() -> List[Dict[str, Any]]:
    """Три контейнера в ответе Docker; у второго нет ни одного поля."""

    return [
        {
            "Id": "c1",
            "Names": ["/web"],
            "Image": "nginx:1.25",
            "ImageID": "sha256:aaa",
            "Command": "nginx -g 'daemon off;'",
            "Created": 1700000000,
            "State": "running",
            "Status": "Up 2 hours",
            "SizeRw": 12,
            "SizeRootFs": 187000000,
        },
        {},
        {
            "Id": "c3",
            "Image": "alpine",
            "ImageID": "sha256:ccc",
            "Command": "sh",
            "Created": 1690000000,
            "State": "exited",
            "Status": "Exited (0) 3 days ago",
            "SizeRw": None,
            "SizeRootFs": None,
        },
    ]
