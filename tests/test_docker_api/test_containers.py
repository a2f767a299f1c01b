"""Тесты получения списка контейнеров."""

from __future__ import annotations

import asyncio

import pytest
import requests
from docker.errors import APIError

from container_arrow.docker_api.containers import (
    ListContainersOptions,
    fetch_container_summaries,
    list_containers,
)
from container_arrow.docker_api.models import ContainerSummary
from container_arrow.exceptions import QueryError


def test_list_preserves_engine_order(make_client, api_payload) -> None:
    client = make_client(api_payload)
    summaries = asyncio.run(list_containers(client))
    assert [s.id for s in summaries] == ["c1", None, "c3"]
    assert summaries[1] == ContainerSummary()


def test_list_does_not_deduplicate(make_client) -> None:
    client = make_client([{"Id": "dup"}, {"Id": "dup"}])
    summaries = asyncio.run(list_containers(client))
    assert [s.id for s in summaries] == ["dup", "dup"]


def test_default_options_sent(make_client) -> None:
    client = make_client([])
    fetch_container_summaries(client)
    assert client.get_raw_client().api.calls == [{"all": False, "size": False}]


def test_options_passed_through(make_client) -> None:
    client = make_client([])
    options = ListContainersOptions(
        all=True, limit=5, size=True, filters={"status": ["running", "paused"]}
    )
    asyncio.run(list_containers(client, options))
    assert client.get_raw_client().api.calls == [
        {"all": True, "size": True, "limit": 5, "filters": {"status": ["running", "paused"]}}
    ]


def test_api_error_becomes_query_error(make_client) -> None:
    client = make_client(error=APIError("500 Server Error"))
    with pytest.raises(QueryError) as excinfo:
        asyncio.run(list_containers(client))
    assert isinstance(excinfo.value.__cause__, APIError)


def test_transport_error_becomes_query_error(make_client) -> None:
    client = make_client(error=requests.exceptions.ReadTimeout("read timed out"))
    with pytest.raises(QueryError) as excinfo:
        fetch_container_summaries(client)
    assert "read timed out" in excinfo.value.reason
