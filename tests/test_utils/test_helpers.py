"""Тесты вспомогательных функций."""

from __future__ import annotations

import pytest

from container_arrow.utils.helpers import normalize_socket_path, parse_filters


def test_normalize_socket_path() -> None:
    assert normalize_socket_path("/var/run/docker.sock") == "unix:///var/run/docker.sock"
    assert normalize_socket_path("unix:///var/run/docker.sock") == "unix:///var/run/docker.sock"
    assert normalize_socket_path("tcp://127.0.0.1:2375") == "tcp://127.0.0.1:2375"
    assert normalize_socket_path("  ") == ""


def test_parse_filters_accumulates_keys() -> None:
    assert parse_filters(["status=running", "status=paused", "label=app=web"]) == {
        "status": ["running", "paused"],
        "label": ["app=web"],
    }


@pytest.mark.parametrize("item", ["novalue", "=running"])
def test_parse_filters_rejects_malformed(item: str) -> None:
    with pytest.raises(ValueError):
        parse_filters([item])
