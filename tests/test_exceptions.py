"""Тесты иерархии ошибок экспорта."""

from __future__ import annotations

from pathlib import Path

import pytest

from container_arrow.exceptions import (
    ContainerArrowError,
    DecodingError,
    DockerConnectionError,
    EncodingError,
    EncodingInitError,
    QueryError,
    SchemaMismatchError,
    SettingsError,
    SettingsIOError,
    SettingsNotFoundError,
    SettingsValidationError,
)


@pytest.mark.parametrize(
    "error",
    [
        DockerConnectionError("/var/run/docker.sock", "refused"),
        QueryError("timeout"),
        SchemaMismatchError("length"),
        EncodingError("broken pipe"),
        EncodingInitError("closed"),
        DecodingError("truncated"),
    ],
)
def test_all_errors_share_boundary_type(error: ContainerArrowError) -> None:
    assert isinstance(error, ContainerArrowError)
    assert error.message == str(error)


def test_init_error_is_encoding_error() -> None:
    assert issubclass(EncodingInitError, EncodingError)


def test_connection_error_context(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level("ERROR")
    error = DockerConnectionError("/tmp/docker.sock", "No such file or directory")
    assert error.context == {"socket_path": "/tmp/docker.sock", "reason": "No such file or directory"}
    assert "/tmp/docker.sock" in caplog.text


def test_cause_is_kept() -> None:
    try:
        try:
            raise OSError("disk full")
        except OSError as exc:
            raise EncodingError(str(exc)) from exc
    except EncodingError as error:
        assert isinstance(error.__cause__, OSError)


class TestSettingsErrors:
    """Ошибки конфигурации тоже наследуют ContainerArrowError."""

    def test_not_found_message(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level("ERROR")
        error = SettingsNotFoundError("docker", "socket")
        assert str(error) == "Unknown setting 'docker.socket'"
        assert "docker.socket" in caplog.text
        assert isinstance(error, SettingsError)

    def test_validation_error_fields(self) -> None:
        error = SettingsValidationError("docker.timeout_sec", -1, "must be >= 0")
        assert error.key == "docker.timeout_sec"
        assert error.value == -1
        assert str(error) == "Invalid value for 'docker.timeout_sec': must be >= 0 (got -1)"

    def test_io_error_contains_path(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        error = SettingsIOError(path, "permission denied")
        assert str(path) in str(error)
        assert error.context["reason"] == "permission denied"
