"""Тесты точки входа CLI."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from container_arrow import main as main_module
from container_arrow import pipeline
from container_arrow.arrow_ipc.writer import read_stream
from container_arrow.docker_api.client import DockerClientWrapper
from container_arrow.main import build_parser, initialize_settings, main


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logging.disable(logging.NOTSET)


@pytest.fixture
def fake_connect(monkeypatch, make_client, api_payload):
    captured = {}

    def _connect(**kwargs) -> DockerClientWrapper:
        captured.update(kwargs)
        return make_client(api_payload)

    monkeypatch.setattr(pipeline, "connect", _connect)
    return captured


def test_cli_writes_file(tmp_path: Path, fake_connect) -> None:
    target = tmp_path / "containers.arrows"
    assert main(["-o", str(target), "--socket", "/tmp/docker.sock", "--verify"]) == 0
    assert fake_connect["socket_path"] == "/tmp/docker.sock"
    assert read_stream(target).column("id").to_pylist() == ["c1", None, "c3"]


def test_cli_writes_stdout(capsysbinary, fake_connect) -> None:
    assert main([]) == 0
    out = capsysbinary.readouterr().out
    assert read_stream(out).num_rows == 3


def test_cli_verify_requires_file_output(fake_connect) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--verify"])
    assert excinfo.value.code == 2
    assert fake_connect == {}


def test_cli_unreadable_output_is_export_failure(tmp_path: Path, monkeypatch, fake_connect) -> None:
    def _write_garbage(settings, sink, **kwargs) -> int:
        sink.write(b"not an arrow stream")
        return 0

    monkeypatch.setattr(main_module, "export_containers", _write_garbage)
    target = tmp_path / "containers.arrows"
    assert main(["-o", str(target), "--verify"]) == 1


def test_cli_bad_config_exit_code(tmp_path: Path) -> None:
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"docker": {"timeout_sec": -5}}), encoding="utf-8")
    assert main(["--config", str(config), "-o", str(tmp_path / "x.arrows")]) == 2


def test_cli_bad_filter_exit_code(tmp_path: Path) -> None:
    assert main(["--filter", "novalue", "-o", str(tmp_path / "x.arrows")]) == 2


def test_cli_unreachable_engine(tmp_path: Path) -> None:
    target = tmp_path / "containers.arrows"
    code = main(["--socket", str(tmp_path / "nope.sock"), "--timeout", "1", "-o", str(target)])
    assert code == 1
    assert not target.exists()


def test_initialize_settings_precedence(tmp_path: Path) -> None:
    config = tmp_path / "config.json"
    config.write_text(
        json.dumps({"docker": {"socket_path": "/from/config.sock", "timeout_sec": 10}}),
        encoding="utf-8",
    )
    args = build_parser().parse_args(
        ["--config", str(config), "--timeout", "3", "-a", "--filter", "status=running"]
    )
    settings = initialize_settings(args, environ={"CONTAINER_ARROW_SOCKET": "/from/env.sock"})

    assert settings.get_value("docker", "socket_path") == "/from/env.sock"
    assert settings.get_value("docker", "timeout_sec") == 3
    assert settings.get_value("query", "all") is True
    assert settings.get_value("query", "size") is False
    assert settings.get_value("query", "filters") == {"status": ["running"]}


def test_logging_disabled_from_settings(tmp_path: Path) -> None:
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"logging": {"enabled": False}}), encoding="utf-8")
    args = build_parser().parse_args(["--config", str(config)])
    main_module.setup_logging_from_settings(initialize_settings(args, environ={}))
    assert logging.root.manager.disable >= logging.CRITICAL
