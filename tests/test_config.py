from __future__ import annotations

import json
from pathlib import Path

import pytest

from duelclient.config import ClientConfig, ConfigError, apply_cli_overrides, build_parser, load_config


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "client.json")

    assert cfg == ClientConfig()
    assert cfg.server_url == "http://localhost:8080"
    assert cfg.poll_interval == 0.0


def test_file_values_are_read(tmp_path: Path) -> None:
    path = tmp_path / "client.json"
    path.write_text(json.dumps({"server_url": "http://10.0.0.5:9000", "poll_interval": 3, "log_level": "debug"}))

    cfg = load_config(path)

    assert cfg.server_url == "http://10.0.0.5:9000"
    assert cfg.poll_interval == 3.0
    assert cfg.log_level == "DEBUG"


def test_invalid_file_raises(tmp_path: Path) -> None:
    path = tmp_path / "client.json"
    path.write_text("{not json")
    with pytest.raises(ConfigError):
        load_config(path)

    path.write_text(json.dumps({"request_timeout": "soon"}))
    with pytest.raises(ConfigError):
        load_config(path)


def test_cli_overrides_file_values() -> None:
    base = ClientConfig(server_url="http://from-file:8080", width=800)
    args = build_parser().parse_args(["--server", "http://cli:1234", "--poll", "2.5"])

    cfg = apply_cli_overrides(base, args)

    assert cfg.server_url == "http://cli:1234"
    assert cfg.poll_interval == 2.5
    assert cfg.width == 800


def test_cli_values_are_validated() -> None:
    args = build_parser().parse_args(["--timeout", "-1"])
    with pytest.raises(ConfigError):
        apply_cli_overrides(ClientConfig(), args)


def test_round_trip_dict() -> None:
    cfg = ClientConfig(server_url="http://x", telemetry=False)
    assert ClientConfig.from_dict(cfg.to_dict()) == cfg


def test_telemetry_must_be_a_json_bool(tmp_path: Path) -> None:
    path = tmp_path / "client.json"
    path.write_text(json.dumps({"telemetry": False}))
    assert load_config(path).telemetry is False

    path.write_text(json.dumps({"telemetry": "false"}))
    with pytest.raises(ConfigError):
        load_config(path)
