from __future__ import annotations

import json
import logging
from argparse import ArgumentParser, Namespace
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

DEFAULT_SERVER_URL = "http://localhost:8080"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ConfigError(RuntimeError):
    pass


def _float(d: Mapping[str, object], key: str, default: float) -> float:
    v = d.get(key, default)
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise ConfigError(f"Expected number for {key}")
    if v < 0:
        raise ConfigError(f"{key} must not be negative")
    return float(v)


def _int(d: Mapping[str, object], key: str, default: int) -> int:
    v = d.get(key, default)
    if isinstance(v, bool) or not isinstance(v, int):
        raise ConfigError(f"Expected int for {key}")
    if v <= 0:
        raise ConfigError(f"{key} must be positive")
    return v


def _bool(d: Mapping[str, object], key: str, default: bool) -> bool:
    v = d.get(key, default)
    if not isinstance(v, bool):
        raise ConfigError(f"Expected true or false for {key}")
    return v


@dataclass(frozen=True)
class ClientConfig:
    server_url: str = DEFAULT_SERVER_URL
    request_timeout: float = 10.0
    poll_interval: float = 0.0
    width: int = 1024
    height: int = 768
    fps: int = 60
    log_level: str = "INFO"
    telemetry: bool = True

    @staticmethod
    def from_dict(d: Mapping[str, object]) -> "ClientConfig":
        defaults = ClientConfig()
        url = d.get("server_url", defaults.server_url)
        if not isinstance(url, str) or not url:
            raise ConfigError("server_url must be a non-empty string")
        level = str(d.get("log_level", defaults.log_level)).upper()
        if level not in _LOG_LEVELS:
            raise ConfigError(f"Unknown log_level: {level}")
        return ClientConfig(
            server_url=url,
            request_timeout=_float(d, "request_timeout", defaults.request_timeout),
            poll_interval=_float(d, "poll_interval", defaults.poll_interval),
            width=_int(d, "width", defaults.width),
            height=_int(d, "height", defaults.height),
            fps=_int(d, "fps", defaults.fps),
            log_level=level,
            telemetry=_bool(d, "telemetry", defaults.telemetry),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "server_url": self.server_url,
            "request_timeout": self.request_timeout,
            "poll_interval": self.poll_interval,
            "width": self.width,
            "height": self.height,
            "fps": self.fps,
            "log_level": self.log_level,
            "telemetry": self.telemetry,
        }

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)


def load_config(path: Path) -> ClientConfig:
    """Read ``path`` if it exists; a missing file means defaults."""
    if not path.exists():
        return ClientConfig()
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a JSON object")
    return ClientConfig.from_dict(raw)


def apply_cli_overrides(cfg: ClientConfig, args: Namespace) -> ClientConfig:
    overrides: dict[str, object] = {}
    if getattr(args, "server", None):
        overrides["server_url"] = args.server
    if getattr(args, "timeout", None) is not None:
        overrides["request_timeout"] = args.timeout
    if getattr(args, "poll", None) is not None:
        overrides["poll_interval"] = args.poll
    if getattr(args, "width", None) is not None:
        overrides["width"] = args.width
    if getattr(args, "height", None) is not None:
        overrides["height"] = args.height
    if getattr(args, "log_level", None):
        overrides["log_level"] = args.log_level.upper()
    if not overrides:
        return cfg
    return ClientConfig.from_dict({**cfg.to_dict(), **overrides})


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="duelclient")
    parser.add_argument("--config", type=str, default=None, help="path to client.json")
    parser.add_argument("--server", type=str, default=None, help="game server base URL")
    parser.add_argument("--timeout", type=float, default=None, help="HTTP timeout in seconds")
    parser.add_argument("--poll", type=float, default=None, help="seconds between state refreshes (0 = off)")
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--log-level", dest="log_level", type=str, default=None)
    return parser
