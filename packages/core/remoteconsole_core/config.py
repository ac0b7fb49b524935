"""Persistent console settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any


CONFIG_VERSION = 2
DEFAULT_PORT = 25575
DEFAULT_DISCONNECT_COMMAND = ".exit"
COLOR_MODES = ("auto", "always", "never")


@dataclass
class ServerConfig:
    address: str = "127.0.0.1"
    port: int = DEFAULT_PORT
    timeout_s: float = 5.0
    tls_mode: int = 0
    password_env: str = "RCON_PASSWORD"


@dataclass
class ConsoleConfig:
    disconnect_command: str = DEFAULT_DISCONNECT_COMMAND
    color: str = "auto"
    banner: bool = True
    prompt: str = ""


@dataclass
class TranscriptConfig:
    enabled: bool = False
    directory: str | None = None


@dataclass
class DiagnosticsConfig:
    keep_log_files: int = 7
    max_bundle_mb: int = 20


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    server: ServerConfig = field(default_factory=ServerConfig)
    console: ConsoleConfig = field(default_factory=ConsoleConfig)
    transcript: TranscriptConfig = field(default_factory=TranscriptConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "RemoteConsole"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "RemoteConsole"
    return Path.home() / ".config" / "remoteconsole"


def config_path() -> Path:
    return config_root() / "config.json"


def transcript_dir(cfg: AppConfig) -> Path:
    if cfg.transcript.directory:
        return Path(cfg.transcript.directory).expanduser()
    return config_root() / "transcripts"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    if not isinstance(raw, dict):
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_server(cfg: AppConfig) -> None:
    try:
        port = int(cfg.server.port)
    except (TypeError, ValueError):
        port = DEFAULT_PORT
    cfg.server.port = port if 1 <= port <= 65535 else DEFAULT_PORT
    try:
        timeout = float(cfg.server.timeout_s)
    except (TypeError, ValueError):
        timeout = 5.0
    cfg.server.timeout_s = max(0.5, min(120.0, timeout))
    if cfg.server.tls_mode not in (0, 1, 2):
        cfg.server.tls_mode = 0
    cfg.server.address = str(cfg.server.address or "127.0.0.1")


def _normalize_console(cfg: AppConfig) -> None:
    if cfg.console.color not in COLOR_MODES:
        cfg.console.color = "auto"
    command = str(cfg.console.disconnect_command or "").strip()
    cfg.console.disconnect_command = command or DEFAULT_DISCONNECT_COMMAND


def _migrate(raw: dict[str, Any]) -> dict[str, Any]:
    version = int(raw.get("config_version", 1))
    data = dict(raw)

    if version < 2:
        # v1 kept connection settings at top level and had no transcript section.
        server = dict(data.get("server", {}) or {})
        for key in ("address", "port"):
            if key in data:
                server.setdefault(key, data.pop(key))
        data["server"] = server
        console = dict(data.get("console", {}) or {})
        if "disconnect_command" in data:
            console.setdefault("disconnect_command", data.pop("disconnect_command"))
        data["console"] = console
        data.setdefault("transcript", {})
        data["config_version"] = 2

    return data


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return AppConfig()
    if not isinstance(raw, dict):
        return AppConfig()

    data = _migrate(raw)
    cfg = AppConfig(
        config_version=int(data.get("config_version", CONFIG_VERSION)),
        server=_merge(ServerConfig, data.get("server", {})),
        console=_merge(ConsoleConfig, data.get("console", {})),
        transcript=_merge(TranscriptConfig, data.get("transcript", {})),
        diagnostics=_merge(DiagnosticsConfig, data.get("diagnostics", {})),
    )

    _normalize_server(cfg)
    _normalize_console(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
