"""Diagnostics export helpers for local support bundles."""

from __future__ import annotations

import json
import os
import platform
import re
import sys
import tempfile
import zipfile
from dataclasses import asdict, is_dataclass
from datetime import datetime, timezone
from importlib import metadata
from pathlib import Path
from typing import Any

from .config import AppConfig, config_path
from .logging_setup import log_dir


_SECRET_RE = re.compile(r"(token|secret|password|apikey|api_key|auth)", re.IGNORECASE)


def _jsonable(value: Any) -> Any:
    if is_dataclass(value):
        return asdict(value)
    if isinstance(value, Path):
        return str(value)
    return value


def redact(value: Any) -> Any:
    if isinstance(value, dict):
        out: dict[str, Any] = {}
        for k, v in value.items():
            if _SECRET_RE.search(k):
                out[k] = "***REDACTED***"
            else:
                out[k] = redact(v)
        return out
    if isinstance(value, list):
        return [redact(v) for v in value]
    return value


def _library_version(name: str) -> str | None:
    try:
        return metadata.version(name)
    except metadata.PackageNotFoundError:
        return None


def terminal_info() -> dict[str, Any]:
    colorterm = os.environ.get("COLORTERM", "")
    return {
        "stdout_isatty": sys.stdout.isatty(),
        "term": os.environ.get("TERM"),
        "colorterm": colorterm or None,
        "truecolor": colorterm.lower() in ("truecolor", "24bit"),
        "encoding": sys.stdout.encoding,
    }


def build_doctor_payload(cfg: AppConfig) -> dict[str, Any]:
    return {
        "ts_utc": datetime.now(timezone.utc).isoformat(),
        "platform": platform.platform(),
        "python": platform.python_version(),
        "config": redact(asdict(cfg)),
        "terminal": terminal_info(),
        "libraries": {name: _library_version(name) for name in ("mcrcon", "colorama")},
        "password_env_set": bool(os.environ.get(cfg.server.password_env)),
    }


def session_events_path() -> Path:
    return log_dir() / "last_session_events.json"


def save_session_events(events: list[dict[str, Any]]) -> Path:
    """Keep the events of the last console session for a later `doctor --export`."""
    path = session_events_path()
    path.write_text(json.dumps(redact(events), indent=2, sort_keys=True, default=_jsonable), encoding="utf-8")
    return path


def load_session_events() -> list[dict[str, Any]]:
    path = session_events_path()
    if not path.exists():
        return []
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return []
    return data if isinstance(data, list) else []


class DiagnosticsExporter:
    def __init__(self, app_name: str = "RemoteConsole") -> None:
        self.app_name = app_name

    def bundle(
        self,
        cfg: AppConfig,
        doctor_payload: dict[str, Any],
        recent_session_events: list[dict[str, Any]] | None = None,
        output_dir: Path | None = None,
    ) -> Path:
        output_base = output_dir or Path(tempfile.gettempdir())
        output_base.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        zip_path = output_base / f"remoteconsole-diagnostics-{stamp}.zip"

        logs = sorted(log_dir().glob("*.log*"))
        max_bytes = cfg.diagnostics.max_bundle_mb * 1024 * 1024

        with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            manifest = {
                "app": self.app_name,
                "created_utc": datetime.now(timezone.utc).isoformat(),
                "host": platform.platform(),
                "python": platform.python_version(),
                "config_path": str(config_path()),
                "log_dir": str(log_dir()),
            }
            zf.writestr("manifest.json", json.dumps(manifest, indent=2, sort_keys=True))
            zf.writestr("doctor.json", json.dumps(redact(doctor_payload), indent=2, sort_keys=True, default=_jsonable))
            zf.writestr("config.redacted.json", json.dumps(redact(asdict(cfg)), indent=2, sort_keys=True))
            zf.writestr(
                "session_events.json",
                json.dumps(redact(recent_session_events or []), indent=2, sort_keys=True, default=_jsonable),
            )

            written = 0
            for item in logs:
                size = item.stat().st_size
                if written + size > max_bytes:
                    break
                zf.write(item, arcname=f"logs/{item.name}")
                written += size

        return zip_path
