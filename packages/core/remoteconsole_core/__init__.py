"""Core console services for settings, sessions, logging, and diagnostics."""

from .config import AppConfig, config_path, load_config, save_config, transcript_dir
from .diagnostics import DiagnosticsExporter, build_doctor_payload, load_session_events, save_session_events
from .session import ConsoleSession, SessionStatus

__all__ = [
    "AppConfig",
    "ConsoleSession",
    "DiagnosticsExporter",
    "SessionStatus",
    "build_doctor_payload",
    "config_path",
    "load_config",
    "load_session_events",
    "save_config",
    "save_session_events",
    "transcript_dir",
]
