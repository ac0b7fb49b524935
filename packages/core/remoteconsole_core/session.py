"""Console session controller with connection state tracking and an event log."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from remoteconsole_rcon import (
    CommandResult,
    ConnectionState,
    RconError,
    RconTransport,
    ServerEndpoint,
    TranscriptWriter,
)

from .logging_setup import get_logger


@dataclass
class SessionStatus:
    connected: bool = False
    state: ConnectionState = ConnectionState.DISCONNECTED
    endpoint: ServerEndpoint | None = None
    commands_sent: int = 0
    last_error: str | None = None


class ConsoleSession:
    def __init__(
        self,
        transport: RconTransport | None = None,
        timeout_s: float = 5.0,
        tls_mode: int = 0,
        transcript: TranscriptWriter | None = None,
    ) -> None:
        self.timeout_s = timeout_s
        self.tls_mode = tls_mode
        self.transcript = transcript

        self._transport = transport or RconTransport()
        self._status = SessionStatus()
        self._events: list[dict[str, Any]] = []
        self._logger = get_logger()

    @property
    def status(self) -> SessionStatus:
        return self._status

    def recent_events(self, limit: int = 200) -> list[dict[str, Any]]:
        return self._events[-limit:]

    def _log_event(self, event: str, **fields: Any) -> None:
        row = {
            "ts_utc": datetime.now(timezone.utc).isoformat(),
            "event": event,
            "state": self._status.state.value,
        }
        row.update(fields)
        self._events.append(row)
        if len(self._events) > 1000:
            self._events = self._events[-1000:]
        self._logger.info(event, extra={"event": event, "fields": fields})

    def connect(self, endpoint: ServerEndpoint, password: str) -> None:
        self._status.state = ConnectionState.CONNECTING
        self._status.endpoint = endpoint
        self._log_event("session_connect_start", endpoint=str(endpoint))
        try:
            self._transport.open(
                address=endpoint.address,
                port=endpoint.port,
                password=password,
                timeout_s=self.timeout_s,
                tls_mode=self.tls_mode,
            )
        except RconError as exc:
            self._status.connected = False
            self._status.state = ConnectionState.DISCONNECTED
            self._status.last_error = str(exc)
            self._log_event("session_connect_error", error=str(exc))
            raise

        self._status.connected = True
        self._status.state = ConnectionState.CONNECTED
        self._status.last_error = None
        self._log_event("session_connect_ok", endpoint=str(endpoint))

    def execute(self, command: str) -> CommandResult:
        if not self._status.connected:
            raise RconError("Not connected")

        if self.transcript is not None:
            self.transcript.write("command", command)

        start = time.perf_counter()
        try:
            response = self._transport.command(command)
        except RconError as exc:
            self._status.last_error = str(exc)
            self._log_event("command_error", error=str(exc))
            self.disconnect()
            raise
        duration = time.perf_counter() - start

        if self.transcript is not None:
            self.transcript.write("response", response)

        self._status.commands_sent += 1
        self._log_event("command_ok", duration_s=duration, response_chars=len(response))
        return CommandResult(command=command, response=response, duration_s=duration)

    def disconnect(self) -> None:
        if self._status.state == ConnectionState.DISCONNECTED and not self._transport.is_open:
            return
        self._transport.close()
        self._status.connected = False
        self._status.state = ConnectionState.DISCONNECTED
        self._log_event("session_disconnect", commands_sent=self._status.commands_sent)
