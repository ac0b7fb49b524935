"""Typed models for the RCON transport and session state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ConnectionState(str, Enum):
    DISCONNECTED = "Disconnected"
    CONNECTING = "Connecting"
    CONNECTED = "Connected"


class RconError(RuntimeError):
    """Connection, protocol or command failure reported by the RCON client."""


class AuthenticationError(RconError):
    """The server rejected the RCON password."""


@dataclass(frozen=True)
class ServerEndpoint:
    address: str
    port: int = 25575

    def __str__(self) -> str:
        return f"{self.address}:{self.port}"


@dataclass(frozen=True)
class CommandResult:
    command: str
    response: str
    duration_s: float = 0.0
