"""RCON transport abstraction over the mcrcon client."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from typing import Any, Callable

from mcrcon import MCRcon, MCRconException

from .models import AuthenticationError, RconError

# Besides socket errors, mcrcon lets undecodable or truncated packets escape.
_CLIENT_ERRORS = (OSError, UnicodeError, struct.error, ValueError)


@dataclass
class RconConfig:
    address: str
    port: int = 25575
    timeout_s: float = 5.0
    tls_mode: int = 0


class RconTransport:
    """Thin wrapper over mcrcon that normalizes its failures to RconError."""

    def __init__(self, client_factory: Callable[..., Any] = MCRcon) -> None:
        self._client_factory = client_factory
        self._client: Any | None = None
        self.config: RconConfig | None = None

    @property
    def is_open(self) -> bool:
        return self._client is not None

    def open(
        self,
        address: str,
        port: int,
        password: str,
        timeout_s: float = 5.0,
        tls_mode: int = 0,
    ) -> None:
        if self.is_open:
            return
        self.config = RconConfig(address=address, port=port, timeout_s=timeout_s, tls_mode=tls_mode)
        # mcrcon arms signal.alarm with this value, which takes whole seconds.
        timeout = max(1, math.ceil(timeout_s))
        client = self._client_factory(address, password, port=port, tlsmode=tls_mode, timeout=timeout)
        try:
            client.connect()
        except MCRconException as exc:
            client.disconnect()
            if "login" in str(exc).lower():
                raise AuthenticationError(f"Authentication with {address}:{port} failed") from exc
            raise RconError(f"Connection to {address}:{port} failed: {exc}") from exc
        except _CLIENT_ERRORS as exc:
            client.disconnect()
            raise RconError(f"Connection to {address}:{port} failed: {exc}") from exc
        self._client = client

    def close(self) -> None:
        if self._client is not None:
            self._client.disconnect()
            self._client = None

    def command(self, text: str) -> str:
        if self._client is None:
            raise RconError("RCON connection is not open")
        try:
            return str(self._client.command(text))
        except (MCRconException, *_CLIENT_ERRORS) as exc:
            raise RconError(f"Command failed: {exc}") from exc
