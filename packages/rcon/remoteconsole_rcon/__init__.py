"""RCON client package: mcrcon transport, session models and transcripts."""

from .models import AuthenticationError, CommandResult, ConnectionState, RconError, ServerEndpoint
from .transcript import TranscriptEvent, TranscriptReplay, TranscriptReport, TranscriptWriter
from .transport import RconTransport

__all__ = [
    "AuthenticationError",
    "CommandResult",
    "ConnectionState",
    "RconError",
    "RconTransport",
    "ServerEndpoint",
    "TranscriptEvent",
    "TranscriptReplay",
    "TranscriptReport",
    "TranscriptWriter",
]
