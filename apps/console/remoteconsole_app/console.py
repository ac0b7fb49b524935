"""Interactive console loop: read a line, send it, render the response, print it."""

from __future__ import annotations

import sys
from datetime import datetime
from importlib import metadata
from pathlib import Path
from typing import TextIO

import colorama

from remoteconsole_core import AppConfig, ConsoleSession, save_session_events, transcript_dir
from remoteconsole_core.logging_setup import get_logger
from remoteconsole_markup import MarkupRenderer, Rgb, TextAttribute, paint
from remoteconsole_rcon import RconError, ServerEndpoint, TranscriptWriter

BANNER_COLOR = Rgb(255, 200, 0)
STATUS_COLOR = Rgb(0, 225, 31)
ERROR_COLOR = Rgb(255, 0, 0)


def app_version() -> str:
    try:
        return metadata.version("remoteconsole")
    except metadata.PackageNotFoundError:
        return "0.1.0"


def use_color(mode: str, stream: TextIO) -> bool:
    if mode == "always":
        return True
    if mode == "never":
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def error_line(text: str, styled: bool) -> str:
    return paint(text, ERROR_COLOR, styled=styled)


class ConsoleApp:
    def __init__(
        self,
        session: ConsoleSession,
        renderer: MarkupRenderer,
        disconnect_command: str = ".exit",
        banner: bool = True,
        prompt: str = "",
    ) -> None:
        self.session = session
        self.renderer = renderer
        self.disconnect_command = disconnect_command
        self.banner = banner
        self.prompt = prompt
        self.logger = get_logger()

    @property
    def styled(self) -> bool:
        return self.renderer.styled

    def is_disconnect(self, line: str) -> bool:
        return line.lower() == self.disconnect_command.lower()

    def _write(self, out: TextIO, text: str) -> None:
        out.write(text + "\n")
        out.flush()

    def print_banner(self, out: TextIO) -> None:
        endpoint = self.session.status.endpoint
        if self.banner:
            self._write(out, paint(f"RemoteConsole {app_version()}", BANNER_COLOR, TextAttribute.UNDERLINE, styled=self.styled))
        if endpoint is not None:
            self._write(
                out,
                paint(
                    f"Connection to server {endpoint.address} on port {endpoint.port} succeeded.",
                    STATUS_COLOR,
                    styled=self.styled,
                ),
            )
        hint = paint("Disconnect command: ", STATUS_COLOR, styled=self.styled)
        hint += paint(self.disconnect_command, STATUS_COLOR, TextAttribute.ITALIC, styled=self.styled)
        self._write(out, hint)

    def run(self, stdin: TextIO, stdout: TextIO) -> int:
        exit_code = 0
        self.print_banner(stdout)
        try:
            while True:
                if self.prompt:
                    stdout.write(self.prompt)
                    stdout.flush()
                line = stdin.readline()
                if not line:
                    break
                command = line.rstrip("\r\n")
                if self.is_disconnect(command):
                    break

                try:
                    result = self.session.execute(command)
                except RconError as exc:
                    self.logger.error("command failed", exc_info=True, extra={"event": "console_command_failed"})
                    self._write(stdout, error_line(str(exc), self.styled))
                    exit_code = 1
                    break
                self._write(stdout, self.renderer.render(result.response))
        finally:
            self.session.disconnect()
            if self.session.transcript is not None:
                self.session.transcript.close()

        self._write(stdout, paint("Connection closed.", STATUS_COLOR, styled=self.styled))
        return exit_code


def run_console(
    cfg: AppConfig,
    endpoint: ServerEndpoint,
    password: str,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    session: ConsoleSession | None = None,
    transcript_path: Path | None = None,
) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    logger = get_logger()

    styled = use_color(cfg.console.color, stdout)
    if styled:
        colorama.just_fix_windows_console()

    if session is None:
        if transcript_path is None and cfg.transcript.enabled:
            name = f"{endpoint.address}-{endpoint.port}-{datetime.now().strftime('%Y%m%d-%H%M%S')}"
            transcript_path = transcript_dir(cfg) / f"{name.replace(':', '_')}.jsonl"
        transcript = TranscriptWriter(transcript_path) if transcript_path is not None else None
        session = ConsoleSession(timeout_s=cfg.server.timeout_s, tls_mode=cfg.server.tls_mode, transcript=transcript)

    try:
        try:
            session.connect(endpoint, password)
        except RconError as exc:
            logger.error("connect failed", exc_info=True, extra={"event": "console_connect_failed"})
            if session.transcript is not None:
                session.transcript.close()
            stdout.write(error_line(str(exc), styled) + "\n")
            stdout.flush()
            return 1

        app = ConsoleApp(
            session=session,
            renderer=MarkupRenderer(styled=styled),
            disconnect_command=cfg.console.disconnect_command,
            banner=cfg.console.banner,
            prompt=cfg.console.prompt,
        )
        return app.run(stdin, stdout)
    finally:
        save_session_events(session.recent_events())
