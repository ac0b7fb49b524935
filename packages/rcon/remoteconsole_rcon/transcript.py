"""Session transcript recording and replay/analysis."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator, Protocol

from remoteconsole_markup import DEFAULT_TABLE, Directive, iter_tokens


class _Renderer(Protocol):
    def render(self, text: str) -> str: ...


@dataclass(frozen=True)
class TranscriptEvent:
    line: int
    direction: str
    text: str


@dataclass
class TranscriptReport:
    total_events: int = 0
    command_events: int = 0
    response_events: int = 0
    directive_count: int = 0
    unknown_codes: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


class TranscriptWriter:
    """Appends command/response events to a JSON Lines file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = path.open("a", encoding="utf-8")

    def write(self, direction: str, text: str) -> None:
        row = {"ts_utc": datetime.now(timezone.utc).isoformat(), "dir": direction, "text": text}
        self._fh.write(json.dumps(row, ensure_ascii=False) + "\n")
        self._fh.flush()

    def close(self) -> None:
        if not self._fh.closed:
            self._fh.close()


class TranscriptReplay:
    def __init__(self) -> None:
        self._invalid_lines: list[int] = []

    def _parse_line(self, line_no: int, line: str) -> TranscriptEvent | None:
        stripped = line.strip()
        if not stripped:
            return None
        try:
            obj: Any = json.loads(stripped)
        except json.JSONDecodeError:
            self._invalid_lines.append(line_no)
            return None
        if not isinstance(obj, dict):
            self._invalid_lines.append(line_no)
            return None
        direction = obj.get("dir") or obj.get("direction") or "unknown"
        return TranscriptEvent(line=line_no, direction=str(direction), text=str(obj.get("text", "")))

    def parse(self, transcript_path: Path) -> list[TranscriptEvent]:
        self._invalid_lines = []
        events: list[TranscriptEvent] = []
        for idx, line in enumerate(transcript_path.read_text(encoding="utf-8").splitlines(), start=1):
            event = self._parse_line(idx, line)
            if event is not None:
                events.append(event)
        return events

    def run(self, transcript_path: Path, strict: bool = True) -> TranscriptReport:
        events = self.parse(transcript_path)
        report = TranscriptReport(total_events=len(events))
        report.errors.extend(f"invalid_json:{n}" for n in self._invalid_lines)

        pending = 0
        for event in events:
            if event.direction == "command":
                report.command_events += 1
                pending += 1
            elif event.direction == "response":
                report.response_events += 1
                pending = max(0, pending - 1)
                for token in iter_tokens(event.text):
                    if not isinstance(token, Directive):
                        continue
                    report.directive_count += 1
                    known = token.code in DEFAULT_TABLE.colors or token.code in DEFAULT_TABLE.attributes
                    if not known and token.code not in report.unknown_codes:
                        report.unknown_codes.append(token.code)

        if strict:
            if report.command_events < 1:
                report.errors.append("missing_command")
            if pending:
                report.errors.append("unanswered_command")

        return report

    def render(self, transcript_path: Path, renderer: _Renderer) -> Iterator[str]:
        for event in self.parse(transcript_path):
            if event.direction == "response":
                yield renderer.render(event.text)
