"""Legacy section-sign markup to terminal SGR escape rendering."""

from __future__ import annotations

from typing import Iterator

from colorama import Style
from colorama.ansi import CSI

from .codes import DEFAULT_TABLE, MARKER
from .models import CodeTable, Directive, Literal, Rgb, TextAttribute, Token

RESET = Style.RESET_ALL


def sgr(*params: int) -> str:
    return f"{CSI}{';'.join(str(p) for p in params)}m"


def fg_rgb(color: Rgb) -> str:
    return sgr(38, 2, color.red, color.green, color.blue)


def iter_tokens(text: str, marker: str = MARKER) -> Iterator[Token]:
    """Lazily split ``text`` into literal characters and two-character directives.

    A marker in last position has no code to pair with and yields nothing.
    """
    chars = iter(text)
    for char in chars:
        if char != marker:
            yield Literal(char)
            continue
        code = next(chars, None)
        if code is None:
            return
        yield Directive(code)


class MarkupRenderer:
    """Folds markup tokens into a styled string for a truecolor terminal."""

    def __init__(self, table: CodeTable = DEFAULT_TABLE, marker: str = MARKER, styled: bool = True) -> None:
        self.table = table
        self.marker = marker
        self.styled = styled

    def directive(self, code: str) -> str:
        # A code may match both tables; each match applies.
        out = ""
        color = self.table.color(code)
        if color is not None:
            out += fg_rgb(color)
        attribute = self.table.attribute(code)
        if attribute is not None:
            out += sgr(int(attribute))
        return out

    def render(self, text: str) -> str:
        if not self.styled:
            return self.strip(text)
        buffer: list[str] = []
        for token in iter_tokens(text, self.marker):
            if isinstance(token, Literal):
                buffer.append(token.char)
            else:
                buffer.append(self.directive(token.code))
        buffer.append(RESET)
        return "".join(buffer)

    def strip(self, text: str) -> str:
        return strip_markup(text, self.marker)


_DEFAULT_RENDERER = MarkupRenderer()


def render(text: str, table: CodeTable = DEFAULT_TABLE) -> str:
    if table is DEFAULT_TABLE:
        return _DEFAULT_RENDERER.render(text)
    return MarkupRenderer(table).render(text)


def strip_markup(text: str, marker: str = MARKER) -> str:
    return "".join(t.char for t in iter_tokens(text, marker) if isinstance(t, Literal))


def paint(text: str, color: Rgb | None = None, *attributes: TextAttribute, styled: bool = True) -> str:
    """Wrap a client status line in a color and attributes, then reset."""
    if not styled:
        return text
    prefix = fg_rgb(color) if color is not None else ""
    prefix += "".join(sgr(int(a)) for a in attributes)
    return f"{prefix}{text}{RESET}"
