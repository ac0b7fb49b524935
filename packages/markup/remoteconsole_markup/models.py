"""Typed markup models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Mapping, Union


class TextAttribute(IntEnum):
    """SGR parameter for each supported text attribute."""

    RESET = 0
    BOLD = 1
    ITALIC = 3
    UNDERLINE = 4
    BLINK = 6
    STRIKETHROUGH = 9


@dataclass(frozen=True)
class Rgb:
    red: int
    green: int
    blue: int

    @classmethod
    def from_hex(cls, value: int) -> "Rgb":
        return cls((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    def hex(self) -> str:
        return f"#{self.red:02X}{self.green:02X}{self.blue:02X}"


@dataclass(frozen=True)
class Literal:
    char: str


@dataclass(frozen=True)
class Directive:
    code: str


Token = Union[Literal, Directive]


@dataclass(frozen=True)
class CodeTable:
    colors: Mapping[str, Rgb]
    attributes: Mapping[str, TextAttribute]

    def color(self, code: str) -> Rgb | None:
        return self.colors.get(code)

    def attribute(self, code: str) -> TextAttribute | None:
        return self.attributes.get(code)
