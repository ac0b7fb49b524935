"""Built-in legacy color and formatting codes."""

from __future__ import annotations

from types import MappingProxyType

from .models import CodeTable, Rgb, TextAttribute

MARKER = "§"

COLOR_CODES = MappingProxyType(
    {
        "0": Rgb.from_hex(0x000000),
        "1": Rgb.from_hex(0x0000AA),
        "2": Rgb.from_hex(0x00AA00),
        "3": Rgb.from_hex(0x00AAAA),
        "4": Rgb.from_hex(0xAA0000),
        "5": Rgb.from_hex(0xAA00AA),
        "6": Rgb.from_hex(0xFFAA00),
        "7": Rgb.from_hex(0xAAAAAA),
        "8": Rgb.from_hex(0x555555),
        "9": Rgb.from_hex(0x5555FF),
        "a": Rgb.from_hex(0x55FF55),
        "b": Rgb.from_hex(0x55FFFF),
        "c": Rgb.from_hex(0xFF5555),
        "d": Rgb.from_hex(0xFF55FF),
        "e": Rgb.from_hex(0xFFFF55),
        "f": Rgb.from_hex(0xFFFFFF),
    }
)

ATTRIBUTE_CODES = MappingProxyType(
    {
        "k": TextAttribute.BLINK,
        "l": TextAttribute.BOLD,
        "m": TextAttribute.STRIKETHROUGH,
        "n": TextAttribute.UNDERLINE,
        "o": TextAttribute.ITALIC,
        "r": TextAttribute.RESET,
    }
)

DEFAULT_TABLE = CodeTable(colors=COLOR_CODES, attributes=ATTRIBUTE_CODES)


def list_codes(table: CodeTable = DEFAULT_TABLE) -> list[tuple[str, str, str]]:
    """Return ``(code, kind, value)`` rows, colors first, each group sorted by code."""
    rows = [(code, "color", rgb.hex()) for code, rgb in sorted(table.colors.items())]
    rows.extend((code, "attribute", attr.name.lower()) for code, attr in sorted(table.attributes.items()))
    return rows
