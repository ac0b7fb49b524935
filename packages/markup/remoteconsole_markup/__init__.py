"""Markup package translating legacy section-sign codes into terminal styling."""

from .codes import ATTRIBUTE_CODES, COLOR_CODES, DEFAULT_TABLE, MARKER, list_codes
from .models import CodeTable, Directive, Literal, Rgb, TextAttribute, Token
from .renderer import RESET, MarkupRenderer, fg_rgb, iter_tokens, paint, render, sgr, strip_markup

__all__ = [
    "ATTRIBUTE_CODES",
    "COLOR_CODES",
    "CodeTable",
    "DEFAULT_TABLE",
    "Directive",
    "Literal",
    "MARKER",
    "MarkupRenderer",
    "RESET",
    "Rgb",
    "TextAttribute",
    "Token",
    "fg_rgb",
    "iter_tokens",
    "list_codes",
    "paint",
    "render",
    "sgr",
    "strip_markup",
]
