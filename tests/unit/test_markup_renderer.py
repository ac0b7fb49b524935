import sys
import unittest
from pathlib import Path
from types import MappingProxyType

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "markup"))

from remoteconsole_markup import (
    ATTRIBUTE_CODES,
    COLOR_CODES,
    DEFAULT_TABLE,
    CodeTable,
    MarkupRenderer,
    Rgb,
    TextAttribute,
    paint,
    render,
    strip_markup,
)

RESET = "\x1b[0m"
RED = "\x1b[38;2;255;85;85m"
AQUA = "\x1b[38;2;85;255;255m"


class RenderTests(unittest.TestCase):
    def test_plain_text_is_copied_with_trailing_reset(self):
        text = "There are 3 of a max of 20 players online: Steve, Alex"
        self.assertEqual(render(text), text + RESET)

    def test_empty_input(self):
        self.assertEqual(render(""), RESET)

    def test_lone_trailing_marker_is_dropped(self):
        self.assertEqual(render("§"), RESET)
        self.assertEqual(render("abc§"), "abc" + RESET)

    def test_unknown_code_is_consumed_silently(self):
        self.assertEqual(render("§z"), render(""))
        self.assertEqual(render("a§zb"), "ab" + RESET)

    def test_color_code_applies_to_following_text(self):
        self.assertEqual(render("§chello"), RED + "hello" + RESET)

    def test_reset_directive(self):
        self.assertEqual(render("§rtext"), RESET + "text" + RESET)

    def test_attribute_codes(self):
        self.assertEqual(render("§lbold"), "\x1b[1mbold" + RESET)
        self.assertEqual(render("§kx§my§nz§ow"), "\x1b[6mx\x1b[9my\x1b[4mz\x1b[3mw" + RESET)

    def test_double_marker_is_a_noop_directive(self):
        self.assertEqual(render("a§b§§c"), "a" + AQUA + "c" + RESET)
        self.assertEqual(render("§§"), RESET)
        self.assertEqual(render("§§§"), RESET)

    def test_style_persists_until_next_directive(self):
        self.assertEqual(render("§cred §lstill"), RED + "red " + "\x1b[1m" + "still" + RESET)

    def test_uppercase_codes_are_unknown(self):
        self.assertEqual(render("§Chi"), "hi" + RESET)

    def test_non_ascii_text_passes_through(self):
        self.assertEqual(render("§aÜber ✓"), "\x1b[38;2;85;255;85mÜber ✓" + RESET)

    def test_overlapping_code_applies_color_then_attribute(self):
        table = CodeTable(
            colors=MappingProxyType({"x": Rgb(1, 2, 3)}),
            attributes=MappingProxyType({"x": TextAttribute.BOLD}),
        )
        self.assertEqual(render("§xy", table), "\x1b[38;2;1;2;3m\x1b[1my" + RESET)


class CodeTableTests(unittest.TestCase):
    def test_table_sizes_and_keys(self):
        self.assertEqual(len(COLOR_CODES), 16)
        self.assertEqual(len(ATTRIBUTE_CODES), 6)
        self.assertEqual(set(COLOR_CODES), set("0123456789abcdef"))
        self.assertEqual(set(ATTRIBUTE_CODES), set("klmnor"))

    def test_tables_unchanged_after_rendering(self):
        for _ in range(50):
            render("§a§l§k§r§z§§text§")
        self.assertEqual(len(DEFAULT_TABLE.colors), 16)
        self.assertEqual(len(DEFAULT_TABLE.attributes), 6)

    def test_tables_are_read_only(self):
        with self.assertRaises(TypeError):
            COLOR_CODES["g"] = Rgb(0, 0, 0)  # type: ignore[index]

    def test_palette_values(self):
        self.assertEqual(COLOR_CODES["6"], Rgb(0xFF, 0xAA, 0x00))
        self.assertEqual(COLOR_CODES["9"].hex(), "#5555FF")
        self.assertIs(ATTRIBUTE_CODES["r"], TextAttribute.RESET)


class StripAndPaintTests(unittest.TestCase):
    def test_strip_markup(self):
        self.assertEqual(strip_markup("§6Gold §lbold§r plain§"), "Gold bold plain")
        self.assertEqual(strip_markup(""), "")

    def test_unstyled_renderer_strips(self):
        renderer = MarkupRenderer(styled=False)
        self.assertEqual(renderer.render("§chello§z"), "hello")

    def test_paint(self):
        self.assertEqual(
            paint("ok", Rgb(0, 225, 31), TextAttribute.ITALIC),
            "\x1b[38;2;0;225;31m\x1b[3mok" + RESET,
        )
        self.assertEqual(paint("ok", Rgb(0, 225, 31), styled=False), "ok")


if __name__ == "__main__":
    unittest.main()
