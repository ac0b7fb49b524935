import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "markup"))
sys.path.insert(0, str(ROOT / "packages" / "rcon"))

from remoteconsole_markup import MarkupRenderer
from remoteconsole_rcon.transcript import TranscriptReplay

TRANSCRIPTS = ROOT / "tests" / "transcripts"


class TranscriptReplayTests(unittest.TestCase):
    def test_report_counts_events_and_codes(self):
        report = TranscriptReplay().run(TRANSCRIPTS / "session_list_time.jsonl", strict=True)

        self.assertEqual(report.total_events, 6)
        self.assertEqual(report.command_events, 3)
        self.assertEqual(report.response_events, 3)
        # 6 in the list response, 2 in the time response, 2 in the last one.
        self.assertEqual(report.directive_count, 10)
        self.assertEqual(report.unknown_codes, ["x", "§"])
        self.assertEqual(report.errors, [])

    def test_strict_mode_flags_unanswered_and_invalid_lines(self):
        report = TranscriptReplay().run(TRANSCRIPTS / "session_truncated.jsonl", strict=True)
        self.assertEqual(report.command_events, 1)
        self.assertIn("invalid_json:2", report.errors)
        self.assertIn("unanswered_command", report.errors)

    def test_non_strict_mode_keeps_parse_errors_only(self):
        report = TranscriptReplay().run(TRANSCRIPTS / "session_truncated.jsonl", strict=False)
        self.assertEqual(report.errors, ["invalid_json:2"])

    def test_render_yields_responses_only(self):
        lines = list(TranscriptReplay().render(TRANSCRIPTS / "session_list_time.jsonl", MarkupRenderer(styled=False)))
        self.assertEqual(
            lines,
            [
                "There are 2 of a max of 20 players online: Steve, Alex",
                "The time is 6000",
                "",
            ],
        )


if __name__ == "__main__":
    unittest.main()
