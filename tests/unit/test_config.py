import json
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "markup"))
sys.path.insert(0, str(ROOT / "packages" / "rcon"))

from remoteconsole_core.config import AppConfig, load_config, save_config


class ConfigTests(unittest.TestCase):
    def test_load_default_when_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "missing.json"
            cfg = load_config(path)
            self.assertIsInstance(cfg, AppConfig)
            self.assertEqual(cfg.server.port, 25575)
            self.assertEqual(cfg.console.disconnect_command, ".exit")
            self.assertEqual(cfg.console.color, "auto")
            self.assertFalse(cfg.transcript.enabled)

    def test_save_and_reload(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            cfg = load_config(path)
            cfg.server.address = "mc.example.net"
            cfg.console.prompt = "rcon> "
            cfg.transcript.enabled = True
            save_config(cfg, path)
            reloaded = load_config(path)
            self.assertEqual(reloaded.server.address, "mc.example.net")
            self.assertEqual(reloaded.console.prompt, "rcon> ")
            self.assertTrue(reloaded.transcript.enabled)
            self.assertNotIn("password\"", path.read_text(encoding="utf-8"))

    def test_corrupt_file_falls_back_to_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            self.assertEqual(load_config(path), AppConfig())

    def test_normalizes_out_of_range_values(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            data = {
                "config_version": 2,
                "server": {"port": 70000, "timeout_s": 0, "tls_mode": 7},
                "console": {"color": "rainbow", "disconnect_command": "  "},
            }
            path.write_text(json.dumps(data), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.server.port, 25575)
            self.assertEqual(cfg.server.timeout_s, 0.5)
            self.assertEqual(cfg.server.tls_mode, 0)
            self.assertEqual(cfg.console.color, "auto")
            self.assertEqual(cfg.console.disconnect_command, ".exit")

    def test_migrate_v1_shape(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            old = {
                "address": "10.0.0.5",
                "port": 25580,
                "disconnect_command": ".quit",
            }
            path.write_text(json.dumps(old), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.config_version, 2)
            self.assertEqual(cfg.server.address, "10.0.0.5")
            self.assertEqual(cfg.server.port, 25580)
            self.assertEqual(cfg.console.disconnect_command, ".quit")
            self.assertFalse(cfg.transcript.enabled)


if __name__ == "__main__":
    unittest.main()
