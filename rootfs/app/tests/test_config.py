"""
Tests for config loading (config.py) and validation (config_validator.py).
"""

import sys
import os
import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from config import OPTIONS_ENV, Config, load_config
from config_validator import ConfigValidator


class TestLoadConfig(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_missing_file_gives_defaults(self):
        cfg = load_config(str(self.dir / "missing.json"))
        self.assertEqual(cfg, Config())
        self.assertEqual(cfg.source, "defaults")

    def test_json_options(self):
        path = self.dir / "options.json"
        path.write_text(json.dumps({"port": 9000, "host": "0.0.0.0"}), encoding="utf-8")
        cfg = load_config(str(path))
        self.assertEqual(cfg.port, 9000)
        self.assertEqual(cfg.host, "0.0.0.0")
        self.assertEqual(cfg.source, str(path))

    def test_yaml_options(self):
        path = self.dir / "options.yaml"
        path.write_text("port: 8080\nlog_level: debug\n", encoding="utf-8")
        cfg = load_config(str(path))
        self.assertEqual(cfg.port, 8080)
        self.assertEqual(cfg.log_level, "debug")

    def test_empty_yaml_gives_defaults(self):
        path = self.dir / "options.yml"
        path.write_text("", encoding="utf-8")
        self.assertEqual(load_config(str(path)), Config())

    def test_unknown_keys_are_ignored(self):
        path = self.dir / "options.json"
        path.write_text(json.dumps({"port": 8001, "rocket": True, "source": "x"}), encoding="utf-8")
        cfg = load_config(str(path))
        self.assertEqual(cfg.port, 8001)
        self.assertFalse(hasattr(cfg, "rocket"))
        self.assertEqual(cfg.source, str(path))

    def test_broken_file_gives_defaults(self):
        path = self.dir / "options.json"
        path.write_text("{not json", encoding="utf-8")
        self.assertEqual(load_config(str(path)), Config())

    def test_non_mapping_gives_defaults(self):
        path = self.dir / "options.json"
        path.write_text("[1, 2]", encoding="utf-8")
        self.assertEqual(load_config(str(path)), Config())

    def test_env_variable(self):
        path = self.dir / "env.json"
        path.write_text(json.dumps({"port": 8123}), encoding="utf-8")
        with patch.dict(os.environ, {OPTIONS_ENV: str(path)}):
            self.assertEqual(load_config().port, 8123)


class TestConfigValidator(unittest.TestCase):

    def setUp(self):
        self.validator = ConfigValidator()

    def test_defaults_are_valid(self):
        self.assertEqual(self.validator.validate(Config()), [])

    def test_bad_port_is_critical(self):
        for port in (-1, 70000, "8000", True):
            results = self.validator.validate(Config(port=port))
            self.assertTrue(ConfigValidator.has_critical(results), port)
            self.assertEqual(results[0].field, "port")

    def test_ephemeral_port_is_allowed(self):
        self.assertEqual(self.validator.validate(Config(port=0)), [])

    def test_missing_data_file_is_critical(self):
        results = self.validator.validate(Config(data_path="/nonexistent/data.json"))
        self.assertTrue(ConfigValidator.has_critical(results))
        self.assertEqual([r.field for r in results], ["data_path"])

    def test_missing_template_dir_is_critical(self):
        results = self.validator.validate(Config(template_dir="/nonexistent/templates"))
        self.assertTrue(ConfigValidator.has_critical(results))
        self.assertEqual([r.field for r in results], ["template_dir"])

    def test_warnings_fall_back_to_safe_defaults(self):
        cfg = Config(host="", log_level="chatty")
        results = self.validator.validate(cfg)
        self.assertFalse(ConfigValidator.has_critical(results))
        self.assertEqual(sorted(r.field for r in results), ["host", "log_level"])
        ConfigValidator.apply_safe_defaults(cfg, results)
        self.assertEqual(cfg.host, "127.0.0.1")
        self.assertEqual(cfg.log_level, "info")


if __name__ == "__main__":
    unittest.main()
