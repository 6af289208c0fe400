"""Tests for configuration manager."""
import os
import shutil
import tempfile
import unittest
from dataclasses import replace
from pathlib import Path
from unittest import mock

from smartspend.config import AppSettings, Config, ConfigManager
from smartspend.config.manager import API_KEY_ENV_VARS

SETTINGS_YAML = """
app: {name: Test App, version: 9.9.9}
logging: {level: DEBUG, max_file_size_mb: 1, backup_count: 1}
llm:
  model_name: gemini-test
  temperature: 0.2
  request_timeout_seconds: 30
  max_retries: 1
  initial_delay_seconds: 0
  backoff_factor: 2
statement:
  region: Indian
  currency: INR
  currency_symbol: "₹"
  digit_grouping: indian
  max_upload_mb: 5
  allowed_mime_types: [image/png]
"""


class TestConfigManager(unittest.TestCase):
    """Test ConfigManager functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = Path(tempfile.mkdtemp())
        self.settings_path = self.test_dir / "settings.yaml"
        self.settings_path.write_text(SETTINGS_YAML, encoding="utf-8")
        self.config_manager = ConfigManager(self.settings_path)

        self.env = mock.patch.dict(os.environ)
        self.env.start()
        for name in API_KEY_ENV_VARS:
            os.environ.pop(name, None)

    def tearDown(self):
        """Clean up test fixtures."""
        self.env.stop()
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_load_config_from_env(self):
        os.environ["GEMINI_API_KEY"] = "test_key"

        config = self.config_manager.load_config()

        self.assertEqual(config.gemini_api_key, "test_key")
        self.assertEqual(config.settings.llm_model_name, "gemini-test")
        self.assertEqual(config.settings.max_upload_bytes, 5 * 1024 * 1024)
        self.assertEqual(config.log_level, "DEBUG")

    def test_fallback_key_names(self):
        os.environ["API_KEY"] = "fallback_key"

        self.assertEqual(self.config_manager.load_config().gemini_api_key, "fallback_key")

    def test_no_key_returns_none(self):
        self.assertIsNone(self.config_manager.load_config())

    def test_settings_path_from_env(self):
        os.environ["SMARTSPEND_CONFIG"] = str(self.settings_path)

        self.assertEqual(AppSettings.load().app_name, "Test App")

    def test_missing_settings_file(self):
        with self.assertRaises(FileNotFoundError):
            AppSettings.load(self.test_dir / "missing.yaml")

    def test_packaged_settings(self):
        os.environ.pop("SMARTSPEND_CONFIG", None)

        settings = AppSettings.load()

        self.assertEqual(settings.currency, "INR")
        self.assertEqual(settings.max_upload_mb, 10)
        self.assertIn("image/png", settings.allowed_mime_types)

    def test_validate_config_valid(self):
        config = Config(gemini_api_key="test_key", settings=AppSettings.load(self.settings_path))

        is_valid, message = self.config_manager.validate_config(config)

        self.assertTrue(is_valid)

    def test_validate_config_missing_key(self):
        config = Config(gemini_api_key="", settings=AppSettings.load(self.settings_path))

        is_valid, message = self.config_manager.validate_config(config)

        self.assertFalse(is_valid)
        self.assertIn("API key", message)

    def test_validate_config_bad_timeout(self):
        settings = replace(AppSettings.load(self.settings_path), llm_request_timeout_seconds=0)

        is_valid, message = self.config_manager.validate_config(Config("test_key", settings))

        self.assertFalse(is_valid)
        self.assertIn("timeout", message)


if __name__ == "__main__":
    unittest.main()
