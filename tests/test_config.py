"""Tests for application settings."""
import os
import unittest
import tempfile
import shutil
from pathlib import Path
from unittest.mock import patch

from finscan.config.settings import AppSettings, CONFIG_ENV_VAR
from finscan.utils.exceptions import ConfigError


class TestAppSettings(unittest.TestCase):
    """Test AppSettings loading and validation."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_load_yaml(self):
        config_file = self.test_dir / "config.yaml"
        config_file.write_text(
            "app:\n"
            "  name: FinScan Test\n"
            "logging:\n"
            "  level: DEBUG\n"
            "llm:\n"
            "  model_name: gemini-test\n"
            "  api_key_env: TEST_GEMINI_KEY\n"
            "extraction:\n"
            "  max_upload_bytes: 1024\n",
            encoding="utf-8"
        )

        settings = AppSettings.load(config_file)

        self.assertEqual(settings.app_name, "FinScan Test")
        self.assertEqual(settings.log_level, "DEBUG")
        self.assertEqual(settings.llm_model_name, "gemini-test")
        self.assertEqual(settings.max_upload_bytes, 1024)
        # Untouched sections keep defaults
        self.assertEqual(settings.tesseract_lang, "eng")
        self.assertIsNone(settings.temp_dir)

    def test_env_var_path(self):
        config_file = self.test_dir / "other.yaml"
        config_file.write_text("llm:\n  model_name: from-env\n", encoding="utf-8")

        with patch.dict(os.environ, {CONFIG_ENV_VAR: str(config_file)}):
            settings = AppSettings.load()

        self.assertEqual(settings.llm_model_name, "from-env")

    def test_missing_explicit_file(self):
        with self.assertRaises(ConfigError):
            AppSettings.load(self.test_dir / "missing.yaml")

    def test_invalid_yaml(self):
        config_file = self.test_dir / "bad.yaml"
        config_file.write_text("llm: [unclosed", encoding="utf-8")

        with self.assertRaises(ConfigError):
            AppSettings.load(config_file)

    def test_api_key_from_environment(self):
        settings = AppSettings(llm_api_key_env="TEST_GEMINI_KEY")

        with patch.dict(os.environ, {"TEST_GEMINI_KEY": "abc123def456ghi"}):
            self.assertEqual(settings.gemini_api_key, "abc123def456ghi")

    def test_validate_config_valid(self):
        is_valid, message = AppSettings().validate()
        self.assertTrue(is_valid)

    def test_validate_config_bad_limit(self):
        is_valid, message = AppSettings(max_upload_bytes=0).validate()
        self.assertFalse(is_valid)
        self.assertIn("Upload", message)


if __name__ == "__main__":
    unittest.main()
