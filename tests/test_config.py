"""Tests for settings and configuration manager."""
import os
import unittest
import tempfile
import shutil
from pathlib import Path
from unittest import mock

from rupiya.config import AppSettings, ConfigManager, Config
from rupiya.orchestrator import PipelineConfig
from rupiya.utils.exceptions import ConfigError


class TestAppSettings(unittest.TestCase):
    """Test AppSettings loading."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_load_packaged_defaults(self):
        """The packaged config.yaml loads."""
        settings = AppSettings.load()

        self.assertEqual(settings.app_name, "Rupiya")
        self.assertEqual(settings.min_line_length, 10)
        self.assertIn("a/c", settings.keywords)
        self.assertEqual(settings.llm_categories, ["Food", "Travel", "Bills", "Shopping"])

    def test_pipeline_config_from_settings(self):
        """Run configuration mirrors the settings."""
        settings = AppSettings.load()
        config = PipelineConfig.from_settings(settings)

        self.assertEqual(config.keywords, tuple(settings.keywords))
        self.assertEqual(config.default_category, "Other")
        self.assertEqual(config.default_payment_mode, "UPI")
        self.assertEqual(config.model_call_timeout, 30)

    def test_missing_file(self):
        """A missing file raises ConfigError."""
        with self.assertRaises(ConfigError):
            AppSettings.load(self.test_dir / "nope.yaml")

    def test_missing_section(self):
        """An incomplete file raises ConfigError."""
        config_path = self.test_dir / "config.yaml"
        config_path.write_text("app:\n  name: Test\n  version: 1\n", encoding="utf-8")

        with self.assertRaises(ConfigError):
            AppSettings.load(config_path)


class TestConfigManager(unittest.TestCase):
    """Test ConfigManager functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = Path(tempfile.mkdtemp())
        self.config_manager = ConfigManager()
        # Override config directory for testing
        self.config_manager.config_dir = self.test_dir
        self.config_manager.config_file = self.test_dir / "config.json"

        env_patcher = mock.patch.dict(os.environ)
        env_patcher.start()
        self.addCleanup(env_patcher.stop)
        for env_var in ("GEMINI_API_KEY", "GOOGLE_API_KEY"):
            os.environ.pop(env_var, None)

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_save_and_load_config(self):
        """Test saving and loading configuration."""
        config = Config(gemini_api_key="test_key", model_name="gemini-test")

        self.config_manager.save_config(config)
        loaded_config = self.config_manager.load_config()

        self.assertEqual(loaded_config, config)

    def test_load_without_file(self):
        """No file gives defaults."""
        self.assertEqual(self.config_manager.load_config(), Config())

    def test_env_overrides_key(self):
        """The environment key wins over the stored one."""
        self.config_manager.save_config(Config(gemini_api_key="stored"))
        os.environ["GEMINI_API_KEY"] = "from_env"

        self.assertEqual(self.config_manager.load_config().gemini_api_key, "from_env")

    def test_corrupt_file(self):
        """Unreadable JSON raises ConfigError."""
        self.config_manager.config_file.write_text("{not json", encoding="utf-8")

        with self.assertRaises(ConfigError):
            self.config_manager.load_config()

    def test_validate_config_valid(self):
        """Test validation with valid config."""
        is_valid, message = self.config_manager.validate_config(Config(gemini_api_key="test_key"))
        self.assertTrue(is_valid)

    def test_validate_config_missing_key(self):
        """Test validation with missing API key."""
        is_valid, message = self.config_manager.validate_config(Config(gemini_api_key=""))

        self.assertFalse(is_valid)
        self.assertIn("API key", message)

    def test_validate_regex_only(self):
        """No key is needed when the model is disabled."""
        is_valid, _ = self.config_manager.validate_config(Config(use_model=False))
        self.assertTrue(is_valid)


if __name__ == "__main__":
    unittest.main()
