"""
Tests for the ConfigManager class.
"""

from unittest.mock import Mock, patch

import pytest

from core.config import normalize_base_url
from core.config_manager import ConfigManager, _coerce
from core.errors import ConfigError, ErrorCode


class TestConfigManager:
    """Test cases for ConfigManager."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        # Mock QSettings so nothing touches the real settings store
        self.settings_patcher = patch("core.config_manager.QSettings")
        self.mock_qsettings_class = self.settings_patcher.start()
        self.mock_qsettings = Mock()
        self.mock_qsettings_class.return_value = self.mock_qsettings

        self.setup_patcher = patch("core.config_manager.setup_qsettings")
        self.mock_setup = self.setup_patcher.start()

        self.open_dir_patcher = patch("core.config_manager.get_default_open_dir")
        self.mock_open_dir = self.open_dir_patcher.start()
        self.mock_open_dir.return_value = "/tmp/pictures"

    def teardown_method(self) -> None:
        """Clean up test fixtures."""
        self.settings_patcher.stop()
        self.setup_patcher.stop()
        self.open_dir_patcher.stop()

    def test_init(self) -> None:
        """Test ConfigManager initialization."""
        config_manager = ConfigManager()

        self.mock_setup.assert_called_once()
        self.mock_qsettings_class.assert_called_once()
        assert config_manager._defaults["last_open_dir"] == "/tmp/pictures"

    def test_get_with_default(self) -> None:
        """Test getting a value with default fallback."""
        config_manager = ConfigManager()
        self.mock_qsettings.value.side_effect = lambda key, default: default

        assert config_manager.get("log_level") == "INFO"
        self.mock_qsettings.value.assert_called_with("log_level", "INFO")

    def test_get_with_stored_value(self) -> None:
        config_manager = ConfigManager()
        self.mock_qsettings.value.return_value = "DEBUG"

        assert config_manager.get("log_level") == "DEBUG"

    def test_get_coerces_to_default_type(self) -> None:
        config_manager = ConfigManager()
        self.mock_qsettings.value.return_value = 42

        assert config_manager.get("log_level") == "42"

    def test_injected_settings(self) -> None:
        settings = Mock()
        settings.value.return_value = "ERROR"

        config_manager = ConfigManager(settings)

        assert config_manager.get("log_level") == "ERROR"
        self.mock_qsettings_class.assert_not_called()

    def test_set(self) -> None:
        """Test setting a value."""
        config_manager = ConfigManager()

        config_manager.set("last_open_dir", "/home/user/Pictures")

        self.mock_qsettings.setValue.assert_called_with("last_open_dir", "/home/user/Pictures")
        self.mock_qsettings.sync.assert_called_once()

    def test_reset_to_defaults(self) -> None:
        config_manager = ConfigManager()

        config_manager.reset_to_defaults()

        self.mock_qsettings.clear.assert_called_once()
        self.mock_qsettings.sync.assert_called_once()

    def test_get_api_base_url_normalizes(self) -> None:
        config_manager = ConfigManager()
        self.mock_qsettings.value.return_value = " https://api.example.com/prod/ "

        assert config_manager.get_api_base_url() == "https://api.example.com/prod"

    def test_get_api_base_url_invalid(self) -> None:
        config_manager = ConfigManager()
        self.mock_qsettings.value.return_value = "not a url"

        with pytest.raises(ConfigError) as exc_info:
            config_manager.get_api_base_url()

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID

    def test_set_api_base_url(self) -> None:
        config_manager = ConfigManager()

        config_manager.set_api_base_url("http://localhost:3000/")

        self.mock_qsettings.setValue.assert_called_with("api_base_url", "http://localhost:3000")

    def test_set_api_base_url_rejects_empty(self) -> None:
        config_manager = ConfigManager()

        with pytest.raises(ConfigError):
            config_manager.set_api_base_url("   ")

        self.mock_qsettings.setValue.assert_not_called()


def test_normalize_base_url() -> None:
    assert normalize_base_url("https://x.example.com///") == "https://x.example.com"

    with pytest.raises(ValueError):
        normalize_base_url("x.example.com")


def test_coerce_values() -> None:
    assert _coerce("flag", "Yes", False) is True
    assert _coerce("flag", "off", True) is False
    assert _coerce("count", "3", 1) == 3
    assert _coerce("count", "three", 1) == 1
    assert _coerce("items", "a", ["x"]) == ["x"]
    assert _coerce("missing", None, "fallback") == "fallback"
