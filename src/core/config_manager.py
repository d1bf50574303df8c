"""
Persisted settings for the Image Converter GUI.

Values live in QSettings under the application's organization/name and are
read back coerced to the type of their default.
"""

import logging
from typing import Any

from PySide6.QtCore import QSettings

from .config import DEFAULT_CONFIG, get_default_open_dir, normalize_base_url, setup_qsettings
from .errors import ConfigError, ErrorCode

logger = logging.getLogger(__name__)

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})


def _coerce(key: str, value: Any, fallback: Any) -> Any:
    """Convert a raw QSettings value to the type of its default."""
    if fallback is None:
        return value
    if value is None:
        return fallback

    expected = type(fallback)
    try:
        if expected is bool:
            # INI backends hand booleans back as strings
            return value.strip().lower() in _TRUE_STRINGS if isinstance(value, str) else bool(value)
        if expected in (int, float, str):
            return expected(value)
    except (TypeError, ValueError) as e:
        logger.warning(f"Setting '{key}' could not be read as {expected.__name__} ({e}); using default")
        return fallback

    if isinstance(value, expected):
        return value
    logger.warning(f"Setting '{key}' has type {type(value).__name__}; using default")
    return fallback


class ConfigManager:
    """
    Typed access to the application's persisted settings.

    Keys missing from storage, or stored with an unusable type, read as
    their defaults from DEFAULT_CONFIG.
    """

    def __init__(self, settings: QSettings | None = None) -> None:
        setup_qsettings()
        self._settings = settings if settings is not None else QSettings()
        self._defaults = dict(DEFAULT_CONFIG)
        # Depends on the user's system, so it is resolved at runtime
        if not self._defaults["last_open_dir"]:
            self._defaults["last_open_dir"] = get_default_open_dir()

    def get(self, key: str, default: Any | None = None) -> Any:
        """Read a setting, falling back to ``default`` or the configured default."""
        fallback = self._defaults.get(key) if default is None else default
        return _coerce(key, self._settings.value(key, fallback), fallback)

    def set(self, key: str, value: Any) -> None:
        self._settings.setValue(key, value)
        self._settings.sync()

    def reset_to_defaults(self) -> None:
        self._settings.clear()
        self._settings.sync()
        logger.info("Settings cleared; defaults apply")

    # Conversion service endpoint

    def get_api_base_url(self) -> str:
        """
        Stored conversion service base URL, normalized.

        Raises:
            ConfigError: If the stored URL is not a usable http(s) URL
        """
        try:
            return normalize_base_url(self.get("api_base_url"))
        except ValueError as e:
            raise ConfigError(
                ErrorCode.CONFIG_INVALID,
                "The conversion service URL is not configured correctly",
                technical_message=str(e),
                context={"key": "api_base_url"},
            ) from e

    def set_api_base_url(self, url: str) -> None:
        """
        Validate and store the conversion service base URL.

        Raises:
            ConfigError: If ``url`` is empty or not http(s)
        """
        try:
            normalized = normalize_base_url(url)
        except ValueError as e:
            raise ConfigError(
                ErrorCode.CONFIG_INVALID,
                "The conversion service URL is not valid",
                technical_message=str(e),
                context={"key": "api_base_url"},
            ) from e
        self.set("api_base_url", normalized)
