"""
Configuration management for the Image Converter GUI.

This module provides configuration defaults, application identifiers and the
JSON schemas used to validate responses from the conversion service.
"""

from pathlib import Path
from typing import Any

from PySide6.QtCore import QCoreApplication, QStandardPaths

# Identifiers that select the QSettings store and data directories
APP_ORGANIZATION = "ImageConverter"
APP_NAME = "GUI"

# Placeholder endpoint; replaced through --api-url or the stored setting
DEFAULT_API_BASE_URL = "https://your-api-id.execute-api.region.amazonaws.com/prod"

# Every persisted setting with its default; values read back as the default's type
DEFAULT_CONFIG: dict[str, Any] = {
    # Remote service
    "api_base_url": DEFAULT_API_BASE_URL,
    # Debug settings
    "log_level": "INFO",  # Options: "DEBUG", "INFO", "WARNING", "ERROR"
    # UI state
    "last_open_dir": "",
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# JSON Schema for the /upload response body (draft-07)
UPLOAD_RESPONSE_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Upload response",
    "type": "object",
    "properties": {
        "conversion_id": {"type": "string"},
    },
}

# JSON Schema for the /convert response body (draft-07)
CONVERT_RESPONSE_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Convert response",
    "type": "object",
    "required": ["download_url"],
    "properties": {
        "download_url": {"type": "string", "minLength": 1},
    },
}


def get_app_config_dir() -> Path:
    """Per-user configuration directory, used when no app data location exists."""
    config_location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.ConfigLocation)
    return Path(config_location) / APP_ORGANIZATION / APP_NAME


def get_default_open_dir() -> str:
    """Return the directory the file picker starts in when nothing is stored."""
    pictures_dir = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.PicturesLocation)
    if pictures_dir and Path(pictures_dir).exists():
        return pictures_dir
    return str(Path.home())


def normalize_base_url(url: str) -> str:
    """
    Normalize an API base URL.

    Strips surrounding whitespace and any trailing slashes so endpoint paths
    can be appended with a single "/".

    Raises:
        ValueError: If the URL is empty or not http(s)
    """
    url = url.strip().rstrip("/")
    if not url:
        raise ValueError("API base URL must not be empty")
    if not url.startswith(("http://", "https://")):
        raise ValueError(f"API base URL must start with http:// or https://: {url}")
    return url


def setup_qsettings() -> None:
    """Set the identifiers QSettings derives its storage location from."""
    QCoreApplication.setOrganizationName(APP_ORGANIZATION)
    QCoreApplication.setApplicationName(APP_NAME)
