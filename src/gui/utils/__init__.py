"""
GUI-specific utilities for the Image Converter application.

This module contains utility functions and classes that are specific
to the GUI implementation.
"""

from .desktop import open_download_url
from .styling import (
    AccessiblePalette,
    StyleSheets,
    apply_status_style,
    create_drag_zone_stylesheet,
    get_status_indicator_color,
)

__all__ = [
    "AccessiblePalette",
    "StyleSheets",
    "apply_status_style",
    "create_drag_zone_stylesheet",
    "get_status_indicator_color",
    "open_download_url",
]
