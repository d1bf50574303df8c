"""
Shared styling for the Image Converter GUI.

Colors come from one accessible palette (WCAG AA contrast for text) and the
stylesheets are generated from it, so every widget agrees on what "error" or
"busy" looks like.
"""

from typing import Any, Protocol


class StyleableWidget(Protocol):
    """Anything that takes a Qt stylesheet."""

    def setStyleSheet(self, styleSheet: str) -> None: ...
    def style(self) -> Any: ...


class AccessiblePalette:
    """Color constants; text/background pairs meet a 4.5:1 contrast ratio."""

    TEXT_PRIMARY = "#212529"
    TEXT_SECONDARY = "#6c757d"
    BACKGROUND_SECONDARY = "#f8f9fa"

    SUCCESS_TEXT = "#198754"
    WARNING_TEXT = "#856404"
    WARNING_BG = "#fff3cd"
    ERROR_TEXT = "#721c24"
    ERROR_BG = "#f8d7da"

    BORDER_DEFAULT = "#dee2e6"
    BORDER_SUCCESS = "#198754"
    BORDER_ERROR = "#dc3545"

    # Status dot
    STATUS_IDLE_COLOR = "#6c757d"
    STATUS_READY_COLOR = "#0d6efd"
    STATUS_BUSY_COLOR = "#fd7e14"
    STATUS_COMPLETED_COLOR = "#198754"
    STATUS_ERROR_COLOR = "#dc3545"

    # Drop zone
    DRAG_NORMAL_BORDER = "#6c757d"
    DRAG_NORMAL_BG = "rgba(128, 128, 128, 20)"
    DRAG_HOVER_BORDER = "#0d6efd"
    DRAG_HOVER_BG = "rgba(13, 110, 253, 0.1)"
    DRAG_REJECT_BORDER = "#dc3545"
    DRAG_REJECT_BG = "rgba(220, 53, 69, 0.1)"


# status -> (text color, background, border, bold)
_LABEL_STYLES = {
    "success": (AccessiblePalette.SUCCESS_TEXT, AccessiblePalette.BACKGROUND_SECONDARY, AccessiblePalette.BORDER_SUCCESS, True),
    "error": (AccessiblePalette.ERROR_TEXT, AccessiblePalette.ERROR_BG, AccessiblePalette.BORDER_ERROR, True),
    "warning": (AccessiblePalette.WARNING_TEXT, AccessiblePalette.WARNING_BG, AccessiblePalette.WARNING_TEXT, True),
    "default": (AccessiblePalette.TEXT_SECONDARY, AccessiblePalette.BACKGROUND_SECONDARY, AccessiblePalette.BORDER_DEFAULT, False),
}

_STATUS_DOT_COLORS = {
    "IDLE": AccessiblePalette.STATUS_IDLE_COLOR,
    "READY": AccessiblePalette.STATUS_READY_COLOR,
    "UPLOADING": AccessiblePalette.STATUS_BUSY_COLOR,
    "CONVERTING": AccessiblePalette.STATUS_BUSY_COLOR,
    "SUCCEEDED": AccessiblePalette.STATUS_COMPLETED_COLOR,
    "FAILED": AccessiblePalette.STATUS_ERROR_COLOR,
}

# drop zone state -> (border, background, text color, bold)
_DRAG_ZONE_STYLES = {
    "normal": (AccessiblePalette.DRAG_NORMAL_BORDER, AccessiblePalette.DRAG_NORMAL_BG, "palette(window-text)", False),
    "hover": (AccessiblePalette.DRAG_HOVER_BORDER, AccessiblePalette.DRAG_HOVER_BG, AccessiblePalette.TEXT_PRIMARY, True),
    "reject": (AccessiblePalette.DRAG_REJECT_BORDER, AccessiblePalette.DRAG_REJECT_BG, AccessiblePalette.DRAG_REJECT_BORDER, True),
}


class StyleSheets:
    """Stylesheet builders for message labels."""

    @staticmethod
    def get_status_label_style(status: str = "default") -> str:
        """Stylesheet for a message label: "success", "error", "warning" or "default"."""
        color, background, border, bold = _LABEL_STYLES.get(status, _LABEL_STYLES["default"])
        return f"""
            QLabel {{
                color: {color};
                font-size: 14px;
                font-weight: {'bold' if bold else 'normal'};
                padding: 10px;
                background-color: {background};
                border: 1px solid {border};
                border-radius: 4px;
            }}
        """


def get_status_indicator_color(status_state: str) -> str:
    """Dot color for a StatusState name; unknown names get the idle color."""
    return _STATUS_DOT_COLORS.get(status_state, AccessiblePalette.STATUS_IDLE_COLOR)


def apply_status_style(widget: StyleableWidget, status: str = "default") -> None:
    """Restyle a label and repolish it so the change shows immediately."""
    widget.setStyleSheet(StyleSheets.get_status_label_style(status))
    widget.style().unpolish(widget)
    widget.style().polish(widget)


def create_drag_zone_stylesheet(state: str = "normal") -> str:
    """Stylesheet for the drop zone in its "normal", "hover" or "reject" state."""
    border, background, color, bold = _DRAG_ZONE_STYLES.get(state, _DRAG_ZONE_STYLES["normal"])
    return f"""
        QLabel#dragZone {{
            border: 2px dashed {border};
            border-radius: 12px;
            background-color: {background};
            color: {color};
            font-size: 14px;
            font-weight: {'bold' if bold else 'normal'};
            padding: 24px;
            min-height: 120px;
        }}
    """
