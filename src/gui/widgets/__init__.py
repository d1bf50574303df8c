"""
Reusable GUI widgets for the Image Converter application.

This module contains custom widgets that can be reused across different
parts of the application.
"""

from .drag_drop import DragDropLabel
from .format_selector import FormatSelector
from .result_panel import ResultPanel
from .status_indicator import StatusIndicatorWidget, StatusState

__all__ = ["DragDropLabel", "FormatSelector", "ResultPanel", "StatusIndicatorWidget", "StatusState"]
