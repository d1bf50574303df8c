"""
UI state management functionality for the main window.

This module renders SessionState snapshots into the widgets. It is the only
place widgets are updated from session state.
"""

import logging
from typing import TYPE_CHECKING

from core.conversion_state import ConversionState, SessionSnapshot
from gui.utils.styling import apply_status_style

if TYPE_CHECKING:
    from gui.main_window import MainWindow

CONVERT_BUTTON_TEXT = {
    ConversionState.UPLOADING: "Uploading...",
    ConversionState.CONVERTING: "Converting...",
}
DEFAULT_CONVERT_TEXT = "Convert File"


class UIStateHandler:
    """Handles UI state management for the main window."""

    def __init__(self, main_window: "MainWindow") -> None:
        self.main_window = main_window
        self._logger = logging.getLogger(__name__)

    def render(self, snapshot: SessionSnapshot) -> None:
        """Update every widget from a session snapshot."""
        ui = self.main_window.ui
        self._logger.debug(f"Rendering phase {snapshot.phase.name}")

        # File selection
        if ui.drag_drop_label:
            if snapshot.selected_file:
                ui.drag_drop_label.set_file_selected(snapshot.selected_file)
            else:
                ui.drag_drop_label.clear_selection()
            ui.drag_drop_label.setEnabled(not snapshot.is_busy)

        if ui.browse_button:
            ui.browse_button.setEnabled(not snapshot.is_busy)

        # Unrecognized files get no suggestion, so the user must be able to pick one
        if ui.format_selector:
            ui.format_selector.setVisible(snapshot.selected_file is not None)
            ui.format_selector.set_current(snapshot.target_format)
            ui.format_selector.setEnabled(not snapshot.is_busy)

        # Convert button
        if ui.convert_button:
            ui.convert_button.setEnabled(snapshot.can_start)
            ui.convert_button.setText(CONVERT_BUTTON_TEXT.get(snapshot.request_state, DEFAULT_CONVERT_TEXT))
            ui.convert_button.setVisible(snapshot.result is None)

        # Status
        if ui.status_indicator:
            ui.status_indicator.set_phase(snapshot.phase)

        # Error message
        if ui.error_label:
            ui.error_label.setText(snapshot.error_message)
            ui.error_label.setVisible(bool(snapshot.error_message))
            if snapshot.error_message:
                apply_status_style(ui.error_label, "error")

        if ui.start_over_button:
            ui.start_over_button.setVisible(bool(snapshot.error_message))

        # Result
        if ui.result_panel:
            ui.result_panel.show_result(snapshot.result)
