"""
File handling functionality for the main window.

This module routes manual picks and drops into the orchestrator's intake
and reports unusable files on the drop zone.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from PySide6.QtWidgets import QFileDialog

from core.errors import BaseAppError
from core.formats import IMAGE_EXTENSIONS

if TYPE_CHECKING:
    from gui.main_window import MainWindow

IMAGE_FILTER = "Images ({});;All Files (*)".format(" ".join(f"*.{ext}" for ext in sorted(IMAGE_EXTENSIONS)))


class FileHandler:
    """Handles file-related operations for the main window."""

    def __init__(self, main_window: "MainWindow") -> None:
        self.main_window = main_window
        self._logger = logging.getLogger(__name__)

    def on_browse_clicked(self) -> None:
        """Open the file picker and take the chosen file."""
        last_dir = self.main_window.config_manager.get("last_open_dir")

        file_path, _ = QFileDialog.getOpenFileName(self.main_window, "Select File", last_dir, IMAGE_FILTER)

        if not file_path:
            # Picker cancelled: nothing to take
            return

        self.main_window.config_manager.set("last_open_dir", str(Path(file_path).parent))
        self.apply_source(file_path)

    def on_file_accepted(self, file_path: str) -> None:
        """Handle a file dropped on the drop zone."""
        self.apply_source(file_path)

    def apply_source(self, source: object) -> None:
        """Hand an intake source to the orchestrator, showing any rejection."""
        try:
            selected = self.main_window.orchestrator.select_file(source)
        except BaseAppError as e:
            self._logger.warning(f"File rejected: {e.user_message}")
            if self.main_window.drag_drop_label:
                self.main_window.drag_drop_label.set_error(e.user_message)
            return

        if selected is not None:
            self._logger.info(f"File selected: {selected.name}")

    def on_format_chosen(self, identifier: str) -> None:
        """Apply the user's target format choice."""
        try:
            self.main_window.orchestrator.set_target_format(identifier or None)
        except BaseAppError as e:
            self._logger.warning(f"Format rejected: {e.user_message}")
