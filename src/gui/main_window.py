"""
Main window for the Image Converter GUI application.

This module contains the MainWindow class which provides the main
user interface for the application.
"""

import logging

from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QMainWindow, QPushButton

from core.config_manager import ConfigManager
from core.conversion_state import SessionSnapshot
from core.orchestrator import ConversionOrchestrator
from gui.conversion_handler import ConversionHandler, TaskScheduler, schedule_on_running_loop
from gui.handlers.file_handler import FileHandler
from gui.handlers.ui_state_handler import UIStateHandler
from gui.utils.desktop import open_download_url
from gui.widgets.drag_drop import DragDropLabel
from gui.widgets.main_window_ui import MainWindowUI


class MainWindow(QMainWindow):
    """
    Main application window.

    Subscribes to the orchestrator's SessionState and forwards user actions
    to the orchestrator; it never changes session state directly.
    """

    def __init__(
        self,
        orchestrator: ConversionOrchestrator,
        config_manager: ConfigManager | None = None,
        scheduler: TaskScheduler = schedule_on_running_loop,
    ) -> None:
        super().__init__()
        self._logger = logging.getLogger(__name__)

        self.orchestrator = orchestrator
        self.config_manager = config_manager or ConfigManager()

        self.ui = MainWindowUI(self)
        self.ui.setup_ui()

        self.file_handler = FileHandler(self)
        self.ui_state_handler = UIStateHandler(self)
        self.conversion_handler = ConversionHandler(orchestrator, parent_widget=self, scheduler=scheduler)

        self._connect_signals()

        # Initial render
        self.ui_state_handler.render(orchestrator.state.snapshot())

    def _connect_signals(self) -> None:
        """Connect UI signals to their handlers."""
        self.orchestrator.state.stateChanged.connect(self._on_state_changed)

        if self.ui.browse_button:
            self.ui.browse_button.clicked.connect(self.file_handler.on_browse_clicked)

        if self.ui.drag_drop_label:
            self.ui.drag_drop_label.fileAccepted.connect(self.file_handler.on_file_accepted)
            self.ui.drag_drop_label.clicked.connect(self.file_handler.on_browse_clicked)

        if self.ui.format_selector:
            self.ui.format_selector.formatChosen.connect(self.file_handler.on_format_chosen)

        if self.ui.convert_button:
            self.ui.convert_button.clicked.connect(self.on_convert_clicked)

        if self.ui.start_over_button:
            self.ui.start_over_button.clicked.connect(self.on_reset_clicked)

        if self.ui.result_panel:
            self.ui.result_panel.downloadRequested.connect(self.on_download_requested)
            self.ui.result_panel.resetRequested.connect(self.on_reset_clicked)

    def _on_state_changed(self, snapshot: SessionSnapshot) -> None:
        self.ui_state_handler.render(snapshot)

    def on_convert_clicked(self) -> None:
        self.conversion_handler.start_conversion()

    def on_reset_clicked(self) -> None:
        self.conversion_handler.reset()

    def on_download_requested(self, url: str) -> None:
        self._logger.info(f"Opening download URL: {url}")
        open_download_url(url, parent=self)

    def closeEvent(self, event: QCloseEvent) -> None:
        task = self.conversion_handler.current_task
        if task is not None and not task.done():
            self._logger.info("Window closing with a conversion in flight; abandoning it")
            task.cancel()
        event.accept()

    # Property accessors for UI components
    @property
    def drag_drop_label(self) -> DragDropLabel | None:
        return self.ui.drag_drop_label

    @property
    def convert_button(self) -> QPushButton:
        if self.ui.convert_button is None:
            raise AttributeError("convert_button not found in UI")
        return self.ui.convert_button
