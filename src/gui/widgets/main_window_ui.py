"""
UI setup and layout management for the main window.

This module provides UI setup functionality for the main window,
separating layout concerns from business logic.
"""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from gui.widgets.drag_drop import DragDropLabel
from gui.widgets.format_selector import FormatSelector
from gui.widgets.result_panel import ResultPanel
from gui.widgets.status_indicator import StatusIndicatorWidget


class MainWindowUI:
    """
    Handles UI setup and layout for the main window.

    Separates UI construction from business logic and event handling.
    """

    def __init__(self, main_window: QMainWindow) -> None:
        self.main_window = main_window
        self.central_widget: QWidget | None = None

        self.title_label: QLabel | None = None
        self.drag_drop_label: DragDropLabel | None = None
        self.browse_button: QPushButton | None = None
        self.format_selector: FormatSelector | None = None
        self.convert_button: QPushButton | None = None
        self.status_indicator: StatusIndicatorWidget | None = None
        self.error_label: QLabel | None = None
        self.start_over_button: QPushButton | None = None
        self.result_panel: ResultPanel | None = None

    def setup_ui(self) -> None:
        """Set up the complete user interface."""
        self.main_window.setWindowTitle("Image Converter")
        self.main_window.setMinimumSize(520, 560)
        self._setup_central_widget()
        self._setup_shortcuts()

    def _setup_central_widget(self) -> None:
        self.central_widget = QWidget()
        self.main_window.setCentralWidget(self.central_widget)

        layout = QVBoxLayout(self.central_widget)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(16)

        # Header
        header = QHBoxLayout()
        self.title_label = QLabel("Image Converter")
        self.title_label.setObjectName("titleLabel")
        self.title_label.setStyleSheet("font-size: 20px; font-weight: bold;")
        header.addWidget(self.title_label)
        header.addStretch()
        self.status_indicator = StatusIndicatorWidget()
        header.addWidget(self.status_indicator)
        layout.addLayout(header)

        # File selection
        self.drag_drop_label = DragDropLabel()
        layout.addWidget(self.drag_drop_label, 1)

        self.browse_button = QPushButton("Browse...")
        self.browse_button.setObjectName("browseButton")
        self.browse_button.setAccessibleName("Browse for a file")
        layout.addWidget(self.browse_button, 0, Qt.AlignmentFlag.AlignLeft)

        # Target format
        self.format_selector = FormatSelector()
        self.format_selector.setVisible(False)
        layout.addWidget(self.format_selector)

        # Action
        self.convert_button = QPushButton("Convert File")
        self.convert_button.setObjectName("convertButton")
        self.convert_button.setDefault(True)
        self.convert_button.setMinimumHeight(40)
        layout.addWidget(self.convert_button)

        # Outcome
        self.error_label = QLabel()
        self.error_label.setObjectName("errorLabel")
        self.error_label.setWordWrap(True)
        self.error_label.setAccessibleName("Error message")
        self.error_label.setVisible(False)
        layout.addWidget(self.error_label)

        self.start_over_button = QPushButton("Start Over")
        self.start_over_button.setObjectName("startOverButton")
        self.start_over_button.setAccessibleName("Clear the form and start over")
        self.start_over_button.setVisible(False)
        layout.addWidget(self.start_over_button, 0, Qt.AlignmentFlag.AlignLeft)

        self.result_panel = ResultPanel()
        layout.addWidget(self.result_panel)

    def _setup_shortcuts(self) -> None:
        open_shortcut = QShortcut(QKeySequence.StandardKey.Open, self.main_window)
        if self.browse_button:
            open_shortcut.activated.connect(self.browse_button.click)
