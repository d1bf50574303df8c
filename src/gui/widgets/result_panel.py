"""
Panel shown after a successful conversion.
"""

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from core.conversion_state import ConversionResult
from gui.utils.styling import apply_status_style


class ResultPanel(QFrame):
    """
    Shows the download action for a conversion result.

    Signals:
        downloadRequested(str): Download URL to open
        resetRequested(): User wants to convert another file
    """

    downloadRequested = Signal(str)
    resetRequested = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("resultPanel")
        self._download_url = ""

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.message_label = QLabel("Conversion complete!")
        apply_status_style(self.message_label, "success")
        layout.addWidget(self.message_label)

        buttons = QHBoxLayout()
        self.download_button = QPushButton("Download Converted File")
        self.download_button.setObjectName("downloadButton")
        self.download_button.clicked.connect(self._on_download_clicked)
        buttons.addWidget(self.download_button)

        self.reset_button = QPushButton("Convert Another File")
        self.reset_button.setObjectName("resetButton")
        self.reset_button.clicked.connect(self.resetRequested)
        buttons.addWidget(self.reset_button)
        layout.addLayout(buttons)

        self.setVisible(False)

    def _on_download_clicked(self) -> None:
        if self._download_url:
            self.downloadRequested.emit(self._download_url)

    def show_result(self, result: ConversionResult | None) -> None:
        """Show the panel for a result, or hide it when there is none."""
        self._download_url = result.download_url if result else ""
        self.download_button.setToolTip(self._download_url)
        self.setVisible(result is not None)

    @property
    def download_url(self) -> str:
        return self._download_url
