"""
Target format selector built from the format catalog.
"""

from PySide6.QtCore import QSignalBlocker, Signal
from PySide6.QtWidgets import QComboBox, QHBoxLayout, QLabel, QWidget

from core.formats import TargetFormat, iter_formats

PLACEHOLDER_TEXT = "Select a format"


class FormatSelector(QWidget):
    """
    Combo box listing the catalog formats in display order.

    Signals:
        formatChosen(str): Identifier picked by the user, or "" for none
    """

    formatChosen = Signal(str)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("formatSelector")

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self.label = QLabel("Convert to:")
        layout.addWidget(self.label)

        self.combo = QComboBox()
        self.combo.setAccessibleName("Target format")
        self.combo.addItem(PLACEHOLDER_TEXT, "")
        for fmt in iter_formats():
            self.combo.addItem(fmt.label, fmt.identifier)
        self.label.setBuddy(self.combo)
        layout.addWidget(self.combo, 1)

        self.combo.activated.connect(self._on_activated)

    def _on_activated(self, index: int) -> None:
        self.formatChosen.emit(self.combo.itemData(index) or "")

    def set_current(self, target_format: TargetFormat | None) -> None:
        """Show a format without emitting formatChosen."""
        identifier = target_format.identifier if target_format else ""
        with QSignalBlocker(self.combo):
            index = self.combo.findData(identifier)
            self.combo.setCurrentIndex(max(index, 0))

    def current_identifier(self) -> str:
        return self.combo.currentData() or ""
