"""
Status badge shown in the window header.
"""

from enum import Enum

from PySide6.QtWidgets import QHBoxLayout, QLabel, QWidget

from core.conversion_state import SessionPhase
from gui.utils.styling import AccessiblePalette, get_status_indicator_color

DOT_SIZE = 12


class StatusState(Enum):
    """Badge states: (short label, longer description for tooltips and screen readers)."""

    IDLE = ("Idle", "Choose an image to convert")
    READY = ("Ready", "File selected, ready to convert")
    UPLOADING = ("Uploading", "Uploading file")
    CONVERTING = ("Converting", "Converting file")
    SUCCEEDED = ("Completed", "Conversion completed successfully")
    FAILED = ("Error", "Conversion failed")

    @property
    def display_name(self) -> str:
        return self.value[0]

    @property
    def description(self) -> str:
        return self.value[1]

    @property
    def color(self) -> str:
        return get_status_indicator_color(self.name)

    @classmethod
    def from_phase(cls, phase: SessionPhase) -> "StatusState":
        if phase is SessionPhase.FILE_SELECTED:
            return cls.READY
        return cls[phase.name]


def _dot_stylesheet(color: str) -> str:
    radius = DOT_SIZE // 2
    return (
        f"QLabel {{ border-radius: {radius}px; background-color: {color}; "
        f"border: 1px solid {AccessiblePalette.BORDER_DEFAULT}; }}"
    )


class StatusIndicatorWidget(QWidget):
    """Colored dot plus label reflecting the current session phase."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("statusIndicator")
        self.setAccessibleName("Conversion status")

        self.status_dot = QLabel(self)
        self.status_dot.setFixedSize(DOT_SIZE, DOT_SIZE)
        self.status_dot.setAccessibleName("Status indicator dot")

        self.status_text = QLabel(self)
        self.status_text.setAccessibleName("Status text")

        row = QHBoxLayout(self)
        row.setContentsMargins(0, 0, 0, 0)
        row.setSpacing(8)
        row.addWidget(self.status_dot)
        row.addWidget(self.status_text)
        row.addStretch()

        self._state = StatusState.IDLE
        self.set_status(StatusState.IDLE)

    def set_status(self, state: StatusState) -> None:
        self._state = state
        self.status_dot.setStyleSheet(_dot_stylesheet(state.color))
        self.status_text.setText(state.display_name)
        self.setAccessibleDescription(state.description)
        self.setToolTip(f"{state.display_name}: {state.description}")

    def set_phase(self, phase: SessionPhase) -> None:
        """Show the badge for a session phase."""
        self.set_status(StatusState.from_phase(phase))

    def get_status(self) -> StatusState:
        return self._state
