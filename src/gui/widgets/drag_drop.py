"""
Drop zone for choosing the input file.
"""

from PySide6.QtCore import QSize, Qt, QTimer, Signal
from PySide6.QtGui import QDragEnterEvent, QDragLeaveEvent, QDragMoveEvent, QDropEvent, QKeyEvent, QMouseEvent
from PySide6.QtWidgets import QApplication, QLabel, QSizePolicy, QWidget

from core.file_intake import SelectedFile, extract_local_paths_from_mimedata
from gui.utils.styling import create_drag_zone_stylesheet

PROMPT_TEXT = "🖼 Drop a file here or click to browse\n\nImages: JPG, PNG, GIF, BMP, TIFF, WebP"
HOVER_TEXT = "🖼 Drop your file here"
ACCESSIBLE_PROMPT = "Drop a file here, or press Enter to browse for one."
REJECT_DISPLAY_MS = 3000

_ACTIVATION_KEYS = (Qt.Key.Key_Return, Qt.Key.Key_Enter, Qt.Key.Key_Space)


class DragDropLabel(QLabel):
    """
    Label that accepts dropped files and doubles as a browse button.

    Only the first local file of a drop is reported; drops without any local
    file are ignored. The zone never decides whether a file is usable, it
    just forwards the path.

    Signals:
        fileAccepted(str): Path of the dropped file
        fileRejected(str): Message shown after the file was refused
        clicked(): The user asked for the file picker
    """

    fileAccepted = Signal(str)
    fileRejected = Signal(str)
    clicked = Signal()

    STATE_NORMAL = "normal"
    STATE_HOVER = "hover"
    STATE_REJECT = "reject"

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("dragZone")
        self.setAcceptDrops(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(self.minimumSizeHint())
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setWordWrap(True)
        self.setAccessibleName("File drop zone")
        self.setAccessibleDescription(ACCESSIBLE_PROMPT)
        self.setToolTip(ACCESSIBLE_PROMPT)

        self._selected_path = ""
        self._idle_text = PROMPT_TEXT
        self._current_state = self.STATE_NORMAL

        self._reject_timer = QTimer(self)
        self._reject_timer.setSingleShot(True)
        self._reject_timer.setInterval(REJECT_DISPLAY_MS)
        self._reject_timer.timeout.connect(lambda: self._set_state(self.STATE_NORMAL))

        self._apply_state()

    # Visual state

    def _apply_state(self) -> None:
        self.setStyleSheet(create_drag_zone_stylesheet(self._current_state))
        if self._current_state == self.STATE_NORMAL:
            self.setText(self._idle_text)
        elif self._current_state == self.STATE_HOVER:
            self.setText(HOVER_TEXT)
        # Reject text is set by set_error
        self.style().unpolish(self)
        self.style().polish(self)

    def _set_state(self, state: str) -> None:
        if state != self._current_state:
            self._current_state = state
            self._apply_state()

    def _reset_to_normal_delayed(self) -> None:
        self._reject_timer.start()

    def _show_idle(self, text: str) -> None:
        self._idle_text = text
        self._reject_timer.stop()
        self._current_state = self.STATE_NORMAL
        self._apply_state()

    def _restore_cursor(self) -> None:
        while QApplication.overrideCursor():
            QApplication.restoreOverrideCursor()

    # Drag and drop

    def dragEnterEvent(self, event: QDragEnterEvent) -> None:
        if not extract_local_paths_from_mimedata(event.mimeData()):
            event.ignore()
            return
        event.acceptProposedAction()
        self._set_state(self.STATE_HOVER)
        QApplication.setOverrideCursor(Qt.CursorShape.DragCopyCursor)

    def dragMoveEvent(self, event: QDragMoveEvent) -> None:
        if event.mimeData().hasUrls():
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragLeaveEvent(self, event: QDragLeaveEvent) -> None:
        self._restore_cursor()
        self._set_state(self.STATE_NORMAL)
        event.accept()

    def dropEvent(self, event: QDropEvent) -> None:
        self._restore_cursor()
        self._set_state(self.STATE_NORMAL)

        paths = extract_local_paths_from_mimedata(event.mimeData())
        if not paths:
            event.ignore()
            return

        event.acceptProposedAction()
        self.fileAccepted.emit(str(paths[0]))

    # Click and keyboard activation

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit()
        super().mouseReleaseEvent(event)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if event.key() in _ACTIVATION_KEYS:
            self.clicked.emit()
            return
        super().keyPressEvent(event)

    # Driven by the window

    def set_file_selected(self, selected_file: SelectedFile) -> None:
        """Show the chosen file's name and size."""
        self._selected_path = str(selected_file.path)
        self._show_idle(f"✅ {selected_file.name}\n\n{selected_file.size_mb:.2f} MB")
        self.setAccessibleDescription(f"File selected: {selected_file.name}")

    def set_error(self, error_message: str) -> None:
        """Show why a file was refused; the zone recovers after a few seconds."""
        self._set_state(self.STATE_REJECT)
        self.setText(f"❌ {error_message}")
        self.fileRejected.emit(error_message)
        self._reset_to_normal_delayed()

    def clear_selection(self) -> None:
        self._selected_path = ""
        self._restore_cursor()
        self._show_idle(PROMPT_TEXT)
        self.setAccessibleDescription(ACCESSIBLE_PROMPT)

    def selected_path(self) -> str:
        return self._selected_path

    def sizeHint(self) -> QSize:
        return QSize(400, 200)

    def minimumSizeHint(self) -> QSize:
        return QSize(300, 150)
