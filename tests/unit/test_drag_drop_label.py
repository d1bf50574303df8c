"""
Tests for DragDropLabel widget.
"""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest
from PySide6.QtCore import QMimeData, Qt, QUrl
from PySide6.QtGui import QDragEnterEvent, QDragLeaveEvent, QDragMoveEvent, QDropEvent
from PySide6.QtWidgets import QApplication

from core.file_intake import SelectedFile
from gui.utils.styling import AccessiblePalette
from gui.widgets import DragDropLabel
from gui.widgets.drag_drop import PROMPT_TEXT


@pytest.fixture
def app():
    """Create QApplication instance for tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture
def widget(app):
    """Create DragDropLabel widget for testing."""
    return DragDropLabel()


def mime_with(*paths) -> QMimeData:
    mime = QMimeData()
    mime.setUrls([QUrl.fromLocalFile(str(p)) for p in paths])
    return mime


class TestDragDropLabelInitialization:
    """Test DragDropLabel initialization and setup."""

    def test_initial_state(self, widget):
        assert widget.acceptDrops() is True
        assert widget._current_state == DragDropLabel.STATE_NORMAL
        assert widget.accessibleName() == "File drop zone"
        assert widget.focusPolicy() == Qt.FocusPolicy.StrongFocus

    def test_initial_text(self, widget):
        assert widget.text() == PROMPT_TEXT
        assert widget.selected_path() == ""

    def test_size_hints(self, widget):
        assert widget.sizeHint().width() >= 400
        assert widget.minimumSizeHint().height() >= 150


class TestDragDropLabelStates:
    """Test visual state management."""

    def test_hover_state(self, widget):
        widget._set_state(DragDropLabel.STATE_HOVER)

        assert AccessiblePalette.DRAG_HOVER_BORDER in widget.styleSheet()
        assert "Drop your file here" in widget.text()

    def test_reject_state(self, widget):
        widget._set_state(DragDropLabel.STATE_REJECT)
        assert AccessiblePalette.DRAG_REJECT_BORDER in widget.styleSheet()


class TestDragDropLabelDragEvents:
    """Test drag and drop event handling."""

    def test_drag_enter_with_file(self, widget, tmp_path):
        photo = tmp_path / "photo.jpg"
        photo.write_bytes(b"jpg")

        event = Mock(spec=QDragEnterEvent)
        event.mimeData.return_value = mime_with(photo)

        widget.dragEnterEvent(event)

        event.acceptProposedAction.assert_called_once()
        assert widget._current_state == DragDropLabel.STATE_HOVER
        widget._restore_cursor()

    def test_drag_enter_without_files(self, widget):
        mime_data = QMimeData()
        mime_data.setText("some text")
        event = Mock(spec=QDragEnterEvent)
        event.mimeData.return_value = mime_data

        widget.dragEnterEvent(event)

        event.ignore.assert_called_once()
        assert widget._current_state == DragDropLabel.STATE_NORMAL

    def test_drag_move_without_urls(self, widget):
        mime_data = QMimeData()
        mime_data.setText("text")
        event = Mock(spec=QDragMoveEvent)
        event.mimeData.return_value = mime_data

        widget.dragMoveEvent(event)

        event.ignore.assert_called_once()

    def test_drag_leave(self, widget):
        widget._set_state(DragDropLabel.STATE_HOVER)
        event = Mock(spec=QDragLeaveEvent)

        widget.dragLeaveEvent(event)

        assert widget._current_state == DragDropLabel.STATE_NORMAL
        event.accept.assert_called_once()


class TestDragDropLabelDropEvents:
    """Test drop event handling."""

    def test_drop_emits_first_file(self, widget, tmp_path):
        first = tmp_path / "first.png"
        second = tmp_path / "second.gif"
        first.write_bytes(b"png")
        second.write_bytes(b"gif")

        event = Mock(spec=QDropEvent)
        event.mimeData.return_value = mime_with(first, second)
        received = []
        widget.fileAccepted.connect(received.append)

        widget.dropEvent(event)

        event.acceptProposedAction.assert_called_once()
        assert received == [str(first.resolve())]

    def test_drop_without_files_is_ignored(self, widget):
        mime_data = QMimeData()
        mime_data.setText("text")
        event = Mock(spec=QDropEvent)
        event.mimeData.return_value = mime_data
        received = []
        widget.fileAccepted.connect(received.append)

        widget.dropEvent(event)

        event.ignore.assert_called_once()
        assert received == []


class TestDragDropLabelPublicMethods:
    """Test public display methods."""

    def test_set_file_selected(self, widget):
        selected = SelectedFile(path=Path("/tmp/photo.jpg"), name="photo.jpg", content_type="image/jpeg", size=1048576)

        widget.set_file_selected(selected)

        assert "photo.jpg" in widget.text()
        assert "1.00 MB" in widget.text()
        assert widget.selected_path() == str(Path("/tmp/photo.jpg"))

    def test_set_error(self, widget):
        received = []
        widget.fileRejected.connect(received.append)

        with patch.object(widget, "_reset_to_normal_delayed") as mock_reset:
            widget.set_error("File not found: gone.png")

        assert widget._current_state == DragDropLabel.STATE_REJECT
        assert "File not found: gone.png" in widget.text()
        assert received == ["File not found: gone.png"]
        mock_reset.assert_called_once()

    def test_clear_selection(self, widget):
        selected = SelectedFile(path=Path("/tmp/a.png"), name="a.png", content_type="image/png", size=10)
        widget.set_file_selected(selected)

        widget.clear_selection()

        assert widget.text() == PROMPT_TEXT
        assert widget.selected_path() == ""

    def test_click_requests_picker(self, widget, qtbot):
        qtbot.addWidget(widget)
        widget.show()

        with qtbot.waitSignal(widget.clicked, timeout=1000):
            qtbot.mouseClick(widget, Qt.MouseButton.LeftButton)

    def test_enter_key_requests_picker(self, widget, qtbot):
        qtbot.addWidget(widget)

        with qtbot.waitSignal(widget.clicked, timeout=1000):
            qtbot.keyClick(widget, Qt.Key.Key_Return)
