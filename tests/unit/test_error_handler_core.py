"""
Tests for ErrorHandler core functionality.

Tests cover:
- Singleton pattern behavior
- Exception capture and normalization
- Context sanitization and signal emission
"""

from unittest.mock import patch

import pytest
from PySide6.QtWidgets import QApplication

from core.error_handler import ErrorHandler, get_error_handler
from core.errors import BaseAppError, ErrorCode, ErrorType, FileError, UploadError


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """Create QApplication for all tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


class TestErrorHandlerSingleton:
    """Test the singleton pattern implementation."""

    def test_singleton_pattern(self):
        """Test that ErrorHandler follows singleton pattern."""
        assert ErrorHandler() is ErrorHandler()

    def test_get_error_handler_returns_singleton(self):
        assert get_error_handler() is ErrorHandler()

    def test_initialization_only_once(self):
        """Test that initialization only happens once despite multiple instantiations."""
        ErrorHandler._instance = None

        with patch.object(ErrorHandler, "_setup_logging") as mock_setup:
            handler1 = ErrorHandler()
            handler2 = ErrorHandler()

            assert mock_setup.call_count == 1
            assert handler1 is handler2


class TestErrorCapture:
    """Test exception capture and normalization."""

    def setup_method(self):
        self.handler = ErrorHandler()

    def test_capture_basic_exception(self):
        app_error = self.handler.capture(ValueError("Test error"))

        assert app_error.type == ErrorType.VALIDATION
        assert app_error.code == ErrorCode.INVALID_INPUT
        assert "ValueError: Test error" in app_error.technical_message

    def test_capture_with_context(self):
        app_error = self.handler.capture(FileNotFoundError("gone"), {"file_path": "/test/a.png"})

        assert app_error.type == ErrorType.FILE
        assert app_error.context["file_path"] == "/test/a.png"
        assert "traceback" in app_error.context

    def test_capture_already_app_error(self):
        original = FileError(code=ErrorCode.PERMISSION_DENIED, user_message="Cannot access file: a.png")

        app_error = self.handler.capture(original, {"attempt_id": "1234abcd"})

        assert app_error is original
        assert app_error.context["attempt_id"] == "1234abcd"

    def test_sensitive_context_is_redacted(self):
        context = {
            "user_session": "abc123def456g",
            "file_data": "aGVsbG8=",
            "api_key": "key123",
            "file_name": "photo.jpg",
        }

        app_error = self.handler.capture(ValueError("Test error"), context)

        assert app_error.context["user_session"] == "[REDACTED]"
        assert app_error.context["file_data"] == "[REDACTED]"
        assert app_error.context["api_key"] == "[REDACTED]"
        assert app_error.context["file_name"] == "photo.jpg"

    def test_long_values_are_truncated(self):
        app_error = self.handler.capture(ValueError("x"), {"note": "a" * 500})
        assert len(app_error.context["note"]) == 203


class TestErrorHandling:
    """Test handle() logging and signals."""

    def test_handle_emits_signal(self, qtbot):
        handler = get_error_handler()

        with qtbot.waitSignal(handler.errorOccurred, timeout=1000) as blocker:
            result = handler.handle(UploadError("boom"))

        assert isinstance(result, BaseAppError)
        assert blocker.args[0] is result

    def test_handle_reraises_keyboard_interrupt(self):
        with pytest.raises(KeyboardInterrupt):
            get_error_handler().handle(KeyboardInterrupt())


class TestExceptionHooks:
    """Test installation of global exception hooks."""

    def test_install_and_restore(self):
        import sys

        handler = get_error_handler()
        original = sys.excepthook

        handler.install_hooks()
        try:
            assert sys.excepthook is not original
        finally:
            handler.restore_hooks()

        assert sys.excepthook is handler._original_excepthook
