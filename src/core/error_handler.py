"""
Error reporting and logging setup for the Image Converter GUI.

A single ErrorHandler normalizes exceptions into BaseAppError values, writes
them to a rotating log file under the application data directory and emits
``errorOccurred`` so the window can react.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
import threading
import traceback
from pathlib import Path
from typing import Any, ClassVar

from PySide6.QtCore import QObject, QStandardPaths, Signal

from .config import get_app_config_dir
from .errors import BaseAppError, map_exception

ERROR_LOGGER_NAME = "image_converter_gui.errors"
CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
ERROR_LOG_FORMAT = "%(asctime)s | %(levelname)s | code=%(app_code)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 5

# Context keys whose values must never reach the log file
SENSITIVE_KEYS = ("password", "token", "key", "secret", "session", "file_data")
MAX_CONTEXT_ITEMS = 20
MAX_CONTEXT_VALUE = 200


def get_log_dir() -> Path:
    """Directory holding ``app.log`` and its rotated backups."""
    app_data = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.AppDataLocation)
    return (Path(app_data) if app_data else get_app_config_dir()) / "logs"


def sanitize_context(context: dict[str, Any]) -> dict[str, str]:
    """
    Make error context safe to log.

    Values of sensitive keys (session token, encoded file payload...) are
    redacted, long values are truncated and the number of entries is capped.
    """
    safe: dict[str, str] = {}
    for index, (key, value) in enumerate(context.items()):
        if index == MAX_CONTEXT_ITEMS:
            safe["..."] = f"({len(context) - MAX_CONTEXT_ITEMS} more items truncated)"
            break
        if any(marker in key.lower() for marker in SENSITIVE_KEYS):
            safe[key] = "[REDACTED]"
            continue
        try:
            text = value if isinstance(value, str) else repr(value)
        except Exception:
            text = "[REPR_FAILED]"
        safe[key] = text if len(text) <= MAX_CONTEXT_VALUE else text[:MAX_CONTEXT_VALUE] + "..."
    return safe


def _build_error_logger(log_dir: Path) -> logging.Logger:
    error_logger = logging.getLogger(ERROR_LOGGER_NAME)
    error_logger.setLevel(logging.DEBUG)
    error_logger.propagate = False
    if error_logger.handlers:
        return error_logger

    log_dir.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(ERROR_LOG_FORMAT, datefmt=DATE_FORMAT)

    file_handler = logging.handlers.RotatingFileHandler(
        log_dir / "app.log", maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
    )
    file_handler.setFormatter(formatter)
    error_logger.addHandler(file_handler)

    # Errors also show on the console of a development run
    if __debug__:
        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(formatter)
        error_logger.addHandler(console)

    return error_logger


class ErrorHandler(QObject):
    """
    Process-wide error sink.

    Signals:
        errorOccurred(BaseAppError): Emitted for every handled error
    """

    errorOccurred = Signal(object)

    _instance: ClassVar[ErrorHandler | None] = None
    _logger: ClassVar[logging.Logger | None] = None

    def __new__(cls) -> ErrorHandler:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        # Singleton: later constructions reuse the first instance untouched
        if getattr(self, "_initialized", False):
            return
        super().__init__()
        self._initialized = True
        self._original_excepthook = sys.excepthook
        self._original_threading_excepthook = threading.excepthook
        self._setup_logging()

    def _setup_logging(self) -> None:
        try:
            ErrorHandler._logger = _build_error_logger(get_log_dir())
        except OSError as e:
            logging.getLogger(__name__).error(f"Error log file unavailable, logging to console only: {e}")
            ErrorHandler._logger = logging.getLogger(ERROR_LOGGER_NAME)

    def capture(self, exception: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
        """
        Normalize an exception and attach sanitized context and a traceback.

        An exception that already is a BaseAppError is returned itself with
        the context merged in.
        """
        safe_context = sanitize_context(context or {})
        app_error = map_exception(exception, safe_context)
        app_error.context.update(safe_context)

        if not app_error.technical_message:
            app_error.technical_message = f"{type(exception).__name__}: {exception}"

        if "traceback" not in app_error.context:
            frames = traceback.format_exception(type(exception), exception, exception.__traceback__)
            app_error.context["traceback"] = "".join(frames)

        return app_error

    def handle(self, exception: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
        """Capture, log and broadcast an exception."""
        if isinstance(exception, SystemExit | KeyboardInterrupt):
            raise exception

        app_error = self.capture(exception, context)
        if self._logger is not None:
            self._logger.error(
                f"[{app_error.type.value}] {app_error.user_message}",
                extra={"app_code": app_error.code.value},
                exc_info=exception,
            )
        self.errorOccurred.emit(app_error)
        return app_error

    def install_hooks(self) -> None:
        """Route uncaught exceptions from the main thread and worker threads here."""

        def excepthook(exc_type: type[BaseException], exc_value: BaseException, exc_tb: Any) -> None:
            if not isinstance(exc_value, Exception):
                self._original_excepthook(exc_type, exc_value, exc_tb)
                return
            try:
                self.handle(exc_value, {"source": "sys.excepthook"})
            except Exception:
                self._original_excepthook(exc_type, exc_value, exc_tb)

        def thread_excepthook(args: threading.ExceptHookArgs) -> None:
            if not isinstance(args.exc_value, Exception):
                self._original_threading_excepthook(args)
                return
            thread_name = args.thread.name if args.thread else "unknown"
            try:
                self.handle(args.exc_value, {"source": "threading.excepthook", "thread": thread_name})
            except Exception:
                self._original_threading_excepthook(args)

        sys.excepthook = excepthook
        threading.excepthook = thread_excepthook

    def restore_hooks(self) -> None:
        sys.excepthook = self._original_excepthook
        threading.excepthook = self._original_threading_excepthook


def get_error_handler() -> ErrorHandler:
    return ErrorHandler()


def setup_error_handling() -> ErrorHandler:
    """Create the error handler and install the global exception hooks."""
    handler = get_error_handler()
    handler.install_hooks()
    return handler


def init_logging(level: str = "INFO") -> None:
    """Configure root console logging; call once at startup."""
    get_error_handler()
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=CONSOLE_FORMAT,
        datefmt=DATE_FORMAT,
    )
