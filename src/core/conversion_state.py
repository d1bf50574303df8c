"""
Conversion state management for the Image Converter GUI.

This module defines the conversion request states, the allowed transitions
between them, and the observable SessionState that owns the selected file,
target format and outcome of the current attempt. The presentation layer
subscribes to ``SessionState.stateChanged`` and never mutates state itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from PySide6.QtCore import QObject, Signal

from .file_intake import SelectedFile
from .formats import TargetFormat

logger = logging.getLogger(__name__)


class ConversionState(Enum):
    """
    Enumeration of conversion request states.

    Exactly one state holds at any time.
    """

    IDLE = auto()  # No request running, ready to start
    UPLOADING = auto()  # Encoding and uploading the file
    CONVERTING = auto()  # Waiting for the convert call
    SUCCEEDED = auto()  # Result available for download
    FAILED = auto()  # Attempt failed, message available


class SessionPhase(Enum):
    """Observable phase shown to the user, derived from state and selection."""

    IDLE = auto()
    FILE_SELECTED = auto()
    UPLOADING = auto()
    CONVERTING = auto()
    SUCCEEDED = auto()
    FAILED = auto()


ALLOWED_TRANSITIONS: dict[ConversionState, frozenset[ConversionState]] = {
    ConversionState.IDLE: frozenset({ConversionState.UPLOADING, ConversionState.FAILED}),
    ConversionState.UPLOADING: frozenset({ConversionState.CONVERTING, ConversionState.FAILED}),
    ConversionState.CONVERTING: frozenset({ConversionState.SUCCEEDED, ConversionState.FAILED}),
    ConversionState.SUCCEEDED: frozenset({ConversionState.IDLE, ConversionState.UPLOADING, ConversionState.FAILED}),
    ConversionState.FAILED: frozenset({ConversionState.IDLE, ConversionState.UPLOADING, ConversionState.FAILED}),
}

BUSY_STATES = frozenset({ConversionState.UPLOADING, ConversionState.CONVERTING})


class StateTransitionError(RuntimeError):
    """Raised when a transition is not allowed from the current state."""

    def __init__(self, current: ConversionState, requested: ConversionState) -> None:
        super().__init__(f"Invalid conversion state transition: {current.name} -> {requested.name}")
        self.current = current
        self.requested = requested


def can_transition(current: ConversionState, requested: ConversionState) -> bool:
    """Check whether ``requested`` may follow ``current``."""
    return requested in ALLOWED_TRANSITIONS[current]


@dataclass(frozen=True)
class ConversionResult:
    """Descriptor returned by the convert call."""

    download_url: str
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_response(cls, body: dict[str, Any]) -> ConversionResult:
        """
        Build a result from a convert response body.

        Raises:
            ValueError: If the body carries no usable ``download_url``
        """
        download_url = body.get("download_url") if isinstance(body, dict) else None
        if not isinstance(download_url, str) or not download_url:
            raise ValueError("Missing download URL in convert response")
        return cls(download_url=download_url, raw=dict(body))


@dataclass(frozen=True)
class SessionSnapshot:
    """Immutable view of SessionState handed to subscribers."""

    request_state: ConversionState
    selected_file: SelectedFile | None
    target_format: TargetFormat | None
    result: ConversionResult | None
    error_message: str

    @property
    def phase(self) -> SessionPhase:
        """Derive the user-facing phase."""
        if self.request_state is ConversionState.IDLE:
            return SessionPhase.FILE_SELECTED if self.selected_file else SessionPhase.IDLE
        return SessionPhase[self.request_state.name]

    @property
    def is_busy(self) -> bool:
        return self.request_state in BUSY_STATES

    @property
    def can_start(self) -> bool:
        """Whether the Start control should be enabled."""
        return not self.is_busy


class SessionState(QObject):
    """
    Owns the state of the current conversion session.

    Signals:
        stateChanged(SessionSnapshot): Emitted after every mutation
    """

    stateChanged = Signal(object)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._request_state = ConversionState.IDLE
        self._selected_file: SelectedFile | None = None
        self._target_format: TargetFormat | None = None
        self._result: ConversionResult | None = None
        self._error_message = ""
        self._generation = 0
        self.setObjectName("SessionState")

    # Read access

    @property
    def request_state(self) -> ConversionState:
        return self._request_state

    @property
    def selected_file(self) -> SelectedFile | None:
        return self._selected_file

    @property
    def target_format(self) -> TargetFormat | None:
        return self._target_format

    @property
    def result(self) -> ConversionResult | None:
        return self._result

    @property
    def error_message(self) -> str:
        return self._error_message

    @property
    def generation(self) -> int:
        """Counter bumped whenever an in-flight attempt is abandoned by reset."""
        return self._generation

    @property
    def is_busy(self) -> bool:
        return self._request_state in BUSY_STATES

    def snapshot(self) -> SessionSnapshot:
        """Return an immutable view of the current state."""
        return SessionSnapshot(
            request_state=self._request_state,
            selected_file=self._selected_file,
            target_format=self._target_format,
            result=self._result,
            error_message=self._error_message,
        )

    # Mutations

    def select_file(self, selected_file: SelectedFile, suggested_format: TargetFormat | None) -> None:
        """Replace the selected file, clearing any previous outcome."""
        self._selected_file = selected_file
        self._target_format = suggested_format
        self._result = None
        self._error_message = ""
        if self._request_state in (ConversionState.SUCCEEDED, ConversionState.FAILED):
            self._transition(ConversionState.IDLE)
        self._emit()

    def set_target_format(self, target_format: TargetFormat | None) -> None:
        """Set or clear the target format chosen by the user."""
        if target_format == self._target_format:
            return
        self._target_format = target_format
        self._emit()

    def begin_upload(self) -> None:
        self._transition(ConversionState.UPLOADING)
        self._result = None
        self._error_message = ""
        self._emit()

    def begin_convert(self) -> None:
        self._transition(ConversionState.CONVERTING)
        self._emit()

    def succeed(self, result: ConversionResult) -> None:
        self._transition(ConversionState.SUCCEEDED)
        self._result = result
        self._emit()

    def fail(self, message: str) -> None:
        """Enter FAILED with a user-facing message; any prior result is dropped."""
        self._transition(ConversionState.FAILED)
        self._result = None
        self._error_message = message
        self._emit()

    def reset(self) -> None:
        """
        Clear the file, format, result and message and return to IDLE.

        Allowed from any state. Resetting while a request is in flight bumps
        the generation so the abandoned attempt's completion is ignored.
        """
        if self.is_busy:
            self._generation += 1
            logger.info(f"Reset while {self._request_state.name.lower()}; abandoning in-flight attempt")

        changed = (
            self._request_state is not ConversionState.IDLE
            or self._selected_file is not None
            or self._target_format is not None
            or self._result is not None
            or bool(self._error_message)
        )

        self._request_state = ConversionState.IDLE
        self._selected_file = None
        self._target_format = None
        self._result = None
        self._error_message = ""

        if changed:
            self._emit()

    def _transition(self, requested: ConversionState) -> None:
        if not can_transition(self._request_state, requested):
            raise StateTransitionError(self._request_state, requested)
        logger.debug(f"Conversion state {self._request_state.name} -> {requested.name}")
        self._request_state = requested

    def _emit(self) -> None:
        self.stateChanged.emit(self.snapshot())
