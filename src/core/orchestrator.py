"""
Conversion orchestration for the Image Converter GUI.

This module sequences the two remote calls (upload, then convert) and maps
their outcomes onto SessionState. Every failure is recovered here and ends
the attempt in the FAILED state with a single user-facing message; nothing
is retried.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Any

from .conversion_state import ConversionResult, SessionSnapshot, SessionState
from .errors import BaseAppError, ConvertError, ErrorCode, UploadError, describe_cause
from .file_intake import FileSource, SelectedFile, file_from_source
from .formats import TargetFormat, get_format, suggest_target_format
from .remote_service import RemoteService, UploadRequest
from .transfer_encoder import Encoder, strip_data_url_prefix

if TYPE_CHECKING:
    from .error_handler import ErrorHandler

MISSING_INPUT_MESSAGE = "Please select a file and target format"
MISSING_CONVERSION_ID_CAUSE = "Missing conversion identifier in upload response"


class ConversionOrchestrator:
    """
    Drives file intake and the upload → convert sequence.

    The session token, remote service and encoder are injected so the whole
    flow runs against fakes in tests.
    """

    def __init__(
        self,
        session_state: SessionState,
        remote_service: RemoteService,
        encoder: Encoder,
        session_token: str,
        error_handler: ErrorHandler | None = None,
    ) -> None:
        self._state = session_state
        self._remote = remote_service
        self._encoder = encoder
        self._session_token = session_token
        self._error_handler = error_handler
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def session_token(self) -> str:
        return self._session_token

    # Intake

    def select_file(self, source: FileSource) -> SelectedFile | None:
        """
        Accept a file from the picker or a drop.

        A source without a file is a no-op. Selection is ignored while a
        request is in flight.

        Raises:
            FileError: If the source names a file that cannot be used
        """
        if self._state.is_busy:
            self._logger.warning("Ignoring file selection while a conversion is running")
            return None

        selected = file_from_source(source)
        if selected is None:
            return None

        suggestion = suggest_target_format(selected.name)
        self._logger.info(
            f"File selected: {selected.name} ({selected.size} bytes, {selected.content_type}), "
            f"suggested format: {suggestion or 'none'}"
        )
        self._state.select_file(selected, suggestion)
        return selected

    def set_target_format(self, identifier: str | TargetFormat | None) -> None:
        """
        Override the target format with a catalog entry, or clear it.

        Raises:
            ValidationError: If the identifier is not in the catalog
        """
        if isinstance(identifier, TargetFormat):
            identifier = identifier.identifier
        target = get_format(identifier) if identifier else None
        self._state.set_target_format(target)

    # Conversion

    async def handle_convert(self) -> SessionSnapshot:
        """
        Run one upload → convert attempt to completion.

        Returns:
            The session snapshot after the attempt settled
        """
        if self._state.is_busy:
            self._logger.warning("Cannot start conversion: another conversion is already running")
            return self._state.snapshot()

        selected = self._state.selected_file
        target = self._state.target_format
        if selected is None or target is None:
            self._logger.info("Conversion not started: file or target format missing")
            self._state.fail(MISSING_INPUT_MESSAGE)
            return self._state.snapshot()

        attempt_id = str(uuid.uuid4())[:8]
        generation = self._state.generation
        self._logger.info(f"[{attempt_id}] Starting conversion of {selected.name} to {target.identifier}")

        conversion_id = await self._upload(selected, generation, attempt_id)
        if conversion_id is not None:
            await self._convert(conversion_id, target, generation, attempt_id)

        return self._state.snapshot()

    def reset_form(self) -> None:
        """Clear file, format, result and message; the session token is kept."""
        self._logger.info("Resetting conversion form")
        self._state.reset()

    async def _upload(self, selected: SelectedFile, generation: int, attempt_id: str) -> str | None:
        self._state.begin_upload()

        try:
            file_data = await self._encoder.encode(selected)
            if self._is_stale(generation, attempt_id):
                return None
            request = UploadRequest(
                file_data=strip_data_url_prefix(file_data),
                file_name=selected.name,
                content_type=selected.content_type,
                user_session=self._session_token,
            )
            body = await self._remote.upload(request)
        except Exception as e:
            if not self._is_stale(generation, attempt_id):
                self._fail(UploadError(describe_cause(e), technical_message=_technical(e)), e, attempt_id)
            return None

        if self._is_stale(generation, attempt_id):
            return None

        conversion_id = _conversion_id_from(body)
        if conversion_id is None:
            error = ConvertError(MISSING_CONVERSION_ID_CAUSE, code=ErrorCode.MISSING_CONVERSION_ID)
            self._fail(error, error, attempt_id)
            return None

        self._logger.info(f"[{attempt_id}] Upload completed, conversion id {conversion_id}")
        return conversion_id

    async def _convert(self, conversion_id: str, target: TargetFormat, generation: int, attempt_id: str) -> None:
        self._state.begin_convert()

        try:
            body = await self._remote.convert(conversion_id, target.identifier)
            if self._is_stale(generation, attempt_id):
                return
            result = ConversionResult.from_response(body)
        except Exception as e:
            if not self._is_stale(generation, attempt_id):
                self._fail(ConvertError(describe_cause(e), technical_message=_technical(e)), e, attempt_id)
            return

        self._logger.info(f"[{attempt_id}] Conversion completed: {result.download_url}")
        self._state.succeed(result)

    def _is_stale(self, generation: int, attempt_id: str) -> bool:
        if generation != self._state.generation:
            self._logger.info(f"[{attempt_id}] Ignoring completion of an attempt abandoned by reset")
            return True
        return False

    def _fail(self, error: BaseAppError, cause: BaseException, attempt_id: str) -> None:
        self._logger.error(f"[{attempt_id}] {error.user_message}")
        if self._error_handler is not None and isinstance(cause, Exception):
            self._error_handler.handle(cause, {"attempt_id": attempt_id, "phase": error.type.value})
        self._state.fail(error.user_message)


def _conversion_id_from(body: Any) -> str | None:
    conversion_id = body.get("conversion_id") if isinstance(body, dict) else None
    if isinstance(conversion_id, str) and conversion_id:
        return conversion_id
    return None


def _technical(exc: BaseException) -> str:
    if isinstance(exc, BaseAppError) and exc.technical_message:
        return exc.technical_message
    return f"{type(exc).__name__}: {exc}"
