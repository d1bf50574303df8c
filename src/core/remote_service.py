"""
Client for the remote upload/convert service.

The service exposes two JSON endpoints on a configured base URL:
``POST {base}/upload`` and ``POST {base}/convert``. Requests go through
QNetworkAccessManager on the Qt event loop; each reply is awaited through an
asyncio future completed by the reply's ``finished`` signal.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

import jsonschema
from PySide6.QtCore import QByteArray, QUrl
from PySide6.QtNetwork import QNetworkAccessManager, QNetworkReply, QNetworkRequest

from .config import CONVERT_RESPONSE_SCHEMA, UPLOAD_RESPONSE_SCHEMA, normalize_base_url
from .errors import ErrorCode, RemoteServiceError

logger = logging.getLogger(__name__)

UPLOAD_ENDPOINT = "upload"
CONVERT_ENDPOINT = "convert"

# Cause text for non-2xx replies
_FAILURE_LABELS = {
    UPLOAD_ENDPOINT: "Upload failed",
    CONVERT_ENDPOINT: "Conversion failed",
}


@dataclass(frozen=True)
class UploadRequest:
    """Body of the upload call."""

    file_data: str = field(repr=False)
    file_name: str
    content_type: str
    user_session: str = field(repr=False)

    def to_json(self) -> dict[str, str]:
        return {
            "file_data": self.file_data,
            "file_name": self.file_name,
            "content_type": self.content_type,
            "user_session": self.user_session,
        }


def build_convert_body(conversion_id: str, target_format: str) -> dict[str, str]:
    """Body of the convert call."""
    return {"conversion_id": conversion_id, "target_format": target_format}


class RemoteService(Protocol):
    """Capability interface for the two remote calls."""

    async def upload(self, request: UploadRequest) -> dict[str, Any]: ...

    async def convert(self, conversion_id: str, target_format: str) -> dict[str, Any]: ...


def parse_json_object(data: bytes, endpoint: str) -> dict[str, Any]:
    """
    Decode a response body that must be a JSON object.

    Raises:
        RemoteServiceError: If the body is not valid JSON or not an object
    """
    try:
        body = json.loads(data.decode("utf-8")) if data else None
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise RemoteServiceError(
            code=ErrorCode.INVALID_RESPONSE,
            user_message=f"Invalid response from {endpoint} endpoint",
            technical_message=str(e),
        ) from e

    if not isinstance(body, dict):
        raise RemoteServiceError(
            code=ErrorCode.INVALID_RESPONSE,
            user_message=f"Invalid response from {endpoint} endpoint",
            technical_message=f"Expected a JSON object, got {type(body).__name__}",
        )
    return body


def validate_response(body: dict[str, Any], schema: dict[str, Any], endpoint: str) -> None:
    """
    Validate a response body against its JSON schema.

    Raises:
        RemoteServiceError: If the body does not match the schema
    """
    try:
        jsonschema.validate(body, schema)
    except jsonschema.ValidationError as e:
        raise RemoteServiceError(
            code=ErrorCode.INVALID_RESPONSE,
            user_message=f"Unexpected response from {endpoint} endpoint: {e.message}",
            technical_message=str(e),
        ) from e


def read_reply(reply: QNetworkReply, endpoint: str) -> dict[str, Any]:
    """
    Turn a finished reply into a JSON object.

    Raises:
        RemoteServiceError: On transport failure, non-2xx status or a bad body
    """
    status = reply.attribute(QNetworkRequest.Attribute.HttpStatusCodeAttribute)
    if status is None:
        # The server never answered: DNS, TLS, connection refused...
        raise RemoteServiceError(
            code=ErrorCode.NETWORK_ERROR,
            user_message=reply.errorString() or "Network error",
            technical_message=str(reply.error()),
        )

    status = int(status)
    if not 200 <= status < 300:
        raise RemoteServiceError(
            code=ErrorCode.HTTP_ERROR,
            user_message=f"{_FAILURE_LABELS.get(endpoint, 'Request failed')} (HTTP {status})",
            status_code=status,
            technical_message=reply.errorString(),
        )

    return parse_json_object(reply.readAll().data(), endpoint)


class HttpRemoteService:
    """RemoteService implementation over QNetworkAccessManager."""

    def __init__(self, base_url: str, manager: QNetworkAccessManager | None = None) -> None:
        self._base_url = normalize_base_url(base_url)
        self._manager = manager or QNetworkAccessManager()

    @property
    def base_url(self) -> str:
        return self._base_url

    def endpoint_url(self, endpoint: str) -> str:
        return f"{self._base_url}/{endpoint}"

    async def upload(self, request: UploadRequest) -> dict[str, Any]:
        """POST the encoded file; returns the body, which should carry ``conversion_id``."""
        body = await self._post_json(UPLOAD_ENDPOINT, request.to_json())
        validate_response(body, UPLOAD_RESPONSE_SCHEMA, UPLOAD_ENDPOINT)
        return body

    async def convert(self, conversion_id: str, target_format: str) -> dict[str, Any]:
        """POST the conversion request; returns the body with ``download_url``."""
        body = await self._post_json(CONVERT_ENDPOINT, build_convert_body(conversion_id, target_format))
        validate_response(body, CONVERT_RESPONSE_SCHEMA, CONVERT_ENDPOINT)
        return body

    def build_request(self, endpoint: str) -> QNetworkRequest:
        request = QNetworkRequest(QUrl(self.endpoint_url(endpoint)))
        request.setHeader(QNetworkRequest.KnownHeaders.ContentTypeHeader, "application/json")
        return request

    async def _post_json(self, endpoint: str, payload: dict[str, Any]) -> dict[str, Any]:
        loop = asyncio.get_running_loop()
        finished: asyncio.Future[None] = loop.create_future()

        def on_finished() -> None:
            if not finished.done():
                finished.set_result(None)

        logger.debug(f"POST {self.endpoint_url(endpoint)}")
        reply = self._manager.post(self.build_request(endpoint), QByteArray(json.dumps(payload).encode("utf-8")))
        reply.finished.connect(on_finished)
        if reply.isFinished():
            on_finished()

        try:
            await finished
            return read_reply(reply, endpoint)
        finally:
            reply.deleteLater()
