"""
Transfer encoding for the upload request.

The upload body carries the raw file bytes as base64 text. Reading the file
happens off the event loop so the UI keeps responding while large files load.
"""

from __future__ import annotations

import asyncio
import base64
import logging
import re
from typing import Protocol

from .errors import EncodingError
from .file_intake import SelectedFile

logger = logging.getLogger(__name__)

_DATA_URL_PREFIX = re.compile(r"^data:[^,]*,")


class Encoder(Protocol):
    """Capability that turns a selected file into transport-safe text."""

    async def encode(self, selected_file: SelectedFile) -> str: ...


def strip_data_url_prefix(text: str) -> str:
    """
    Remove a ``data:<mime>;base64,`` prefix, leaving only the payload.

    Encoders are pluggable and some hand back a data URL rather than bare
    base64; the upload body must carry the payload alone.
    """
    return _DATA_URL_PREFIX.sub("", text, count=1)


def encode_bytes(data: bytes) -> str:
    """Encode raw bytes as base64 text."""
    return base64.b64encode(data).decode("ascii")


class Base64Encoder:
    """Reads a SelectedFile and returns its content as bare base64 text."""

    async def encode(self, selected_file: SelectedFile) -> str:
        """
        Encode the file content.

        Raises:
            EncodingError: If the file cannot be read
        """
        try:
            data = await asyncio.to_thread(selected_file.read_bytes)
        except OSError as e:
            logger.error(f"Failed to read {selected_file.name}: {e}")
            raise EncodingError(
                user_message=f"Could not read {selected_file.name}",
                technical_message=f"{type(e).__name__}: {e}",
                context={"path": str(selected_file.path)},
            ) from e

        logger.debug(f"Encoded {selected_file.name} ({len(data)} bytes)")
        return encode_bytes(data)
