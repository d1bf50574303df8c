"""
File intake for manual selection and drag-and-drop.

This module normalizes whatever the host environment yields (a picker path,
a list of dropped paths, or a drop event's QMimeData) into a single
SelectedFile value.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Union
from urllib.parse import unquote

from PySide6.QtCore import QMimeData, QMimeDatabase

from .errors import ErrorCode, FileError

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class SelectedFile:
    """The user's chosen input file."""

    path: Path
    name: str
    content_type: str
    size: int

    @classmethod
    def from_path(cls, path: str | Path) -> SelectedFile:
        """
        Build a SelectedFile from a local path.

        Raises:
            FileError: If the path does not name a readable regular file
        """
        path = Path(path)
        if not path.is_file():
            raise FileError(
                code=ErrorCode.FILE_NOT_FOUND,
                user_message=f"File not found: {path.name or path}",
                context={"path": str(path)},
            )
        try:
            size = path.stat().st_size
        except OSError as e:
            raise FileError(
                code=ErrorCode.PERMISSION_DENIED,
                user_message=f"Cannot access file: {path.name}",
                technical_message=str(e),
                context={"path": str(path)},
            ) from e

        return cls(path=path, name=path.name, content_type=detect_content_type(path), size=size)

    @property
    def size_mb(self) -> float:
        """Size in MiB, rounded to two decimals for display."""
        return round(self.size / (1024 * 1024), 2)

    def read_bytes(self) -> bytes:
        """Read the whole file content."""
        return self.path.read_bytes()


FileSource = Union[SelectedFile, str, Path, Sequence[Union[str, Path]], QMimeData, None]


def detect_content_type(path: Path) -> str:
    """Detect a MIME type for a file, by name first and then by content."""
    mime_type = QMimeDatabase().mimeTypeForFile(str(path))
    if mime_type.isValid() and not mime_type.isDefault():
        return mime_type.name()
    return DEFAULT_CONTENT_TYPE


def extract_local_paths_from_mimedata(mime: QMimeData) -> list[Path]:
    """
    Extract local file paths from a QMimeData object.

    Handles URL decoding, deduplication, and filters out non-local URLs,
    directories and paths that no longer exist.
    """
    if not mime.hasUrls():
        return []

    paths = []
    seen_paths = set()

    for url in mime.urls():
        if not url.isLocalFile():
            continue

        try:
            path = Path(unquote(url.toLocalFile())).resolve()
            if path.is_dir() or not path.exists():
                continue

            path_str = str(path)
            if path_str not in seen_paths:
                seen_paths.add(path_str)
                paths.append(path)

        except (OSError, ValueError):
            continue

    return paths


def file_from_source(source: FileSource) -> SelectedFile | None:
    """
    Normalize an intake source into a SelectedFile.

    Only the first file of a multi-file source is taken. Returns None when
    the source carries no file at all (cancelled picker, empty drop).

    Raises:
        FileError: If a path is present but does not name a readable file
    """
    if source is None:
        return None

    if isinstance(source, SelectedFile):
        return source

    if isinstance(source, QMimeData):
        paths: list[Path] = extract_local_paths_from_mimedata(source)
    elif isinstance(source, (str, Path)):
        paths = [Path(source)] if str(source) else []
    else:
        paths = [Path(p) for p in source if str(p)]

    if not paths:
        return None

    if len(paths) > 1:
        logger.info(f"{len(paths)} files provided, using the first one: {paths[0].name}")

    return SelectedFile.from_path(paths[0])
