"""
Tests for file intake from picker paths and drops.
"""

from pathlib import Path

import pytest
from PySide6.QtCore import QMimeData, QUrl

from core.errors import ErrorCode, FileError
from core.file_intake import (
    DEFAULT_CONTENT_TYPE,
    SelectedFile,
    extract_local_paths_from_mimedata,
    file_from_source,
)


@pytest.fixture
def photo(tmp_path) -> Path:
    path = tmp_path / "photo.jpg"
    path.write_bytes(b"\xff\xd8\xff\xe0" + b"\x00" * 2044)
    return path


def make_mime(*paths) -> QMimeData:
    mime = QMimeData()
    mime.setUrls([QUrl.fromLocalFile(str(p)) for p in paths])
    return mime


class TestSelectedFile:
    """Test SelectedFile construction."""

    def test_from_path(self, photo):
        selected = SelectedFile.from_path(photo)

        assert selected.path == photo
        assert selected.name == "photo.jpg"
        assert selected.size == 2048
        assert selected.content_type == "image/jpeg"
        assert selected.read_bytes().startswith(b"\xff\xd8")

    def test_size_mb(self, tmp_path):
        path = tmp_path / "big.png"
        path.write_bytes(b"\x00" * (1024 * 1024 + 512 * 1024))

        assert SelectedFile.from_path(path).size_mb == 1.5

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileError) as exc_info:
            SelectedFile.from_path(tmp_path / "gone.png")

        assert exc_info.value.code == ErrorCode.FILE_NOT_FOUND
        assert "gone.png" in exc_info.value.user_message

    def test_directory_is_rejected(self, tmp_path):
        with pytest.raises(FileError):
            SelectedFile.from_path(tmp_path)

    def test_unknown_content_type_falls_back(self, tmp_path):
        path = tmp_path / "blob.zzq"
        path.write_bytes(b"\x00\x01\x02\xfe\xff")

        assert SelectedFile.from_path(path).content_type == DEFAULT_CONTENT_TYPE


class TestFileFromSource:
    """Test normalization of intake sources."""

    def test_none_is_noop(self):
        assert file_from_source(None) is None

    def test_empty_sources_are_noop(self):
        assert file_from_source("") is None
        assert file_from_source([]) is None
        assert file_from_source(QMimeData()) is None

    def test_string_path(self, photo):
        assert file_from_source(str(photo)).name == "photo.jpg"

    def test_selected_file_passes_through(self, photo):
        selected = SelectedFile.from_path(photo)
        assert file_from_source(selected) is selected

    def test_first_of_many_is_taken(self, tmp_path, photo):
        other = tmp_path / "other.png"
        other.write_bytes(b"png")

        assert file_from_source([photo, other]).name == "photo.jpg"

    def test_mime_data(self, photo):
        selected = file_from_source(make_mime(photo))
        assert selected.path == photo.resolve()

    def test_missing_path_raises(self, tmp_path):
        with pytest.raises(FileError):
            file_from_source(str(tmp_path / "missing.gif"))


class TestExtractLocalPaths:
    """Test QMimeData path extraction."""

    def test_no_urls(self):
        mime = QMimeData()
        mime.setText("just text")
        assert extract_local_paths_from_mimedata(mime) == []

    def test_filters_directories_and_missing(self, tmp_path, photo):
        mime = make_mime(tmp_path, tmp_path / "missing.png", photo)
        assert extract_local_paths_from_mimedata(mime) == [photo.resolve()]

    def test_deduplicates(self, photo):
        assert extract_local_paths_from_mimedata(make_mime(photo, photo)) == [photo.resolve()]

    def test_remote_urls_ignored(self):
        mime = QMimeData()
        mime.setUrls([QUrl("https://example.com/photo.jpg")])
        assert extract_local_paths_from_mimedata(mime) == []
