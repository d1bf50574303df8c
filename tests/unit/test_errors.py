"""
Tests for the error taxonomy.
"""

from core.errors import (
    BaseAppError,
    ConvertError,
    EncodingError,
    ErrorCode,
    ErrorType,
    FileError,
    RemoteServiceError,
    UploadError,
    ValidationError,
    describe_cause,
    map_exception,
)


class TestPhaseErrors:
    """Test the user-facing wording of phase failures."""

    def test_upload_error_message(self):
        error = UploadError("Upload failed (HTTP 500)")

        assert error.type == ErrorType.UPLOAD
        assert error.code == ErrorCode.UPLOAD_FAILED
        assert str(error) == "Failed to upload file: Upload failed (HTTP 500)"

    def test_convert_error_message(self):
        error = ConvertError("Conversion failed (HTTP 400)")

        assert error.type == ErrorType.CONVERT
        assert error.code == ErrorCode.CONVERSION_FAILED
        assert error.user_message == "Failed to convert file: Conversion failed (HTTP 400)"

    def test_convert_error_custom_code(self):
        error = ConvertError("Missing conversion identifier in upload response", code=ErrorCode.MISSING_CONVERSION_ID)
        assert error.code == ErrorCode.MISSING_CONVERSION_ID

    def test_remote_error_status_code(self):
        error = RemoteServiceError(code=ErrorCode.HTTP_ERROR, user_message="Upload failed (HTTP 503)", status_code=503)

        assert error.status_code == 503
        assert error.context["status_code"] == 503

    def test_encoding_error(self):
        error = EncodingError("Could not read a.png", context={"path": "/tmp/a.png"})

        assert error.type == ErrorType.ENCODING
        assert error.code == ErrorCode.READ_FAILED


class TestDescribeCause:
    """Test cause text extraction."""

    def test_app_error_uses_user_message(self):
        error = RemoteServiceError(code=ErrorCode.NETWORK_ERROR, user_message="Host not found", technical_message="x")
        assert describe_cause(error) == "Host not found"

    def test_plain_exception_uses_str(self):
        assert describe_cause(RuntimeError("boom")) == "boom"

    def test_empty_exception_uses_class_name(self):
        assert describe_cause(TimeoutError()) == "TimeoutError"


class TestMapException:
    """Test mapping of built-in exceptions."""

    def test_app_error_passes_through(self):
        error = FileError(code=ErrorCode.FILE_NOT_FOUND, user_message="File not found: a.png")
        assert map_exception(error) is error

    def test_value_error_maps_to_validation(self):
        error = map_exception(ValueError("bad"))

        assert isinstance(error, ValidationError)
        assert error.code == ErrorCode.INVALID_INPUT

    def test_unknown_exception(self):
        error = map_exception(KeyError("k"))

        assert isinstance(error, BaseAppError)
        assert error.code == ErrorCode.UNKNOWN
        assert "KeyError" in error.technical_message

    def test_str_and_repr(self):
        error = UploadError("boom")

        assert str(error) == "Failed to upload file: boom"
        assert "code=UPLOAD_FAILED" in repr(error)
        assert "type=upload" in repr(error)
