"""Custom exceptions for chat attachment ingestion."""


class AttachmentException(Exception):
    """Base exception for attachment ingestion.

    All custom exceptions in this package should inherit from this base class.
    None of them escape the batch operations (download, build, cleanup); they
    are caught per file and degrade to omission or a placeholder fragment.
    """

    pass


class InvalidFileDescriptor(AttachmentException):
    """Raised when a raw platform file object cannot be parsed.

    Attributes:
        file_name: Name of the file, if one could be read
    """

    def __init__(self, message: str, file_name: str | None = None):
        super().__init__(message)
        self.file_name = file_name


class SizeLimitExceeded(AttachmentException):
    """Raised when a file is above the download ceiling.

    A declared size above the ceiling is rejected before any network call; a
    received body above it is rejected before anything is written.

    Attributes:
        file_name: Name of the rejected file
        size: Declared or received size in bytes
        limit: Configured ceiling in bytes
    """

    def __init__(self, file_name: str, size: int, limit: int):
        super().__init__(
            f"File '{file_name}' is {size} bytes, above the {limit} byte limit"
        )
        self.file_name = file_name
        self.size = size
        self.limit = limit


class MissingDownloadUrl(AttachmentException):
    """Raised when a file has neither a private download URL nor a private URL.

    Attributes:
        file_name: Name of the file
    """

    def __init__(self, file_name: str):
        super().__init__(f"No download URL available for file '{file_name}'")
        self.file_name = file_name


class HttpError(AttachmentException):
    """Raised when the download request does not succeed.

    This exception is raised when:
    - The server answers with a non-2xx status
    - The request itself fails (connection error, timeout); ``status_code``
      is ``None`` in that case

    Attributes:
        file_name: Name of the file being downloaded
        status_code: HTTP status code, if a response was received
        reason: HTTP reason phrase or transport error description
    """

    def __init__(
        self,
        file_name: str,
        status_code: int | None = None,
        reason: str | None = None,
    ):
        if status_code is None:
            message = f"Download of '{file_name}' failed: {reason}"
        else:
            message = f"HTTP {status_code}: {reason or ''}".rstrip()
        super().__init__(message)
        self.file_name = file_name
        self.status_code = status_code
        self.reason = reason


class InvalidImageContent(AttachmentException):
    """Raised when a declared image does not start with a known image signature.

    Slack answers unauthenticated file requests with an HTML login page while
    keeping an ``image/*`` content type, so the declared type is never trusted.

    Attributes:
        file_name: Name of the file
        mimetype: Declared mimetype of the attachment
        content_type: Content-Type header of the download response
        leading_bytes: First bytes of the body, hex encoded
    """

    def __init__(
        self,
        file_name: str,
        mimetype: str,
        content_type: str | None = None,
        leading_bytes: str | None = None,
    ):
        super().__init__(
            f"Downloaded file '{file_name}' is not a valid image "
            f"(got content-type: {content_type or 'unknown'})"
        )
        self.file_name = file_name
        self.mimetype = mimetype
        self.content_type = content_type
        self.leading_bytes = leading_bytes


class ReadFailure(AttachmentException):
    """Raised when a downloaded temp file cannot be read back.

    Attributes:
        file_name: Original attachment name
        path: Path that could not be read
        original_error: The underlying OS error
    """

    def __init__(
        self,
        file_name: str,
        path: str,
        original_error: Exception | None = None,
    ):
        super().__init__(f"Could not read '{file_name}' from {path}")
        self.file_name = file_name
        self.path = path
        self.original_error = original_error


class DeleteFailure(AttachmentException):
    """Raised when a temp file cannot be removed.

    Attributes:
        path: Path that could not be deleted
        original_error: The underlying OS error
    """

    def __init__(self, path: str, original_error: Exception | None = None):
        super().__init__(f"Could not delete temp file {path}: {original_error}")
        self.path = path
        self.original_error = original_error


class WriteFailure(AttachmentException):
    """Raised when a downloaded body cannot be written to a temp file.

    Attributes:
        file_name: Original attachment name
        path: Temp path that could not be written
        original_error: The underlying OS error
    """

    def __init__(
        self,
        file_name: str,
        path: str,
        original_error: Exception | None = None,
    ):
        super().__init__(f"Could not write '{file_name}' to {path}")
        self.file_name = file_name
        self.path = path
        self.original_error = original_error
