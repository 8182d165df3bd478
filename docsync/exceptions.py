"""Custom exceptions for document sync operations."""


class DocumentServiceError(Exception):
    """Base exception for document service errors."""

    pass


class ValidationError(DocumentServiceError):
    """Raised when an argument is malformed or escapes the documents directory."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotFoundError(DocumentServiceError):
    """Raised when a document or version is not found."""

    def __init__(self, resource_type: str, resource_id: str):
        message = f"{resource_type} '{resource_id}' not found"
        super().__init__(message)
        self.resource_type = resource_type
        self.resource_id = resource_id


class StorageError(DocumentServiceError):
    """Raised when a filesystem operation fails."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error
