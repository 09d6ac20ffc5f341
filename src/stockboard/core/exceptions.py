"""Application-level exceptions."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 400

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class InsufficientSharesError(ValidationError):
    """Raised when attempting to sell more shares than held."""

    def __init__(self, ticker: str, requested: int, available: int):
        super().__init__(
            f"Insufficient shares of {ticker}: requested {requested}, available {available}"
        )
        self.code = "INSUFFICIENT_SHARES"


class SourceUnavailable(AppError):
    """Raised when the upstream quote source fails or answers with a non-success status."""

    status_code = 503

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message, code="SOURCE_UNAVAILABLE")
        self.status = status


class MalformedResponse(AppError):
    """Raised when the upstream payload is missing its expected shape."""

    status_code = 502

    def __init__(self, message: str):
        super().__init__(message, code="MALFORMED_RESPONSE")


class StorageError(AppError):
    """Raised when a persistent store read or write fails."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message, code="STORAGE_ERROR")
