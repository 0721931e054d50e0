"""
Custom exceptions for the Infrastructure layer.
"""
from typing import Optional


class InfrastructureError(Exception):
    """Base class for exceptions in the infrastructure layer."""
    pass


class ConfigError(InfrastructureError):
    """Raised when the plugin configuration or credentials are invalid or missing."""
    pass


class ClientError(InfrastructureError):
    """Raised when the storage client cannot be constructed."""
    pass


class StorageError(InfrastructureError):
    """
    Raised when a storage operation fails.

    The backend error that caused the failure is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        bucket: Optional[str] = None,
        key: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.bucket = bucket
        self.key = key


class BackendError(InfrastructureError):
    """
    Normalized failure reported by a storage backend SDK.

    Storage client adapters raise this instead of SDK specific errors so that
    callers never need to know which SDK is in use.
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        code: Optional[str] = None,
        request_id: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.request_id = request_id

    def __str__(self) -> str:
        details = []
        if self.status is not None:
            details.append(f"status={self.status}")
        if self.code:
            details.append(f"code={self.code}")
        if self.request_id:
            details.append(f"request_id={self.request_id}")
        if not details:
            return self.message
        return f"{self.message} ({', '.join(details)})"
