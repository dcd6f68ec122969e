from typing import Optional, Any


class DashboardError(Exception):
    """
    Base exception for the dashboard API.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ResourceNotFoundError(DashboardError):
    """
    Raised when a requested document does not exist.
    """
    def __init__(self, message: str = "Resource not found", details: Optional[Any] = None):
        super().__init__(message, code="NOT_FOUND", status_code=404, details=details)


class InvalidIdentifierError(ResourceNotFoundError):
    """
    Raised when an identifier cannot name any stored document.
    """
    def __init__(self, message: str = "Invalid identifier", details: Optional[Any] = None):
        super().__init__(message, details=details)
        self.code = "INVALID_IDENTIFIER"


class DatabaseUnavailableError(DashboardError):
    """
    Raised when the document store cannot serve a query.
    """
    def __init__(self, message: str = "Database unavailable", details: Optional[Any] = None):
        super().__init__(message, code="DATABASE_UNAVAILABLE", status_code=503, details=details)


class DatabaseTimeoutError(DashboardError):
    """
    Raised when a query exceeds its time limit.
    """
    def __init__(self, message: str = "Database query timed out", details: Optional[Any] = None):
        super().__init__(message, code="DATABASE_TIMEOUT", status_code=504, details=details)
