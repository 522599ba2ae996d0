"""
Album API — Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for each error scenario of the service.
Why:   Services raise typed errors; global handlers registered in main.py turn
       them into JSON responses with the right HTTP status code, so route
       handlers contain no try/except.
How:   Each exception class carries a message and an optional context dict.

Exception Hierarchy:
    AlbumAPIError (base)
    ├── ConfigurationError  → fatal at startup (process exits)
    ├── NotFoundError       → 404 Not Found     {"message": message}
    └── BackendError        → 500 Server Error  {"error": message}
"""

from typing import Any, Dict, Optional


class AlbumAPIError(Exception):
    """
    Base exception for all Album API errors.

    Attributes:
        message:  Error description returned in the API response
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ConfigurationError(AlbumAPIError):
    """
    Raised when a required setting is missing.

    When:    AIRTABLE_TOKEN, AIRTABLE_BASE_ID or AIRTABLE_TABLE is empty.
    Effect:  The process entry point logs it and exits before serving traffic.
    """


class NotFoundError(AlbumAPIError):
    """
    Raised when the backend reports no record for an identifier.

    Why a custom exception:
        The table client returns None for missing records (not an exception).
        AlbumService converts None → NotFoundError so the HTTP status is
        decided in one place.
    """

    def __init__(
        self,
        resource: str = "album",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class BackendError(AlbumAPIError):
    """
    Raised when a call to the table backend fails.

    What:    Network failure, timeout, authentication failure, rate limiting,
             any non-2xx response other than "record not found", or a response
             body that is not the expected JSON shape.
    HTTP:    500 Internal Server Error. The message is the raw error text,
             except for album creation which replaces it with a fixed message.

    Attributes:
        status_code: HTTP status returned by the backend, None for transport errors
    """

    def __init__(
        self,
        message: str = "backend request failed",
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if status_code is not None:
            ctx["status_code"] = status_code
        super().__init__(message=message, context=ctx)
        self.status_code = status_code
