"""
Private Notes Backend — Custom Exception Hierarchy
===================================================

What:  Application-specific exceptions for every failure the API can report.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch the HTTP-facing
       ones and return structured JSON error responses.
Who:   Raised by the auth gate, services and collaborator adapters.

Exception Hierarchy:
    NotesError (base)
    ├── UnauthenticatedError       → 401 Unauthorized
    ├── ValidationError            → 400 Bad Request
    ├── NotFoundError              → 404 Not Found
    ├── InternalError              → 500 Internal Server Error
    ├── IdentityVerificationError  (identity provider signal, never rendered)
    ├── RecordNotFoundError        (record store signal, never rendered)
    └── RecordStoreError           (record store signal, never rendered)

The collaborator signals are translated at the layer above them: the auth gate
turns IdentityVerificationError into UnauthenticatedError, and NoteService
turns RecordNotFoundError / RecordStoreError into NotFoundError / InternalError.
"""

from typing import Any, Dict, Optional


class NotesError(Exception):
    """
    Base exception for all Private Notes errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only as `details`
                  where the handler chooses to)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class UnauthenticatedError(NotesError):
    """
    Raised when a request carries no usable bearer credential.

    HTTP:    401 Unauthorized
    When:    Missing/malformed Authorization header, token rejected by the
             identity provider, or the provider failed unexpectedly.
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ValidationError(NotesError):
    """
    Raised when client input fails validation.

    HTTP:    400 Bad Request
    When:    Missing or empty title/content on create and update.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(NotesError):
    """
    Raised when the requested note does not exist for the caller.

    HTTP:    404 Not Found
    Note:    A note owned by someone else is indistinguishable from a missing
             one; ownership scoping never produces 403.
    """

    def __init__(
        self,
        resource: str = "Note",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource.lower()
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class InternalError(NotesError):
    """
    Raised when a collaborator fails in a way the client cannot fix.

    HTTP:    500 Internal Server Error
    Message: The collaborator's own error message, verbatim.
    """

    def __init__(
        self,
        message: str = "An internal error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class IdentityVerificationError(NotesError):
    """
    Raised by an IdentityVerifier when the provider reports an error
    (as opposed to simply not recognising the token).
    """

    def __init__(
        self,
        message: str = "Identity provider rejected the verification request",
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if status_code is not None:
            ctx["status_code"] = status_code
        super().__init__(message=message, context=ctx)
        self.status_code = status_code


class RecordNotFoundError(NotesError):
    """Raised by a RecordStore when no row matches the id and owner filter."""

    def __init__(
        self,
        record_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if record_id:
            ctx["record_id"] = record_id
        super().__init__(message="No matching record", context=ctx)
        self.record_id = record_id


class RecordStoreError(NotesError):
    """Raised by a RecordStore for any other failure; message is the store's own."""

    def __init__(
        self,
        message: str = "Record store operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
