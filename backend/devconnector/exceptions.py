"""
DevConnector Backend: Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for every failure a route can report.
Why:   Services raise; global handlers (registered in main.py) translate to
       HTTP. Routes stay free of try/except blocks.
How:   Each exception carries a user-facing message, an optional `param`
       naming the offending input, and a context dict that is logged but
       never returned to the client.

Exception Hierarchy:
    DevConnectorError (base)
    ├── ValidationError          → 400 Bad Request (field errors)
    │   └── DuplicateError       → 400 Bad Request (unique value taken)
    ├── UnauthenticatedError     → 401 Unauthorized (missing/invalid token)
    ├── UnauthorizedError        → 401 Unauthorized (not the owner)
    ├── NotFoundError            → 404 Not Found
    └── DatabaseError            → 500 Internal Server Error

Response envelope (all of them):
    {"errors": [{"msg": "Post not found"}]}
    {"errors": [{"msg": "Name is required", "param": "name"}, ...]}
"""

from typing import Any, Dict, List, Optional


class DevConnectorError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return)
        param:    Request field or header the error refers to, if any
        context:  Additional debug info (logged, NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Internal server error",
        param: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.param = param
        self.context = context or {}
        super().__init__(self.message)

    @property
    def errors(self) -> List[Dict[str, str]]:
        """The `errors` array of the response envelope."""
        error = {"msg": self.message}
        if self.param:
            error["param"] = self.param
        return [error]


class ValidationError(DevConnectorError):
    """
    Raised when client input fails validation or a business precondition.

    Carries either a single message/param pair or a full list of field
    errors collected by the request validator.
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        param: Optional[str] = None,
        errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, param=param, context=context)
        self._errors = errors

    @property
    def errors(self) -> List[Dict[str, str]]:
        if self._errors:
            return self._errors
        return super().errors


class DuplicateError(ValidationError):
    """Raised when a value that must be unique (e.g. email) is already taken."""


class UnauthenticatedError(DevConnectorError):
    """
    Raised by the identity verifier.

    Covers both "no credential presented" and "credential could not be
    verified" (expired, malformed, bad signature). Both answer 401 and
    name the auth header as `param`.
    """

    status_code = 401

    def __init__(
        self,
        message: str = "No token, authorization denied",
        param: Optional[str] = "x-auth-token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, param=param, context=context)


class UnauthorizedError(DevConnectorError):
    """Raised when an authenticated user acts on a resource they do not own."""

    status_code = 401

    def __init__(
        self,
        message: str = "User not authorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(DevConnectorError):
    """
    Raised when a requested resource does not exist.

    Repositories return None for missing rows and for ids that cannot be
    parsed; services convert that None into this exception with a
    resource-specific message.
    """

    status_code = 404

    def __init__(
        self,
        message: str = "Resource not found",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(DevConnectorError):
    """
    Raised when a database operation fails unexpectedly.

    Security Note:
        The message returned to the client is always generic. The original
        driver error is kept in `context` and logged server-side only.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Internal server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
