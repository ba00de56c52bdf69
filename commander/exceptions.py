"""
Commander Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the error cases the API reports.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) translate them into
       HTTP responses.
Who:   Raised by CommandService; caught by the handlers in main.py.

Exception Hierarchy:
    CommanderError (base)
    ├── ValidationError    → 400 Bad Request (validation problem body)
    ├── NotFoundError      → 404 Not Found (empty body)
    └── PersistenceError   → 500 Internal Server Error
"""

from typing import Any, Dict, List, Optional


class CommanderError(Exception):
    """
    Base exception for all Commander application errors.

    Attributes:
        message:  User-facing error description (safe to return in a response)
        context:  Additional debug info (logged but NOT returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(CommanderError):
    """
    Raised when a request body or a patched command fails validation.

    What:    Carries a field → messages map, rendered as the `errors` member
             of the validation problem response.
    When:    PATCH documents that cannot be applied or that leave the command
             invalid; malformed create/update bodies.
    HTTP:    400 Bad Request

    Example response:
        {
            "title": "One or more validation errors occurred.",
            "status": 400,
            "errors": {"howTo": ["The howTo field is required."]}
        }
    """

    def __init__(
        self,
        errors: Optional[Dict[str, List[str]]] = None,
        message: str = "One or more validation errors occurred.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.errors: Dict[str, List[str]] = errors or {}

    def add(self, field: str, message: str) -> None:
        self.errors.setdefault(field, []).append(message)


class NotFoundError(CommanderError):
    """
    Raised when a requested command does not exist.

    The repository returns None for a missing id; the service converts that
    into this exception so routes stay free of null checks.
    HTTP:    404 Not Found, empty body.
    """

    def __init__(
        self,
        resource: str = "command",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class PersistenceError(CommanderError):
    """
    Raised when the repository reports that staged changes were not saved.

    What:    `save_changes()` returned False (the store rejected the commit).
    HTTP:    500 Internal Server Error

    The response message is always generic; the store error itself is logged
    by the repository that caught it.
    """

    def __init__(
        self,
        message: str = "The change could not be saved. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
