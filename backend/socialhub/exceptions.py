"""
SocialHub Backend — Custom Exception Hierarchy
===============================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and route dependencies; caught by global handlers.
       Repositories do not raise these; they return explicit outcomes that
       the services translate.

Exception Hierarchy:
    SocialHubError (base)
    ├── ValidationError          → 400 Bad Request (business rule violated)
    ├── AuthenticationError      → 401 Unauthorized
    ├── ForbiddenError           → 403 Forbidden
    ├── NotFoundError            → 404 Not Found
    ├── ConflictError            → 409 Conflict (unique constraint)
    └── DatabaseError            → 500 Internal Server Error

Error payload:
    {
        "error": "conflict",
        "message": "Username is already taken",
        "details": {"field": "username"},
        "request_id": "a1b2c3d4"
    }
"""

from typing import Any, Dict, Optional


class SocialHubError(Exception):
    """
    Base exception for all SocialHub application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info; returned as "details" only by the
                  handlers for client-side errors (400/409)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(SocialHubError):
    """
    Raised when a request is well-formed but breaks a business rule.

    When:    Following yourself, liking your own post, an unparseable date
             path parameter, an empty token on /api/auth/validate.
    HTTP:    400 Bad Request

    Field-level schema failures never reach this class: FastAPI rejects
    them with its default 422 before a handler runs.
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


class AuthenticationError(SocialHubError):
    """
    Raised when the caller's identity is missing or cannot be established.

    When:    Login with bad credentials; a privileged route reached without
             a valid bearer token.
    HTTP:    401 Unauthorized (with a WWW-Authenticate: Bearer header)

    Login failures always use the same message whether the account is
    unknown or the password is wrong, so the response cannot be used to
    enumerate usernames.
    """

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(SocialHubError):
    """
    Raised when an authenticated caller acts on behalf of someone else.

    When:    Token belongs to user 1 but the path names user 2 as the
             follower/liker/author, or the caller edits a post they do not own.
    HTTP:    403 Forbidden
    """

    def __init__(
        self,
        message: str = "You are not allowed to perform this action",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(SocialHubError):
    """
    Raised when a referenced user, post, comment or relationship is absent.

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
        message: Optional[str] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id is not None:
                message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)


class ConflictError(SocialHubError):
    """
    Raised when a write collides with a uniqueness constraint in the store.

    When:    Duplicate username or email, following the same user twice,
             liking the same post twice.
    HTTP:    409 Conflict

    The store's constraint is the source of truth; this is raised after the
    INSERT/UPDATE failed, not from a pre-check.
    """

    def __init__(
        self,
        message: str = "The resource already exists",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DatabaseError(SocialHubError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        SQL text, constraint names and driver errors are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
