"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"

    # Not found errors (404)
    POST_NOT_FOUND = "POST_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_CURSOR = "INVALID_CURSOR"

    # Conflict errors (409)
    DUPLICATE_LIKE = "DUPLICATE_LIKE"
    PROFILE_CREATION_FAILED = "PROFILE_CREATION_FAILED"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500/503)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationError(AppException):
    """Input rejected by a domain rule (empty content, bad cursor)."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=400,
            details={"field": field} if field else None,
        )


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(self, message: str = "Access denied", details: Any | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
            details=details,
        )


class NotFoundError(AppException):
    """A referenced row does not exist."""

    def __init__(self, error_code: ErrorCode, message: str, details: Any | None = None) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=404,
            details=details,
        )


class PostNotFoundError(NotFoundError):
    """Post not found."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.POST_NOT_FOUND,
            message=f"Post not found: {post_id}",
            details={"post_id": post_id},
        )


class ProfileNotFoundError(NotFoundError):
    """Profile not found."""

    def __init__(self, profile_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message=f"Profile not found: {profile_id}",
            details={"profile_id": profile_id},
        )


class CommentNotFoundError(NotFoundError):
    """Comment not found."""

    def __init__(self, comment_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.COMMENT_NOT_FOUND,
            message=f"Comment not found: {comment_id}",
            details={"comment_id": comment_id},
        )


class ConflictError(AppException):
    """A write collided with a uniqueness constraint."""

    def __init__(self, error_code: ErrorCode, message: str, details: Any | None = None) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=409,
            details=details,
        )


class DuplicateLikeError(ConflictError):
    """The user already likes this post."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.DUPLICATE_LIKE,
            message="You already like this post",
            details={"post_id": post_id},
        )


class ProfileCreationError(ConflictError):
    """Profile could not be created on first sign-in."""

    def __init__(self, profile_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_CREATION_FAILED,
            message="Failed to create profile. Please try again.",
            details={"profile_id": profile_id},
        )


class TransientError(AppException):
    """The database is unreachable or dropped the connection."""

    def __init__(self, message: str = "Storage temporarily unavailable") -> None:
        super().__init__(
            error_code=ErrorCode.SERVICE_UNAVAILABLE,
            message=message,
            status_code=503,
        )
