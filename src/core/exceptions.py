"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    REVIEW_NOT_FOUND = "REVIEW_NOT_FOUND"
    PORTFOLIO_ITEM_NOT_FOUND = "PORTFOLIO_ITEM_NOT_FOUND"
    SERVICE_REQUEST_NOT_FOUND = "SERVICE_REQUEST_NOT_FOUND"
    EXCHANGE_NOT_FOUND = "EXCHANGE_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Conflict errors (409)
    DUPLICATE_REVIEW = "DUPLICATE_REVIEW"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    STORAGE_ERROR = "STORAGE_ERROR"


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
    """Input is malformed or out of range."""

    def __init__(self, message: str, details: Any | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=400,
            details=details,
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


class ForbiddenError(AppException):
    """Authenticated but not permitted."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
        )


class NotFoundError(AppException):
    """Base class for a referenced aggregate or sub-resource that is absent."""

    def __init__(self, error_code: ErrorCode, message: str, details: Any | None = None) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=404,
            details=details,
        )


class ProfileNotFoundError(NotFoundError):
    """Skill profile not found."""

    def __init__(self, profile_id: str = "") -> None:
        super().__init__(
            ErrorCode.PROFILE_NOT_FOUND,
            f"Profile not found: {profile_id}" if profile_id else "Profile not found",
            details={"profile_id": profile_id} if profile_id else None,
        )


class ReviewNotFoundError(NotFoundError):
    """Review not found on the profile."""

    def __init__(self, review_id: str) -> None:
        super().__init__(
            ErrorCode.REVIEW_NOT_FOUND,
            f"Review not found: {review_id}",
            details={"review_id": review_id},
        )


class PortfolioItemNotFoundError(NotFoundError):
    """Portfolio item not found on the profile."""

    def __init__(self, item_id: str) -> None:
        super().__init__(
            ErrorCode.PORTFOLIO_ITEM_NOT_FOUND,
            f"Portfolio item not found: {item_id}",
            details={"item_id": item_id},
        )


class ServiceRequestNotFoundError(NotFoundError):
    """Service request not found."""

    def __init__(self, request_id: str) -> None:
        super().__init__(
            ErrorCode.SERVICE_REQUEST_NOT_FOUND,
            f"Service request not found: {request_id}",
            details={"request_id": request_id},
        )


class ExchangeNotFoundError(NotFoundError):
    """Exchange proposal not found."""

    def __init__(self, exchange_id: str) -> None:
        super().__init__(
            ErrorCode.EXCHANGE_NOT_FOUND,
            f"Exchange not found: {exchange_id}",
            details={"exchange_id": exchange_id},
        )


class UserNotFoundError(NotFoundError):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            ErrorCode.USER_NOT_FOUND,
            f"User not found: {user_id}",
            details={"user_id": user_id},
        )


class ConflictError(AppException):
    """Request conflicts with the current state of the resource."""

    def __init__(self, error_code: ErrorCode, message: str, details: Any | None = None) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=409,
            details=details,
        )


class DuplicateReviewError(ConflictError):
    """Reviewer already has a review on this profile."""

    def __init__(self, profile_id: str) -> None:
        super().__init__(
            ErrorCode.DUPLICATE_REVIEW,
            "You have already reviewed this profile",
            details={"profile_id": profile_id},
        )


class InvalidStatusTransitionError(ConflictError):
    """Status change is not allowed from the current status."""

    def __init__(self, current: str, requested: str) -> None:
        super().__init__(
            ErrorCode.INVALID_STATUS_TRANSITION,
            f"Cannot change status from '{current}' to '{requested}'",
            details={"current_status": current, "requested_status": requested},
        )


class StorageError(AppException):
    """Blob storage collaborator failed."""

    def __init__(self, message: str = "Asset storage failed", details: Any | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.STORAGE_ERROR,
            message=message,
            status_code=500,
            details=details,
        )
