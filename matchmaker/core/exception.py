from typing import Any, Optional
from fastapi import HTTPException, status

from matchmaker.constants.error_constant import (
    ERROR_DAILY_PICKS_NO_EMBEDDING,
    ERROR_EXT_AI_PROVIDER_FAILED,
    ERROR_MESSAGE_NOT_AUTHORIZED,
    ERROR_SWIPE_ALREADY_EXISTS,
    ERROR_VAL_INVALID_INPUT,
)


class AppException(HTTPException):

    def __init__(
        self,
        error_code: str,
        message: str | None = None,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Optional[dict[str, Any]] = None,
    ):
        """
        Args:
            error_code: Error code constant (e.g., ERROR_USER_NOT_FOUND)
            message: Human-readable message (falls back to error_code if None)
            status_code: HTTP status code
            details: Additional context data
        """
        self.error_code = error_code
        self.message = message or error_code
        self.details = details or {}

        super().__init__(
            status_code=status_code,
            detail={
                "error_code": error_code,
                "message": self.message,
                "details": self.details,
            },
        )

    def __str__(self) -> str:
        return f"{self.error_code}: {self.message}"


class NotFoundError(AppException):
    """A user, match or daily-pick set referenced by id does not exist"""

    def __init__(self, error_code: str, message: str | None = None, **details: Any):
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
        )


class DuplicateSwipeError(AppException):
    """The swiper already decided on this profile"""

    def __init__(self, swiper_id: Any, swiped_id: Any):
        super().__init__(
            error_code=ERROR_SWIPE_ALREADY_EXISTS,
            message="Already swiped on this user",
            status_code=status.HTTP_409_CONFLICT,
            details={"swiper_id": str(swiper_id), "swiped_id": str(swiped_id)},
        )


class NoEmbeddingError(AppException):
    def __init__(self, user_id: Any):
        super().__init__(
            error_code=ERROR_DAILY_PICKS_NO_EMBEDDING,
            message="User has no profile embedding",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"user_id": str(user_id)},
        )


class ProviderError(AppException):
    """Embedding, chat-completion or vector-index failure (timeouts included)"""

    def __init__(
        self,
        message: str,
        error_code: str = ERROR_EXT_AI_PROVIDER_FAILED,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status.HTTP_502_BAD_GATEWAY,
            details=details,
        )


class AuthorizationError(AppException):
    def __init__(
        self,
        message: str = "Not authorized to perform this action",
        error_code: str = ERROR_MESSAGE_NOT_AUTHORIZED,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
        )


class ValidationError(AppException):
    def __init__(
        self,
        message: str,
        error_code: str = ERROR_VAL_INVALID_INPUT,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )
