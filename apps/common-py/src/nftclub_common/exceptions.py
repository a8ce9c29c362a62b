"""Error kinds raised by the user domain.

Callers tell failures apart by type (or by the ``code`` attribute once they
have been rendered to JSON) instead of parsing messages.
"""

from typing import Any


class UserServiceError(Exception):
    """Base class for every error raised by the user service."""

    code = "user_service_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        """Render the error as a JSON-compatible body."""
        return {"detail": self.message, "code": self.code}


class UserNotFoundError(UserServiceError):
    """No user exists with the requested identifier."""

    code = "not_found"

    def __init__(self, user_id: Any) -> None:
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class UserValidationError(UserServiceError):
    """A user payload or identifier failed validation."""

    code = "validation_error"

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        body["errors"] = self.errors
        return body


class StoreError(UserServiceError):
    """The entity store failed to complete an operation."""

    code = "store_error"
