"""Application error types.

Every error carries the HTTP status the API answers with, so services can
raise them without knowing about FastAPI.
"""


class AppError(Exception):
    """Base class for errors scoped to a single request."""

    status_code = 500

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: dict[str, object] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}


class NotFoundError(AppError):
    """A referenced food item, meal or user does not exist."""

    status_code = 404

    def __init__(self, resource: str, identifier: object | None = None) -> None:
        message = f"{resource} not found"
        if identifier is not None:
            message = f"{resource} {identifier} not found"
        super().__init__(
            message,
            details={"resource": resource, "id": str(identifier)}
            if identifier is not None
            else {"resource": resource},
        )


class ValidationError(AppError):
    """Input has the wrong shape or violates a business rule."""

    status_code = 400

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, details={"field": field} if field else None)


class InvalidServingSize(ValidationError):
    """A reference serving amount is zero or negative."""

    def __init__(self, amount: float) -> None:
        super().__init__(
            f"Reference serving amount must be positive, got {amount}",
            field="serving_size.amount",
        )


class AuthenticationError(AppError):
    """Credentials or token were rejected."""

    status_code = 401


class PermissionDeniedError(AppError):
    """The caller is authenticated but not allowed to do this."""

    status_code = 403


class ChatUnavailableError(AppError):
    """No chat-completion provider is configured."""

    status_code = 503

    def __init__(self) -> None:
        super().__init__("Chat assistant is currently unavailable.")


class ChatUpstreamError(AppError):
    """The chat-completion provider failed or answered with garbage."""

    status_code = 502
