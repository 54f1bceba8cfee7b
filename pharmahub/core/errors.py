"""Application errors mapped to HTTP status codes by the exception handlers in main."""


class AppError(Exception):
    """Base error carrying a user-facing message and an HTTP status code."""

    status_code = 500
    headers: dict[str, str] | None = None

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(AppError):
    """Missing or invalid input."""

    status_code = 400


class ConflictError(AppError):
    """A unique field (codigo_gestor, cnpj, email) is already in use."""

    status_code = 400


class AuthError(AppError):
    """Bad credentials, or a missing, invalid or expired bearer token."""

    status_code = 401
    headers = {"WWW-Authenticate": "Bearer"}


class NotFoundError(AppError):
    status_code = 404


class InternalError(AppError):
    """Unexpected failure; the message is generic and the cause is only logged."""

    status_code = 500
