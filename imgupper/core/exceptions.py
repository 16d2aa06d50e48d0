class AppError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ValidationError(AppError):
    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class ConflictError(AppError):
    def __init__(self, message: str):
        super().__init__(message, status_code=409)


class AuthError(AppError):
    """Bad credentials or a missing/invalid bearer token.

    Messages stay uniform so callers cannot tell which check failed.
    """

    def __init__(self, message: str = "invalid email or password"):
        super().__init__(message, status_code=401)


class InvalidTokenError(AuthError):
    def __init__(self) -> None:
        super().__init__("invalid token")


class NotFoundError(AppError):
    def __init__(self, message: str = "not found"):
        super().__init__(message, status_code=404)


class InternalError(AppError):
    def __init__(self, message: str = "internal error"):
        super().__init__(message, status_code=500)


class SigningError(InternalError):
    def __init__(self) -> None:
        super().__init__("failed to generate auth token")


class StorageError(AppError):
    """Object-store write failed. ``detail`` is logged, never returned."""

    def __init__(self, detail: str = ""):
        super().__init__("failed to upload file", status_code=500)
        self.detail = detail


class PersistenceError(AppError):
    def __init__(self, message: str = "failed to save record", detail: str = ""):
        super().__init__(message, status_code=500)
        self.detail = detail
