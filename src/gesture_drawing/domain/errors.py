"""Errors raised by the drawing session core."""


class ProviderError(Exception):
    """Raised when the image provider cannot return reference images."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SessionNotFoundError(LookupError):
    """Raised when a session id is unknown or already closed."""
