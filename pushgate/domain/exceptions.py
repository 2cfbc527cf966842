"""Errors raised while preparing or dispatching push notifications."""


class PushConfigurationError(RuntimeError):
    """Raised when a delivery channel lacks the configuration it needs."""


class CredentialSigningError(RuntimeError):
    """Raised when the service account key cannot sign the token assertion."""


class TokenExchangeError(RuntimeError):
    """Raised when the token endpoint rejects the signed assertion."""

    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class NotificationNotFoundError(ValueError):
    """Raised when the requested notification does not exist."""


class NotificationStatusConflictError(ValueError):
    """Raised when a status write would move a notification backwards."""

    def __init__(self, message: str, *, current_status: str | None = None) -> None:
        super().__init__(message)
        self.current_status = current_status


__all__ = [
    "CredentialSigningError",
    "NotificationNotFoundError",
    "NotificationStatusConflictError",
    "PushConfigurationError",
    "TokenExchangeError",
]
