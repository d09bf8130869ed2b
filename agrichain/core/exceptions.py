class LedgerServiceError(Exception):
    """Base exception for all errors raised by the inventory core."""

    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(LedgerServiceError):
    """Raised when input is missing or malformed. No state is changed."""

    status_code = 400


class NotFoundError(LedgerServiceError):
    """Raised when a referenced entity does not exist."""

    status_code = 404


class AuthorizationError(LedgerServiceError):
    """Raised when the caller's scope does not cover the requested row."""

    status_code = 403


class ConflictError(LedgerServiceError):
    """Raised when the store rejected a write, e.g. a concurrent first insert."""

    status_code = 409
