"""Custom exception types for domain and API layers."""


class AppError(Exception):
    """Base app exception."""


class ValidationError(AppError):
    """Validation failure for user input."""


class EmptyDateError(ValidationError):
    """A required month-year token was empty."""

    def __init__(self, message: str = "date is empty") -> None:
        super().__init__(message)


class InvalidDateFormatError(ValidationError):
    """A month-year token did not match MM-YYYY."""

    def __init__(self, token: str) -> None:
        super().__init__(f"date is invalid: {token!r}, expected MM-YYYY")
        self.token = token


class DateOrderError(ValidationError):
    """A date range ends before (or where) it starts."""


class NotFoundError(AppError):
    """Repository lookup matched no row."""

    def __init__(self, entity: str, identifier: str) -> None:
        super().__init__(f"{entity} {identifier} not found")
        self.entity = entity
        self.identifier = identifier


class StorageError(AppError):
    """Database failure surfaced to the caller, never retried."""
