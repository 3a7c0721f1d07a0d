"""Exceptions raised by the maintenance logbook."""


class LogbookError(Exception):
    """Base class for logbook errors."""


class ValidationError(LogbookError, ValueError):
    """A required field is missing or a value is out of range."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class PersistenceError(LogbookError):
    """The data file could not be written."""
