"""Exceptions raised by the reference value store and access control."""


class ReferenceValueError(Exception):
    """Base class for all errors raised by this application."""


class StorageError(ReferenceValueError):
    """The backing file could not be read or written."""


class DecodeError(ReferenceValueError):
    """Stored data is not a valid JSON array of reference values."""


class NotFoundError(ReferenceValueError):
    """No reference value with the requested id exists."""

    def __init__(self, value_id: str) -> None:
        super().__init__(f"value not found: {value_id!r}")
        self.value_id = value_id


class AuthError(ReferenceValueError):
    """The request carried a missing or unknown token."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)
        self.message = message
