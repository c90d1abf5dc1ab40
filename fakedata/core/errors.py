"""Exception hierarchy for fakedata.

Every error raised by the engine derives from FakeDataError so callers can
catch the whole family. Most also derive from the closest builtin so that
code written against a real persistence layer (``except ValueError``) keeps
working when the fake is swapped in.
"""

from __future__ import annotations


class FakeDataError(Exception):
    """Base exception for fakedata errors."""

    pass


class NullArgumentError(FakeDataError, ValueError):
    """Raised when a required argument is None.

    Example:
        >>> raise NullArgumentError("record")
        NullArgumentError: record must not be None.
    """

    def __init__(self, argument: str) -> None:
        self.argument = argument
        super().__init__(f"{argument} must not be None.")


class NotLockedError(FakeDataError, RuntimeError):
    """Raised when a table is used while its database context is not locked."""

    def __init__(self, message: str = "Database context must be locked.") -> None:
        super().__init__(message)


class RecordValidationError(FakeDataError, ValueError):
    """Raised when a record violates a declared field rule.

    Attributes:
        field_name: Name of the offending field.
        rule: Name of the violated rule ("required", "max_length", "pattern").
    """

    def __init__(self, field_name: str, rule: str, message: str) -> None:
        self.field_name = field_name
        self.rule = rule
        super().__init__(message)


class AutoIdOverflowError(FakeDataError, OverflowError):
    """Raised when the next auto ID does not fit the identity field's width."""

    def __init__(self, field_name: str, value: int, maximum: int) -> None:
        self.field_name = field_name
        self.value = value
        super().__init__(
            f"Auto ID {value} for {field_name} exceeds the maximum of {maximum}."
        )


class LockCancelledError(FakeDataError):
    """Raised when an asynchronous lock wait is abandoned via its cancel event."""

    def __init__(self) -> None:
        super().__init__("Lock acquisition was cancelled.")


class LockTimeoutError(FakeDataError, TimeoutError):
    """Raised when the database lock could not be acquired in time."""

    def __init__(self, timeout: float | None) -> None:
        self.timeout = timeout
        super().__init__(f"Timed out after {timeout}s waiting for the database lock.")


class LockReleaseError(FakeDataError, RuntimeError):
    """Raised in strict mode when a handle that does not hold the lock is released."""

    def __init__(self) -> None:
        super().__init__("Database context is not locked by this handle.")


class MetadataError(FakeDataError):
    """Raised when a record type's metadata declarations are invalid."""

    pass


class ConfigurationError(FakeDataError):
    """Raised when configuration validation fails."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        message = "Configuration validation failed:\n" + "\n".join(
            f"  - {e}" for e in errors
        )
        super().__init__(message)
