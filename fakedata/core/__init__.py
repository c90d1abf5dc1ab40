"""Core types shared by the engine and the metadata providers."""

from fakedata.core.errors import (
    AutoIdOverflowError,
    ConfigurationError,
    FakeDataError,
    LockCancelledError,
    LockReleaseError,
    LockTimeoutError,
    MetadataError,
    NotLockedError,
    NullArgumentError,
    RecordValidationError,
)
from fakedata.core.models import (
    FieldValidator,
    IdentityField,
    IdentityKind,
    RecordMetadata,
)
from fakedata.core.protocols import RecordMetadataProvider

__all__ = [
    "AutoIdOverflowError",
    "ConfigurationError",
    "FakeDataError",
    "FieldValidator",
    "IdentityField",
    "IdentityKind",
    "LockCancelledError",
    "LockReleaseError",
    "LockTimeoutError",
    "MetadataError",
    "NotLockedError",
    "NullArgumentError",
    "RecordMetadata",
    "RecordMetadataProvider",
    "RecordValidationError",
]
