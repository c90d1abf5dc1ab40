"""fakedata: in-memory fake database for unit tests."""

from .context import DatabaseContext
from .core.errors import (
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
from .database import FakeDatabase
from .infra.config import FakeDataConfig
from .infra.metadata import (
    DataclassMetadataProvider,
    YamlMetadataProvider,
    column,
    identity,
)
from .table import Table

__version__ = "0.1.0"
__all__ = [
    "AutoIdOverflowError",
    "ConfigurationError",
    "DataclassMetadataProvider",
    "DatabaseContext",
    "FakeDataConfig",
    "FakeDataError",
    "FakeDatabase",
    "LockCancelledError",
    "LockReleaseError",
    "LockTimeoutError",
    "MetadataError",
    "NotLockedError",
    "NullArgumentError",
    "RecordValidationError",
    "Table",
    "YamlMetadataProvider",
    "__version__",
    "column",
    "identity",
]
