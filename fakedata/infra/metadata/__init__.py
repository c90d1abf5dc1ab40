"""Record metadata providers.

This package contains:
- base: caching shared by every provider
- dataclass_provider: declarations in dataclass field metadata (the default)
- yaml_provider: declarations in a YAML descriptor table
"""

from fakedata.infra.metadata.base import BaseMetadataProvider
from fakedata.infra.metadata.dataclass_provider import (
    DataclassMetadataProvider,
    column,
    default_provider,
    identity,
)
from fakedata.infra.metadata.yaml_provider import YamlMetadataProvider

__all__ = [
    "BaseMetadataProvider",
    "DataclassMetadataProvider",
    "YamlMetadataProvider",
    "column",
    "default_provider",
    "identity",
]
