"""Infrastructure for fakedata.

This package contains:
- config: FakeDataConfig dataclass for configuration management
- env: dotenv loading
- locking: SessionLock shared by every handle of a database
- metadata/: record metadata providers
"""

from fakedata.infra.config import FakeDataConfig, default_config
from fakedata.infra.locking import SessionLock

__all__ = ["FakeDataConfig", "SessionLock", "default_config"]
