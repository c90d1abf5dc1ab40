"""Configuration dataclass for fakedata.

Provides FakeDataConfig for centralized configuration management. Test
suites can construct configuration programmatically (and attach it to a
context class) or load it from environment variables via from_env().

Environment Variables:
    FAKEDATA_LOCK_POLL_INTERVAL_MS: Poll interval for asynchronous lock waits (default: 5)
    FAKEDATA_LOCK_TIMEOUT: Seconds to wait for the database lock (default: wait forever)
    FAKEDATA_FIRST_AUTO_ID: First auto ID for new tables (default: arbitrary)
    FAKEDATA_STRICT_RELEASE: Raise on releasing an unlocked handle (default: false)
"""

from __future__ import annotations

import functools
import os
import random
from dataclasses import dataclass, field

from fakedata.core.errors import ConfigurationError
from fakedata.infra.env import load_user_env

# Range the arbitrary first auto ID is drawn from when none is configured
FIRST_AUTO_ID_RANGE = (1000, 1_000_000)

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


def _parse_int(
    name: str, parse_errors: list[str], *, default: int | None = None
) -> int | None:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        parse_errors.append(f"{name}: invalid integer '{raw}'")
        return default


def _parse_float(name: str, parse_errors: list[str]) -> float | None:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError:
        parse_errors.append(f"{name}: invalid number '{raw}'")
        return None


def _parse_bool(name: str, parse_errors: list[str]) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw not in _FALSE_VALUES:
        parse_errors.append(f"{name}: invalid boolean '{raw}'")
    return False


@dataclass(frozen=True)
class FakeDataConfig:
    """Centralized configuration for fake databases.

    Attributes:
        lock_poll_interval_ms: How often an asynchronous lock wait retries.
            Env: FAKEDATA_LOCK_POLL_INTERVAL_MS (default: 5)
        lock_timeout_seconds: Default time limit for lock acquisition.
            None waits forever. Env: FAKEDATA_LOCK_TIMEOUT
        first_auto_id: First auto ID handed out by new tables. None picks an
            arbitrary value per table. Env: FAKEDATA_FIRST_AUTO_ID
        strict_release: Raise LockReleaseError when a handle that does not
            hold the lock is released, instead of logging a warning.
            Env: FAKEDATA_STRICT_RELEASE (default: false)

    Example:
        # Programmatic construction:
        config = FakeDataConfig(first_auto_id=1000, strict_release=True)

        # Load from environment:
        config = FakeDataConfig.from_env()
    """

    lock_poll_interval_ms: int = field(default=5)
    lock_timeout_seconds: float | None = None
    first_auto_id: int | None = None
    strict_release: bool = field(default=False)

    @classmethod
    def from_env(cls, *, validate: bool = True) -> FakeDataConfig:
        """Create FakeDataConfig from environment variables.

        Args:
            validate: If True (default), run validation and raise
                ConfigurationError on any errors. Parse errors are always
                raised.

        Returns:
            FakeDataConfig instance with values from environment or defaults.

        Raises:
            ConfigurationError: If a variable cannot be parsed, or
                validate=True and the configuration is invalid.
        """
        parse_errors: list[str] = []
        poll_interval = _parse_int(
            "FAKEDATA_LOCK_POLL_INTERVAL_MS", parse_errors, default=5
        )
        config = cls(
            lock_poll_interval_ms=poll_interval if poll_interval is not None else 5,
            lock_timeout_seconds=_parse_float("FAKEDATA_LOCK_TIMEOUT", parse_errors),
            first_auto_id=_parse_int("FAKEDATA_FIRST_AUTO_ID", parse_errors),
            strict_release=_parse_bool("FAKEDATA_STRICT_RELEASE", parse_errors),
        )

        if validate:
            errors = config.validate()
            errors.extend(parse_errors)
            if errors:
                raise ConfigurationError(errors)
        elif parse_errors:
            raise ConfigurationError(parse_errors)

        return config

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors.

        Returns:
            List of error messages. Empty list if configuration is valid.
        """
        errors: list[str] = []
        if self.lock_poll_interval_ms <= 0:
            errors.append(
                f"lock_poll_interval_ms must be > 0, got: {self.lock_poll_interval_ms}"
            )
        if self.lock_timeout_seconds is not None and self.lock_timeout_seconds < 0:
            errors.append(
                f"lock_timeout_seconds must be >= 0, got: {self.lock_timeout_seconds}"
            )
        # 0 is the unset value of a non-nullable identity
        if self.first_auto_id is not None and self.first_auto_id < 1:
            errors.append(f"first_auto_id must be >= 1, got: {self.first_auto_id}")
        return errors

    @property
    def lock_poll_interval(self) -> float:
        """Poll interval in seconds."""
        return self.lock_poll_interval_ms / 1000.0

    def pick_first_auto_id(self) -> int:
        """Return the configured first auto ID, or an arbitrary one."""
        if self.first_auto_id is not None:
            return self.first_auto_id
        return random.randrange(*FIRST_AUTO_ID_RANGE)


@functools.lru_cache(maxsize=1)
def default_config() -> FakeDataConfig:
    """Process-wide configuration loaded once from the environment.

    The user .env file is loaded first; variables already set win.
    """
    load_user_env()
    return FakeDataConfig.from_env()
