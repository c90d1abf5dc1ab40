"""Unit tests for FakeDataConfig in fakedata/infra/config.py."""

from __future__ import annotations

import pytest

from fakedata.core.errors import ConfigurationError
from fakedata.infra.config import (
    FIRST_AUTO_ID_RANGE,
    FakeDataConfig,
    default_config,
)


class TestFakeDataConfigDefaults:
    """Tests for FakeDataConfig default values."""

    def test_defaults(self) -> None:
        config = FakeDataConfig()
        assert config.lock_poll_interval_ms == 5
        assert config.lock_timeout_seconds is None
        assert config.first_auto_id is None
        assert config.strict_release is False

    def test_poll_interval_in_seconds(self) -> None:
        assert FakeDataConfig(lock_poll_interval_ms=250).lock_poll_interval == 0.25

    def test_arbitrary_first_auto_id(self) -> None:
        low, high = FIRST_AUTO_ID_RANGE
        for _ in range(20):
            assert low <= FakeDataConfig().pick_first_auto_id() < high

    def test_configured_first_auto_id(self) -> None:
        assert FakeDataConfig(first_auto_id=1).pick_first_auto_id() == 1


class TestFakeDataConfigFromEnv:
    """Tests for FakeDataConfig.from_env."""

    def test_empty_environment_gives_defaults(self) -> None:
        assert FakeDataConfig.from_env() == FakeDataConfig()

    def test_reads_all_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FAKEDATA_LOCK_POLL_INTERVAL_MS", "20")
        monkeypatch.setenv("FAKEDATA_LOCK_TIMEOUT", "1.5")
        monkeypatch.setenv("FAKEDATA_FIRST_AUTO_ID", "500")
        monkeypatch.setenv("FAKEDATA_STRICT_RELEASE", "yes")

        config = FakeDataConfig.from_env()

        assert config.lock_poll_interval_ms == 20
        assert config.lock_timeout_seconds == 1.5
        assert config.first_auto_id == 500
        assert config.strict_release is True

    def test_parse_errors_collected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FAKEDATA_LOCK_TIMEOUT", "soon")
        monkeypatch.setenv("FAKEDATA_FIRST_AUTO_ID", "one")
        monkeypatch.setenv("FAKEDATA_STRICT_RELEASE", "maybe")

        with pytest.raises(ConfigurationError) as exc_info:
            FakeDataConfig.from_env()

        errors = exc_info.value.errors
        assert len(errors) == 3
        assert any("FAKEDATA_LOCK_TIMEOUT" in e for e in errors)
        assert any("FAKEDATA_FIRST_AUTO_ID" in e for e in errors)
        assert any("FAKEDATA_STRICT_RELEASE" in e for e in errors)

    def test_parse_errors_raised_without_validation(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FAKEDATA_LOCK_POLL_INTERVAL_MS", "fast")
        with pytest.raises(ConfigurationError, match="invalid integer 'fast'"):
            FakeDataConfig.from_env(validate=False)

    def test_validation_errors(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FAKEDATA_LOCK_POLL_INTERVAL_MS", "0")
        with pytest.raises(ConfigurationError, match="lock_poll_interval_ms"):
            FakeDataConfig.from_env()

    def test_skip_validation(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FAKEDATA_LOCK_TIMEOUT", "-1")
        config = FakeDataConfig.from_env(validate=False)
        assert config.lock_timeout_seconds == -1


class TestValidate:
    """Tests for FakeDataConfig.validate."""

    def test_valid_config(self) -> None:
        assert FakeDataConfig(lock_timeout_seconds=0, first_auto_id=1).validate() == []

    @pytest.mark.parametrize("first_auto_id", [0, -3])
    def test_first_auto_id_must_be_positive(self, first_auto_id: int) -> None:
        errors = FakeDataConfig(first_auto_id=first_auto_id).validate()
        assert errors == [f"first_auto_id must be >= 1, got: {first_auto_id}"]

    def test_all_errors_reported(self) -> None:
        config = FakeDataConfig(
            lock_poll_interval_ms=-1, lock_timeout_seconds=-2, first_auto_id=-3
        )
        assert len(config.validate()) == 3


class TestDefaultConfig:
    """Tests for the cached process-wide config."""

    def test_cached(self) -> None:
        assert default_config() is default_config()

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FAKEDATA_FIRST_AUTO_ID", "77")
        default_config.cache_clear()
        assert default_config().first_auto_id == 77

    def test_zero_first_auto_id_rejected(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FAKEDATA_FIRST_AUTO_ID", "0")
        default_config.cache_clear()
        with pytest.raises(ConfigurationError, match="first_auto_id must be >= 1"):
            default_config()
