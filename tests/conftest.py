"""Pytest configuration for fakedata tests."""

from collections.abc import Iterator

import pytest

from fakedata.infra.config import default_config
from fakedata.infra.env import fakedata_environ


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run every test against default configuration.

    Removes FAKEDATA_* variables inherited from the developer's shell and
    drops the cached process-wide config before and after the test.
    """
    for name in fakedata_environ():
        monkeypatch.delenv(name)
    default_config.cache_clear()
    yield
    default_config.cache_clear()


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Default unmarked tests to unit category."""
    for item in items:
        if any(marker in item.keywords for marker in ("unit", "integration")):
            continue
        item.add_marker(pytest.mark.unit)
