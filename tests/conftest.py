"""Pytest configuration for sitelink."""
import pytest

from sitelink.base.config import get_config, set_config


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _restore_global_config():
    original = get_config()
    yield
    set_config(original)
