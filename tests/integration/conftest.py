"""Integration test configuration and fixtures."""

import os
import uuid
from typing import AsyncGenerator, Generator

import httpx
import pytest

from schemareg import AsyncRegistryClient, RegistryClient, RegistryConfig

REGISTRY_URL = os.getenv("SCHEMA_REGISTRY_URL", "http://localhost:8081")


def pytest_runtest_setup(item):
    """Skip integration tests if no schema registry is reachable."""
    if "integration" in [mark.name for mark in item.iter_markers()]:
        if not is_registry_available():
            pytest.skip(f"Schema registry not available on {REGISTRY_URL}")


def is_registry_available() -> bool:
    """Check if a schema registry answers on REGISTRY_URL."""
    try:
        response = httpx.get(f"{REGISTRY_URL}/subjects", timeout=5.0)
        return response.status_code == 200
    except httpx.HTTPError:
        return False


@pytest.fixture
def registry_config() -> RegistryConfig:
    """Configuration for the local schema registry."""
    return RegistryConfig(host=REGISTRY_URL)


@pytest.fixture
def registry_client(registry_config: RegistryConfig) -> Generator[RegistryClient, None, None]:
    with RegistryClient(registry_config) as client:
        yield client


@pytest.fixture
async def async_registry_client(registry_config: RegistryConfig) -> AsyncGenerator[AsyncRegistryClient, None]:
    """Async registry client for integration tests."""
    async with AsyncRegistryClient(registry_config) as client:
        yield client


@pytest.fixture
def test_subject() -> str:
    """Unique subject name for test isolation."""
    return f"test-subject-{uuid.uuid4().hex[:8]}-value"
