"""
Pytest configuration and shared fixtures for tzmeta tests.

Provides:
- In-memory chain and HTTP doubles (``tests/fixtures/chain.py``)
- A resolver wired to the fake fetcher
- Logging configured at DEBUG so resolution events are exercised
"""

from __future__ import annotations

import logging

import pytest

from tests.fixtures.chain import FakeFetcher, InMemoryChain
from tzmeta.core.config import ResolverConfig
from tzmeta.models.network import NetworkContext
from tzmeta.resolver import MetadataResolver


pytest_plugins = ["tests.fixtures.chain"]


# ============================================================================
# Logging Configuration
# ============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Configure logging for tests."""
    logging.basicConfig(level=logging.DEBUG)


# ============================================================================
# Resolver Fixtures
# ============================================================================


@pytest.fixture
def resolver_config() -> ResolverConfig:
    """Default config with a small depth limit."""
    return ResolverConfig(max_depth=4)


@pytest.fixture
def resolver(resolver_config: ResolverConfig, fetcher: FakeFetcher) -> MetadataResolver:
    """Resolver backed by the fake fetcher."""
    return MetadataResolver(resolver_config, fetcher=fetcher)


@pytest.fixture
def context(chain: InMemoryChain) -> NetworkContext:
    """Context with no declared network."""
    return NetworkContext(client=chain)
