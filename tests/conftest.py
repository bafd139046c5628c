# PATH: tests/conftest.py
"""
Pytest configuration and fixtures for DeepBook query tests.
"""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import DeepBookConfig  # noqa: E402


def pytest_configure(config):
    """Configure pytest."""
    # Add custom markers
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (need a live fullnode)"
    )


@pytest_asyncio.fixture
async def mainnet_config():
    """Initialized mainnet config with an extra 2-decimal TEST coin and pool."""
    config = DeepBookConfig("mainnet")
    await config.init()
    config.add_coin(
        "TEST",
        "0x99",
        "0x0000000000000000000000000000000000000000000000000000000000000099::test::TEST",
        100,
    )
    config.add_pool(
        "TEST_USDC",
        "0x77",
        "TEST",
        "USDC",
    )
    return config


@pytest.fixture
def mock_adapter():
    """Simulation adapter whose simulate() result is set per test."""
    adapter = MagicMock()
    adapter.simulate = AsyncMock()
    adapter.provider.close = AsyncMock()
    return adapter
