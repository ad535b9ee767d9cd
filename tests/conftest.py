"""
Pytest configuration and common fixtures for Neshan client tests.

Live tests talk to the real Neshan API and need NESHAN_API_KEY in the
environment (or in a .env file in the project root). They are skipped
otherwise.
"""

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from neshan import NeshanClient
from neshan.config import loadDotEnv

LIVE_API_KEY_ENV = "NESHAN_API_KEY"


@pytest.fixture(scope="session")
def neshanApiKey() -> str:
    """
    Provide API key for live tests.

    Returns:
        str: Neshan API key

    Skips the test if the key is not configured.
    """
    loadDotEnv(".env")
    apiKey = os.getenv(LIVE_API_KEY_ENV, "")
    if not apiKey:
        pytest.skip(f"{LIVE_API_KEY_ENV} is not set")
    return apiKey


@pytest_asyncio.fixture
async def liveClient(neshanApiKey: str) -> AsyncGenerator[NeshanClient, None]:
    """
    Create client for the real Neshan API.

    Yields:
        NeshanClient: Client closed after the test
    """
    async with NeshanClient(neshanApiKey, timeout=30) as client:
        yield client
