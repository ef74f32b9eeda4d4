"""Shared fixtures for the offline tests.

Page-object tests render the static documents in storefront_pages.py with
``page.set_content``; they need a local Playwright browser but no network.
"""

from __future__ import annotations

import pytest
import pytest_asyncio

from saucedemo_tests.browser import Browser
from saucedemo_tests.playwright_client import PlaywrightClient


@pytest_asyncio.fixture()
async def browser():
    client = PlaywrightClient(headless=True, timeout=3000, navigation_timeout=5000)
    try:
        await client.connect()
    except Exception as exc:
        pytest.skip(f"Playwright browser not available: {exc}")
    try:
        yield Browser(client.page)
    finally:
        await client.close()
