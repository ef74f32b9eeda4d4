"""Fixtures and global hooks for the SauceDemo suite.

Loaded by pytest before any test module, which makes it the support file:
commands are registered here once, and the suite lifecycle is logged here.
"""
import logging
from typing import Tuple

import httpx
import pytest
import pytest_asyncio

from saucedemo_tests.api_client import PlaceholderApiClient
from saucedemo_tests.browser import Browser
from saucedemo_tests.commands import commands
from saucedemo_tests.config import settings
from saucedemo_tests.fixture_data import load_api_data, load_products, load_users
from saucedemo_tests.pages import CartPage, CheckoutPage, LoginPage, ProductPage
from saucedemo_tests.playwright_client import PlaywrightClient
from saucedemo_tests.support import build_error_policy, default_ignorable_patterns, finish_test, load_support

logger = logging.getLogger("saucedemo_tests")


# ============================================================================
# Global hooks
# ============================================================================

def pytest_configure(config):
    config.addinivalue_line("markers", "live: needs a real browser and network access to the storefront/API")
    config.addinivalue_line("markers", "smoke: fast critical-path checks")
    config.addinivalue_line("markers", "regression: full regression tier")
    load_support()


def pytest_collection_modifyitems(config, items):
    """Live cases are retried by the runner (none in interactive mode)."""
    if settings.retries <= 0:
        return
    for item in items:
        if item.get_closest_marker("live") and not item.get_closest_marker("flaky"):
            item.add_marker(pytest.mark.flaky(reruns=settings.retries))


def pytest_sessionstart(session):
    logger.info("Starting test suite execution")


def pytest_sessionfinish(session, exitstatus):
    logger.info("Test suite execution completed (exit status %s)", exitstatus)


def pytest_runtest_setup(item):
    logger.info("Running test: %s", item.nodeid)


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)
    if report.failed:
        logger.error("Test failed: %s (%s)", item.nodeid, report.when)


# ============================================================================
# Environment availability
# ============================================================================

def _probe(url: str) -> str | None:
    """Return None if the URL answers, otherwise a reason string."""
    try:
        httpx.get(url, timeout=settings.request_timeout / 1000, follow_redirects=True)
    except httpx.HTTPError as exc:
        return f"{url} unreachable: {exc}"
    return None


@pytest.fixture(scope="session")
def storefront_available():
    reason = _probe(settings.url("/"))
    if reason:
        pytest.skip(reason)


@pytest.fixture(scope="session")
def api_available():
    reason = _probe(settings.api("/users/1"))
    if reason:
        pytest.skip(reason)


# ============================================================================
# Browser fixtures
# ============================================================================

@pytest.fixture
def ignorable_error_patterns() -> Tuple[str, ...]:
    """Page errors this suite tolerates; override in a test module to widen or narrow it."""
    return default_ignorable_patterns()


@pytest.fixture
def error_policy(ignorable_error_patterns):
    return build_error_policy(ignorable_error_patterns)


@pytest_asyncio.fixture()
async def playwright_client(storefront_available):
    """Fresh browser context per test; skips when no browser can be launched."""
    client = PlaywrightClient(record_video_dir=str(settings.video_dir) if settings.record_video else None)
    try:
        await client.connect()
    except Exception as exc:
        pytest.skip(f"Playwright browser not available: {exc}")
    try:
        yield client
    finally:
        await client.close()


@pytest_asyncio.fixture()
async def browser(request, playwright_client, error_policy):
    """Browser wrapper with the error policy attached; screenshots failures."""
    error_policy.attach(playwright_client.page)
    browser = Browser(playwright_client.page)
    yield browser

    report = getattr(request.node, "rep_call", None)
    await finish_test(browser, error_policy, report is not None and report.failed, request.node.nodeid)


@pytest.fixture
def cy(browser):
    """Custom commands bound to this test's browser."""
    return commands.bind(browser)


@pytest.fixture
def login_page(browser):
    return LoginPage(browser)


@pytest.fixture
def product_page(browser):
    return ProductPage(browser)


@pytest.fixture
def cart_page(browser):
    return CartPage(browser)


@pytest.fixture
def checkout_page(browser):
    return CheckoutPage(browser)


@pytest_asyncio.fixture()
async def visited(login_page):
    """Start every case from a clean login page."""
    await login_page.visit()
    return login_page


@pytest_asyncio.fixture()
async def logged_in(visited, users):
    """Start from the inventory view, authenticated as validUser."""
    user = users["validUser"]
    await visited.login(user.username, user.password)
    return visited


# ============================================================================
# Fixture data (fresh per test)
# ============================================================================

@pytest.fixture
def users():
    return load_users()


@pytest.fixture
def products():
    return load_products()


@pytest.fixture
def api_data():
    return load_api_data()


@pytest.fixture
def valid_user(users):
    return users["validUser"]


# ============================================================================
# REST API
# ============================================================================

@pytest.fixture
def api(api_available):
    with PlaceholderApiClient() as client:
        yield client
