"""Custom commands: reusable named operations for test modules.

Commands are registered once per process (``support.load_support``) and
the registry is then frozen. Tests reach them through a namespace bound to
their ``Browser``::

    cy = commands.bind(browser)
    await cy.login_with_fixture("validUser")
    await cy.add_product_to_cart("Sauce Labs Backpack")

Every command receives the namespace as its first argument, so commands
can call each other (``cy.login`` from ``login_with_fixture``) and reach
the browser through ``cy.browser``.
"""
from __future__ import annotations

import functools
import json
import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

import anyio
from playwright.async_api import Response, expect

from saucedemo_tests.browser import Browser, ToolError
from saucedemo_tests.fixture_data import load_users

logger = logging.getLogger(__name__)

CommandFunc = Callable[..., Awaitable[Any]]

# Marker Playwright puts in navigation timeouts caused by a missing load event
LOAD_EVENT_MARKER = 'waiting until "load"'
DEFAULT_VISIT_RETRIES = 2
DEFAULT_RETRY_DELAY = 2.0


class CommandRegistryError(RuntimeError):
    """Invalid registration or lookup of a custom command."""


class UnknownCommandError(CommandRegistryError, AttributeError):
    """No command is registered under the requested name.

    Also an ``AttributeError``, so ``hasattr``/``getattr`` with a default
    work on a bound namespace.
    """


class CommandRegistry:
    """Name -> async operation mapping, closed for registration once frozen."""

    def __init__(self) -> None:
        self._commands: Dict[str, CommandFunc] = {}
        self._frozen = False

    def add(self, name: str, func: Optional[CommandFunc] = None):
        """Register ``func`` under ``name``; usable directly or as a decorator."""
        if func is None:
            return functools.partial(self.add, name)
        if self._frozen:
            raise CommandRegistryError(f"Cannot register '{name}': commands are already frozen")
        if name in self._commands:
            raise CommandRegistryError(f"Command '{name}' is already registered")
        if name.startswith("_") or name in ("browser", "registry"):
            raise CommandRegistryError(f"Reserved command name: '{name}'")
        self._commands[name] = func
        return func

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def names(self) -> List[str]:
        return sorted(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def get(self, name: str) -> CommandFunc:
        try:
            return self._commands[name]
        except KeyError:
            raise UnknownCommandError(f"Unknown command: '{name}'") from None

    def bind(self, browser: Browser) -> "CommandNamespace":
        if not self._frozen:
            raise CommandRegistryError("Commands must be registered (and frozen) before tests run")
        return CommandNamespace(self, browser)


class CommandNamespace:
    """Registry commands bound to one browser, invoked as attributes."""

    def __init__(self, registry: CommandRegistry, browser: Browser) -> None:
        self.registry = registry
        self.browser = browser

    def __getattr__(self, name: str) -> Callable[..., Awaitable[Any]]:
        if name.startswith("_"):
            raise AttributeError(name)
        return functools.partial(self.registry.get(name), self)

    def __dir__(self) -> Iterable[str]:
        return list(super().__dir__()) + self.registry.names()


# Process-wide registry; populated by register_builtin_commands()
commands = CommandRegistry()


# ---- authentication -------------------------------------------------------------

async def login(cy: CommandNamespace, username: str, password: str) -> None:
    page = cy.browser.page
    await page.locator('[data-test="username"]').fill(username)
    await page.locator('[data-test="password"]').fill(password)
    await page.locator('[data-test="login-button"]').click()


async def login_with_fixture(cy: CommandNamespace, user_type: str = "validUser") -> None:
    user = load_users()[user_type]
    await cy.login(user.username, user.password)


# ---- cart -----------------------------------------------------------------------

def _inventory_item(cy: CommandNamespace, product_name: str):
    page = cy.browser.page
    return page.locator(".inventory_item").filter(
        has=page.locator(".inventory_item_name", has_text=product_name)
    )


async def add_product_to_cart(cy: CommandNamespace, product_name: str) -> None:
    await _inventory_item(cy, product_name).locator("button", has_text="Add to cart").click()


async def remove_product_from_cart(cy: CommandNamespace, product_name: str) -> None:
    await _inventory_item(cy, product_name).locator("button", has_text="Remove").click()


async def verify_cart_badge_count(cy: CommandNamespace, expected_count: int) -> None:
    badge = cy.browser.page.locator(".shopping_cart_badge")
    if expected_count > 0:
        await expect(badge).to_be_visible()
        await expect(badge).to_contain_text(str(expected_count))
    else:
        await expect(badge).to_have_count(0)


async def navigate_to_cart(cy: CommandNamespace) -> None:
    await cy.browser.page.locator(".shopping_cart_link").click()


# ---- checkout -------------------------------------------------------------------

async def fill_checkout_form(cy: CommandNamespace, first_name: str, last_name: str, postal_code: str) -> None:
    page = cy.browser.page
    await page.locator('[data-test="firstName"]').fill(first_name)
    await page.locator('[data-test="lastName"]').fill(last_name)
    await page.locator('[data-test="postalCode"]').fill(postal_code)
    await page.locator('[data-test="continue"]').click()


async def complete_checkout(cy: CommandNamespace, first_name: str, last_name: str, postal_code: str) -> None:
    await cy.navigate_to_cart()
    await cy.browser.page.locator('[data-test="checkout"]').click()
    await cy.fill_checkout_form(first_name, last_name, postal_code)
    await cy.browser.page.locator('[data-test="finish"]').click()


# ---- verification -----------------------------------------------------------------

async def verify_product_displayed(cy: CommandNamespace, product_name: str) -> None:
    await expect(cy.browser.page.locator(".inventory_item_name").filter(has_text=product_name)).to_be_visible()


async def verify_error_message(cy: CommandNamespace, expected_message: str) -> None:
    error = cy.browser.page.locator('[data-test="error"]')
    await expect(error).to_be_visible()
    await expect(error).to_contain_text(expected_message)


async def verify_url_contains(cy: CommandNamespace, text: str) -> None:
    await cy.browser.expect_url_contains(text)


async def verify_element_text(cy: CommandNamespace, selector: str, expected_text: str) -> None:
    element = cy.browser.page.locator(selector)
    await expect(element).to_be_visible()
    await expect(element).to_contain_text(expected_text)


# ---- navigation & state -----------------------------------------------------------

async def wait_for_page_load(cy: CommandNamespace) -> None:
    await cy.browser.wait_for_visible("body")
    await cy.browser.wait_for_ready_state()


async def visit_with_retry(
    cy: CommandNamespace,
    url: str,
    max_retries: int = DEFAULT_VISIT_RETRIES,
    retry_delay: float = DEFAULT_RETRY_DELAY,
    **goto_options: Any,
) -> Dict[str, Any]:
    """Navigate, retrying only when the page's load event never fired.

    Other errors, and the last load-event error once ``max_retries`` extra
    attempts are spent, propagate unchanged.
    """
    goto_options.setdefault("wait_until", "load")
    attempt = 0
    while True:
        logger.info("Page load attempt %d for %s", attempt + 1, url)
        try:
            result = await cy.browser.goto(url, **goto_options)
            await cy.browser.wait_for_visible("body", timeout=30000)
            return result
        except ToolError as exc:
            if attempt >= max_retries or LOAD_EVENT_MARKER not in exc.message:
                raise
            attempt += 1
            logger.warning("Retrying visit (attempt %d/%d): %s", attempt + 1, max_retries + 1, url)
            await anyio.sleep(retry_delay)


async def clear_app_state(cy: CommandNamespace) -> None:
    await cy.browser.clear_app_state()


async def select_dropdown_option(cy: CommandNamespace, selector: str, option_text: str) -> None:
    await cy.browser.select(selector, option_text)


async def take_custom_screenshot(cy: CommandNamespace, name: str) -> str:
    return await cy.browser.screenshot(name, full_page=False)


# ---- network --------------------------------------------------------------------

async def _capture_response(cy: CommandNamespace, url_pattern: Any, action: Callable[[], Awaitable[Any]]) -> Response:
    async with cy.browser.page.expect_response(url_pattern) as response_info:
        await action()
    return await response_info.value


async def wait_for_api_response(
    cy: CommandNamespace, url_pattern: Any, action: Callable[[], Awaitable[Any]]
) -> Response:
    """Run ``action`` and wait for the matching response; it must be 200 or 201."""
    response = await _capture_response(cy, url_pattern, action)
    assert response.status in (200, 201), f"Unexpected status {response.status} for {response.url}"
    return response


async def verify_api_response(
    cy: CommandNamespace,
    url_pattern: Any,
    action: Callable[[], Awaitable[Any]],
    status_code: Optional[int] = None,
    body_property: Optional[str] = None,
    body_contains: Optional[str] = None,
) -> Response:
    response = await _capture_response(cy, url_pattern, action)
    if status_code is not None:
        assert response.status == status_code, f"Expected status {status_code}, got {response.status}"
    if body_property is not None or body_contains is not None:
        body = await response.json()
        if body_property is not None:
            assert isinstance(body, dict) and body_property in body, (
                f"Response body has no property '{body_property}': {body!r}"
            )
        if body_contains is not None:
            assert body_contains in json.dumps(body), f"'{body_contains}' not in response body"
    return response


BUILTIN_COMMANDS: Dict[str, CommandFunc] = {
    "login": login,
    "login_with_fixture": login_with_fixture,
    "add_product_to_cart": add_product_to_cart,
    "remove_product_from_cart": remove_product_from_cart,
    "verify_cart_badge_count": verify_cart_badge_count,
    "navigate_to_cart": navigate_to_cart,
    "fill_checkout_form": fill_checkout_form,
    "complete_checkout": complete_checkout,
    "verify_product_displayed": verify_product_displayed,
    "verify_error_message": verify_error_message,
    "wait_for_page_load": wait_for_page_load,
    "visit_with_retry": visit_with_retry,
    "clear_app_state": clear_app_state,
    "select_dropdown_option": select_dropdown_option,
    "verify_url_contains": verify_url_contains,
    "verify_element_text": verify_element_text,
    "take_custom_screenshot": take_custom_screenshot,
    "wait_for_api_response": wait_for_api_response,
    "verify_api_response": verify_api_response,
}


def register_builtin_commands(registry: CommandRegistry) -> CommandRegistry:
    for name, func in BUILTIN_COMMANDS.items():
        registry.add(name, func)
    return registry
