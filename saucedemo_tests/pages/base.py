"""Common plumbing for page objects."""
from __future__ import annotations

from typing import Callable, Dict

from playwright.async_api import Locator, Page, expect

from saucedemo_tests.browser import Browser

LocatorFactory = Callable[..., Locator]


class BasePage:
    """Facade over one area of the storefront.

    ``elements`` maps a semantic name to a factory returning a fresh
    Playwright ``Locator``; locators resolve against the live document on
    every use, so nothing is cached between calls. Action methods return
    ``self`` for chaining, query methods return awaited values, and
    ``verify_*`` methods assert with Playwright's retrying ``expect``.
    """

    def __init__(self, browser: Browser) -> None:
        self.browser = browser
        self.elements: Dict[str, LocatorFactory] = self._build_elements()

    def _build_elements(self) -> Dict[str, LocatorFactory]:
        raise NotImplementedError

    @property
    def page(self) -> Page:
        return self.browser.page

    def by_test_id(self, value: str) -> Locator:
        """Locate by the storefront's data-test attribute."""
        return self.page.locator(f'[data-test="{value}"]')

    def row(self, row_selector: str, name: str) -> Locator:
        """The single row (inventory card / cart line) whose name label contains ``name``."""
        return self.page.locator(row_selector).filter(
            has=self.page.locator(".inventory_item_name", has_text=name)
        )

    async def verify_title(self, expected: str) -> None:
        title = self.page.locator(".title")
        await expect(title).to_be_visible()
        await expect(title).to_contain_text(expected)
