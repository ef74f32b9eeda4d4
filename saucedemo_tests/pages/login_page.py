"""Login page object."""
from __future__ import annotations

import re
from typing import Dict

from playwright.async_api import expect

from saucedemo_tests.config import settings
from saucedemo_tests.pages.base import BasePage, LocatorFactory


class LoginPage(BasePage):
    """Selectors and gestures for the storefront login form."""

    def _build_elements(self) -> Dict[str, LocatorFactory]:
        return {
            "username_input": lambda: self.by_test_id("username"),
            "password_input": lambda: self.by_test_id("password"),
            "login_button": lambda: self.by_test_id("login-button"),
            "error_message": lambda: self.by_test_id("error"),
            "error_button": lambda: self.page.locator(".error-button"),
            "login_container": lambda: self.page.locator(".login_container"),
            "bot_image": lambda: self.page.locator(".bot_column"),
        }

    async def visit(self) -> "LoginPage":
        """Open the login page with a clean session.

        The storefront does not always fire its load event, so readiness is
        judged by the login form itself rather than by navigation events.
        """
        await self.browser.clear_app_state()
        await self.browser.goto(settings.url("/"), wait_until="commit")

        await self.browser.wait_for_visible("body", timeout=30000)
        await expect(self.elements["username_input"]()).to_be_visible(timeout=25000)
        await expect(self.elements["login_container"]()).to_be_visible(timeout=15000)

        await self.browser.expect_url_contains(settings.host)
        return self

    async def enter_username(self, username: str) -> "LoginPage":
        await self.elements["username_input"]().fill(username)
        return self

    async def enter_password(self, password: str) -> "LoginPage":
        await self.elements["password_input"]().fill(password)
        return self

    async def click_login_button(self) -> "LoginPage":
        await self.elements["login_button"]().click()
        return self

    async def login(self, username: str, password: str) -> "LoginPage":
        await self.enter_username(username)
        await self.enter_password(password)
        await self.click_login_button()
        return self

    async def verify_error_message(self, expected_message: str) -> "LoginPage":
        error = self.elements["error_message"]()
        await expect(error).to_be_visible()
        await expect(error).to_contain_text(expected_message)
        return self

    async def verify_error_message_hidden(self) -> "LoginPage":
        await expect(self.elements["error_message"]()).to_have_count(0)
        return self

    async def verify_login_page_displayed(self) -> "LoginPage":
        for name in ("login_container", "username_input", "password_input", "login_button"):
            await expect(self.elements[name]()).to_be_visible()
        return self

    async def clear_error_message(self) -> "LoginPage":
        await self.elements["error_button"]().click()
        return self

    async def verify_successful_login(self) -> "LoginPage":
        """Logged-in users land on the inventory view."""
        await expect(self.page).to_have_url(re.compile(r"/inventory\.html"))
        await expect(self.page.locator(".inventory_list")).to_be_visible()
        return self
