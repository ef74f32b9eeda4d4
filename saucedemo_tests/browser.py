"""Browser facade used by page objects, commands and fixtures.

Wraps one Playwright ``Page``: navigation relative to the storefront base
URL, storage reset, screenshots and polling waits. Driver failures surface
as ``ToolError`` so callers can inspect what was attempted.
"""
from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, TypeVar

import anyio
from playwright.async_api import Error as PlaywrightError, Page, expect

from saucedemo_tests.config import settings

T = TypeVar("T")

_ABSOLUTE_URL = re.compile(r"^[a-z]+:")


@dataclass
class ToolError(Exception):
    """A browser operation failed; ``payload`` holds its arguments."""

    name: str
    payload: Dict[str, Any]
    message: str

    def __str__(self) -> str:
        return f"{self.name} failed ({self.message}) with payload={self.payload}"


class Browser:
    """Storefront-aware wrapper over a Playwright page."""

    def __init__(self, page: Page) -> None:
        self._page = page
        self.current_url: str | None = None
        self.current_title: str | None = None

    @property
    def page(self) -> Page:
        return self._page

    async def _snapshot(self) -> Dict[str, Any]:
        self.current_url = self._page.url
        self.current_title = await self._page.title()
        return {"url": self.current_url, "title": self.current_title}

    # ---- navigation -------------------------------------------------------------
    async def goto(self, url: str, wait_until: str = "load", timeout: int | None = None) -> Dict[str, Any]:
        """Open ``url`` and return url, title and HTTP status.

        HTTP error statuses are reported in the result, never raised; timeouts
        and network failures (``net::ERR_*``) raise ``ToolError``.

        Args:
            url: Absolute URL or a path relative to the storefront base URL
            wait_until: "load", "domcontentloaded", "networkidle" or "commit"
            timeout: Milliseconds (default: page load timeout from settings)
        """
        target = url if _ABSOLUTE_URL.match(url) else settings.url(url)
        try:
            response = await self._page.goto(
                target, wait_until=wait_until, timeout=timeout or settings.page_load_timeout
            )
        except PlaywrightError as exc:
            raise ToolError(name="goto", payload={"url": target, "wait_until": wait_until}, message=str(exc))
        result = await self._snapshot()
        result["status"] = response.status if response else None
        return result

    async def reload(self) -> Dict[str, Any]:
        try:
            await self._page.reload()
        except PlaywrightError as exc:
            raise ToolError(name="reload", payload={"url": self._page.url}, message=str(exc))
        return await self._snapshot()

    # ---- page interaction -------------------------------------------------------
    async def select(self, selector: str, label: str) -> Dict[str, Any]:
        """Choose the option whose visible text is ``label``."""
        try:
            await self._page.select_option(selector, label=label)
        except PlaywrightError as exc:
            raise ToolError(name="select", payload={"selector": selector, "label": label}, message=str(exc))
        return {"selector": selector, "label": label}

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        try:
            return await self._page.evaluate(script, arg)
        except Exception as exc:
            raise ToolError(name="evaluate", payload={"script": script}, message=str(exc))

    # ---- state --------------------------------------------------------------------
    async def clear_app_state(self) -> None:
        """Drop cookies, and local/session storage when an http(s) origin is loaded."""
        await self._page.context.clear_cookies()
        if self._page.url.startswith("http"):
            await self.evaluate("() => { window.localStorage.clear(); window.sessionStorage.clear(); }")

    async def local_storage_item(self, key: str) -> Any:
        """localStorage value, JSON-decoded when it parses (None if absent)."""
        raw = await self.evaluate("(key) => window.localStorage.getItem(key)", key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            return raw

    async def screenshot(self, name: str, full_page: bool = True) -> str:
        """Write ``<screenshot_dir>/<name>.png`` and return its path."""
        path = os.path.join(settings.screenshot_dir, f"{name}.png")
        try:
            os.makedirs(settings.screenshot_dir, exist_ok=True)
            await self._page.screenshot(path=path, type="png", full_page=full_page)
        except Exception as exc:
            raise ToolError(name="screenshot", payload={"name": name, "path": path}, message=str(exc))
        return path

    # ---- waits ----------------------------------------------------------------------
    async def wait_for_visible(self, selector: str, timeout: int | None = None) -> None:
        await expect(self._page.locator(selector)).to_be_visible(timeout=timeout)

    async def expect_url_contains(self, fragment: str, timeout: int | None = None) -> None:
        await expect(self._page).to_have_url(re.compile(re.escape(fragment)), timeout=timeout)

    async def wait_for_ready_state(self, timeout: float = 10.0) -> None:
        await self.poll_until(
            lambda: self.evaluate("() => document.readyState"),
            lambda state: state == "complete",
            timeout=timeout,
            description="document.readyState == 'complete'",
        )

    async def poll_until(
        self,
        fetch: Callable[[], Awaitable[T]],
        predicate: Callable[[T], bool],
        timeout: float | None = None,
        interval: float = 0.2,
        description: str = "condition",
    ) -> T:
        """Re-read a value until ``predicate`` accepts it; AssertionError on timeout.

        ``timeout`` is in seconds and defaults to the command timeout.
        """
        if timeout is None:
            timeout = settings.default_command_timeout / 1000
        deadline = anyio.current_time() + timeout
        value = await fetch()
        while not predicate(value):
            if anyio.current_time() > deadline:
                raise AssertionError(f"Timed out after {timeout}s waiting for {description}; last value: {value!r}")
            await anyio.sleep(interval)
            value = await fetch()
        return value
