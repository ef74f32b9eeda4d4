"""
Playwright Session Client
=========================

Owns the Playwright driver, the launched browser, one browser context and
its default page. Every test case gets its own client, so cookies, storage
and recorded video never leak between cases.

Usage:
    from saucedemo_tests.playwright_client import PlaywrightClient

    async with PlaywrightClient() as client:
        await client.page.goto("https://www.saucedemo.com")
        await client.page.fill('[data-test="username"]', "standard_user")
"""

import os
from typing import Any, Dict, Optional

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from saucedemo_tests.config import settings

BROWSER_TYPES = ("chromium", "firefox", "webkit")


class PlaywrightClient:
    """
    One browser + context + page, configured from ``settings``.

    Example:
        async with PlaywrightClient(record_video_dir="artifacts/videos") as client:
            await client.page.goto("https://www.saucedemo.com")
    """

    def __init__(
        self,
        browser_type: Optional[str] = None,
        headless: Optional[bool] = None,
        timeout: Optional[int] = None,
        navigation_timeout: Optional[int] = None,
        viewport: Optional[Dict[str, int]] = None,
        record_video_dir: Optional[str] = None,
    ):
        """
        Args:
            browser_type: chromium, firefox or webkit (None = from settings)
            headless: Run without a window (None = from settings)
            timeout: Default action timeout in milliseconds
            navigation_timeout: Default navigation timeout in milliseconds
            viewport: Context viewport, e.g. {"width": 1920, "height": 1080}
            record_video_dir: Directory for recorded videos (None = no video)
        """
        self.browser_type = browser_type or settings.browser_type
        self.headless = settings.playwright_headless if headless is None else headless
        self.timeout = timeout or settings.default_command_timeout
        self.navigation_timeout = navigation_timeout or settings.page_load_timeout
        self.viewport = viewport or settings.viewport
        self.record_video_dir = record_video_dir

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _context_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"viewport": self.viewport}
        if self.record_video_dir:
            os.makedirs(self.record_video_dir, exist_ok=True)
            options["record_video_dir"] = self.record_video_dir
            options["record_video_size"] = self.viewport
        return options

    async def connect(self):
        """Launch the browser and open the default context and page.

        If the launch fails the driver is stopped before the error propagates.
        """
        name = self.browser_type
        if name not in BROWSER_TYPES:
            print(f"[CONFIG] WARNING: unknown browser '{name}', using chromium")
            name = "chromium"

        self._playwright = await async_playwright().start()
        try:
            launcher = getattr(self._playwright, name)
            self._browser = await launcher.launch(headless=self.headless)
            self._context = await self._browser.new_context(**self._context_options())
            self._context.set_default_timeout(self.timeout)
            self._context.set_default_navigation_timeout(self.navigation_timeout)
            self._page = await self._context.new_page()
        except Exception:
            await self.close()
            raise

    async def close(self):
        """Tear down page, context, browser and driver, in that order.

        Closing the context is what flushes recorded video to disk.
        """
        page, context, browser, driver = self._page, self._context, self._browser, self._playwright
        self._page = self._context = self._browser = self._playwright = None
        if page:
            await page.close()
        if context:
            await context.close()
        if browser:
            await browser.close()
        if driver:
            await driver.stop()

    @property
    def page(self) -> Page:
        """The default page of the client's context."""
        if not self._page:
            raise RuntimeError("Client not connected. Use 'async with' or call connect()")
        return self._page
