"""Support bootstrap, run once per process before any test executes.

- registers the built-in custom commands and freezes the registry
- applies the default assertion timeout to Playwright ``expect``
- builds per-test error policies from the patterns a suite injects
- finishes each test: failure screenshot, then the page-error verdict
"""
from __future__ import annotations

import logging
import re
from typing import Iterable, Optional

import allure
from playwright.async_api import expect

from saucedemo_tests.browser import Browser
from saucedemo_tests.commands import CommandRegistry, commands, register_builtin_commands
from saucedemo_tests.config import UiTestConfig, settings
from saucedemo_tests.error_policy import (
    DEFAULT_IGNORABLE_ERROR_PATTERNS,
    DEFAULT_SUPPRESSED_ERROR_PATTERNS,
    ErrorPolicy,
)

logger = logging.getLogger(__name__)


def load_support(registry: CommandRegistry = commands, config: UiTestConfig = settings) -> CommandRegistry:
    """Register commands and global defaults. Safe to call more than once."""
    if registry.frozen:
        return registry
    register_builtin_commands(registry)
    registry.freeze()
    expect.set_options(timeout=config.default_command_timeout)
    logger.info(
        "Support loaded: %d commands, base_url=%s, api_url=%s, retries=%d",
        len(registry.names()),
        config.base_url,
        config.api_url,
        config.retries,
    )
    return registry


def default_ignorable_patterns(config: UiTestConfig = settings) -> tuple[str, ...]:
    return DEFAULT_IGNORABLE_ERROR_PATTERNS + tuple(config.extra_ignorable_errors)


def build_error_policy(
    ignorable_patterns: Optional[Iterable[str]] = None,
    suppressed_patterns: Optional[Iterable[str]] = None,
    config: UiTestConfig = settings,
) -> ErrorPolicy:
    return ErrorPolicy(
        ignorable_patterns=tuple(default_ignorable_patterns(config) if ignorable_patterns is None else ignorable_patterns),
        suppressed_patterns=tuple(
            DEFAULT_SUPPRESSED_ERROR_PATTERNS if suppressed_patterns is None else suppressed_patterns
        ),
        fail_on_page_errors=config.fail_on_page_errors,
    )


async def finish_test(
    browser: Browser, policy: ErrorPolicy, failed: bool, test_id: str, config: UiTestConfig = settings
) -> None:
    """Screenshot a failed test, then raise any uncaught page errors it produced.

    Page errors are raised even when taking the screenshot fails.
    """
    try:
        if failed and config.screenshot_on_failure:
            path = await browser.screenshot(re.sub(r"[^A-Za-z0-9_.-]+", "_", test_id))
            allure.attach.file(path, name="failure-screenshot", attachment_type=allure.attachment_type.PNG)
    finally:
        policy.raise_if_errors()
