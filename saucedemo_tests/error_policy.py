"""Uncaught page error handling.

The storefront occasionally throws benign errors (ResizeObserver loop
warnings, load-event hiccups) that must not fail unrelated assertions.
Each test builds its own ``ErrorPolicy`` from the patterns its suite
injects, so what is ignored is scoped and can be tested in isolation.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Pattern, Sequence

from playwright.async_api import ConsoleMessage, Error as PlaywrightError, Page

logger = logging.getLogger(__name__)

# Known browser noise that never indicates an application failure
DEFAULT_IGNORABLE_ERROR_PATTERNS: tuple[str, ...] = (
    r"ResizeObserver loop limit exceeded",
    r"ResizeObserver loop completed with undelivered notifications",
)

# Page-load anomalies: logged, never fatal (navigation retries handle them)
DEFAULT_SUPPRESSED_ERROR_PATTERNS: tuple[str, ...] = (
    r"load event",
    r"pageLoadTimeout",
)


class UncaughtPageError(AssertionError):
    """Raised when the page threw errors that no pattern allows."""

    def __init__(self, messages: Sequence[str]) -> None:
        self.messages = list(messages)
        joined = "\n  - ".join(self.messages)
        super().__init__(f"{len(self.messages)} uncaught page error(s):\n  - {joined}")


def _compile(patterns: Iterable[str]) -> List[Pattern[str]]:
    return [re.compile(pattern) for pattern in patterns]


@dataclass
class ErrorPolicy:
    """Decide which uncaught page errors may fail a test.

    - ignorable patterns: dropped silently
    - suppressed patterns: logged at WARNING, not fatal
    - everything else: recorded; ``raise_if_errors`` fails the test
    """

    ignorable_patterns: Sequence[str] = DEFAULT_IGNORABLE_ERROR_PATTERNS
    suppressed_patterns: Sequence[str] = DEFAULT_SUPPRESSED_ERROR_PATTERNS
    fail_on_page_errors: bool = True
    errors: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._ignorable = _compile(self.ignorable_patterns)
        self._suppressed = _compile(self.suppressed_patterns)

    def is_ignorable(self, message: str) -> bool:
        return any(pattern.search(message) for pattern in self._ignorable)

    def is_suppressed(self, message: str) -> bool:
        return any(pattern.search(message) for pattern in self._suppressed)

    def handle(self, message: str) -> bool:
        """Classify one error message. Returns True when it counts as a failure."""
        if self.is_ignorable(message):
            return False
        if self.is_suppressed(message):
            logger.warning("Page load event issue detected, continuing: %s", message)
            return False
        self.errors.append(message)
        logger.error("Uncaught page error: %s", message)
        return True

    def attach(self, page: Page) -> "ErrorPolicy":
        """Subscribe to the page's uncaught errors and console errors."""
        page.on("pageerror", self._on_page_error)
        page.on("console", self._on_console)
        return self

    def _on_page_error(self, error: PlaywrightError) -> None:
        self.handle(error.message or str(error))

    def _on_console(self, message: ConsoleMessage) -> None:
        if message.type == "error":
            logger.debug("Console error on %s: %s", message.location.get("url", "?"), message.text)

    def raise_if_errors(self) -> None:
        if self.errors and self.fail_on_page_errors:
            raise UncaughtPageError(self.errors)
