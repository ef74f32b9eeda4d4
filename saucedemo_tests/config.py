"""Shared configuration for the SauceDemo UI suite.

Values are resolved in this order:
- environment variable
- .env.defaults in the workspace
- built-in default below

Set UI_BASE_URL to point the suite at another storefront deployment and
PLAYWRIGHT_HEADLESS=false to run headed (interactive mode, no retries).
"""
from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Iterator, List, Tuple
from urllib.parse import urljoin, urlparse

from saucedemo_tests.env_defaults import get_env_default

BUILTIN_DEFAULTS: Dict[str, str] = {
    "UI_BASE_URL": "https://www.saucedemo.com",
    "UI_API_URL": "https://jsonplaceholder.typicode.com",
    "PLAYWRIGHT_HEADLESS": "true",
    "PLAYWRIGHT_BROWSER": "chromium",
    "UI_VIEWPORT_WIDTH": "1920",
    "UI_VIEWPORT_HEIGHT": "1080",
    "UI_COMMAND_TIMEOUT_MS": "10000",
    "UI_REQUEST_TIMEOUT_MS": "10000",
    "UI_PAGE_LOAD_TIMEOUT_MS": "60000",
    "UI_RETRIES_RUN_MODE": "2",
    "UI_RETRIES_OPEN_MODE": "0",
    "UI_RECORD_VIDEO": "true",
    "UI_SCREENSHOT_ON_FAILURE": "true",
    "SCREENSHOT_DIR": "artifacts/screenshots",
    "VIDEO_DIR": "artifacts/videos",
    "UI_FAIL_ON_PAGE_ERRORS": "true",
    "UI_IGNORABLE_ERRORS": "",
}

_TRUE_VALUES = {"true", "1", "yes", "on"}


def _lookup(key: str) -> str:
    value = os.getenv(key)
    if value is None:
        value = get_env_default(key)
    if value is None:
        value = BUILTIN_DEFAULTS[key]
    return value


def _as_bool(key: str) -> bool:
    return _lookup(key).strip().lower() in _TRUE_VALUES


def _as_int(key: str) -> int:
    raw = _lookup(key).strip()
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{key} must be an integer, got {raw!r}") from None


def _as_patterns(key: str) -> Tuple[str, ...]:
    return tuple(part.strip() for part in _lookup(key).split(";") if part.strip())


@dataclass
class UiTargetProfile:
    """Concrete storefront + API endpoints the suite runs against."""

    name: str
    base_url: str
    api_url: str

    @property
    def host(self) -> str:
        return urlparse(self.base_url).hostname or ""


class UiTestConfig:
    """Runtime configuration for the suite.

    Built once at import time; tests read it through the module-level
    ``settings`` object.
    """

    def __init__(self) -> None:
        self.playwright_headless: bool = _as_bool("PLAYWRIGHT_HEADLESS")
        self.browser_type: str = _lookup("PLAYWRIGHT_BROWSER").strip().lower()

        self.viewport_width: int = _as_int("UI_VIEWPORT_WIDTH")
        self.viewport_height: int = _as_int("UI_VIEWPORT_HEIGHT")

        self.default_command_timeout: int = _as_int("UI_COMMAND_TIMEOUT_MS")
        self.request_timeout: int = _as_int("UI_REQUEST_TIMEOUT_MS")
        self.page_load_timeout: int = _as_int("UI_PAGE_LOAD_TIMEOUT_MS")

        self.retries_run_mode: int = _as_int("UI_RETRIES_RUN_MODE")
        self.retries_open_mode: int = _as_int("UI_RETRIES_OPEN_MODE")

        self.record_video: bool = _as_bool("UI_RECORD_VIDEO")
        self.screenshot_on_failure: bool = _as_bool("UI_SCREENSHOT_ON_FAILURE")
        self.screenshot_dir = Path(_lookup("SCREENSHOT_DIR"))
        self.video_dir = Path(_lookup("VIDEO_DIR"))

        self.fail_on_page_errors: bool = _as_bool("UI_FAIL_ON_PAGE_ERRORS")
        self.extra_ignorable_errors: Tuple[str, ...] = _as_patterns("UI_IGNORABLE_ERRORS")

        primary = UiTargetProfile(
            name="primary",
            base_url=_lookup("UI_BASE_URL").strip(),
            api_url=_lookup("UI_API_URL").strip(),
        )
        self._profiles: Dict[str, UiTargetProfile] = {primary.name: primary}
        self._active: UiTargetProfile = primary

    # ---- run mode ---------------------------------------------------------------
    @property
    def interactive(self) -> bool:
        """Headed runs behave like an interactive runner session."""
        return not self.playwright_headless

    @property
    def retries(self) -> int:
        return self.retries_open_mode if self.interactive else self.retries_run_mode

    @property
    def viewport(self) -> Dict[str, int]:
        return {"width": self.viewport_width, "height": self.viewport_height}

    # ---- active profile helpers -------------------------------------------------
    @property
    def base_url(self) -> str:
        return self._active.base_url

    @property
    def api_url(self) -> str:
        return self._active.api_url

    @property
    def host(self) -> str:
        return self._active.host

    def profiles(self) -> List[UiTargetProfile]:
        return list(self._profiles.values())

    @contextmanager
    def use_profile(self, profile: UiTargetProfile) -> Iterator[UiTargetProfile]:
        """Temporarily switch the active profile (a copy, so edits don't leak)."""
        previous = self._active
        self._active = replace(profile)
        try:
            yield self._active
        finally:
            self._active = previous

    # ---- utility helpers --------------------------------------------------------
    def url(self, path: str = "") -> str:
        """Return an absolute storefront URL for the provided path."""
        return urljoin(self.base_url.rstrip("/") + "/", path.lstrip("/"))

    def api(self, path: str = "") -> str:
        """Return an absolute placeholder API URL for the provided path."""
        return urljoin(self.api_url.rstrip("/") + "/", path.lstrip("/"))


# Singleton instance - initialized on first import
settings = UiTestConfig()
