"""Client for the placeholder REST API (users / posts).

Responses are returned as-is: a 404 is data for these checks, not an
error, so nothing here raises on status.

Usage:
    with PlaceholderApiClient() as api:
        response = api.get_user(1)
        assert response.status_code == 200
"""
from __future__ import annotations

import time
from typing import Any, Dict, Optional

import httpx

from saucedemo_tests.config import settings


class PlaceholderApiClient:
    """Synchronous httpx client bound to settings.api_url."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 transport: Optional[httpx.BaseTransport] = None) -> None:
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout / 1000
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )
        self.last_elapsed: float = 0.0

    def __enter__(self) -> "PlaceholderApiClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request and remember its wall-clock duration in ``last_elapsed``."""
        started = time.monotonic()
        response = self._client.request(method, path, **kwargs)
        self.last_elapsed = time.monotonic() - started
        return response

    # ---- users ------------------------------------------------------------------
    def list_users(self) -> httpx.Response:
        return self.request("GET", "/users")

    def get_user(self, user_id: int) -> httpx.Response:
        return self.request("GET", f"/users/{user_id}")

    # ---- posts ------------------------------------------------------------------
    def list_posts(self, user_id: Optional[int] = None) -> httpx.Response:
        params = {"userId": user_id} if user_id is not None else None
        return self.request("GET", "/posts", params=params)

    def get_post(self, post_id: int) -> httpx.Response:
        return self.request("GET", f"/posts/{post_id}")

    def create_post(self, payload: Dict[str, Any]) -> httpx.Response:
        return self.request("POST", "/posts", json=payload)

    def update_post(self, post_id: int, payload: Dict[str, Any]) -> httpx.Response:
        return self.request("PUT", f"/posts/{post_id}", json=payload)

    def delete_post(self, post_id: int) -> httpx.Response:
        return self.request("DELETE", f"/posts/{post_id}")

    def is_reachable(self) -> bool:
        try:
            self.request("HEAD", "/")
        except httpx.HTTPError:
            return False
        return True
