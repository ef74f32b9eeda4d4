"""Static test data: users, products and API payloads.

Every loader re-reads its JSON file, so each test gets a fresh copy and
nothing one test does can leak into the next.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from saucedemo_tests.utils import parse_price

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


@dataclass(frozen=True)
class UserRecord:
    """Storefront credentials, plus checkout details where the role needs them."""

    username: str
    password: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    postal_code: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UserRecord":
        return cls(
            username=data["username"],
            password=data["password"],
            first_name=data.get("firstName"),
            last_name=data.get("lastName"),
            postal_code=data.get("postalCode"),
        )


@dataclass(frozen=True)
class ProductRecord:
    name: str
    price: str
    description: str = ""

    @property
    def amount(self) -> float:
        """Numeric price, e.g. 29.99 for "$29.99"."""
        return parse_price(self.price)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProductRecord":
        return cls(name=data["name"], price=data["price"], description=data.get("description", ""))


def load_fixture(name: str) -> Dict[str, Any]:
    """Parse fixtures/<name>.json and return a new dict."""
    path = FIXTURES_DIR / f"{name}.json"
    if not path.exists():
        raise FileNotFoundError(f"Fixture not found: {path}")
    with path.open(encoding="utf-8") as fh:
        return json.load(fh)


def load_users() -> Mapping[str, UserRecord]:
    """Users keyed by role (validUser, lockedUser, problemUser, performanceUser)."""
    raw = load_fixture("users")
    return MappingProxyType({role: UserRecord.from_dict(data) for role, data in raw.items()})


def load_products() -> Tuple[ProductRecord, ...]:
    """Catalog in the storefront's default order."""
    raw = load_fixture("products")
    return tuple(ProductRecord.from_dict(item) for item in raw["products"])


def load_api_data() -> Dict[str, Any]:
    return load_fixture("api")
