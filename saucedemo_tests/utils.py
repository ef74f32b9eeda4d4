"""Small helpers shared by page objects, commands and tests."""
from __future__ import annotations

import random
import re
import secrets
import string
from datetime import date, datetime, timezone
from typing import Any, Iterable, List, Mapping, Tuple

from saucedemo_tests.browser import Browser

_ALPHANUMERIC = string.ascii_letters + string.digits
_AMOUNT = re.compile(r"-?\d+(?:\.\d+)?")

# Sort dropdown label -> (key, descending)
SORT_OPTIONS: Mapping[str, Tuple[str, bool]] = {
    "Name (A to Z)": ("name", False),
    "Name (Z to A)": ("name", True),
    "Price (low to high)": ("price", False),
    "Price (high to low)": ("price", True),
}


def generate_random_string(length: int = 10) -> str:
    return "".join(secrets.choice(_ALPHANUMERIC) for _ in range(length))


def generate_random_email() -> str:
    return f"test_{generate_random_string(8)}@example.com"


def generate_random_number(minimum: int = 0, maximum: int = 100) -> int:
    return random.randint(minimum, maximum)


def format_date(value: date | None = None, fmt: str = "YYYY-MM-DD") -> str:
    """Format with YYYY/MM/DD tokens, e.g. format_date(d, "DD.MM.YYYY")."""
    value = value or date.today()
    return (
        fmt.replace("YYYY", f"{value.year:04d}")
        .replace("MM", f"{value.month:02d}")
        .replace("DD", f"{value.day:02d}")
    )


def get_current_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def parse_price(text: str) -> float:
    """Extract the amount from labels like "$29.99" or "Item total: $29.99"."""
    match = _AMOUNT.search(text.replace(",", ""))
    if not match:
        raise ValueError(f"No price found in {text!r}")
    return float(match.group(0))


def compare_prices(first: str, second: str) -> bool:
    """True if the first price is greater than the second."""
    return parse_price(first) > parse_price(second)


def calculate_total_price(items: Iterable[Any]) -> float:
    """Sum item prices; items are mappings with "price" or objects with .price."""
    total = 0.0
    for item in items:
        price = item["price"] if isinstance(item, Mapping) else item.price
        total += parse_price(price)
    return round(total, 2)


def verify_response_schema(response: Any, schema: Mapping[str, Any], path: str = "") -> None:
    """Assert every key of ``schema`` exists in ``response``; nested dicts recurse.

    Only presence is checked, never types or values.
    """
    for key, expected in schema.items():
        location = f"{path}.{key}" if path else key
        assert isinstance(response, Mapping) and key in response, f"Missing property '{location}'"
        if isinstance(expected, Mapping):
            verify_response_schema(response[key], expected, location)


def expected_sort_order(products: Iterable[Any], option: str) -> List[Any]:
    """Products ordered the way the given sort dropdown label should order them."""
    try:
        key, descending = SORT_OPTIONS[option]
    except KeyError:
        raise ValueError(f"Unknown sort option: {option!r}") from None
    if key == "price":
        return sorted(products, key=lambda p: parse_price(p.price), reverse=descending)
    return sorted(products, key=lambda p: p.name, reverse=descending)


async def wait_for_element(browser: Browser, selector: str, timeout: int = 10000) -> None:
    await browser.wait_for_visible(selector, timeout=timeout)
