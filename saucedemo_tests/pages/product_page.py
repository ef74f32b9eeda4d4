"""Inventory (product listing) page object."""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from playwright.async_api import expect

from saucedemo_tests.fixture_data import ProductRecord, load_products
from saucedemo_tests.pages.base import BasePage, LocatorFactory
from saucedemo_tests.utils import SORT_OPTIONS, expected_sort_order, parse_price

ITEM = ".inventory_item"


class ProductPage(BasePage):
    """Selectors and gestures for the product listing, header cart and menu."""

    def _build_elements(self) -> Dict[str, LocatorFactory]:
        return {
            "inventory_list": lambda: self.page.locator(".inventory_list"),
            "inventory_item": lambda: self.page.locator(ITEM),
            "inventory_item_name": lambda: self.page.locator(".inventory_item_name"),
            "inventory_item_description": lambda: self.page.locator(".inventory_item_desc"),
            "inventory_item_price": lambda: self.page.locator(".inventory_item_price"),
            "inventory_item_row": lambda name: self.row(ITEM, name),
            "add_to_cart_button": lambda name: self.row(ITEM, name).locator("button", has_text="Add to cart"),
            "remove_button": lambda name: self.row(ITEM, name).locator("button", has_text="Remove"),
            "product_sort_container": lambda: self.page.locator("select.product_sort_container"),
            "shopping_cart_badge": lambda: self.page.locator(".shopping_cart_badge"),
            "shopping_cart_link": lambda: self.page.locator(".shopping_cart_link"),
            "product_title": lambda: self.page.locator(".title"),
            "menu_button": lambda: self.page.locator("#react-burger-menu-btn"),
            "menu_items": lambda: self.page.locator(".bm-menu"),
            "logout_link": lambda: self.page.locator("#logout_sidebar_link"),
        }

    async def verify_product_page_displayed(self) -> "ProductPage":
        await self.verify_title("Products")
        await expect(self.elements["inventory_list"]()).to_be_visible()
        return self

    async def verify_product_displayed(self, product_name: str) -> "ProductPage":
        await expect(
            self.elements["inventory_item_name"]().filter(has_text=product_name)
        ).to_be_visible()
        return self

    async def verify_item_details_displayed(self, product_name: str) -> "ProductPage":
        """Name, description, price and button are all visible on the product's card."""
        row = self.elements["inventory_item_row"](product_name)
        await expect(row.locator(".inventory_item_name")).to_contain_text(product_name)
        for selector in (".inventory_item_desc", ".inventory_item_price", "button"):
            await expect(row.locator(selector)).to_be_visible()
        return self

    async def get_product_price(self, product_name: str) -> str:
        return await self.elements["inventory_item_row"](product_name).locator(".inventory_item_price").inner_text()

    async def get_button_text(self, product_name: str) -> str:
        return await self.elements["inventory_item_row"](product_name).locator("button").inner_text()

    async def add_product_to_cart(self, product_name: str) -> "ProductPage":
        await self.elements["add_to_cart_button"](product_name).click()
        return self

    async def remove_product_from_cart(self, product_name: str) -> "ProductPage":
        await self.elements["remove_button"](product_name).click()
        return self

    async def verify_cart_badge_count(self, expected_count: int) -> "ProductPage":
        """A positive count shows on the badge; zero means no badge at all."""
        badge = self.elements["shopping_cart_badge"]()
        if expected_count > 0:
            await expect(badge).to_be_visible()
            await expect(badge).to_have_text(str(expected_count))
        else:
            await expect(badge).to_have_count(0)
        return self

    async def navigate_to_cart(self) -> "ProductPage":
        await self.elements["shopping_cart_link"]().click()
        return self

    async def sort_products(self, sort_option: str) -> "ProductPage":
        await self.elements["product_sort_container"]().select_option(label=sort_option)
        return self

    async def get_all_product_names(self) -> List[str]:
        return await self.elements["inventory_item_name"]().all_inner_texts()

    async def get_all_product_prices(self) -> List[str]:
        return await self.elements["inventory_item_price"]().all_inner_texts()

    async def get_product_count(self) -> int:
        return await self.elements["inventory_item"]().count()

    async def verify_products_sorted(
        self, sort_option: str, catalog: Optional[Sequence[ProductRecord]] = None
    ) -> "ProductPage":
        """Assert the listing is exactly ``catalog`` ordered the way ``sort_option`` promises.

        ``catalog`` defaults to the product fixture, so a missing, extra or
        repriced item fails the check as well as a wrong order. Price options
        compare prices, name options compare names.
        """
        ordered = expected_sort_order(load_products() if catalog is None else catalog, sort_option)
        key, _ = SORT_OPTIONS[sort_option]
        if key == "price":
            fetch = self._numeric_prices
            expected = [parse_price(p.price) for p in ordered]
        else:
            fetch = self.get_all_product_names
            expected = [p.name for p in ordered]
        await self.browser.poll_until(
            fetch,
            lambda values: values == expected,
            description=f"products sorted by {sort_option} as {expected}",
        )
        return self

    async def _numeric_prices(self) -> List[float]:
        return [parse_price(price) for price in await self.get_all_product_prices()]

    async def verify_products_sorted_by_price_low_to_high(self) -> "ProductPage":
        return await self.verify_products_sorted("Price (low to high)")

    async def verify_products_sorted_by_price_high_to_low(self) -> "ProductPage":
        return await self.verify_products_sorted("Price (high to low)")

    async def verify_products_sorted_by_name_a_to_z(self) -> "ProductPage":
        return await self.verify_products_sorted("Name (A to Z)")

    async def verify_products_sorted_by_name_z_to_a(self) -> "ProductPage":
        return await self.verify_products_sorted("Name (Z to A)")

    async def logout(self) -> "ProductPage":
        await self.elements["menu_button"]().click()
        logout_link = self.elements["logout_link"]()
        await expect(logout_link).to_be_visible()
        await logout_link.click()
        return self
