"""Shopping cart page object."""
from __future__ import annotations

from typing import Dict, Iterable, List

from playwright.async_api import expect

from saucedemo_tests.pages.base import BasePage, LocatorFactory
from saucedemo_tests.utils import parse_price

ITEM = ".cart_item"


class CartPage(BasePage):
    def _build_elements(self) -> Dict[str, LocatorFactory]:
        return {
            "cart_list": lambda: self.page.locator(".cart_list"),
            "cart_item": lambda: self.page.locator(ITEM),
            "cart_item_name": lambda: self.page.locator(".inventory_item_name"),
            "cart_item_description": lambda: self.page.locator(".inventory_item_desc"),
            "cart_item_price": lambda: self.page.locator(".inventory_item_price"),
            "cart_item_row": lambda name: self.row(ITEM, name),
            "remove_button": lambda name: self.row(ITEM, name).locator("button", has_text="Remove"),
            "continue_shopping_button": lambda: self.by_test_id("continue-shopping"),
            "checkout_button": lambda: self.by_test_id("checkout"),
            "cart_title": lambda: self.page.locator(".title"),
        }

    async def verify_cart_page_displayed(self) -> "CartPage":
        await self.verify_title("Your Cart")
        await expect(self.elements["cart_list"]()).to_be_visible()
        return self

    async def verify_product_in_cart(self, product_name: str) -> "CartPage":
        await expect(self.elements["cart_item_name"]().filter(has_text=product_name)).to_be_visible()
        return self

    async def verify_multiple_products_in_cart(self, product_names: Iterable[str]) -> "CartPage":
        for product_name in product_names:
            await self.verify_product_in_cart(product_name)
        return self

    async def get_product_price(self, product_name: str) -> str:
        return await self.elements["cart_item_row"](product_name).locator(".inventory_item_price").inner_text()

    async def remove_product(self, product_name: str) -> "CartPage":
        await self.elements["remove_button"](product_name).click()
        return self

    async def click_continue_shopping(self) -> "CartPage":
        await self.elements["continue_shopping_button"]().click()
        return self

    async def click_checkout(self) -> "CartPage":
        await self.elements["checkout_button"]().click()
        return self

    async def get_all_cart_items(self) -> List[str]:
        return await self.elements["cart_item_name"]().all_inner_texts()

    async def get_cart_item_count(self) -> int:
        return await self.elements["cart_item"]().count()

    async def verify_cart_is_empty(self) -> "CartPage":
        await expect(self.elements["cart_item"]()).to_have_count(0)
        return self

    async def calculate_total_cart_value(self) -> float:
        prices = await self.elements["cart_item_price"]().all_inner_texts()
        return round(sum(parse_price(price) for price in prices), 2)
