"""Checkout page object: information, overview and complete steps.

The storefront checkout is a small state machine:

    Cart --checkout--> INFORMATION --continue--> OVERVIEW --finish--> COMPLETE
                       |cancel -> Cart           |cancel -> Products   |back home -> Products

``continue`` stays on INFORMATION with an error banner while a required
field is blank. Methods must be called in that order; calling a step's
gesture from another step leaves the UI in an undefined state.
"""
from __future__ import annotations

import enum
from typing import Dict, Optional

from playwright.async_api import expect

from saucedemo_tests.pages.base import BasePage, LocatorFactory
from saucedemo_tests.utils import parse_price

FIRST_NAME_REQUIRED = "First Name is required"
LAST_NAME_REQUIRED = "Last Name is required"
POSTAL_CODE_REQUIRED = "Postal Code is required"
ORDER_COMPLETE_HEADER = "Thank you for your order!"


class CheckoutStep(enum.Enum):
    INFORMATION = "Checkout: Your Information"
    OVERVIEW = "Checkout: Overview"
    COMPLETE = "Checkout: Complete!"


def step_for_title(title: str) -> Optional[CheckoutStep]:
    title = title.strip()
    for step in CheckoutStep:
        if title.startswith(step.value):
            return step
    return None


def expected_validation_error(first_name: str, last_name: str, postal_code: str) -> Optional[str]:
    """Message the information form shows on continue; the first blank field wins."""
    if not first_name:
        return FIRST_NAME_REQUIRED
    if not last_name:
        return LAST_NAME_REQUIRED
    if not postal_code:
        return POSTAL_CODE_REQUIRED
    return None


class CheckoutPage(BasePage):
    def _build_elements(self) -> Dict[str, LocatorFactory]:
        return {
            # Checkout information
            "checkout_title": lambda: self.page.locator(".title"),
            "first_name_input": lambda: self.by_test_id("firstName"),
            "last_name_input": lambda: self.by_test_id("lastName"),
            "postal_code_input": lambda: self.by_test_id("postalCode"),
            "continue_button": lambda: self.by_test_id("continue"),
            "cancel_button": lambda: self.by_test_id("cancel"),
            "error_message": lambda: self.by_test_id("error"),
            "error_button": lambda: self.page.locator(".error-button"),
            # Checkout overview
            "cart_list": lambda: self.page.locator(".cart_list"),
            "cart_item": lambda: self.page.locator(".cart_item"),
            "cart_item_name": lambda: self.page.locator(".inventory_item_name"),
            "cart_item_price": lambda: self.page.locator(".inventory_item_price"),
            "summary_subtotal": lambda: self.page.locator(".summary_subtotal_label"),
            "summary_tax": lambda: self.page.locator(".summary_tax_label"),
            "summary_total": lambda: self.page.locator(".summary_total_label"),
            "finish_button": lambda: self.by_test_id("finish"),
            # Checkout complete
            "complete_container": lambda: self.page.locator("#checkout_complete_container"),
            "complete_title": lambda: self.page.locator(".complete-header"),
            "complete_text": lambda: self.page.locator(".complete-text"),
            "back_home_button": lambda: self.by_test_id("back-to-products"),
            "pony_express_image": lambda: self.page.locator(".pony_express"),
        }

    async def current_step(self) -> Optional[CheckoutStep]:
        return step_for_title(await self.elements["checkout_title"]().inner_text())

    # ---- information ------------------------------------------------------------
    async def verify_checkout_information_page(self) -> "CheckoutPage":
        await self.verify_title(CheckoutStep.INFORMATION.value)
        return self

    async def enter_first_name(self, first_name: str) -> "CheckoutPage":
        await self.elements["first_name_input"]().fill(first_name)
        return self

    async def enter_last_name(self, last_name: str) -> "CheckoutPage":
        await self.elements["last_name_input"]().fill(last_name)
        return self

    async def enter_postal_code(self, postal_code: str) -> "CheckoutPage":
        await self.elements["postal_code_input"]().fill(postal_code)
        return self

    async def fill_checkout_form(self, first_name: str, last_name: str, postal_code: str) -> "CheckoutPage":
        await self.enter_first_name(first_name)
        await self.enter_last_name(last_name)
        await self.enter_postal_code(postal_code)
        return self

    async def click_continue(self) -> "CheckoutPage":
        await self.elements["continue_button"]().click()
        return self

    async def click_cancel(self) -> "CheckoutPage":
        """Information step: back to the cart."""
        await self.elements["cancel_button"]().click()
        return self

    async def verify_error_message(self, expected_message: str) -> "CheckoutPage":
        error = self.elements["error_message"]()
        await expect(error).to_be_visible()
        await expect(error).to_contain_text(expected_message)
        return self

    async def complete_checkout_information(self, first_name: str, last_name: str, postal_code: str) -> "CheckoutPage":
        await self.fill_checkout_form(first_name, last_name, postal_code)
        await self.click_continue()
        return self

    # ---- overview ---------------------------------------------------------------
    async def verify_checkout_overview_page(self) -> "CheckoutPage":
        await self.verify_title(CheckoutStep.OVERVIEW.value)
        return self

    async def verify_product_in_overview(self, product_name: str) -> "CheckoutPage":
        await expect(self.elements["cart_item_name"]().filter(has_text=product_name)).to_be_visible()
        return self

    async def get_summary_subtotal(self) -> str:
        return await self.elements["summary_subtotal"]().inner_text()

    async def get_summary_tax(self) -> str:
        return await self.elements["summary_tax"]().inner_text()

    async def get_summary_total(self) -> str:
        return await self.elements["summary_total"]().inner_text()

    async def click_finish(self) -> "CheckoutPage":
        await self.elements["finish_button"]().click()
        return self

    async def click_overview_cancel(self) -> "CheckoutPage":
        """Overview step: back to the product listing."""
        await self.elements["cancel_button"]().click()
        return self

    async def verify_order_summary(self) -> "CheckoutPage":
        """Displayed total must equal displayed subtotal plus displayed tax."""
        subtotal = parse_price(await self.get_summary_subtotal())
        tax = parse_price(await self.get_summary_tax())
        total = parse_price(await self.get_summary_total())
        assert round(subtotal + tax, 2) == total, (
            f"Total ${total:.2f} != subtotal ${subtotal:.2f} + tax ${tax:.2f}"
        )
        return self

    # ---- complete ---------------------------------------------------------------
    async def verify_checkout_complete_page(self) -> "CheckoutPage":
        await expect(self.elements["complete_container"]()).to_be_visible()
        title = self.elements["complete_title"]()
        await expect(title).to_be_visible()
        await expect(title).to_contain_text(ORDER_COMPLETE_HEADER)
        return self

    async def verify_success_message(self, expected_message: str) -> "CheckoutPage":
        text = self.elements["complete_text"]()
        await expect(text).to_be_visible()
        await expect(text).to_contain_text(expected_message)
        return self

    async def verify_confirmation_elements(self) -> "CheckoutPage":
        for name in ("complete_title", "complete_text", "back_home_button", "pony_express_image"):
            await expect(self.elements[name]()).to_be_visible()
        return self

    async def click_back_home(self) -> "CheckoutPage":
        await self.elements["back_home_button"]().click()
        return self

    async def complete_full_checkout(self, first_name: str, last_name: str, postal_code: str) -> "CheckoutPage":
        """Information -> overview -> complete, verifying each step on the way."""
        await self.complete_checkout_information(first_name, last_name, postal_code)
        await self.verify_checkout_overview_page()
        await self.click_finish()
        await self.verify_checkout_complete_page()
        return self
