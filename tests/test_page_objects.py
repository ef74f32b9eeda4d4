"""Page objects against static storefront documents (no network)."""

from __future__ import annotations

import pytest

from saucedemo_tests.config import settings
from saucedemo_tests.error_policy import ErrorPolicy, UncaughtPageError
from saucedemo_tests.fixture_data import ProductRecord, load_products
from saucedemo_tests.pages import CartPage, CheckoutPage, CheckoutStep, LoginPage, ProductPage, expected_validation_error
from saucedemo_tests.utils import expected_sort_order, wait_for_element

from storefront_pages import (
    CHECKOUT_INFO_HTML,
    COMPLETE_HTML,
    LOGIN_HTML,
    cart_html,
    inventory_html,
    overview_html,
)

pytestmark = pytest.mark.asyncio


# ---- login ----------------------------------------------------------------------

async def test_login_form_and_error_banner(browser):
    await browser.page.set_content(LOGIN_HTML)
    login = LoginPage(browser)

    await login.verify_login_page_displayed()
    await login.verify_error_message_hidden()
    await login.login("", "secret_sauce")
    await login.verify_error_message("Username is required")
    await login.clear_error_message()
    await login.verify_error_message_hidden()


async def test_login_actions_chain(browser):
    await browser.page.set_content(LOGIN_HTML)
    login = LoginPage(browser)

    result = await login.enter_username("standard_user")
    assert result is login
    await login.click_login_button()
    await login.verify_error_message("Password is required")


# ---- product listing --------------------------------------------------------------

async def test_listing_queries(browser):
    await browser.page.set_content(inventory_html())
    products = ProductPage(browser)
    catalog = load_products()

    await wait_for_element(browser, ".inventory_list", timeout=2000)
    await products.verify_product_page_displayed()
    assert await products.get_product_count() == len(catalog)
    assert await products.get_all_product_names() == [p.name for p in catalog]
    assert await products.get_product_price("Sauce Labs Onesie") == "$7.99"
    await products.verify_item_details_displayed("Sauce Labs Backpack")


async def test_add_and_remove_update_badge_and_button(browser):
    await browser.page.set_content(inventory_html())
    products = ProductPage(browser)

    await products.verify_cart_badge_count(0)
    await products.add_product_to_cart("Sauce Labs Backpack")
    await products.add_product_to_cart("Sauce Labs Bike Light")
    await products.verify_cart_badge_count(2)
    assert await products.get_button_text("Sauce Labs Backpack") == "Remove"

    await products.remove_product_from_cart("Sauce Labs Backpack")
    await products.verify_cart_badge_count(1)
    assert await products.get_button_text("Sauce Labs Backpack") == "Add to cart"


@pytest.mark.parametrize(
    "option", ["Name (A to Z)", "Name (Z to A)", "Price (low to high)", "Price (high to low)"]
)
async def test_sorting(browser, option):
    await browser.page.set_content(inventory_html())
    products = ProductPage(browser)
    ordered = expected_sort_order(load_products(), option)

    await products.sort_products(option)
    await products.verify_products_sorted(option)
    assert await products.get_all_product_prices() == [p.price for p in ordered]
    if option.startswith("Name"):
        assert await products.get_all_product_names() == [p.name for p in ordered]


async def test_price_sort_low_to_high_full_sequence(browser):
    """Prices are compared item by item, not just checked for order."""
    catalog = [
        ProductRecord(f"Item {index}", price)
        for index, price in enumerate(["$29.99", "$9.99", "$15.99", "$49.99", "$7.99", "$5.99"])
    ]
    await browser.page.set_content(inventory_html(catalog))
    products = ProductPage(browser)

    await products.sort_products("Price (low to high)")
    await products.verify_products_sorted("Price (low to high)", catalog)
    assert await products.get_all_product_prices() == ["$5.99", "$7.99", "$9.99", "$15.99", "$29.99", "$49.99"]


async def test_unsorted_listing_fails_verification(browser, monkeypatch):
    monkeypatch.setattr(settings, "default_command_timeout", 300)
    await browser.page.set_content(inventory_html())

    # catalog order is not price-ascending
    with pytest.raises(AssertionError, match=r"Price \(low to high\)"):
        await ProductPage(browser).verify_products_sorted_by_price_low_to_high()


async def test_ordered_but_incomplete_listing_fails_verification(browser, monkeypatch):
    monkeypatch.setattr(settings, "default_command_timeout", 300)
    products = ProductPage(browser)

    async def short_listing():
        return ["$1.00", "$7.99"]

    monkeypatch.setattr(products, "get_all_product_prices", short_listing)
    with pytest.raises(AssertionError, match=r"last value: \[1\.0, 7\.99\]"):
        await products.verify_products_sorted_by_price_low_to_high()


async def test_name_sort_against_other_catalog_fails(browser, monkeypatch):
    monkeypatch.setattr(settings, "default_command_timeout", 300)
    await browser.page.set_content(inventory_html())
    products = ProductPage(browser)
    await products.sort_products("Name (A to Z)")

    with pytest.raises(AssertionError):
        await products.verify_products_sorted("Name (A to Z)", load_products()[:5])


# ---- cart -----------------------------------------------------------------------

async def test_cart_contents_and_removal(browser):
    catalog = load_products()
    await browser.page.set_content(cart_html(catalog[:3]))
    cart = CartPage(browser)

    await cart.verify_cart_page_displayed()
    await cart.verify_multiple_products_in_cart([p.name for p in catalog[:3]])
    assert await cart.get_cart_item_count() == 3
    assert await cart.calculate_total_cart_value() == round(sum(p.amount for p in catalog[:3]), 2)
    assert await cart.get_product_price(catalog[1].name) == catalog[1].price

    for product in catalog[:3]:
        await cart.remove_product(product.name)
    await cart.verify_cart_is_empty()
    assert await cart.get_all_cart_items() == []


# ---- checkout -------------------------------------------------------------------

@pytest.mark.parametrize(
    "first_name,last_name,postal_code",
    [("", "Doe", "12345"), ("John", "", "12345"), ("John", "Doe", ""), ("", "", "")],
)
async def test_information_step_validation(browser, first_name, last_name, postal_code):
    await browser.page.set_content(CHECKOUT_INFO_HTML)
    checkout = CheckoutPage(browser)

    await checkout.verify_checkout_information_page()
    assert await checkout.current_step() is CheckoutStep.INFORMATION
    await checkout.complete_checkout_information(first_name, last_name, postal_code)
    await checkout.verify_error_message(expected_validation_error(first_name, last_name, postal_code))


async def test_order_summary_arithmetic(browser):
    checkout = CheckoutPage(browser)

    await browser.page.set_content(overview_html("$29.99", "$2.40", "$32.39"))
    await checkout.verify_checkout_overview_page()
    await checkout.verify_product_in_overview("Sauce Labs Backpack")
    await checkout.verify_order_summary()

    await browser.page.set_content(overview_html("$29.99", "$2.40", "$40.00"))
    with pytest.raises(AssertionError, match="Total"):
        await checkout.verify_order_summary()


async def test_complete_step(browser):
    await browser.page.set_content(COMPLETE_HTML)
    checkout = CheckoutPage(browser)

    await checkout.verify_checkout_complete_page()
    await checkout.verify_success_message("Your order has been dispatched")
    await checkout.verify_confirmation_elements()
    assert await checkout.current_step() is CheckoutStep.COMPLETE


# ---- error policy on a live page ------------------------------------------------------

async def test_error_policy_collects_uncaught_errors(browser):
    policy = ErrorPolicy().attach(browser.page)
    await browser.page.set_content(
        "<script>"
        "setTimeout(() => { throw new Error('ResizeObserver loop limit exceeded'); });"
        "setTimeout(() => { throw new Error('checkout widget exploded'); });"
        "</script>"
    )

    async def recorded():
        return list(policy.errors)

    await browser.poll_until(recorded, lambda errors: len(errors) == 1, timeout=3)
    with pytest.raises(UncaughtPageError, match="checkout widget exploded"):
        policy.raise_if_errors()
