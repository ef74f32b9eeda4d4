"""
Product listing tests: display, details and sort orders of the inventory.
"""
import allure
import pytest
from playwright.async_api import expect

from saucedemo_tests.utils import expected_sort_order

pytestmark = [pytest.mark.asyncio, pytest.mark.live]


@allure.feature("Product listing")
class TestProductListing:

    @pytest.mark.smoke
    @pytest.mark.regression
    async def test_products_page_displayed_after_login(self, logged_in, product_page):
        await product_page.verify_product_page_displayed()

    @pytest.mark.regression
    async def test_all_products_displayed(self, logged_in, product_page, products):
        """Every fixture product is on the listing."""
        for product in products:
            await product_page.verify_product_displayed(product.name)

    @pytest.mark.regression
    async def test_product_details_displayed(self, logged_in, product_page, products):
        """A card shows name, description, price and button."""
        await product_page.verify_item_details_displayed(products[0].name)

    @allure.story("Sorting")
    @pytest.mark.regression
    async def test_sort_by_name_a_to_z(self, logged_in, product_page):
        """Name (A to Z) gives the catalog in alphabetical order."""
        await product_page.sort_products("Name (A to Z)")
        await product_page.verify_products_sorted_by_name_a_to_z()

    @allure.story("Sorting")
    @pytest.mark.regression
    async def test_sort_by_name_z_to_a(self, logged_in, product_page):
        """Name (Z to A) gives the catalog in reverse alphabetical order."""
        await product_page.sort_products("Name (Z to A)")
        await product_page.verify_products_sorted_by_name_z_to_a()

    @allure.story("Sorting")
    @pytest.mark.regression
    async def test_sort_by_price_low_to_high(self, logged_in, product_page):
        """Price (low to high) gives the catalog cheapest first."""
        await product_page.sort_products("Price (low to high)")
        await product_page.verify_products_sorted_by_price_low_to_high()

    @allure.story("Sorting")
    @pytest.mark.regression
    async def test_sort_by_price_high_to_low(self, logged_in, product_page):
        """Price (high to low) gives the catalog dearest first."""
        await product_page.sort_products("Price (high to low)")
        await product_page.verify_products_sorted_by_price_high_to_low()

    @allure.story("Sorting")
    @pytest.mark.regression
    async def test_name_sort_matches_catalog(self, logged_in, product_page, products):
        """Z to A ordering equals the fixture catalog sorted the same way."""
        await product_page.sort_products("Name (Z to A)")
        expected = [p.name for p in expected_sort_order(products, "Name (Z to A)")]
        await expect(product_page.elements["inventory_item_name"]()).to_have_text(expected)

    @allure.story("Sorting")
    @pytest.mark.regression
    @pytest.mark.parametrize("option", ["Price (low to high)", "Price (high to low)"])
    async def test_price_sort_matches_catalog(self, logged_in, product_page, products, option):
        """Every displayed price equals the fixture catalog's price at that position."""
        await product_page.sort_products(option)
        expected = [p.price for p in expected_sort_order(products, option)]
        await expect(product_page.elements["inventory_item_price"]()).to_have_text(expected)
        await product_page.verify_products_sorted(option, products)

    @pytest.mark.regression
    async def test_product_count_positive(self, logged_in, product_page):
        """The listing is never empty."""
        assert await product_page.get_product_count() > 0

    @pytest.mark.regression
    async def test_product_price_matches_fixture(self, logged_in, product_page, products):
        """Listed price equals the fixture price."""
        product = products[0]
        assert await product_page.get_product_price(product.name) == product.price

    @pytest.mark.regression
    async def test_every_product_has_required_elements(self, logged_in, product_page):
        """Every card has name, description, price and button."""
        items = product_page.elements["inventory_item"]()
        count = await items.count()
        assert count > 0
        for index in range(count):
            item = items.nth(index)
            for selector in (".inventory_item_name", ".inventory_item_desc", ".inventory_item_price", "button"):
                await expect(item.locator(selector)).to_be_visible()
