"""Page objects for the SauceDemo storefront."""

from saucedemo_tests.pages.base import BasePage
from saucedemo_tests.pages.cart_page import CartPage
from saucedemo_tests.pages.checkout_page import CheckoutPage, CheckoutStep, expected_validation_error
from saucedemo_tests.pages.login_page import LoginPage
from saucedemo_tests.pages.product_page import ProductPage

__all__ = [
    "BasePage",
    "CartPage",
    "CheckoutPage",
    "CheckoutStep",
    "LoginPage",
    "ProductPage",
    "expected_validation_error",
]
