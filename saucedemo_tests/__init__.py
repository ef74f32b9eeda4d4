"""End-to-end UI regression suite for the SauceDemo storefront."""

__version__ = "1.0.0"
