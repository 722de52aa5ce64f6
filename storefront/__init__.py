"""Storefront cart engine: cart, undo history, wishlist, order ledger and checkout."""

__version__ = "0.1.0"
