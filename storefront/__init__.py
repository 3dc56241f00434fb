"""Storefront: guest cart, server cart, checkout and payments"""

__version__ = "1.0.0"
