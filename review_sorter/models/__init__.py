"""
Data models for catalog products.

This module contains pure data classes with no business logic.
"""

from .product import Collection, ProductImage, ProductPrice, RatedProduct, RawProduct

__all__ = ['Collection', 'ProductImage', 'ProductPrice', 'RawProduct', 'RatedProduct']
