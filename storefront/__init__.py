"""Storefront order checkout and management service."""

__version__ = "1.0.0"
