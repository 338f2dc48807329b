"""Storefront service: read-only product catalog and a file-backed shopping cart."""

__version__ = "1.0.0"
