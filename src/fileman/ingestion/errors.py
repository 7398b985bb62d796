"""Ingestion errors."""


class ListingError(Exception):
    """Raised when the input directory or one of its entries cannot be resolved."""
