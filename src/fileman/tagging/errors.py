"""Tagging errors."""


class TagError(Exception):
    """Raised when a cluster tag cannot be applied to a file."""
