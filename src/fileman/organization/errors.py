"""Output materialization errors."""


class MaterializationError(Exception):
    """Raised when the symlink tree cannot be written."""
