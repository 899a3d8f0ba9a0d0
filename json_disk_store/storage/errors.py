"""Errors raised by the disk store."""


class StoreError(Exception):
    """Base class for store errors."""


class KeyNotFoundError(StoreError, KeyError):
    """Raised when updating a key that is not in the store."""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f'Key "{self.key}" not found'
