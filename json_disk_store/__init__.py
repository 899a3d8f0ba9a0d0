"""JSON Disk Store - a small key-value store persisted to a JSON file."""

from .storage import DiskStore, KeyNotFoundError, StoreCipher, StoreError

__version__ = "0.1.0"

__all__ = ["DiskStore", "KeyNotFoundError", "StoreCipher", "StoreError"]
