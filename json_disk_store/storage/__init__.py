"""Storage modules for the JSON disk store."""

from .cipher import StoreCipher
from .disk_store import DiskStore, JsonData, JsonValue
from .errors import KeyNotFoundError, StoreError

__all__ = [
    "DiskStore",
    "JsonData",
    "JsonValue",
    "StoreCipher",
    "KeyNotFoundError",
    "StoreError",
]
