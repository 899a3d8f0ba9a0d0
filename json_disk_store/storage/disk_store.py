"""JSON key-value store persisted to a single file."""

import copy
import json
import logging
import os
import uuid
from typing import Any, Dict, List, Optional, Union

from .cipher import StoreCipher
from .errors import KeyNotFoundError

logger = logging.getLogger(__name__)

JsonValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]
JsonData = Dict[str, JsonValue]


class DiskStore:
    """
    Key-value store backed by one JSON file.

    Every operation loads the whole mapping, and every mutation rewrites the
    whole file. With ``use_cache`` the mapping is kept in memory after the
    first load and the file is only written, never re-read. With a password
    the file content is encrypted (see :class:`StoreCipher`).

    There is no locking: concurrent mutations on one instance, or several
    instances on one file, can lose updates.
    """

    def __init__(
        self,
        file_name: str,
        directory: Optional[str] = None,
        use_cache: bool = False,
        password: Optional[str] = None,
    ):
        """
        Initialize disk store. The file is not touched until first use.

        Args:
            file_name: Name of the backing file
            directory: Directory holding the file. Defaults to the current
                       working directory.
            use_cache: Keep the mapping in memory between calls
            password: Optional password. If given, the file is encrypted
                      with a key derived from it.
        """
        self._file_path = self._resolve_path(file_name, directory)
        self._use_cache = use_cache
        self._cache: Optional[JsonData] = None
        self._initialized = False
        self._cipher = StoreCipher(password) if password else None

    @staticmethod
    def _resolve_path(file_name: str, directory: Optional[str]) -> str:
        return os.path.abspath(os.path.join(directory or os.getcwd(), file_name))

    @property
    def file_path(self) -> str:
        return self._file_path

    @property
    def use_cache(self) -> bool:
        return self._use_cache

    @property
    def encrypted(self) -> bool:
        return self._cipher is not None

    @property
    def initialized(self) -> bool:
        return self._initialized

    def _encrypt(self, text: str) -> str:
        if self._cipher is None:
            return text
        return self._cipher.encrypt(text)

    def _decrypt(self, text: str) -> str:
        if self._cipher is None:
            return text
        return self._cipher.decrypt(text)

    def _read_text(self) -> str:
        with open(self._file_path, 'r', encoding='utf-8') as f:
            return f.read()

    def _write_text(self, text: str):
        with open(self._file_path, 'w', encoding='utf-8') as f:
            f.write(text)

    async def _ensure_file_exists(self):
        """Create the file, and its directory, holding an empty mapping."""
        if os.path.exists(self._file_path):
            return

        os.makedirs(os.path.dirname(self._file_path), exist_ok=True)
        self._write_text(self._encrypt(json.dumps({})))
        logger.debug("Created store file %s", self._file_path)

    async def _load(self) -> JsonData:
        content = self._decrypt(self._read_text())
        data = json.loads(content) if content else {}
        logger.debug("Loaded %d entries from %s", len(data), self._file_path)
        return data

    async def _initialize(self) -> JsonData:
        """
        Make sure the file exists and return the current mapping.

        The existence check runs once per instance. Without the cache the
        file is read again on every call.
        """
        if not self._initialized:
            await self._ensure_file_exists()

        if self._use_cache and self._cache is not None:
            data = copy.deepcopy(self._cache)
        else:
            data = await self._load()
            if self._use_cache:
                self._cache = copy.deepcopy(data)

        self._initialized = True
        return data

    async def _persist(self, data: JsonData):
        """Serialize, encrypt and overwrite the file."""
        text = json.dumps(data, allow_nan=False)
        self._write_text(self._encrypt(text))
        if self._use_cache:
            self._cache = json.loads(text)
        logger.debug("Saved %d entries to %s", len(data), self._file_path)

    async def write(self, key: str, value: JsonValue) -> str:
        """
        Store a value under a new unique key.

        Args:
            key: Label the unique key is built from
            value: Any JSON-serializable value. NaN and infinities are
                   rejected with ValueError.

        Returns:
            The generated key (``<key>-<uuid4>``), needed for later lookups
        """
        data = await self._initialize()

        unique_key = f"{key}-{uuid.uuid4()}"
        data[unique_key] = value
        await self._persist(data)

        return unique_key

    async def read(self, key: str, default: Any = None) -> Optional[JsonValue]:
        """Get the value stored under a key, or ``default`` if there is none."""
        data = await self._initialize()
        return data.get(key, default)

    async def update(self, key: str, value: JsonValue):
        """
        Replace the value of an existing key.

        Raises:
            KeyNotFoundError: If the key is not in the store. Nothing is
                written in that case.
        """
        data = await self._initialize()

        if key not in data:
            raise KeyNotFoundError(key)

        data[key] = value
        await self._persist(data)

    async def delete(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if the key existed and was removed, False otherwise
        """
        data = await self._initialize()

        if key not in data:
            return False

        del data[key]
        await self._persist(data)
        return True
