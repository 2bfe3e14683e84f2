"""Key/value stores that hold the serialized record collections."""

import os
from pathlib import Path
from typing import Protocol, cast

import redis
import structlog

from medicare.config import Settings
from medicare.core.exceptions import StorageException

logger = structlog.get_logger(__name__)


class PersistentStore(Protocol):
    """Opaque byte store addressed by string keys."""

    def load(self, key: str) -> bytes | None:
        """Return the stored bytes, or None when the key is absent."""
        ...

    def save(self, key: str, data: bytes) -> None:
        """Store bytes under key, raising StorageException on failure."""
        ...


class MemoryStore:
    """Process-local store, used for tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, bytes] | None = None):
        """Initialize store with optional initial contents."""
        self.data: dict[str, bytes] = dict(initial or {})

    def load(self, key: str) -> bytes | None:
        return self.data.get(key)

    def save(self, key: str, data: bytes) -> None:
        self.data[key] = bytes(data)


class FileStore:
    """One file per key inside a directory."""

    def __init__(self, root: str | Path):
        """Initialize store rooted at the given directory."""
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def load(self, key: str) -> bytes | None:
        """
        Read the file for key.

        Args:
            key: Store key

        Returns:
            File contents, or None if the file does not exist

        Raises:
            StorageException: If the file exists but cannot be read
        """
        path = self._path(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageException(f"Failed to read {path}: {e}", key=key) from e

    def save(self, key: str, data: bytes) -> None:
        """
        Write data for key, replacing the file atomically.

        Args:
            key: Store key
            data: Serialized payload

        Raises:
            StorageException: If the directory or file cannot be written
        """
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(data)
            os.replace(tmp_path, path)
        except OSError as e:
            raise StorageException(f"Failed to write {path}: {e}", key=key) from e


class RedisStore:
    """Redis-backed store."""

    def __init__(self, redis_client: redis.Redis):
        """Initialize store with Redis client."""
        self.redis = redis_client

    def load(self, key: str) -> bytes | None:
        try:
            value = cast(bytes | str | None, self.redis.get(key))
        except redis.RedisError as e:
            raise StorageException(f"Failed to read key {key}: {e}", key=key) from e
        if isinstance(value, str):
            return value.encode("utf-8")
        return value

    def save(self, key: str, data: bytes) -> None:
        try:
            self.redis.set(key, data)
        except redis.RedisError as e:
            raise StorageException(f"Failed to write key {key}: {e}", key=key) from e


def get_redis_client(settings: Settings) -> redis.Redis:
    """
    Create Redis client instance.

    Args:
        settings: Application settings

    Returns:
        Redis client instance
    """
    return redis.Redis(
        host=settings.redis_host,
        port=settings.redis_port,
        db=settings.redis_db,
        username=settings.redis_username,
        password=settings.redis_password or None,
        socket_connect_timeout=5,
        socket_keepalive=True,
        health_check_interval=30,
    )


def get_store(settings: Settings) -> PersistentStore:
    """
    Build the store selected by STORAGE_BACKEND.

    Args:
        settings: Application settings

    Returns:
        Store instance

    Raises:
        ValueError: If the backend name is unknown
    """
    backend = settings.storage_backend.lower()

    if backend == "memory":
        store: PersistentStore = MemoryStore()
    elif backend == "file":
        store = FileStore(settings.data_dir)
    elif backend == "redis":
        store = RedisStore(get_redis_client(settings))
    else:
        raise ValueError(f"Unknown storage backend: {settings.storage_backend}")

    logger.info("store_selected", backend=backend)
    return store
