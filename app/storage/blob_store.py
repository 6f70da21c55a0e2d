"""Backing object store contract shared by the S3 and in-memory backends."""
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import List


class DelegationScope(str, Enum):
    READ = "read"
    READ_WRITE = "read-write"


class BlobNotFoundError(KeyError):
    """Raised by `BlobStore.get` when no object exists under the key."""


class BlobStore(ABC):
    """Flat key/blob storage with prefix listing and delegated client access."""

    @abstractmethod
    def list(self, prefix: str = "") -> List[str]:
        """Return the keys of all objects whose key starts with `prefix`."""

    @abstractmethod
    def get(self, key: str) -> bytes:
        """Return the object's bytes or raise BlobNotFoundError."""

    @abstractmethod
    def put(self, key: str, data: bytes, content_type: str = "application/json") -> None:
        """Create or overwrite the object stored under `key`."""

    @abstractmethod
    def issue_delegation_token(self, scope: DelegationScope, expires_at: datetime) -> str:
        """Return a container-wide URL clients can use directly until `expires_at`.

        Raises StorageConfigurationError when the store cannot sign tokens.
        """
