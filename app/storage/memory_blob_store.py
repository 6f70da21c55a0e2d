import threading
from datetime import datetime
from typing import Dict, List
from urllib.parse import urlencode

from app.core.exceptions import StorageConfigurationError
from app.storage.blob_store import BlobNotFoundError, BlobStore, DelegationScope

_PERMISSIONS = {
    DelegationScope.READ: "rl",
    DelegationScope.READ_WRITE: "rwcl",
}


class InMemoryBlobStore(BlobStore):
    """Process-local blob store for development and tests."""

    def __init__(self, container: str = "scoreboard", can_sign: bool = True):
        self.container = container
        self.can_sign = can_sign
        self._blobs: Dict[str, bytes] = {}
        self._lock = threading.Lock()

    def list(self, prefix: str = "") -> List[str]:
        with self._lock:
            return sorted(k for k in self._blobs if k.startswith(prefix))

    def get(self, key: str) -> bytes:
        with self._lock:
            try:
                return self._blobs[key]
            except KeyError:
                raise BlobNotFoundError(key) from None

    def put(self, key: str, data: bytes, content_type: str = "application/json") -> None:
        with self._lock:
            self._blobs[key] = bytes(data)

    def issue_delegation_token(self, scope: DelegationScope, expires_at: datetime) -> str:
        if not self.can_sign:
            raise StorageConfigurationError(
                "Cannot generate delegation tokens: the in-memory store was created without signing support"
            )
        query = urlencode({"sp": _PERMISSIONS[scope], "se": expires_at.isoformat()})
        return f"memory://{self.container}?{query}"
