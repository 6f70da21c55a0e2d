import json
import time
from datetime import datetime, timezone

from app.core.exceptions import InvalidHistoryError
from app.storage.blob_store import BlobStore
import logging

logger = logging.getLogger(__name__)


class HistoryService:
    def __init__(self, store: BlobStore, max_bytes: int = 512 * 1024):
        self.store = store
        self.max_bytes = max_bytes

    def upload_history(self, body: bytes) -> str:
        """Validate a score history document and store it verbatim under a timestamped name"""
        if not body or len(body) > self.max_bytes:
            raise InvalidHistoryError("Invalid History Data.")
        try:
            json.loads(body)
        except (UnicodeDecodeError, ValueError):
            raise InvalidHistoryError("Request body is not valid JSON.") from None

        filename = f"score-history-{datetime.now(timezone.utc):%Y-%m-%d-%H-%M-%S}.json"
        self.store.put(filename, body)
        logger.info(f"Uploaded score history {filename} ({len(body)} bytes)")
        return filename

    def test_connection(self) -> str:
        key = f"connection-test-{time.time_ns()}.txt"
        self.store.put(key, b"Connection test successful", content_type="text/plain")
        return key
