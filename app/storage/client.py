from app.config import settings
from app.core.exceptions import StorageConfigurationError
from app.storage.blob_store import BlobStore
from app.storage.memory_blob_store import InMemoryBlobStore
import logging

logger = logging.getLogger(__name__)


class BlobStoreClient:
    _store: BlobStore = None

    @classmethod
    def get_store(cls) -> BlobStore:
        if cls._store is None:
            backend = settings.storage_backend.lower()
            if backend == "s3":
                from app.storage.s3_blob_store import S3Storage
                cls._store = S3Storage()
                logger.info(f"S3 storage initialized for bucket {cls._store.bucket_name}")
            elif backend == "memory":
                cls._store = InMemoryBlobStore()
                logger.warning("Using in-memory blob storage; data is lost on restart")
            else:
                raise StorageConfigurationError(f"Unknown storage backend: {settings.storage_backend}")
        return cls._store

    @classmethod
    def reset_store(cls):
        cls._store = None


def get_blob_store() -> BlobStore:
    return BlobStoreClient.get_store()
