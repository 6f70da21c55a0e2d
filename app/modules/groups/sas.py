"""Time-boxed delegated access to the backing store for browser clients."""
from datetime import datetime, timedelta, timezone

from app.modules.groups.schemas import SasTokenSet
from app.storage.blob_store import BlobStore, DelegationScope


class SasIssuer:
    def __init__(self, store: BlobStore, validity: timedelta = timedelta(hours=3)):
        self.store = store
        self.validity = validity

    def generate_sas_urls(self, can_write: bool) -> SasTokenSet:
        """Mint a container-wide read URL, plus a read-write URL when `can_write` is set.

        Both URLs share one expiry. Nothing is cached: every call signs fresh tokens.
        Raises StorageConfigurationError if the store cannot sign.
        """
        expires_at = datetime.now(timezone.utc) + self.validity
        read_url = self.store.issue_delegation_token(DelegationScope.READ, expires_at)
        write_url = None
        if can_write:
            write_url = self.store.issue_delegation_token(DelegationScope.READ_WRITE, expires_at)
        return SasTokenSet(read_url=read_url, write_url=write_url, expires_at=expires_at)
