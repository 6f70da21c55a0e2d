import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional, Tuple

from app.config import settings
from app.core.codes import generate_admin_code, generate_member_code
from app.core.exceptions import GroupNotFoundError
from app.modules.groups.sas import SasIssuer
from app.modules.groups.schemas import Group, MemberAccess, SasTokenSet
from app.storage.blob_store import BlobStore
import logging

logger = logging.getLogger(__name__)

GROUP_BLOB_PREFIX = "_groups/"


class GroupService:
    """Group registry cached in memory and persisted one document per group.

    The cache is hydrated from the store on first use. Every operation runs
    under a single lock, including the initial load.
    """

    def __init__(self, store: BlobStore, sas_validity: Optional[timedelta] = None):
        self.store = store
        self.sas_issuer = SasIssuer(store, sas_validity or timedelta(hours=settings.sas_validity_hours))
        self._groups: Dict[str, Group] = {}
        self._lock = threading.Lock()
        self._loaded = False

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        with self._lock:
            if self._loaded:
                return
            for key in self.store.list(GROUP_BLOB_PREFIX):
                try:
                    group = Group.model_validate_json(self.store.get(key))
                except Exception as e:
                    logger.warning(f"Skipping unreadable group document {key}: {e}")
                    continue
                self._groups[group.id] = group
            self._loaded = True
            logger.info(f"Loaded {len(self._groups)} group(s) from storage")

    def _save_group(self, group: Group) -> None:
        data = group.model_dump_json(by_alias=True, indent=2)
        self.store.put(f"{GROUP_BLOB_PREFIX}{group.id}.json", data.encode("utf-8"))

    def create_group(self, name: str) -> Group:
        """Create a group with a fresh admin code and persist it"""
        self._ensure_loaded()
        with self._lock:
            admin_code = generate_admin_code()
            existing = {g.admin_code.casefold() for g in self._groups.values()}
            while admin_code.casefold() in existing:
                admin_code = generate_admin_code()

            group = Group(
                id=str(uuid.uuid4()),
                name=name,
                admin_code=admin_code,
                created_at=datetime.now(timezone.utc),
            )
            self._save_group(group)
            self._groups[group.id] = group
            logger.info(f"Created group {group.id}")
            return group

    def get_group_by_id(self, group_id: str) -> Optional[Group]:
        self._ensure_loaded()
        with self._lock:
            return self._groups.get(group_id)

    def get_group_by_admin_code(self, admin_code: str) -> Optional[Group]:
        self._ensure_loaded()
        with self._lock:
            for group in self._groups.values():
                if group.is_admin_code(admin_code):
                    return group
            return None

    def get_group_by_member_code(self, member_code: str) -> Optional[Tuple[Group, MemberAccess]]:
        """Find the group owning an active member code, scanning every group"""
        self._ensure_loaded()
        with self._lock:
            for group in self._groups.values():
                member = group.find_member(member_code, active_only=True)
                if member is not None:
                    return group, member
            return None

    def add_member(self, group_id: str, label: str) -> MemberAccess:
        """Add a member whose code is unique across all groups.

        Raises GroupNotFoundError if the group does not exist.
        """
        self._ensure_loaded()
        with self._lock:
            group = self._groups.get(group_id)
            if group is None:
                raise GroupNotFoundError(group_id)

            existing = {m.code.casefold() for g in self._groups.values() for m in g.members}
            code = generate_member_code()
            while code.casefold() in existing:
                code = generate_member_code()

            member = MemberAccess(code=code, label=label, active=True)
            updated = group.model_copy(deep=True)
            updated.members.append(member)
            self._save_group(updated)
            self._groups[group_id] = updated
            logger.info(f"Added member to group {group_id}")
            return member

    def revoke_member(self, group_id: str, member_code: str) -> bool:
        """Deactivate a member code. Returns False when the group or member is missing"""
        self._ensure_loaded()
        with self._lock:
            group = self._groups.get(group_id)
            if group is None:
                return False

            updated = group.model_copy(deep=True)
            member = updated.find_member(member_code)
            if member is None:
                return False

            member.active = False
            self._save_group(updated)
            self._groups[group_id] = updated
            logger.info(f"Revoked member {member.label!r} in group {group_id}")
            return True

    def generate_sas_urls(self, can_write: bool) -> SasTokenSet:
        return self.sas_issuer.generate_sas_urls(can_write)
