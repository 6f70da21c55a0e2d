"""
Core dependencies: process-wide service instances and access-code checks
"""

from functools import lru_cache

from fastapi import HTTPException, status

from app.config import settings
from app.modules.groups.schemas import Group
from app.modules.groups.service import GroupService
from app.modules.history.service import HistoryService
from app.modules.players.service import DefaultPlayersService
from app.modules.shares.service import GameShareService
from app.storage.client import get_blob_store


@lru_cache()
def get_group_service() -> GroupService:
    """Single GroupService for the process lifetime; its cache is loaded lazily"""
    return GroupService(get_blob_store())


@lru_cache()
def get_share_service() -> GameShareService:
    return GameShareService(get_blob_store())


@lru_cache()
def get_default_players_service() -> DefaultPlayersService:
    return DefaultPlayersService()


@lru_cache()
def get_history_service() -> HistoryService:
    return HistoryService(get_blob_store(), settings.max_history_bytes)


def reset_services() -> None:
    """Drop the cached service instances (next request builds fresh ones)"""
    get_group_service.cache_clear()
    get_share_service.cache_clear()
    get_default_players_service.cache_clear()
    get_history_service.cache_clear()


def require_code(code: str, name: str = "Code") -> str:
    """Reject a blank access code query parameter with 400"""
    if not code or not code.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{name} is required"
        )
    return code.strip()


def get_group_or_404(group_id: str, service: GroupService) -> Group:
    group = service.get_group_by_id(group_id)
    if group is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Group not found"
        )
    return group


def check_group_admin(group: Group, admin_code: str) -> Group:
    """Allow only the group's admin code (case-insensitive)"""
    if not group.is_admin_code(admin_code):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid admin code"
        )
    return group


def check_group_member(group: Group, code: str) -> Group:
    """Allow the admin code or any active member code of the group"""
    if group.is_admin_code(code):
        return group
    if group.find_member(code, active_only=True) is not None:
        return group
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Invalid code"
    )
