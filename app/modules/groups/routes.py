from fastapi import APIRouter, Depends, HTTPException, Query
from app.modules.groups.schemas import (
    GroupCreate, GroupCreateResponse, GroupJoinResponse,
    GroupMemberAdd, GroupMemberResponse, SasTokenSet
)
from app.modules.groups.service import GroupService
from app.core.dependencies import (
    get_group_service, require_code, get_group_or_404, check_group_admin, check_group_member
)

router = APIRouter(prefix="/groups", tags=["groups"])


@router.post("", response_model=GroupCreateResponse, status_code=201)
async def create_group(
    group_data: GroupCreate,
    service: GroupService = Depends(get_group_service)
):
    """Create a new group and hand back its admin code"""
    if not group_data.name.strip():
        raise HTTPException(status_code=400, detail="Name is required")
    group = service.create_group(group_data.name.strip())
    return GroupCreateResponse(group_id=group.id, name=group.name, admin_code=group.admin_code)


@router.get("/join", response_model=GroupJoinResponse)
async def join_group(
    code: str = Query(""),
    service: GroupService = Depends(get_group_service)
):
    """Resolve an admin or active member code to its group and storage URLs"""
    code = require_code(code)

    group = service.get_group_by_admin_code(code)
    if group is not None:
        return GroupJoinResponse(
            group_id=group.id,
            group_name=group.name,
            is_admin=True,
            sas_urls=service.generate_sas_urls(can_write=True)
        )

    match = service.get_group_by_member_code(code)
    if match is not None:
        member_group, _ = match
        # Teammates get write access too
        return GroupJoinResponse(
            group_id=member_group.id,
            group_name=member_group.name,
            is_admin=False,
            sas_urls=service.generate_sas_urls(can_write=True)
        )

    raise HTTPException(status_code=404, detail="Invalid code")


@router.post("/{group_id}/members", response_model=GroupMemberResponse, status_code=201)
async def add_member(
    group_id: str,
    member_data: GroupMemberAdd,
    admin_code: str = Query("", alias="adminCode"),
    service: GroupService = Depends(get_group_service)
):
    """Add a member access code to the group (admin code required)"""
    admin_code = require_code(admin_code, "Admin code")
    group = get_group_or_404(group_id, service)
    check_group_admin(group, admin_code)

    if not member_data.label.strip():
        raise HTTPException(status_code=400, detail="Label is required")

    member = service.add_member(group_id, member_data.label.strip())
    return GroupMemberResponse(code=member.code, label=member.label)


@router.delete("/{group_id}/members/{code}", status_code=204)
async def revoke_member(
    group_id: str,
    code: str,
    admin_code: str = Query("", alias="adminCode"),
    service: GroupService = Depends(get_group_service)
):
    """Deactivate a member access code (admin code required)"""
    admin_code = require_code(admin_code, "Admin code")
    group = get_group_or_404(group_id, service)
    check_group_admin(group, admin_code)

    if not service.revoke_member(group_id, code):
        raise HTTPException(status_code=404, detail="Member not found")
    return None


@router.get("/{group_id}/sas/refresh", response_model=SasTokenSet)
async def refresh_sas(
    group_id: str,
    code: str = Query(""),
    service: GroupService = Depends(get_group_service)
):
    """Issue fresh storage URLs to a holder of the admin code or an active member code"""
    code = require_code(code)
    group = get_group_or_404(group_id, service)
    check_group_member(group, code)
    return service.generate_sas_urls(can_write=True)
