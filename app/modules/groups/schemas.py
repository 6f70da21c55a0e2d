from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from app.core.codes import codes_match


class MemberAccess(BaseModel):
    code: str
    label: str
    active: bool = True


class Group(BaseModel):
    id: str
    name: str
    admin_code: str = Field(alias="adminCode")
    created_at: datetime = Field(alias="createdAt")
    members: List[MemberAccess] = Field(default_factory=list)

    class Config:
        populate_by_name = True

    def is_admin_code(self, code: str) -> bool:
        return codes_match(self.admin_code, code)

    def find_member(self, code: str, active_only: bool = False) -> Optional[MemberAccess]:
        for member in self.members:
            if active_only and not member.active:
                continue
            if codes_match(member.code, code):
                return member
        return None


class SasTokenSet(BaseModel):
    read_url: str = Field(alias="readUrl")
    write_url: Optional[str] = Field(default=None, alias="writeUrl")
    expires_at: datetime = Field(alias="expiresAt")

    class Config:
        populate_by_name = True


class GroupCreate(BaseModel):
    name: str = ""


class GroupCreateResponse(BaseModel):
    group_id: str = Field(alias="groupId")
    name: str
    admin_code: str = Field(alias="adminCode")

    class Config:
        populate_by_name = True


class GroupJoinResponse(BaseModel):
    group_id: str = Field(alias="groupId")
    group_name: str = Field(alias="groupName")
    is_admin: bool = Field(alias="isAdmin")
    sas_urls: SasTokenSet = Field(alias="sasUrls")

    class Config:
        populate_by_name = True


class GroupMemberAdd(BaseModel):
    label: str = ""


class GroupMemberResponse(BaseModel):
    code: str
    label: str
