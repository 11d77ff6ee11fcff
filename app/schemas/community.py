# ============================================================================
# FILE: app/schemas/community.py
# ============================================================================
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from app.db.models.community import Community, CommunityMember
from app.schemas.user import UserSummary

class CommunityCreate(BaseModel):
    """Schema for creating a community"""
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    image_url: Optional[str] = None

class CommunityUpdate(BaseModel):
    """Schema for updating a community"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    image_url: Optional[str] = None

class CommunityResponse(BaseModel):
    """Schema for community response"""
    id: int
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    created_at: datetime
    leader: UserSummary
    member_count: int
    radio_playlist_id: Optional[int] = None
    is_member: bool = False
    user_role: Optional[str] = None

    @classmethod
    def from_entity(cls, community: Community, user_id: Optional[int] = None) -> "CommunityResponse":
        membership = community.membership_for(user_id) if user_id is not None else None
        return cls(
            id=community.id,
            name=community.name,
            description=community.description,
            image_url=community.image_url,
            created_at=community.created_at,
            leader=UserSummary.model_validate(community.leader),
            member_count=community.member_count,
            radio_playlist_id=community.radio_playlist_id,
            is_member=membership is not None,
            user_role=membership.role.value if membership else None,
        )

class CommunityMemberResponse(BaseModel):
    """Schema for a community member with their role"""
    id: int
    nickname: str
    profile_picture_url: Optional[str] = None
    role: str
    joined_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, membership: CommunityMember) -> "CommunityMemberResponse":
        return cls(
            id=membership.user.id,
            nickname=membership.user.nickname,
            profile_picture_url=membership.user.profile_picture_url,
            role=membership.role.value,
            joined_at=membership.joined_at,
        )
