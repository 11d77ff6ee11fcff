# ============================================================================
# FILE: app/api/v1/endpoints/community.py
# ============================================================================
from fastapi import APIRouter, Depends, Query, status, Response
from sqlalchemy.orm import Session
from typing import List, Optional, Tuple
from app.db.session import get_db
from app.api.dependencies import (
    require_current_user,
    get_current_user,
    current_user_id,
    ensure_community_leader_or_admin,
    pagination,
)
from app.api.v1.endpoints.post import build_post_page
from app.schemas.common import MessageResponse, Page
from app.schemas.community import (
    CommunityCreate,
    CommunityUpdate,
    CommunityResponse,
    CommunityMemberResponse,
)
from app.schemas.post import PostResponse
from app.services.community_service import community_service
from app.services.post_service import post_service
from app.db.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("", response_model=CommunityResponse, status_code=status.HTTP_201_CREATED)
async def create_community(
    community_data: CommunityCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Create a community, the caller becomes its leader
    Requires authentication
    """
    community = community_service.create_community(db, community_data, current_user.id)
    return CommunityResponse.from_entity(community, current_user.id)

@router.get("/search", response_model=List[CommunityResponse])
async def search_communities(
    query: str = Query(..., min_length=1, description="Name fragment"),
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user)
):
    """Search communities by name"""
    user_id = current_user_id(current_user)
    return [
        CommunityResponse.from_entity(community, user_id)
        for community in community_service.search_communities(db, query)
    ]

@router.get("/user", response_model=List[CommunityResponse])
async def get_my_communities(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Communities the caller belongs to
    Requires authentication
    """
    return [
        CommunityResponse.from_entity(community, current_user.id)
        for community in community_service.get_user_communities(db, current_user.id)
    ]

@router.get("/{community_id}", response_model=CommunityResponse)
async def get_community(
    community_id: int,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user)
):
    """Get a community, with the caller's membership status when authenticated"""
    community = community_service.get_community(db, community_id)
    return CommunityResponse.from_entity(community, current_user_id(current_user))

@router.put("/{community_id}", response_model=CommunityResponse)
async def update_community(
    community_id: int,
    update_data: CommunityUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Update community details
    Requires the leader or an administrator
    """
    community = community_service.get_community(db, community_id)
    ensure_community_leader_or_admin(community, current_user)
    community = community_service.update_community(db, community_id, update_data)
    return CommunityResponse.from_entity(community, current_user.id)

@router.delete("/{community_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_community(
    community_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Delete a community
    Requires the leader or an administrator
    """
    community = community_service.get_community(db, community_id)
    ensure_community_leader_or_admin(community, current_user)
    community_service.delete_community(db, community_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/{community_id}/join", response_model=MessageResponse)
async def join_community(
    community_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Join a community as a member
    Requires authentication
    """
    community_service.join_community(db, community_id, current_user.id)
    return {"message": "You joined the community"}

@router.post("/{community_id}/leave", response_model=MessageResponse)
async def leave_community(
    community_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Leave a community, the leader cannot leave
    Requires authentication
    """
    community_service.leave_community(db, community_id, current_user.id)
    return {"message": "You left the community"}

@router.get("/{community_id}/members", response_model=List[CommunityMemberResponse])
async def get_community_members(
    community_id: int,
    db: Session = Depends(get_db)
):
    """Members of a community with their role"""
    return [
        CommunityMemberResponse.from_entity(membership)
        for membership in community_service.get_members(db, community_id)
    ]

@router.get("/{community_id}/posts", response_model=Page[PostResponse])
async def get_community_posts(
    community_id: int,
    paging: Tuple[int, int] = Depends(pagination),
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user)
):
    """Posts published in a community, newest first"""
    page, size = paging
    posts, total = post_service.get_community_posts(db, community_id, page, size)
    return build_post_page(db, posts, total, page, size, current_user_id(current_user))

@router.post("/{community_id}/radio", response_model=CommunityResponse)
async def set_community_radio(
    community_id: int,
    playlist_id: int = Query(..., description="Playlist played as the community radio"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Set the community radio playlist
    Requires the leader or an administrator
    """
    community = community_service.get_community(db, community_id)
    ensure_community_leader_or_admin(community, current_user)
    community = community_service.set_community_radio(db, community_id, playlist_id)
    return CommunityResponse.from_entity(community, current_user.id)
