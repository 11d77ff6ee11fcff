# ============================================================================
# FILE: app/api/v1/endpoints/user.py
# ============================================================================
from fastapi import APIRouter, Depends, Query, status, Response
from sqlalchemy.orm import Session
from typing import List, Optional
from app.db.session import get_db
from app.api.dependencies import (
    require_current_user,
    get_current_user,
    ensure_owner_or_admin,
)
from app.schemas.common import MessageResponse
from app.schemas.user import UserResponse, UserUpdate
from app.services.user_service import user_service
from app.db.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(require_current_user)
):
    """
    Get current user information
    Requires authentication
    """
    return UserResponse.from_entity(current_user)

@router.get("/search", response_model=List[UserResponse])
async def search_users(
    query: str = Query(..., min_length=1, description="Nickname fragment"),
    db: Session = Depends(get_db)
):
    """Search users by nickname"""
    return [UserResponse.from_entity(user) for user in user_service.search_users(db, query)]

@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user)
):
    """
    Get a user profile
    Authenticated callers also see whether they follow this user
    """
    user = user_service.get_user(db, user_id)
    is_following = None
    if current_user is not None and current_user.id != user_id:
        is_following = user_service.is_following(db, current_user.id, user_id)
    return UserResponse.from_entity(user, is_following=is_following)

@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    update_data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Update a user profile
    Requires the user themselves or an administrator
    """
    ensure_owner_or_admin(user_id, current_user, "account")
    return UserResponse.from_entity(user_service.update_user(db, user_id, update_data))

@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Delete a user account
    Requires the user themselves or an administrator
    """
    ensure_owner_or_admin(user_id, current_user, "account")
    user_service.delete_user(db, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/{user_id}/follow", response_model=MessageResponse)
async def follow_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Follow another user
    Requires authentication
    """
    user_service.follow_user(db, current_user.id, user_id)
    return {"message": "You are now following this user"}

@router.post("/{user_id}/unfollow", response_model=MessageResponse)
async def unfollow_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Stop following a user
    Requires authentication
    """
    user_service.unfollow_user(db, current_user.id, user_id)
    return {"message": "You no longer follow this user"}

@router.get("/{user_id}/followers", response_model=List[UserResponse])
async def get_followers(
    user_id: int,
    db: Session = Depends(get_db)
):
    """Users following user_id"""
    return [UserResponse.from_entity(user) for user in user_service.get_followers(db, user_id)]

@router.get("/{user_id}/following", response_model=List[UserResponse])
async def get_following(
    user_id: int,
    db: Session = Depends(get_db)
):
    """Users that user_id follows"""
    return [UserResponse.from_entity(user) for user in user_service.get_following(db, user_id)]
