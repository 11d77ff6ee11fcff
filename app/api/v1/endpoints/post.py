# ============================================================================
# FILE: app/api/v1/endpoints/post.py
# ============================================================================
from fastapi import APIRouter, Depends, Query, status, Response
from sqlalchemy.orm import Session
from typing import List, Optional, Tuple
from app.db.session import get_db
from app.api.dependencies import (
    require_current_user,
    get_current_user,
    current_user_id,
    ensure_owner_or_admin,
    pagination,
)
from app.schemas.common import Page
from app.schemas.post import PostCreate, PostUpdate, PostResponse
from app.services.post_service import post_service
from app.db.models.post import Post
from app.db.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

def build_post_page(
    db: Session,
    posts: List[Post],
    total: int,
    page: int,
    size: int,
    user_id: Optional[int],
) -> Page[PostResponse]:
    """Map a page of posts to responses carrying the caller's vote"""
    votes = post_service.get_user_votes(db, [post.id for post in posts], user_id)
    items = [PostResponse.from_entity(post, votes.get(post.id, 0)) for post in posts]
    return Page[PostResponse].build(items, total, page, size)

@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Create a post, optionally inside a community and sharing a song
    Requires authentication (and membership when posting into a community)
    """
    post = post_service.create_post(db, post_data, current_user.id)
    return PostResponse.from_entity(post)

@router.get("/feed", response_model=Page[PostResponse])
async def get_feed(
    paging: Tuple[int, int] = Depends(pagination),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Personal feed: posts by followed users, or popular posts when following nobody
    Requires authentication
    """
    page, size = paging
    posts, total = post_service.get_feed_for_user(db, current_user.id, page, size)
    return build_post_page(db, posts, total, page, size, current_user.id)

@router.get("/user/{user_id}", response_model=Page[PostResponse])
async def get_user_posts(
    user_id: int,
    paging: Tuple[int, int] = Depends(pagination),
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user)
):
    """Posts written by a user, newest first"""
    page, size = paging
    posts, total = post_service.get_user_posts(db, user_id, page, size)
    return build_post_page(db, posts, total, page, size, current_user_id(current_user))

@router.get("/community/{community_id}", response_model=Page[PostResponse])
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

@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: int,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user)
):
    """Get a post, with the caller's vote when authenticated"""
    post = post_service.get_post(db, post_id)
    user_vote = post_service.get_user_vote(db, post_id, current_user_id(current_user))
    return PostResponse.from_entity(post, user_vote)

@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: int,
    update_data: PostUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Edit a post
    Requires the author or an administrator
    """
    post = post_service.get_post(db, post_id)
    ensure_owner_or_admin(post.user_id, current_user, "post")
    post = post_service.update_post(db, post_id, update_data)
    return PostResponse.from_entity(post, post_service.get_user_vote(db, post_id, current_user.id))

@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Delete a post
    Requires the author or an administrator
    """
    post = post_service.get_post(db, post_id)
    ensure_owner_or_admin(post.user_id, current_user, "post")
    post_service.delete_post(db, post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/{post_id}/vote", response_model=PostResponse)
async def vote_post(
    post_id: int,
    value: int = Query(..., description="1 upvote, -1 downvote, 0 removes the vote"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Vote on a post
    Requires authentication
    """
    post = post_service.vote_post(db, post_id, current_user.id, value)
    return PostResponse.from_entity(post, value)
