# ============================================================================
# FILE: app/api/v1/endpoints/comment.py
# ============================================================================
from fastapi import APIRouter, Depends, status, Response
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.api.dependencies import require_current_user, ensure_owner_or_admin
from app.schemas.comment import CommentCreate, CommentResponse
from app.services.comment_service import comment_service
from app.db.models.user import User

router = APIRouter()

@router.post("/post/{post_id}", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def add_comment(
    post_id: int,
    comment_data: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Comment on a post
    Requires authentication
    """
    return comment_service.add_comment(db, post_id, current_user.id, comment_data)

@router.get("/post/{post_id}", response_model=List[CommentResponse])
async def get_comments_for_post(post_id: int, db: Session = Depends(get_db)):
    """Comments of a post, oldest first"""
    return comment_service.get_comments_for_post(db, post_id)

@router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: int,
    comment_data: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Edit a comment
    Requires the author or an administrator
    """
    comment = comment_service.get_comment(db, comment_id)
    ensure_owner_or_admin(comment.user_id, current_user, "comment")
    return comment_service.update_comment(db, comment_id, comment_data)

@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Delete a comment
    Requires the author or an administrator
    """
    comment = comment_service.get_comment(db, comment_id)
    ensure_owner_or_admin(comment.user_id, current_user, "comment")
    comment_service.delete_comment(db, comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
