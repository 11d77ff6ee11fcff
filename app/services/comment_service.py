# ============================================================================
# FILE: app/services/comment_service.py
# ============================================================================
from typing import List
from sqlalchemy.orm import Session
from app.core.exceptions import NotFoundError
from app.db.models.comment import Comment
from app.schemas.comment import CommentCreate
from app.services.post_service import post_service
from app.services.user_service import user_service
import logging

logger = logging.getLogger(__name__)

class CommentService:
    """Service layer for comments on posts"""

    def add_comment(self, db: Session, post_id: int, user_id: int, comment_data: CommentCreate) -> Comment:
        post = post_service.get_post(db, post_id)
        author = user_service.get_user(db, user_id)

        comment = Comment(post=post, author=author, content=comment_data.content)
        db.add(comment)
        db.commit()
        db.refresh(comment)
        logger.info(f"Comment {comment.id} added to post {post_id} by user {user_id}")
        return comment

    def get_comment(self, db: Session, comment_id: int) -> Comment:
        comment = db.get(Comment, comment_id)
        if not comment:
            raise NotFoundError(f"Comment not found with id: {comment_id}")
        return comment

    def get_comments_for_post(self, db: Session, post_id: int) -> List[Comment]:
        """Comments of a post, oldest first"""
        post_service.get_post(db, post_id)
        return db.query(Comment).filter(Comment.post_id == post_id).order_by(
            Comment.created_at, Comment.id
        ).all()

    def update_comment(self, db: Session, comment_id: int, comment_data: CommentCreate) -> Comment:
        comment = self.get_comment(db, comment_id)
        comment.content = comment_data.content
        db.commit()
        db.refresh(comment)
        logger.info(f"Comment updated: {comment_id}")
        return comment

    def delete_comment(self, db: Session, comment_id: int) -> None:
        comment = self.get_comment(db, comment_id)
        db.delete(comment)
        db.commit()
        logger.info(f"Comment deleted: {comment_id}")

# Create singleton instance
comment_service = CommentService()
