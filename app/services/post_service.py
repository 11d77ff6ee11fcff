# ============================================================================
# FILE: app/services/post_service.py
# ============================================================================
from typing import Dict, Iterable, List, Optional, Tuple
from sqlalchemy.orm import Session
from app.core.exceptions import ServiceError, NotFoundError
from app.db.models.post import Post, PostVote
from app.db.pagination import paginate
from app.schemas.post import PostCreate, PostUpdate
from app.services.community_service import community_service
from app.services.song_service import song_service
from app.services.user_service import user_service
import logging

logger = logging.getLogger(__name__)

VALID_VOTES = (-1, 0, 1)

class PostService:
    """Service layer for posts, the vote ledger and the feed"""

    def create_post(self, db: Session, post_data: PostCreate, user_id: int) -> Post:
        """
        Create a post for user_id
        Posting into a community requires being a member of it
        """
        author = user_service.get_user(db, user_id)

        community = None
        if post_data.community_id is not None:
            community = community_service.get_community(db, post_data.community_id)
            if not community.is_member(user_id):
                raise ServiceError("You must be a member of the community to post in it")

        song = None
        if post_data.song_id is not None:
            song = song_service.get_song(db, post_data.song_id)

        post = Post(
            content=post_data.content,
            image_url=post_data.image_url,
            author=author,
            community=community,
            song=song,
            vote_count=0,
        )

        try:
            db.add(post)
            db.commit()
            db.refresh(post)
            logger.info(f"Post created: {post.id} by user {user_id}")
            return post
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating post: {e}")
            raise

    def get_post(self, db: Session, post_id: int) -> Post:
        post = db.get(Post, post_id)
        if not post:
            raise NotFoundError(f"Post not found with id: {post_id}")
        return post

    def update_post(self, db: Session, post_id: int, update_data: PostUpdate) -> Post:
        post = self.get_post(db, post_id)

        if update_data.content is not None:
            post.content = update_data.content
        if update_data.image_url is not None:
            post.image_url = update_data.image_url
        if update_data.song_id is not None:
            post.song = song_service.get_song(db, update_data.song_id)

        db.commit()
        db.refresh(post)
        logger.info(f"Post updated: {post_id}")
        return post

    def delete_post(self, db: Session, post_id: int) -> None:
        post = self.get_post(db, post_id)
        try:
            db.delete(post)
            db.commit()
            logger.info(f"Post deleted: {post_id}")
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting post: {e}")
            raise

    def vote_post(self, db: Session, post_id: int, user_id: int, value: int) -> Post:
        """
        Set the caller's vote on a post to value (-1, 0 or 1)

        The cached vote_count moves by (value - previous vote), where a missing
        ledger row counts as 0. Voting 0 deletes the ledger row.
        """
        if value not in VALID_VOTES:
            raise ServiceError("Invalid vote value, expected -1, 0 or 1")

        post = self.get_post(db, post_id)
        user_service.get_user(db, user_id)

        vote = db.get(PostVote, (post_id, user_id))
        previous = vote.value if vote else 0

        post.vote_count = (post.vote_count or 0) + (value - previous)

        if value == 0:
            if vote is not None:
                db.delete(vote)
        elif vote is not None:
            vote.value = value
        else:
            db.add(PostVote(post_id=post_id, user_id=user_id, value=value))

        try:
            db.commit()
            db.refresh(post)
        except Exception as e:
            db.rollback()
            logger.error(f"Error voting on post {post_id}: {e}")
            raise

        logger.info(f"User {user_id} voted {value} on post {post_id} (was {previous})")
        return post

    def get_user_vote(self, db: Session, post_id: int, user_id: Optional[int]) -> int:
        """Caller's current vote on a post, 0 when absent or anonymous"""
        if user_id is None:
            return 0
        vote = db.get(PostVote, (post_id, user_id))
        return vote.value if vote else 0

    def get_user_votes(self, db: Session, post_ids: Iterable[int], user_id: Optional[int]) -> Dict[int, int]:
        """Caller's votes for a batch of posts, missing posts are omitted"""
        post_ids = list(post_ids)
        if user_id is None or not post_ids:
            return {}
        rows = db.query(PostVote).filter(
            PostVote.user_id == user_id,
            PostVote.post_id.in_(post_ids)
        ).all()
        return {row.post_id: row.value for row in rows}

    def get_user_posts(self, db: Session, user_id: int, page: int, size: int) -> Tuple[List[Post], int]:
        user_service.get_user(db, user_id)
        query = db.query(Post).filter(Post.user_id == user_id).order_by(Post.created_at.desc(), Post.id.desc())
        return paginate(query, page, size)

    def get_community_posts(self, db: Session, community_id: int, page: int, size: int) -> Tuple[List[Post], int]:
        community_service.get_community(db, community_id)
        query = db.query(Post).filter(Post.community_id == community_id).order_by(
            Post.created_at.desc(), Post.id.desc()
        )
        return paginate(query, page, size)

    def get_popular_posts(self, db: Session, page: int, size: int) -> Tuple[List[Post], int]:
        """Global popularity listing: highest vote count first"""
        query = db.query(Post).order_by(Post.vote_count.desc(), Post.created_at.desc(), Post.id.desc())
        return paginate(query, page, size)

    def get_feed_for_user(self, db: Session, user_id: int, page: int, size: int) -> Tuple[List[Post], int]:
        """
        Posts by the users user_id follows, newest first
        Falls back to the global popularity listing when following nobody
        """
        user = user_service.get_user(db, user_id)
        following_ids = [followed.id for followed in user.following]

        if not following_ids:
            logger.info(f"User {user_id} follows nobody, serving popular posts")
            return self.get_popular_posts(db, page, size)

        query = db.query(Post).filter(Post.user_id.in_(following_ids)).order_by(
            Post.created_at.desc(), Post.id.desc()
        )
        return paginate(query, page, size)

# Create singleton instance
post_service = PostService()
