# ============================================================================
# FILE: app/services/user_service.py
# ============================================================================
from typing import List, Optional
from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from app.config import settings
from app.core.cache import cache, SONG_SEARCH_PREFIX
from app.core.storage import storage
from app.core.exceptions import ServiceError, NotFoundError, ConflictError
from app.core.security import get_password_hash, verify_password
from app.db.models.user import User, Role
from app.schemas.user import SignupRequest, UserUpdate
import logging

logger = logging.getLogger(__name__)

class UserService:
    """Service layer for accounts, profiles and the follow graph"""

    def create_user(self, db: Session, user_data: SignupRequest) -> User:
        """Register a new account, email and nickname must be unused"""
        if self.get_user_by_email(db, user_data.email):
            raise ConflictError("Email already in use")
        if self.get_user_by_nickname(db, user_data.nickname):
            raise ConflictError("Nickname already in use")

        try:
            user = User(
                name=user_data.name,
                last_name=user_data.last_name,
                nickname=user_data.nickname,
                email=user_data.email,
                hashed_password=get_password_hash(user_data.password),
                role=Role.USER,
                email_verified=False,
                profile_picture_url=settings.DEFAULT_PROFILE_PICTURE,
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            logger.info(f"User created: {user.nickname}")
            return user
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating user: {e}")
            raise

    def get_user(self, db: Session, user_id: int) -> User:
        """Get user by id or raise"""
        user = db.get(User, user_id)
        if not user:
            raise NotFoundError(f"User not found with id: {user_id}")
        return user

    def get_user_by_email(self, db: Session, email: str) -> Optional[User]:
        """Get user by email"""
        return db.query(User).filter(User.email == email).first()

    def get_user_by_nickname(self, db: Session, nickname: str) -> Optional[User]:
        """Get user by nickname"""
        return db.query(User).filter(User.nickname == nickname).first()

    def authenticate_user(self, db: Session, username_or_email: str, password: str) -> Optional[User]:
        """Authenticate user with email or nickname and password"""
        user = db.query(User).filter(
            or_(User.email == username_or_email, User.nickname == username_or_email)
        ).first()
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    def search_users(self, db: Session, nickname: str) -> List[User]:
        """Case-insensitive nickname substring search"""
        pattern = f"%{nickname.strip().lower()}%"
        return db.query(User).filter(func.lower(User.nickname).like(pattern)).order_by(User.nickname).all()

    def update_user(self, db: Session, user_id: int, update_data: UserUpdate) -> User:
        """Update profile fields that were provided"""
        user = self.get_user(db, user_id)

        if update_data.nickname is not None and update_data.nickname != user.nickname:
            if self.get_user_by_nickname(db, update_data.nickname):
                raise ConflictError("Nickname already in use")
            user.nickname = update_data.nickname

        for field in ("name", "last_name", "bio", "profile_picture_url"):
            value = getattr(update_data, field)
            if value is not None:
                setattr(user, field, value)

        try:
            db.commit()
            db.refresh(user)
            logger.info(f"User updated: {user_id}")
            return user
        except Exception as e:
            db.rollback()
            logger.error(f"Error updating user: {e}")
            raise

    def delete_user(self, db: Session, user_id: int) -> None:
        """
        Delete an account with everything it owns
        Votes on other users' posts are taken back out of their vote counts,
        uploaded song files are removed once the rows are gone
        """
        user = self.get_user(db, user_id)
        stored_files = [
            path
            for song in user.songs
            for path in (song.audio_file_path, song.cover_image_path)
        ]

        try:
            for vote in user.votes:
                if vote.post.user_id != user_id:
                    vote.post.vote_count = (vote.post.vote_count or 0) - vote.value
            db.delete(user)
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting user: {e}")
            raise

        for path in stored_files:
            storage.delete(path)
        if stored_files:
            cache.invalidate_prefix(SONG_SEARCH_PREFIX)
        logger.info(f"User deleted: {user_id}")

    def follow_user(self, db: Session, follower_id: int, followed_id: int) -> None:
        """Add followed_id to the follower's following set"""
        if follower_id == followed_id:
            raise ServiceError("A user cannot follow themselves")

        follower = self.get_user(db, follower_id)
        followed = self.get_user(db, followed_id)

        if followed in follower.following:
            raise ConflictError("You already follow this user")

        follower.following.append(followed)
        db.commit()
        logger.info(f"User {follower_id} now follows {followed_id}")

    def unfollow_user(self, db: Session, follower_id: int, followed_id: int) -> None:
        """Remove followed_id from the follower's following set"""
        follower = self.get_user(db, follower_id)
        followed = self.get_user(db, followed_id)

        if followed not in follower.following:
            raise ServiceError("You do not follow this user")

        follower.following.remove(followed)
        db.commit()
        logger.info(f"User {follower_id} unfollowed {followed_id}")

    def get_followers(self, db: Session, user_id: int) -> List[User]:
        return list(self.get_user(db, user_id).followers)

    def get_following(self, db: Session, user_id: int) -> List[User]:
        return list(self.get_user(db, user_id).following)

    def is_following(self, db: Session, follower_id: int, followed_id: int) -> bool:
        follower = self.get_user(db, follower_id)
        return any(user.id == followed_id for user in follower.following)

# Create singleton instance
user_service = UserService()
