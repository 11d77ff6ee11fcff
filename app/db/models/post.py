
# ============================================================================
# FILE: app/db/models/post.py
# ============================================================================
from sqlalchemy import Column, Integer, SmallInteger, String, DateTime, ForeignKey, Text, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from app.db.base import Base

class Post(Base):
    """User post, optionally inside a community and optionally sharing a song"""
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    content = Column(Text, nullable=False)
    image_url = Column(String, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    community_id = Column(Integer, ForeignKey("communities.id", ondelete="CASCADE"), nullable=True, index=True)
    song_id = Column(Integer, ForeignKey("songs.id", ondelete="SET NULL"), nullable=True)
    # Cached sum of PostVote.value for this post
    vote_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    author = relationship("User", back_populates="posts")
    community = relationship("Community", back_populates="posts")
    song = relationship("Song", back_populates="posts")
    votes = relationship("PostVote", back_populates="post", cascade="all, delete-orphan")
    comments = relationship("Comment", back_populates="post", cascade="all, delete-orphan",
                            order_by="Comment.created_at")

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, user_id={self.user_id}, vote_count={self.vote_count})>"

class PostVote(Base):
    """Vote ledger row, absence of a row means the user has not voted"""
    __tablename__ = "post_votes"
    __table_args__ = (
        CheckConstraint("value IN (1, -1)", name="ck_post_votes_value"),
    )

    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    value = Column(SmallInteger, nullable=False)

    # Relationships
    post = relationship("Post", back_populates="votes")
    user = relationship("User", back_populates="votes")
