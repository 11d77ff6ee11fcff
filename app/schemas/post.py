# ============================================================================
# FILE: app/schemas/post.py
# ============================================================================
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from app.db.models.post import Post
from app.schemas.song import SongSummary
from app.schemas.user import UserSummary

class PostCreate(BaseModel):
    """Schema for creating a post"""
    content: str = Field(..., min_length=1, max_length=5000)
    image_url: Optional[str] = None
    community_id: Optional[int] = None
    song_id: Optional[int] = None

class PostUpdate(BaseModel):
    """Schema for editing a post, the community cannot change"""
    content: Optional[str] = Field(None, min_length=1, max_length=5000)
    image_url: Optional[str] = None
    song_id: Optional[int] = None

class PostResponse(BaseModel):
    """Schema for post response"""
    id: int
    content: str
    image_url: Optional[str] = None
    author: UserSummary
    community_id: Optional[int] = None
    community_name: Optional[str] = None
    song: Optional[SongSummary] = None
    vote_count: int
    # Caller's vote: -1, 0 or 1 (0 for anonymous callers)
    user_vote: int = 0
    comment_count: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, post: Post, user_vote: int = 0) -> "PostResponse":
        return cls(
            id=post.id,
            content=post.content,
            image_url=post.image_url,
            author=UserSummary.model_validate(post.author),
            community_id=post.community_id,
            community_name=post.community.name if post.community else None,
            song=SongSummary.model_validate(post.song) if post.song else None,
            vote_count=post.vote_count,
            user_vote=user_vote,
            comment_count=len(post.comments),
            created_at=post.created_at,
            updated_at=post.updated_at,
        )
