# ============================================================================
# FILE: app/schemas/comment.py
# ============================================================================
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from app.schemas.user import UserSummary

class CommentCreate(BaseModel):
    """Schema for writing or editing a comment"""
    content: str = Field(..., min_length=1, max_length=2000)

class CommentResponse(BaseModel):
    id: int
    post_id: int
    content: str
    author: UserSummary
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
