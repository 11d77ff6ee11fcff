# ============================================================================
# FILE: app/schemas/user.py
# ============================================================================
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime
from app.db.models.user import User

class SignupRequest(BaseModel):
    """Schema for user registration"""
    name: str = Field(..., min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    nickname: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)

class UserUpdate(BaseModel):
    """Schema for profile updates, only provided fields change"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    nickname: Optional[str] = Field(None, min_length=3, max_length=50)
    bio: Optional[str] = None
    profile_picture_url: Optional[str] = None

class UserSummary(BaseModel):
    """Compact author/member representation embedded in other responses"""
    id: int
    nickname: str
    profile_picture_url: Optional[str] = None

    class Config:
        from_attributes = True

class UserResponse(BaseModel):
    """Schema for user response"""
    id: int
    name: str
    last_name: Optional[str] = None
    nickname: str
    email: str
    role: str
    bio: Optional[str] = None
    profile_picture_url: Optional[str] = None
    created_at: datetime
    follower_count: int = 0
    following_count: int = 0
    # Only set when the caller is authenticated
    is_following: Optional[bool] = None

    @classmethod
    def from_entity(cls, user: User, is_following: Optional[bool] = None) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            last_name=user.last_name,
            nickname=user.nickname,
            email=user.email,
            role=user.role.value,
            bio=user.bio,
            profile_picture_url=user.profile_picture_url,
            created_at=user.created_at,
            follower_count=len(user.followers),
            following_count=len(user.following),
            is_following=is_following,
        )

class AuthResponse(BaseModel):
    """Schema for a successful login"""
    access_token: str
    token_type: str = "bearer"
    user_id: int
    name: str
    nickname: str
    role: str
