
# ============================================================================
# FILE: app/schemas/playlist.py
# ============================================================================
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from app.db.models.playlist import Playlist
from app.schemas.song import SongSummary

class PlaylistCreate(BaseModel):
    """Schema for creating a playlist"""
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    cover_image_url: Optional[str] = None
    is_public: bool = False
    song_ids: List[int] = []

class PlaylistUpdate(BaseModel):
    """Schema for updating a playlist, song_ids replaces the whole list when given"""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    cover_image_url: Optional[str] = None
    is_public: Optional[bool] = None
    song_ids: Optional[List[int]] = None

class PlaylistSongResponse(BaseModel):
    """Schema for playlist song response"""
    position: int
    added_at: datetime
    song: SongSummary

    class Config:
        from_attributes = True

class PlaylistResponse(BaseModel):
    """Schema for playlist response"""
    id: int
    name: str
    description: Optional[str] = None
    cover_image_url: Optional[str] = None
    is_public: bool
    owner_id: int
    owner_nickname: str
    created_at: datetime
    updated_at: datetime
    songs: List[PlaylistSongResponse] = []

    @classmethod
    def from_entity(cls, playlist: Playlist) -> "PlaylistResponse":
        return cls(
            id=playlist.id,
            name=playlist.name,
            description=playlist.description,
            cover_image_url=playlist.cover_image_url,
            is_public=playlist.is_public,
            owner_id=playlist.user_id,
            owner_nickname=playlist.owner.nickname,
            created_at=playlist.created_at,
            updated_at=playlist.updated_at,
            songs=[PlaylistSongResponse.model_validate(entry) for entry in playlist.entries],
        )
