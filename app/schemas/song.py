# ============================================================================
# FILE: app/schemas/song.py
# ============================================================================
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from app.db.models.song import Song

class GenreCreate(BaseModel):
    """Schema for creating or renaming a genre"""
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None

class GenreResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    class Config:
        from_attributes = True

class SongCreate(BaseModel):
    """Metadata sent as the song_data part of an upload"""
    title: str = Field(..., min_length=1, max_length=200)
    artist: Optional[str] = Field(None, max_length=200)
    album: Optional[str] = Field(None, max_length=200)
    duration_seconds: Optional[int] = Field(None, ge=0)
    genre_ids: List[int] = []

class SongUpdate(BaseModel):
    """Schema for updating song metadata, only provided fields change"""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    artist: Optional[str] = Field(None, max_length=200)
    album: Optional[str] = Field(None, max_length=200)
    duration_seconds: Optional[int] = Field(None, ge=0)
    genre_ids: Optional[List[int]] = None

class SongSummary(BaseModel):
    """Compact song representation embedded in posts and playlists"""
    id: int
    title: str
    artist: Optional[str] = None

    class Config:
        from_attributes = True

class SongResponse(BaseModel):
    """Schema for song response"""
    id: int
    title: str
    artist: Optional[str] = None
    album: Optional[str] = None
    duration_seconds: Optional[int] = None
    uploader_id: int
    uploader_nickname: str
    has_cover: bool
    play_count: int
    genres: List[GenreResponse] = []
    created_at: datetime

    @classmethod
    def from_entity(cls, song: Song) -> "SongResponse":
        return cls(
            id=song.id,
            title=song.title,
            artist=song.artist,
            album=song.album,
            duration_seconds=song.duration_seconds,
            uploader_id=song.user_id,
            uploader_nickname=song.uploader.nickname,
            has_cover=bool(song.cover_image_path),
            play_count=song.play_count or 0,
            genres=[GenreResponse.model_validate(genre) for genre in song.genres],
            created_at=song.created_at,
        )
