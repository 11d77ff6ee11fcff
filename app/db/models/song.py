
# ============================================================================
# FILE: app/db/models/song.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Table
from sqlalchemy.orm import relationship
from datetime import datetime
from app.db.base import Base

song_genres = Table(
    "song_genres",
    Base.metadata,
    Column("song_id", Integer, ForeignKey("songs.id", ondelete="CASCADE"), primary_key=True),
    Column("genre_id", Integer, ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True),
)

class Song(Base):
    """Uploaded audio with its metadata"""
    __tablename__ = "songs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False, index=True)
    artist = Column(String(200), nullable=True, index=True)
    album = Column(String(200), nullable=True)
    duration_seconds = Column(Integer, nullable=True)
    audio_file_path = Column(String, nullable=False)
    audio_content_type = Column(String(100), nullable=True)
    cover_image_path = Column(String, nullable=True)
    play_count = Column(Integer, nullable=False, default=0)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    uploader = relationship("User", back_populates="songs")
    genres = relationship("Genre", secondary=song_genres, back_populates="songs")
    playlist_entries = relationship("PlaylistSong", back_populates="song", cascade="all, delete-orphan")
    posts = relationship("Post", back_populates="song")

    @property
    def stream_media_type(self) -> str:
        # Songs without a recorded upload type are served as MP3
        return self.audio_content_type or "audio/mpeg"

class Genre(Base):
    """Genre tag attached to songs"""
    __tablename__ = "genres"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)

    songs = relationship("Song", secondary=song_genres, back_populates="genres")
