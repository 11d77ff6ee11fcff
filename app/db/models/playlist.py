
# ============================================================================
# FILE: app/db/models/playlist.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Boolean
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import relationship
from datetime import datetime
from app.db.base import Base

class Playlist(Base):
    """Ordered song collection owned by a user"""
    __tablename__ = "playlists"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    cover_image_url = Column(String, nullable=True)
    is_public = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    owner = relationship("User", back_populates="playlists")
    entries = relationship(
        "PlaylistSong",
        back_populates="playlist",
        order_by="PlaylistSong.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )
    radio_communities = relationship("Community", back_populates="radio_playlist")

    @property
    def songs(self):
        return [entry.song for entry in self.entries]

    def contains_song(self, song_id: int) -> bool:
        return any(entry.song_id == song_id for entry in self.entries)

class PlaylistSong(Base):
    """Junction table for playlist songs, position keeps the order"""
    __tablename__ = "playlist_songs"

    id = Column(Integer, primary_key=True, index=True)
    playlist_id = Column(Integer, ForeignKey("playlists.id", ondelete="CASCADE"), nullable=False, index=True)
    song_id = Column(Integer, ForeignKey("songs.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    added_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    playlist = relationship("Playlist", back_populates="entries")
    song = relationship("Song", back_populates="playlist_entries")
