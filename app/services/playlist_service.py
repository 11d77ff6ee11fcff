# ============================================================================
# FILE: app/services/playlist_service.py
# ============================================================================
from typing import List
from sqlalchemy.orm import Session
from app.core.exceptions import ServiceError, NotFoundError, ConflictError
from app.db.models.playlist import Playlist, PlaylistSong
from app.db.models.song import Song
from app.schemas.playlist import PlaylistCreate, PlaylistUpdate
from app.services.song_service import song_service
from app.services.user_service import user_service
import logging

logger = logging.getLogger(__name__)

class PlaylistService:
    """Service layer for playlist operations"""

    def create_playlist(self, db: Session, user_id: int, playlist_data: PlaylistCreate) -> Playlist:
        """Create a new playlist for a user, with optional initial songs in order"""
        owner = user_service.get_user(db, user_id)
        songs = self._resolve_songs(db, playlist_data.song_ids)

        playlist = Playlist(
            owner=owner,
            name=playlist_data.name,
            description=playlist_data.description,
            cover_image_url=playlist_data.cover_image_url,
            is_public=playlist_data.is_public,
        )
        for song in songs:
            playlist.entries.append(PlaylistSong(song=song))

        try:
            db.add(playlist)
            db.commit()
            db.refresh(playlist)
            logger.info(f"Playlist created: {playlist.id} for user {user_id}")
            return playlist
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating playlist: {e}")
            raise

    def get_playlist(self, db: Session, playlist_id: int) -> Playlist:
        """Get a specific playlist"""
        playlist = db.get(Playlist, playlist_id)
        if not playlist:
            raise NotFoundError(f"Playlist not found with id: {playlist_id}")
        return playlist

    def get_playlists_by_owner(self, db: Session, user_id: int) -> List[Playlist]:
        """Get all playlists for a user"""
        user_service.get_user(db, user_id)
        return db.query(Playlist).filter(Playlist.user_id == user_id).order_by(Playlist.id).all()

    def get_public_playlists_by_owner(self, db: Session, user_id: int) -> List[Playlist]:
        user_service.get_user(db, user_id)
        return db.query(Playlist).filter(
            Playlist.user_id == user_id,
            Playlist.is_public.is_(True)
        ).order_by(Playlist.id).all()

    def get_public_playlists(self, db: Session) -> List[Playlist]:
        return db.query(Playlist).filter(Playlist.is_public.is_(True)).order_by(Playlist.id).all()

    def update_playlist(self, db: Session, playlist_id: int, update_data: PlaylistUpdate) -> Playlist:
        """Update playlist details, replace the song list when song_ids is given"""
        playlist = self.get_playlist(db, playlist_id)

        for field in ("name", "description", "cover_image_url", "is_public"):
            value = getattr(update_data, field)
            if value is not None:
                setattr(playlist, field, value)

        if update_data.song_ids is not None:
            songs = self._resolve_songs(db, update_data.song_ids)
            playlist.entries.clear()
            for song in songs:
                playlist.entries.append(PlaylistSong(song=song))

        try:
            db.commit()
            db.refresh(playlist)
            logger.info(f"Playlist updated: {playlist_id}")
            return playlist
        except Exception as e:
            db.rollback()
            logger.error(f"Error updating playlist: {e}")
            raise

    def delete_playlist(self, db: Session, playlist_id: int) -> None:
        """Delete a playlist"""
        playlist = self.get_playlist(db, playlist_id)
        try:
            db.delete(playlist)
            db.commit()
            logger.info(f"Playlist deleted: {playlist_id}")
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting playlist: {e}")
            raise

    def add_song_to_playlist(self, db: Session, playlist_id: int, song_id: int) -> Playlist:
        """Append a song at the end of a playlist"""
        playlist = self.get_playlist(db, playlist_id)
        song = song_service.get_song(db, song_id)

        if playlist.contains_song(song_id):
            raise ConflictError("Song is already in the playlist")

        playlist.entries.append(PlaylistSong(song=song))
        db.commit()
        db.refresh(playlist)
        logger.info(f"Song added to playlist {playlist_id}: {song_id}")
        return playlist

    def remove_song_from_playlist(self, db: Session, playlist_id: int, song_id: int) -> Playlist:
        """Remove a song from a playlist, later songs move up one position"""
        playlist = self.get_playlist(db, playlist_id)
        song_service.get_song(db, song_id)

        entry = next((e for e in playlist.entries if e.song_id == song_id), None)
        if entry is None:
            raise ServiceError("Song is not in the playlist")

        playlist.entries.remove(entry)
        db.commit()
        db.refresh(playlist)
        logger.info(f"Song removed from playlist {playlist_id}: {song_id}")
        return playlist

    def _resolve_songs(self, db: Session, song_ids: List[int]) -> List[Song]:
        """Songs in the given order, a repeated id keeps its first position"""
        return [song_service.get_song(db, song_id) for song_id in dict.fromkeys(song_ids)]

# Create singleton instance
playlist_service = PlaylistService()
