# ============================================================================
# FILE: app/services/song_service.py
# ============================================================================
from typing import List, Dict, Optional, Tuple
from fastapi import UploadFile
from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from app.config import settings
from app.core.cache import cache, SONG_SEARCH_PREFIX
from app.core.exceptions import ServiceError, NotFoundError
from app.core.storage import storage
from app.db.models.song import Song, Genre
from app.db.pagination import paginate
from app.schemas.song import SongCreate, SongUpdate, SongResponse
from app.services.genre_service import genre_service
from app.services.user_service import user_service
import logging

logger = logging.getLogger(__name__)

class SongService:
    """Service layer for the song catalog"""

    def upload_song(
        self,
        db: Session,
        song_data: SongCreate,
        audio_file: UploadFile,
        cover_image: Optional[UploadFile],
        user_id: int,
    ) -> Song:
        """Store the audio (and optional cover) and create the song record"""
        uploader = user_service.get_user(db, user_id)
        genres = genre_service.get_genres_by_ids(db, song_data.genre_ids)

        audio_path = storage.save_audio(audio_file)
        cover_path = None
        try:
            if cover_image is not None:
                cover_path = storage.save_cover(cover_image)

            song = Song(
                title=song_data.title,
                artist=song_data.artist,
                album=song_data.album,
                duration_seconds=song_data.duration_seconds,
                audio_file_path=audio_path,
                audio_content_type=audio_file.content_type,
                cover_image_path=cover_path,
                uploader=uploader,
                genres=genres,
            )
            db.add(song)
            db.commit()
            db.refresh(song)
        except Exception as e:
            db.rollback()
            storage.delete(audio_path)
            storage.delete(cover_path)
            logger.error(f"Error uploading song: {e}")
            raise

        cache.invalidate_prefix(SONG_SEARCH_PREFIX)
        logger.info(f"Song uploaded: {song.id} by user {user_id}")
        return song

    def get_song(self, db: Session, song_id: int) -> Song:
        song = db.get(Song, song_id)
        if not song:
            raise NotFoundError(f"Song not found with id: {song_id}")
        return song

    def update_song(self, db: Session, song_id: int, update_data: SongUpdate) -> Song:
        """Update metadata fields that were provided"""
        song = self.get_song(db, song_id)

        for field in ("title", "artist", "album", "duration_seconds"):
            value = getattr(update_data, field)
            if value is not None:
                setattr(song, field, value)
        if update_data.genre_ids is not None:
            song.genres = genre_service.get_genres_by_ids(db, update_data.genre_ids)

        db.commit()
        db.refresh(song)
        cache.invalidate_prefix(SONG_SEARCH_PREFIX)
        logger.info(f"Song updated: {song_id}")
        return song

    def delete_song(self, db: Session, song_id: int) -> None:
        """Delete the song record and its stored files"""
        song = self.get_song(db, song_id)
        audio_path, cover_path = song.audio_file_path, song.cover_image_path

        try:
            db.delete(song)
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting song: {e}")
            raise

        storage.delete(audio_path)
        storage.delete(cover_path)
        cache.invalidate_prefix(SONG_SEARCH_PREFIX)
        logger.info(f"Song deleted: {song_id}")

    def get_songs_by_uploader(self, db: Session, user_id: int) -> List[Song]:
        user_service.get_user(db, user_id)
        return db.query(Song).filter(Song.user_id == user_id).order_by(Song.created_at.desc(), Song.id.desc()).all()

    def search_songs(self, db: Session, query: str) -> List[Dict]:
        """
        Search songs by title or artist (case-insensitive)
        Results are cached briefly, uploads and edits drop the cache
        """
        query = query.strip()
        if not query:
            return []

        cache_key = f"{SONG_SEARCH_PREFIX}{query.lower()}"
        cached_results = cache.get(cache_key)
        if cached_results is not None:
            logger.info(f"Cache hit for song search: {query}")
            return cached_results

        pattern = f"%{query.lower()}%"
        songs = db.query(Song).filter(
            or_(func.lower(Song.title).like(pattern), func.lower(Song.artist).like(pattern))
        ).order_by(Song.title).all()

        results = [SongResponse.from_entity(song).model_dump(mode="json") for song in songs]
        cache.set(cache_key, results, settings.SEARCH_CACHE_SECONDS)
        return results

    def get_songs_by_genre(self, db: Session, genre_id: int) -> List[Song]:
        genre_service.get_genre(db, genre_id)
        return db.query(Song).join(Song.genres).filter(Genre.id == genre_id).order_by(Song.title).all()

    def get_all_songs(self, db: Session, page: int, size: int) -> Tuple[List[Song], int]:
        query = db.query(Song).order_by(Song.created_at.desc(), Song.id.desc())
        return paginate(query, page, size)

    def get_stream_path(self, db: Session, song_id: int) -> str:
        """Absolute path of the audio file, counts one play"""
        song = self.get_song(db, song_id)
        if not storage.exists(song.audio_file_path):
            logger.error(f"Audio file missing for song {song_id}: {song.audio_file_path}")
            raise NotFoundError("Audio file not found")

        song.play_count = (song.play_count or 0) + 1
        db.commit()
        return storage.resolve(song.audio_file_path)

    def get_cover_path(self, db: Session, song_id: int) -> str:
        song = self.get_song(db, song_id)
        if not storage.exists(song.cover_image_path):
            raise NotFoundError("Cover image not found")
        return storage.resolve(song.cover_image_path)

    def parse_song_data(self, raw: str) -> SongCreate:
        """Validate the JSON song_data part of a multipart upload"""
        try:
            return SongCreate.model_validate_json(raw)
        except ValueError as e:
            raise ServiceError(f"Invalid song data: {e}")

# Create singleton instance
song_service = SongService()
