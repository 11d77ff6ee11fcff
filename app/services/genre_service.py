# ============================================================================
# FILE: app/services/genre_service.py
# ============================================================================
from typing import List, Dict
from sqlalchemy.orm import Session
from app.core.cache import cache, GENRES_KEY
from app.core.exceptions import NotFoundError, ConflictError
from app.config import settings
from app.db.models.song import Genre
from app.schemas.song import GenreCreate, GenreResponse
import logging

logger = logging.getLogger(__name__)

class GenreService:
    """Service layer for the genre catalog"""

    def list_genres(self, db: Session) -> List[Dict]:
        """
        All genres ordered by name
        The catalog is cached and dropped on every change
        """
        cached = cache.get(GENRES_KEY)
        if cached is not None:
            logger.info("Cache hit for genre catalog")
            return cached

        genres = db.query(Genre).order_by(Genre.name).all()
        data = [GenreResponse.model_validate(genre).model_dump() for genre in genres]
        cache.set(GENRES_KEY, data, settings.CACHE_EXPIRE_SECONDS)
        return data

    def get_genre(self, db: Session, genre_id: int) -> Genre:
        genre = db.get(Genre, genre_id)
        if not genre:
            raise NotFoundError(f"Genre not found with id: {genre_id}")
        return genre

    def get_genres_by_ids(self, db: Session, genre_ids: List[int]) -> List[Genre]:
        """Resolve ids in order, every id must exist"""
        return [self.get_genre(db, genre_id) for genre_id in dict.fromkeys(genre_ids)]

    def create_genre(self, db: Session, genre_data: GenreCreate) -> Genre:
        if db.query(Genre).filter(Genre.name == genre_data.name).first():
            raise ConflictError("A genre with that name already exists")

        genre = Genre(name=genre_data.name, description=genre_data.description)
        db.add(genre)
        db.commit()
        db.refresh(genre)
        cache.delete(GENRES_KEY)
        logger.info(f"Genre created: {genre.name}")
        return genre

    def update_genre(self, db: Session, genre_id: int, genre_data: GenreCreate) -> Genre:
        genre = self.get_genre(db, genre_id)
        if genre_data.name != genre.name:
            if db.query(Genre).filter(Genre.name == genre_data.name).first():
                raise ConflictError("A genre with that name already exists")
            genre.name = genre_data.name
        genre.description = genre_data.description

        db.commit()
        db.refresh(genre)
        cache.delete(GENRES_KEY)
        logger.info(f"Genre updated: {genre_id}")
        return genre

    def delete_genre(self, db: Session, genre_id: int) -> None:
        genre = self.get_genre(db, genre_id)
        db.delete(genre)
        db.commit()
        cache.delete(GENRES_KEY)
        logger.info(f"Genre deleted: {genre_id}")

# Create singleton instance
genre_service = GenreService()
