# ============================================================================
# FILE: app/api/v1/endpoints/genre.py
# ============================================================================
from fastapi import APIRouter, Depends, status, Response
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.api.dependencies import require_admin
from app.schemas.song import GenreCreate, GenreResponse
from app.services.genre_service import genre_service
from app.db.models.user import User

router = APIRouter()

@router.get("", response_model=List[GenreResponse])
async def list_genres(db: Session = Depends(get_db)):
    """All genres ordered by name"""
    return genre_service.list_genres(db)

@router.get("/{genre_id}", response_model=GenreResponse)
async def get_genre(genre_id: int, db: Session = Depends(get_db)):
    return genre_service.get_genre(db, genre_id)

@router.post("", response_model=GenreResponse, status_code=status.HTTP_201_CREATED)
async def create_genre(
    genre_data: GenreCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """
    Create a genre
    Requires an administrator
    """
    return genre_service.create_genre(db, genre_data)

@router.put("/{genre_id}", response_model=GenreResponse)
async def update_genre(
    genre_id: int,
    genre_data: GenreCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """
    Rename or describe a genre
    Requires an administrator
    """
    return genre_service.update_genre(db, genre_id, genre_data)

@router.delete("/{genre_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_genre(
    genre_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """
    Delete a genre, songs keep existing without it
    Requires an administrator
    """
    genre_service.delete_genre(db, genre_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
