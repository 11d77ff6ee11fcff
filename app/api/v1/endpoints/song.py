# ============================================================================
# FILE: app/api/v1/endpoints/song.py
# ============================================================================
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status, Response
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session
from typing import List, Optional, Tuple
from app.db.session import get_db
from app.api.dependencies import require_current_user, ensure_owner_or_admin, pagination
from app.schemas.common import Page
from app.schemas.song import SongResponse, SongUpdate
from app.services.song_service import song_service
from app.db.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("", response_model=SongResponse, status_code=status.HTTP_201_CREATED)
async def upload_song(
    song_data: str = Form(..., description="JSON metadata: title, artist, album, duration_seconds, genre_ids"),
    audio_file: UploadFile = File(...),
    cover_image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Upload a song (multipart) with an optional cover image
    Requires authentication
    """
    request = song_service.parse_song_data(song_data)
    song = song_service.upload_song(db, request, audio_file, cover_image, current_user.id)
    return SongResponse.from_entity(song)

@router.get("", response_model=Page[SongResponse])
async def get_all_songs(
    paging: Tuple[int, int] = Depends(pagination),
    db: Session = Depends(get_db)
):
    """All songs, newest first"""
    page, size = paging
    songs, total = song_service.get_all_songs(db, page, size)
    return Page[SongResponse].build([SongResponse.from_entity(song) for song in songs], total, page, size)

@router.get("/search", response_model=List[SongResponse])
async def search_songs(
    query: str = Query(..., min_length=1, description="Title or artist fragment"),
    db: Session = Depends(get_db)
):
    """Search songs by title or artist"""
    return song_service.search_songs(db, query)

@router.get("/user/{user_id}", response_model=List[SongResponse])
async def get_user_songs(
    user_id: int,
    db: Session = Depends(get_db)
):
    """Songs uploaded by a user"""
    return [SongResponse.from_entity(song) for song in song_service.get_songs_by_uploader(db, user_id)]

@router.get("/genre/{genre_id}", response_model=List[SongResponse])
async def get_songs_by_genre(
    genre_id: int,
    db: Session = Depends(get_db)
):
    """Songs tagged with a genre"""
    return [SongResponse.from_entity(song) for song in song_service.get_songs_by_genre(db, genre_id)]

@router.get("/{song_id}", response_model=SongResponse)
async def get_song(
    song_id: int,
    db: Session = Depends(get_db)
):
    return SongResponse.from_entity(song_service.get_song(db, song_id))

@router.get("/{song_id}/stream")
async def stream_song(
    song_id: int,
    db: Session = Depends(get_db)
):
    """
    Stream the audio file of a song
    Supports Range requests for seeking
    """
    path = song_service.get_stream_path(db, song_id)
    song = song_service.get_song(db, song_id)
    return FileResponse(
        path,
        media_type=song.stream_media_type,
        headers={"Content-Disposition": "inline", "Accept-Ranges": "bytes"},
    )

@router.get("/{song_id}/cover")
async def get_song_cover(
    song_id: int,
    db: Session = Depends(get_db)
):
    """Cover image of a song"""
    return FileResponse(song_service.get_cover_path(db, song_id))

@router.put("/{song_id}", response_model=SongResponse)
async def update_song(
    song_id: int,
    update_data: SongUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Update song metadata
    Requires the uploader or an administrator
    """
    song = song_service.get_song(db, song_id)
    ensure_owner_or_admin(song.user_id, current_user, "song")
    return SongResponse.from_entity(song_service.update_song(db, song_id, update_data))

@router.delete("/{song_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_song(
    song_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Delete a song and its files
    Requires the uploader or an administrator
    """
    song = song_service.get_song(db, song_id)
    ensure_owner_or_admin(song.user_id, current_user, "song")
    song_service.delete_song(db, song_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
