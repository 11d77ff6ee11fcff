# ============================================================================
# FILE: app/api/v1/endpoints/playlist.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, status, Response
from sqlalchemy.orm import Session
from typing import List, Optional
from app.db.session import get_db
from app.api.dependencies import require_current_user, get_current_user, ensure_owner_or_admin
from app.schemas.playlist import (
    PlaylistCreate,
    PlaylistUpdate,
    PlaylistResponse,
)
from app.services.playlist_service import playlist_service
from app.db.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/user", response_model=List[PlaylistResponse])
async def get_my_playlists(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Get all playlists for the current user, public and private
    Requires authentication
    """
    playlists = playlist_service.get_playlists_by_owner(db, current_user.id)
    return [PlaylistResponse.from_entity(playlist) for playlist in playlists]

@router.get("/user/{user_id}", response_model=List[PlaylistResponse])
async def get_user_public_playlists(
    user_id: int,
    db: Session = Depends(get_db)
):
    """Public playlists of a user"""
    playlists = playlist_service.get_public_playlists_by_owner(db, user_id)
    return [PlaylistResponse.from_entity(playlist) for playlist in playlists]

@router.get("/public", response_model=List[PlaylistResponse])
async def get_public_playlists(
    db: Session = Depends(get_db)
):
    """All public playlists"""
    return [PlaylistResponse.from_entity(playlist) for playlist in playlist_service.get_public_playlists(db)]

@router.post("", response_model=PlaylistResponse, status_code=status.HTTP_201_CREATED)
async def create_playlist(
    playlist_data: PlaylistCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Create a new playlist
    Requires authentication
    """
    playlist = playlist_service.create_playlist(db, current_user.id, playlist_data)
    return PlaylistResponse.from_entity(playlist)

@router.get("/{playlist_id}", response_model=PlaylistResponse)
async def get_playlist(
    playlist_id: int,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user)
):
    """
    Get a specific playlist
    Private playlists are visible only to their owner or an administrator
    """
    playlist = playlist_service.get_playlist(db, playlist_id)
    if not playlist.is_public:
        if current_user is None or (current_user.id != playlist.user_id and not current_user.is_admin):
            # Do not reveal that a private playlist exists
            raise HTTPException(status_code=404, detail="Playlist not found")
    return PlaylistResponse.from_entity(playlist)

@router.put("/{playlist_id}", response_model=PlaylistResponse)
async def update_playlist(
    playlist_id: int,
    update_data: PlaylistUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Update playlist details (name, description, visibility, songs)
    Requires ownership or an administrator
    """
    playlist = playlist_service.get_playlist(db, playlist_id)
    ensure_owner_or_admin(playlist.user_id, current_user, "playlist")
    playlist = playlist_service.update_playlist(db, playlist_id, update_data)
    return PlaylistResponse.from_entity(playlist)

@router.delete("/{playlist_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_playlist(
    playlist_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Delete a playlist
    Requires ownership or an administrator
    """
    playlist = playlist_service.get_playlist(db, playlist_id)
    ensure_owner_or_admin(playlist.user_id, current_user, "playlist")
    playlist_service.delete_playlist(db, playlist_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/{playlist_id}/songs/{song_id}", response_model=PlaylistResponse)
async def add_song_to_playlist(
    playlist_id: int,
    song_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Add a song at the end of a playlist
    Requires ownership or an administrator
    """
    playlist = playlist_service.get_playlist(db, playlist_id)
    ensure_owner_or_admin(playlist.user_id, current_user, "playlist")
    playlist = playlist_service.add_song_to_playlist(db, playlist_id, song_id)
    return PlaylistResponse.from_entity(playlist)

@router.delete("/{playlist_id}/songs/{song_id}", response_model=PlaylistResponse)
async def remove_song_from_playlist(
    playlist_id: int,
    song_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Remove a song from a playlist
    Requires ownership or an administrator
    """
    playlist = playlist_service.get_playlist(db, playlist_id)
    ensure_owner_or_admin(playlist.user_id, current_user, "playlist")
    playlist = playlist_service.remove_song_from_playlist(db, playlist_id, song_id)
    return PlaylistResponse.from_entity(playlist)
