# ============================================================================
# FILE: app/api/v1/router.py
# ============================================================================
from fastapi import APIRouter
from app.api.v1.endpoints import auth, user, post, community, playlist, song, genre, comment

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(user.router, prefix="/users", tags=["users"])
api_router.include_router(post.router, prefix="/posts", tags=["posts"])
api_router.include_router(community.router, prefix="/communities", tags=["communities"])
api_router.include_router(playlist.router, prefix="/playlists", tags=["playlists"])
api_router.include_router(song.router, prefix="/songs", tags=["songs"])
api_router.include_router(genre.router, prefix="/genres", tags=["genres"])
api_router.include_router(comment.router, prefix="/comments", tags=["comments"])
