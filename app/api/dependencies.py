# ============================================================================
# FILE: app/api/dependencies.py
# ============================================================================
from fastapi import Depends, HTTPException, Query, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from app.config import settings
from app.db.session import get_db
from app.core.security import decode_access_token
from app.db.models.user import User
from app.db.models.community import Community
from typing import Optional, Tuple

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/login", auto_error=False)

def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """
    Get current authenticated user from JWT token
    Returns None if no token or invalid token (allows anonymous access)
    """
    if not token:
        return None

    try:
        payload = decode_access_token(token)
        email: str = payload.get("sub")
        if email is None:
            return None
    except HTTPException:
        return None

    return db.query(User).filter(User.email == email).first()

def require_current_user(
    current_user: Optional[User] = Depends(get_current_user)
) -> User:
    """
    Require authenticated user (raises 401 if not authenticated)
    Use this dependency for protected endpoints
    """
    if current_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return current_user

def require_admin(
    current_user: User = Depends(require_current_user)
) -> User:
    """Require a platform administrator (raises 403 otherwise)"""
    if not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Administrator role required")
    return current_user

def current_user_id(current_user: Optional[User]) -> Optional[int]:
    return current_user.id if current_user else None

def pagination(
    page: int = Query(0, ge=0, description="Page index, starting at 0"),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Page size"),
) -> Tuple[int, int]:
    return page, size

# ----------------------------------------------------------------------------
# Authorization guards, called by mutating endpoints before the service call
# ----------------------------------------------------------------------------

def ensure_owner_or_admin(owner_id: int, current_user: User, resource: str = "resource") -> None:
    """Allow the owner of a resource or an administrator"""
    if current_user.id != owner_id and not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Only the owner of this {resource} or an administrator can do this",
        )

def ensure_community_leader_or_admin(community: Community, current_user: User) -> None:
    """Allow the community leader or an administrator"""
    if community.leader_id != current_user.id and not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the community leader or an administrator can do this",
        )
