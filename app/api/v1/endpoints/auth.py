# ============================================================================
# FILE: app/api/v1/endpoints/auth.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from datetime import timedelta
from app.db.session import get_db
from app.schemas.common import MessageResponse
from app.schemas.user import SignupRequest, AuthResponse
from app.services.user_service import user_service
from app.core.security import create_access_token
from app.config import settings
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/signup", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    user_data: SignupRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user account
    Email and nickname must not be in use
    """
    user_service.create_user(db, user_data)
    return {"message": "User registered successfully"}

@router.post("/login", response_model=AuthResponse)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """
    Login with email or nickname and password
    Returns JWT access token
    """
    user = user_service.authenticate_user(db, form_data.username, form_data.password)
    if not user:
        logger.warning(f"Failed login for {form_data.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # Create access token
    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = create_access_token(
        data={"sub": user.email}, expires_delta=access_token_expires
    )

    return AuthResponse(
        access_token=access_token,
        user_id=user.id,
        name=user.name,
        nickname=user.nickname,
        role=user.role.value,
    )
