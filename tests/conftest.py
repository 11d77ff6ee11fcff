# ============================================================================
# FILE: tests/conftest.py
# ============================================================================
import os

# Settings are read at import time: point them at throwaway backends first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["REDIS_URL"] = "redis://127.0.0.1:1/0"
os.environ["SECRET_KEY"] = "test-secret-key"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.config import settings
from app.core.security import create_access_token
from app.db.base import Base
from app.db.session import get_db
from app.db.models.user import Role
from app.db.models.song import Song
from app.schemas.user import SignupRequest
from app.services.user_service import user_service


engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def upload_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture()
def make_user(db):
    counter = {"n": 0}

    def _make_user(nickname=None, role=Role.USER, password="secret123"):
        counter["n"] += 1
        nickname = nickname or f"user{counter['n']}"
        user = user_service.create_user(db, SignupRequest(
            name=nickname.title(),
            nickname=nickname,
            email=f"{nickname}@example.com",
            password=password,
        ))
        if role != Role.USER:
            user.role = role
            db.commit()
        return user

    return _make_user


@pytest.fixture()
def make_song(db):
    def _make_song(uploader, title="Song", artist="Artist"):
        song = Song(title=title, artist=artist, audio_file_path=f"audio/{title}.mp3", uploader=uploader)
        db.add(song)
        db.commit()
        db.refresh(song)
        return song

    return _make_song


def auth_headers(user):
    token = create_access_token({"sub": user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def headers_for():
    return auth_headers
