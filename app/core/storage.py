# ============================================================================
# FILE: app/core/storage.py
# ============================================================================
import os
import shutil
import uuid
from typing import Optional
from fastapi import UploadFile
from app.config import settings
from app.core.exceptions import ServiceError
import logging

logger = logging.getLogger(__name__)

AUDIO_DIR = "audio"
COVER_DIR = "covers"

class FileStorage:
    """Stores uploaded audio files and cover images on the local disk"""

    def __init__(self, root: Optional[str] = None):
        self._root = root

    @property
    def root(self) -> str:
        # Resolved lazily so tests can point UPLOAD_DIR somewhere else
        return os.path.abspath(self._root or settings.UPLOAD_DIR)

    def save_audio(self, upload: UploadFile) -> str:
        return self._save(upload, AUDIO_DIR, "audio/")

    def save_cover(self, upload: UploadFile) -> str:
        return self._save(upload, COVER_DIR, "image/")

    def _save(self, upload: UploadFile, subdir: str, content_prefix: str) -> str:
        """Write an upload under subdir and return its path relative to the root"""
        content_type = upload.content_type or ""
        if not content_type.startswith(content_prefix):
            raise ServiceError(f"Unsupported file type: {content_type or 'unknown'}")

        ext = os.path.splitext(upload.filename or "")[1].lower()
        relative_path = os.path.join(subdir, f"{uuid.uuid4().hex}{ext}")
        target = os.path.join(self.root, relative_path)
        os.makedirs(os.path.dirname(target), exist_ok=True)

        with open(target, "wb") as f:
            shutil.copyfileobj(upload.file, f)

        logger.info(f"Stored upload {upload.filename} -> {relative_path}")
        return relative_path

    def resolve(self, relative_path: str) -> str:
        """Absolute path for a stored file"""
        return os.path.join(self.root, relative_path)

    def exists(self, relative_path: Optional[str]) -> bool:
        return bool(relative_path) and os.path.isfile(self.resolve(relative_path))

    def delete(self, relative_path: Optional[str]) -> None:
        if not relative_path:
            return
        try:
            os.remove(self.resolve(relative_path))
            logger.info(f"Deleted stored file {relative_path}")
        except FileNotFoundError:
            logger.warning(f"Stored file already missing: {relative_path}")

# Singleton instance
storage = FileStorage()
