# ============================================================================
# FILE: app/core/exceptions.py
# ============================================================================
from typing import Optional


class ServiceError(Exception):
    """
    Domain failure raised by the service layer.
    Carries a human-readable message and the HTTP status it maps to.
    """
    status_code: int = 400

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(ServiceError):
    """Referenced entity does not exist"""
    status_code = 404


class ConflictError(ServiceError):
    """Uniqueness or state conflict (duplicate name, already a member...)"""
    status_code = 409
