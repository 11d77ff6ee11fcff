# ============================================================================
# FILE: app/schemas/common.py
# ============================================================================
from pydantic import BaseModel
from typing import Generic, List, TypeVar
import math

T = TypeVar("T")

class MessageResponse(BaseModel):
    """Plain confirmation message"""
    message: str

class Page(BaseModel, Generic[T]):
    """One page of a paginated listing (page is 0-based)"""
    items: List[T]
    total: int
    page: int
    size: int
    pages: int

    @classmethod
    def build(cls, items: List[T], total: int, page: int, size: int) -> "Page[T]":
        pages = math.ceil(total / size) if size else 0
        return cls(items=items, total=total, page=page, size=size, pages=pages)
