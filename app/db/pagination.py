# ============================================================================
# FILE: app/db/pagination.py
# ============================================================================
from typing import List, Tuple, Any
from sqlalchemy.orm import Query

def paginate(query: Query, page: int, size: int) -> Tuple[List[Any], int]:
    """Return one page of query results (page is 0-based) and the total count"""
    total = query.order_by(None).count()
    items = query.offset(page * size).limit(size).all()
    return items, total
