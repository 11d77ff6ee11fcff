# ============================================================================
# FILE: app/db/base.py
# ============================================================================
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Import all models so Base.metadata knows every table
def import_models():
    from app.db.models import user, community, post, playlist, song, comment  # noqa: F401
