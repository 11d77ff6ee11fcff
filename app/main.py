# ============================================================================
# FILE: app/main.py
# ============================================================================
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.api.v1.router import api_router
from app.core.exceptions import ServiceError
from app.core.logging import setup_logging
from app.config import settings
from app.db.base import Base, import_models
from app.db.session import engine
import logging

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

import_models()

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup"""
    logger.info(f"Starting {settings.APP_NAME}")
    Base.metadata.create_all(bind=engine)
    yield
    logger.info(f"Shutting down {settings.APP_NAME}")

# Create FastAPI app instance
app = FastAPI(
    title=settings.APP_NAME,
    description="Music sharing social platform: songs, playlists, communities, posts and votes",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """Turn domain failures into {"detail": message} responses"""
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)

@app.get("/health")
async def health_check():
    return {"status": "healthy"}

@app.get("/")
async def root():
    return {"message": settings.APP_NAME, "version": "1.0.0", "docs": "/docs"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
