# ============================================================================
# FILE: listenqueue/main.py
# ============================================================================
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from listenqueue.api.v1.router import api_router
from listenqueue.core.errors import GenericError
from listenqueue.core.logging import setup_logging
from listenqueue.config import settings
from listenqueue.db import models  # noqa: F401  registers the tables
from listenqueue.db.base import Base
from listenqueue.db.session import engine
import logging

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

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
    description="Playlists, media and moderation for a collaborative listening queue",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(GenericError)
async def generic_error_handler(request: Request, exc: GenericError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.debug(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "internal server error"})

# Include API v1 router
app.include_router(api_router, prefix="/api/v1")

@app.get("/health")
async def health_check():
    return {"status": "healthy"}

@app.get("/")
async def root():
    return {"message": settings.APP_NAME, "version": "1.0.0", "docs": "/docs"}
