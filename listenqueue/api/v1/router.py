# ============================================================================
# FILE: listenqueue/api/v1/router.py
# ============================================================================
from fastapi import APIRouter
from listenqueue.api.v1.endpoints import auth, playlists, search, users

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(playlists.router, prefix="/playlists", tags=["playlists"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(search.router, prefix="/search", tags=["search"])
