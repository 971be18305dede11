# ============================================================================
# FILE: listenqueue/api/v1/endpoints/search.py
# Media source search endpoints
# ============================================================================
from fastapi import APIRouter, Depends, Query
from typing import List
from listenqueue.api.dependencies import require_current_user
from listenqueue.schemas.media import SearchResponse, SearchResult
from listenqueue.services.search_service import search_service
from listenqueue.db.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("", response_model=SearchResponse)
async def search_all(
    query: str = Query(..., min_length=1, description="Search query"),
    current_user: User = Depends(require_current_user)
):
    """
    Search every media source at once

    **Caching**: Results are cached in Redis per source and query
    """
    logger.info(f"Searching all sources for: {query}")
    return search_service.search(query)

@router.get("/{source}", response_model=List[SearchResult])
async def search_source(
    source: str,
    query: str = Query(..., min_length=1, description="Search query"),
    current_user: User = Depends(require_current_user)
):
    """
    Search a single media source (youtube, soundcloud)
    """
    logger.info(f"Searching {source} for: {query}")
    return search_service.search_source(source, query)
