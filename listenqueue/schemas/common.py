# ============================================================================
# FILE: listenqueue/schemas/common.py
# ============================================================================
from pydantic import BaseModel
from typing import Generic, List, TypeVar

T = TypeVar("T")

class Page(BaseModel, Generic[T]):
    """Schema for a paginated list response"""
    page: int
    limit: int
    total: int
    data: List[T] = []
