# ============================================================================
# FILE: listenqueue/core/pagination.py
# ============================================================================
from typing import Any, Dict, List, Optional, Tuple


def clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(value, upper))


def page_params(
    page: Optional[int],
    limit: Optional[int],
    default_limit: int,
    max_limit: int,
) -> Tuple[int, int]:
    """
    Normalize page/limit query values
    Missing values fall back to page 0 and `default_limit`; out of range
    values are clamped to page >= 0 and 1 <= limit <= `max_limit`
    """
    _page = 0 if page is None else max(page, 0)
    _limit = default_limit if limit is None else clamp(limit, 1, max_limit)
    return _page, _limit


def paginate(page: int, limit: int, items: List[Any], total: int) -> Dict[str, Any]:
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "data": items,
    }
