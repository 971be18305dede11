# ============================================================================
# FILE: listenqueue/core/errors.py
# Errors raised by the service layer, converted to JSON in listenqueue.main
# ============================================================================
from typing import Optional


class GenericError(Exception):
    """Error carrying the HTTP status code it should be answered with"""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def __repr__(self) -> str:
        return f"GenericError({self.status_code}, {self.message!r})"


class PaginateError(GenericError):
    """Raised when a paginated query can't be executed"""

    def __init__(self, cause: Optional[Exception] = None):
        super().__init__(500, "failed to paginate")
        self.cause = cause


class TokenError(GenericError):
    """Raised when an auth token is present but can't be accepted"""

    def __init__(self, message: str):
        super().__init__(400, message)
