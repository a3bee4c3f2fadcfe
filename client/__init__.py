"""Python client for the Green Points API."""

from .api import ApiError, GreenPointsClient
from .query_cache import QueryCache
from .session import SessionDisposedError, SessionState, SessionStore

__all__ = [
    "ApiError",
    "GreenPointsClient",
    "QueryCache",
    "SessionDisposedError",
    "SessionState",
    "SessionStore",
]
