from .api_client import FlashgenApiError, FlashgenClient
from .review_session import ReviewSession

__all__ = [
    "FlashgenApiError",
    "FlashgenClient",
    "ReviewSession",
]
