from socialfeed.core.exceptions import (
    SocialFeedError, ValidationError, SelfReferenceError,
    NotFoundError, ForbiddenError, StoreError,
)
from socialfeed.core.pagination import Pagination, Page, check_window

__all__ = [
    "SocialFeedError", "ValidationError", "SelfReferenceError",
    "NotFoundError", "ForbiddenError", "StoreError",
    "Pagination", "Page", "check_window",
]
