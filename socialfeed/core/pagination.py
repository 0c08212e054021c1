"""Page/limit/offset convention shared by every listing."""
from typing import Generic, List, TypeVar
from pydantic import BaseModel
from socialfeed.config import settings
from socialfeed.core.exceptions import ValidationError
from socialfeed.core.validation import MAX_ID

T = TypeVar("T")


def check_window(limit: int, offset: int) -> None:
    """Reject a limit/offset pair outside the accepted range."""
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValidationError("Limit must be an integer")
    if isinstance(offset, bool) or not isinstance(offset, int):
        raise ValidationError("Offset must be an integer")
    if limit < 1 or limit > settings.max_page_size:
        raise ValidationError(f"Limit must be between 1 and {settings.max_page_size}")
    if offset < 0:
        raise ValidationError("Offset must not be negative")
    if offset > MAX_ID * settings.max_page_size:
        raise ValidationError("Offset is too large")


class Pagination(BaseModel):
    page: int = 1
    limit: int = 20

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_query(cls, page: int = 1, limit: int = None) -> "Pagination":
        """Build pagination from raw query values, validating the bounds."""
        if limit is None:
            limit = settings.default_page_size
        if page < 1 or page > MAX_ID:
            raise ValidationError(f"Page must be between 1 and {MAX_ID}")
        if limit < 1 or limit > settings.max_page_size:
            raise ValidationError(f"Limit must be between 1 and {settings.max_page_size}")
        return cls(page=page, limit=limit)

    def wrap(self, items: list) -> "Page":
        """Wrap one page of results.

        ``has_more`` is true whenever the page came back full. A table with
        exactly ``limit`` matching rows reports ``has_more=True`` and the next
        page is empty; no counting query is issued to tell the difference.
        """
        return Page(
            items=items,
            page=self.page,
            limit=self.limit,
            has_more=len(items) == self.limit,
        )


class Page(BaseModel, Generic[T]):
    items: List[T]
    page: int
    limit: int
    has_more: bool = False
