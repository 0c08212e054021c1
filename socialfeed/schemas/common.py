"""Outcome types shared by the stores."""
from typing import Generic, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class Updated(BaseModel, Generic[T]):
    """An ownership-gated mutation matched a row."""
    row: T


class NotFoundOrUnauthorized(BaseModel):
    """An ownership-gated mutation matched nothing.

    Missing rows, deleted rows and rows owned by someone else all land here
    so callers cannot probe for content they may not touch.
    """
