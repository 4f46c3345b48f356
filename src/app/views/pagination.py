"""Offset pagination applied after filtering"""

from typing import Any, List, Sequence, Tuple

from pydantic import BaseModel, Field


class PageQuery(BaseModel):
    """Page window shared by every list query"""

    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


def paginate(items: Sequence[Any], limit: int, offset: int = 0) -> Tuple[List[Any], int]:
    """
    Slice a filtered collection

    Returns:
        (page, total) where total is the size of the unsliced collection
    """
    items = list(items)
    offset = max(offset, 0)
    if limit <= 0:
        return [], len(items)
    return items[offset:offset + limit], len(items)
