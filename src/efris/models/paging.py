"""
Paged query responses (T106, T111, T127).
"""

from typing import Any, Optional
from pydantic import BaseModel

from efris.models.envelope import WireModel


class PageInfo(WireModel):
    page_no: Optional[int] = None
    page_size: Optional[int] = None
    total_size: Optional[int] = None
    page_count: Optional[int] = None


class PagedResult(BaseModel):
    page: PageInfo = PageInfo()
    records: list[dict[str, Any]] = []
