"""Pagination primitives для read-side repository методів."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class PageRequest:
    """Paging, search та sorting параметри.

    ``items_per_page=None`` означає default з settings.
    """

    page_index: int = 0
    items_per_page: Optional[int] = None
    search_term: Optional[str] = None
    sort_field: Optional[str] = None
    sort_order: SortOrder = SortOrder.ASC

    def offset(self, limit: int) -> int:
        return max(self.page_index, 0) * limit


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    data: List[T] = field(default_factory=list)
    count: int = 0
    page_index: int = 0
