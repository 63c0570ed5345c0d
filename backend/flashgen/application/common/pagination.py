"""
Pagination types for list queries.

Example:
    result = use_case.list_flashcards(user_id, Pagination.clamped(page, limit))
    result.items, result.total
"""

from dataclasses import dataclass
from typing import Generic, Self, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 50


@dataclass(frozen=True)
class Pagination:
    """
    Pagination parameters for list queries.

    Attributes:
        page: Current page number (1-indexed)
        page_size: Number of items per page
    """

    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("Page must be at least 1")
        if self.page_size < 1:
            raise ValueError("Page size must be at least 1")
        if self.page_size > MAX_PAGE_SIZE:
            raise ValueError(f"Page size cannot exceed {MAX_PAGE_SIZE}")

    @classmethod
    def clamped(cls, page: int, page_size: int) -> Self:
        """Build pagination from raw query values, pulling them into the allowed range."""
        return cls(page=max(page, 1), page_size=min(max(page_size, 1), MAX_PAGE_SIZE))

    @property
    def offset(self) -> int:
        """Calculate the offset for database queries."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        """Return the limit for database queries."""
        return self.page_size


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    """
    Paginated result containing items and metadata.

    Attributes:
        items: List of items for the current page
        total: Total number of items across all pages
        pagination: The pagination parameters used
    """

    items: list[T]
    total: int
    pagination: Pagination

    @property
    def page(self) -> int:
        return self.pagination.page

    @property
    def page_size(self) -> int:
        return self.pagination.page_size

    @property
    def total_pages(self) -> int:
        if self.total == 0:
            return 0
        return (self.total + self.pagination.page_size - 1) // self.pagination.page_size
