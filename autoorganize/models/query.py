"""Query filters and paginated results."""

from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar

from autoorganize.config.settings import DEFAULT_PAGE_SIZE
from autoorganize.models.result import FileSortingStatus, OrganizerType

T = TypeVar("T")


@dataclass
class ResultQuery:
    """
    Filter for organization results.

    Attributes:
        statuses: Keep only these statuses (all when empty).
        type: Keep only this organizer type.
        path_contains: Substring the original path must contain.
        start_index: Index of the first returned record.
        limit: Maximum number of records, None for no limit.
    """

    statuses: List[FileSortingStatus] = field(default_factory=list)
    type: Optional[OrganizerType] = None
    path_contains: Optional[str] = None
    start_index: int = 0
    limit: Optional[int] = DEFAULT_PAGE_SIZE


@dataclass
class SmartMatchQuery:
    """Filter for smart match entries."""

    organizer_type: Optional[OrganizerType] = None
    start_index: int = 0
    limit: Optional[int] = None


@dataclass
class QueryResult(Generic[T]):
    """A page of records and the total count matching the filter."""

    items: List[T] = field(default_factory=list)
    total_record_count: int = 0
