"""Organization result data model."""

import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from autoorganize.utils.hash import result_id_for_path


class OrganizerType(str, Enum):
    """Kind of media an organizer handles."""

    EPISODE = "Episode"
    MOVIE = "Movie"


class FileSortingStatus(str, Enum):
    """Outcome of an organization attempt."""

    SUCCESS = "Success"
    FAILURE = "Failure"
    SKIPPED_EXISTING = "SkippedExisting"
    NEEDS_CORRECTION = "NeedsCorrection"

    @property
    def is_completed(self) -> bool:
        """True for outcomes removed by a clear-completed request."""
        return self in (FileSortingStatus.SUCCESS, FileSortingStatus.SKIPPED_EXISTING)


@dataclass
class OrganizationResult:
    """
    Audit record of one organization attempt for a source path.

    The ``id`` is derived from ``original_path`` so that every attempt for
    the same path overwrites the same record. ``is_in_progress`` is never
    persisted: stores fill it in from the in-progress guard when reading.
    """

    original_path: str
    type: OrganizerType
    status: FileSortingStatus = FileSortingStatus.FAILURE
    status_message: str = ''
    target_path: Optional[str] = None
    id: str = ''

    # Parse results, kept on failure to help a manual correction
    extracted_name: Optional[str] = None
    extracted_year: Optional[int] = None
    extracted_season: Optional[int] = None
    extracted_episode: Optional[int] = None
    extracted_ending_episode: Optional[int] = None

    file_size: int = 0
    date: float = field(default_factory=time.time)
    duplicate_of: Optional[str] = None
    is_in_progress: bool = False

    def __post_init__(self) -> None:
        self.original_path = str(self.original_path)
        if not self.id and self.original_path:
            self.id = result_id_for_path(self.original_path)

    @property
    def original_file_name(self) -> str:
        """Basename of the source file."""
        return Path(self.original_path).name

    def is_success(self) -> bool:
        """Check if the attempt placed the file."""
        return self.status == FileSortingStatus.SUCCESS
