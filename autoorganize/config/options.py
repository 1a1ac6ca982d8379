"""Organization options for TV and movie libraries."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from autoorganize.config.settings import (
    DEFAULT_MIN_FILE_SIZE_MB,
    DEFAULT_MOVIE_LIBRARY_DIR,
    DEFAULT_TV_LIBRARY_DIR,
    EXT_VIDEO,
)
from autoorganize.models.result import OrganizerType
from autoorganize.exceptions import ConfigurationError


@dataclass
class OrganizeOptions:
    """
    Options applied by one organizer when placing a file.

    Attributes:
        library_dir: Root folder of the library the file is placed into.
        skip_duplicates: If True, an identical file at the destination ends
            the attempt as SkippedExisting instead of being replaced.
        delete_duplicate_source: Remove the source when it duplicates a
            library file.
        overwrite_existing: Replace a destination file whose content differs.
        copy_original_file: Copy instead of move (the source is kept).
        dry_run: Decide the placement without touching any file.
    """

    library_dir: Path
    skip_duplicates: bool = True
    delete_duplicate_source: bool = False
    overwrite_existing: bool = False
    copy_original_file: bool = False
    dry_run: bool = False


@dataclass
class AutoOrganizeOptions:
    """
    Complete runtime configuration of the organization engine.

    Attributes:
        watch_locations: Folders scanned for new files.
        min_file_size_mb: Files below this size are ignored by scans.
        extensions: Accepted file extensions (lowercase, with dot).
        tv: Options used by the episode organizer.
        movie: Options used by the movie organizer.
    """

    watch_locations: List[Path] = field(default_factory=list)
    min_file_size_mb: int = DEFAULT_MIN_FILE_SIZE_MB
    extensions: frozenset = field(default_factory=lambda: frozenset(EXT_VIDEO))
    tv: OrganizeOptions = field(
        default_factory=lambda: OrganizeOptions(library_dir=DEFAULT_TV_LIBRARY_DIR)
    )
    movie: OrganizeOptions = field(
        default_factory=lambda: OrganizeOptions(library_dir=DEFAULT_MOVIE_LIBRARY_DIR)
    )

    def options_for(self, organizer_type: OrganizerType) -> OrganizeOptions:
        """
        Return the options of the organizer handling ``organizer_type``.

        Raises:
            ConfigurationError: If the type has no organizer.
        """
        if organizer_type == OrganizerType.EPISODE:
            return self.tv
        if organizer_type == OrganizerType.MOVIE:
            return self.movie
        raise ConfigurationError(f"No organizer exists for the type {organizer_type}")
