"""Organizer for movie files."""

from pathlib import Path
from typing import Optional

from autoorganize.config.options import OrganizeOptions
from autoorganize.models.media import MovieCorrectionRequest
from autoorganize.models.result import (
    FileSortingStatus,
    OrganizationResult,
    OrganizerType,
)
from autoorganize.pipeline.collaborators import Collaborators
from autoorganize.pipeline.placement import mark, new_result, place, resolve_target
from autoorganize.storage.smart_match_store import SmartMatchStore


class MovieOrganizer:
    """Decide where a movie file belongs and place it."""

    organizer_type = OrganizerType.MOVIE

    def __init__(self, smart_matches: SmartMatchStore, collaborators: Collaborators) -> None:
        self.smart_matches = smart_matches
        self.collaborators = collaborators

    def organize(
        self,
        source_path: str,
        options: OrganizeOptions,
        correction: Optional[MovieCorrectionRequest] = None
    ) -> OrganizationResult:
        """
        Organize one movie file.

        Args:
            source_path: Path of the file to organize.
            options: Movie organizer options.
            correction: Explicit movie chosen by the user.

        Returns:
            The result of the attempt.
        """
        tokens = self.collaborators.parse_tokens(Path(source_path))
        result = new_result(str(source_path), self.organizer_type, tokens)

        if correction is not None:
            target = correction.to_target()
        elif not tokens.title:
            return mark(result, FileSortingStatus.FAILURE,
                        f"Unable to determine movie name from {result.original_file_name}")
        else:
            target = resolve_target(tokens, self.organizer_type, self.smart_matches, self.collaborators)

        if target is None:
            return mark(result, FileSortingStatus.NEEDS_CORRECTION,
                        f"Unable to find movie: {tokens.title}")

        return place(result, target, tokens, options, self.collaborators)
