"""Organizer for TV episode files."""

from pathlib import Path
from typing import Optional

from autoorganize.config.options import OrganizeOptions
from autoorganize.models.media import EpisodeCorrectionRequest
from autoorganize.models.result import (
    FileSortingStatus,
    OrganizationResult,
    OrganizerType,
)
from autoorganize.pipeline.collaborators import Collaborators
from autoorganize.pipeline.placement import mark, new_result, place, resolve_target
from autoorganize.storage.smart_match_store import SmartMatchStore


class EpisodeOrganizer:
    """
    Decide where an episode file belongs and place it.

    Reads learned corrections but never writes them; the engine records
    corrections once they succeed.
    """

    organizer_type = OrganizerType.EPISODE

    def __init__(self, smart_matches: SmartMatchStore, collaborators: Collaborators) -> None:
        self.smart_matches = smart_matches
        self.collaborators = collaborators

    def organize(
        self,
        source_path: str,
        options: OrganizeOptions,
        correction: Optional[EpisodeCorrectionRequest] = None
    ) -> OrganizationResult:
        """
        Organize one episode file.

        Args:
            source_path: Path of the file to organize.
            options: TV organizer options.
            correction: Explicit series (and optionally numbering) chosen by
                the user; bypasses smart matches and the provider.

        Returns:
            The result of the attempt.
        """
        tokens = self.collaborators.parse_tokens(Path(source_path))
        if correction is not None:
            if correction.season_number is not None:
                tokens.season = correction.season_number
            if correction.episode_number is not None:
                tokens.episode = correction.episode_number
            if correction.ending_episode_number is not None:
                tokens.ending_episode = correction.ending_episode_number

        result = new_result(str(source_path), self.organizer_type, tokens)
        name = result.original_file_name

        if not tokens.title and correction is None:
            return mark(result, FileSortingStatus.FAILURE,
                        f"Unable to determine series name from {name}")
        if tokens.season is None:
            return mark(result, FileSortingStatus.FAILURE,
                        f"Unable to determine season number from {name}")
        if tokens.episode is None:
            return mark(result, FileSortingStatus.FAILURE,
                        f"Unable to determine episode number from {name}")

        if correction is not None:
            target = correction.to_target()
        else:
            target = resolve_target(tokens, self.organizer_type, self.smart_matches, self.collaborators)

        if target is None:
            return mark(result, FileSortingStatus.NEEDS_CORRECTION,
                        f"Unable to find series in library: {tokens.title}")

        return place(result, target, tokens, options, self.collaborators)
