"""Parsed filename tokens, resolved targets and correction requests."""

from dataclasses import dataclass, field
from typing import Optional

from autoorganize.models.result import OrganizerType


@dataclass
class ParsedTokens:
    """
    Tokens extracted from a source filename.

    Every field is best-effort: a missing value is None.
    """

    title: Optional[str] = None
    year: Optional[int] = None
    season: Optional[int] = None
    episode: Optional[int] = None
    ending_episode: Optional[int] = None
    extension: str = ''

    @property
    def is_episode(self) -> bool:
        """True when an episode number was found."""
        return self.episode is not None


@dataclass
class Target:
    """
    A resolved library entity (series or movie).

    Attributes:
        id: Provider identity of the entity.
        name: Display name used for folder and file names.
        year: Release or first air year.
        organizer_type: Kind of entity.
    """

    id: str
    name: str
    year: Optional[int] = None
    organizer_type: OrganizerType = OrganizerType.MOVIE


@dataclass
class EpisodeCorrectionRequest:
    """
    User-supplied resolution of an episode file.

    Season and episode numbers, when given, override the parsed ones.
    """

    source_path: str
    series_id: str
    series_name: str
    series_year: Optional[int] = None
    season_number: Optional[int] = None
    episode_number: Optional[int] = None
    ending_episode_number: Optional[int] = None
    remember_correction: bool = True

    organizer_type: OrganizerType = field(default=OrganizerType.EPISODE, init=False)

    def to_target(self) -> Target:
        return Target(
            id=self.series_id,
            name=self.series_name,
            year=self.series_year,
            organizer_type=OrganizerType.EPISODE,
        )


@dataclass
class MovieCorrectionRequest:
    """User-supplied resolution of a movie file."""

    source_path: str
    movie_id: str
    movie_name: str
    movie_year: Optional[int] = None
    remember_correction: bool = True

    organizer_type: OrganizerType = field(default=OrganizerType.MOVIE, init=False)

    def to_target(self) -> Target:
        return Target(
            id=self.movie_id,
            name=self.movie_name,
            year=self.movie_year,
            organizer_type=OrganizerType.MOVIE,
        )
