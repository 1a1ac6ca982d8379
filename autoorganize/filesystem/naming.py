"""Destination path templates for episodes and movies."""

from pathlib import Path
from typing import Optional

from autoorganize.classification.text_processing import normalize
from autoorganize.config.options import OrganizeOptions
from autoorganize.config.settings import (
    EPISODE_NAME_PATTERN,
    MOVIE_FOLDER_PATTERN,
    MULTI_EPISODE_NAME_PATTERN,
    SEASON_FOLDER_PATTERN,
    SPECIALS_FOLDER_NAME,
)
from autoorganize.models.media import ParsedTokens, Target
from autoorganize.models.result import OrganizerType


def format_title_with_year(title: str, year: Optional[int]) -> str:
    """
    Format a series or movie folder name.

    Args:
        title: Display name.
        year: Release year, omitted when unknown.

    Returns:
        "Title (Year)" or "Title", safe for the filesystem.
    """
    if year:
        return normalize(MOVIE_FOLDER_PATTERN.format(title=title, year=year))
    return normalize(title)


def format_season_folder(season: int) -> str:
    """
    Format season number as folder name.

    Args:
        season: Season number.

    Returns:
        Formatted string like "Season 01", or the specials folder for season 0.
    """
    if season == 0:
        return SPECIALS_FOLDER_NAME
    return SEASON_FOLDER_PATTERN.format(season=season)


def build_episode_filename(
    series_title: str,
    season: int,
    episode: int,
    extension: str,
    ending_episode: Optional[int] = None
) -> str:
    """
    Build the episode filename.

    Args:
        series_title: Title of the series.
        season: Season number.
        episode: Episode number.
        extension: File extension including dot.
        ending_episode: Last episode of a multi-episode file.

    Returns:
        Formatted filename like "Show - S01E02.mkv".
    """
    if ending_episode and ending_episode > episode:
        name = MULTI_EPISODE_NAME_PATTERN.format(
            series=series_title, season=season, episode=episode, ending_episode=ending_episode
        )
    else:
        name = EPISODE_NAME_PATTERN.format(series=series_title, season=season, episode=episode)
    return f"{normalize(name)}{extension}"


def build_episode_path(
    target: Target,
    season: int,
    episode: int,
    extension: str,
    library_dir: Path,
    ending_episode: Optional[int] = None
) -> Path:
    """Build ``library/Show (Year)/Season 01/Show - S01E02.ext``."""
    series_folder = format_title_with_year(target.name, target.year)
    return (
        library_dir
        / series_folder
        / format_season_folder(season)
        / build_episode_filename(normalize(target.name), season, episode, extension, ending_episode)
    )


def build_movie_path(target: Target, extension: str, library_dir: Path) -> Path:
    """Build ``library/Title (Year)/Title (Year).ext``."""
    folder = format_title_with_year(target.name, target.year)
    return library_dir / folder / f"{folder}{extension}"


def build_destination(target: Target, tokens: ParsedTokens, options: OrganizeOptions) -> Path:
    """
    Compute the canonical library path of a file.

    Args:
        target: Resolved series or movie.
        tokens: Parsed filename tokens (season/episode numbers, extension).
        options: Organizer options holding the library folder.

    Returns:
        Destination path of the file.

    Raises:
        ValueError: If an episode target has no season or episode number.
    """
    if target.organizer_type == OrganizerType.EPISODE:
        if tokens.season is None or tokens.episode is None:
            raise ValueError("Season and episode numbers are required to place an episode")
        return build_episode_path(
            target, tokens.season, tokens.episode, tokens.extension,
            options.library_dir, tokens.ending_episode,
        )
    return build_movie_path(target, tokens.extension, options.library_dir)
