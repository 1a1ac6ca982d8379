"""Filename token extraction and media type detection."""

from pathlib import Path
from typing import Any, Optional, Union

import guessit
from loguru import logger

from autoorganize.models.media import ParsedTokens
from autoorganize.models.result import OrganizerType


def _first_int(value: Any) -> Optional[int]:
    """Return the first integer of a guessit value (which may be a list)."""
    if isinstance(value, list):
        value = value[0] if value else None
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _last_int(value: Any) -> Optional[int]:
    if isinstance(value, list) and len(value) > 1:
        return _first_int(value[-1])
    return None


def parse_tokens(path: Union[str, Path]) -> ParsedTokens:
    """
    Extract title, year and season/episode tokens from a filename using guessit.

    Args:
        path: Source file path; only the filename is parsed.

    Returns:
        ParsedTokens with every field guessit could detect.
    """
    path = Path(path)
    infos = guessit.guessit(path.name)

    title = infos.get('title')
    if isinstance(title, list):
        title = ' '.join(title)
    title = title.strip(' -') if title else None

    episode_value = infos.get('episode')
    tokens = ParsedTokens(
        title=title or None,
        year=_first_int(infos.get('year')),
        season=_first_int(infos.get('season')),
        episode=_first_int(episode_value),
        ending_episode=_last_int(episode_value),
        extension=path.suffix.lower(),
    )

    # guessit leaves season empty for "Show - 102" style numbering
    if tokens.episode is not None and tokens.season is None and infos.get('type') == 'episode':
        tokens.season = 1

    if not tokens.title:
        logger.warning(f'No title detected for {path.name}')

    return tokens


def detect_organizer_type(tokens: ParsedTokens) -> OrganizerType:
    """
    Pick the organizer for a file from its parsed tokens.

    Args:
        tokens: Parsed filename tokens.

    Returns:
        EPISODE when an episode number was found, MOVIE otherwise.
    """
    return OrganizerType.EPISODE if tokens.is_episode else OrganizerType.MOVIE
