"""Learned filename-to-target corrections."""

from dataclasses import dataclass, field
from typing import Optional, Set

from autoorganize.models.result import OrganizerType


@dataclass
class SmartMatch:
    """
    A learned mapping from filename name tokens to a library target.

    Attributes:
        id: Provider identity of the target series or movie.
        organizer_type: Organizer the target belongs to.
        display_name: Target name used when building destinations.
        year: Target year, if known.
        match_strings: Normalized name tokens resolving to this target.
    """

    id: str
    organizer_type: OrganizerType
    display_name: str = ''
    year: Optional[int] = None
    match_strings: Set[str] = field(default_factory=set)
