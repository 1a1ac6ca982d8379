"""File organization pipeline."""

from autoorganize.pipeline.guard import InProgressGuard
from autoorganize.pipeline.collaborators import Collaborators
from autoorganize.pipeline.episode_organizer import EpisodeOrganizer
from autoorganize.pipeline.movie_organizer import MovieOrganizer
from autoorganize.pipeline.engine import OrganizationEngine

__all__ = [
    "InProgressGuard",
    "Collaborators",
    "EpisodeOrganizer",
    "MovieOrganizer",
    "OrganizationEngine",
]
