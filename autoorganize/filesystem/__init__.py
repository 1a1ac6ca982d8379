"""Filesystem operations for file organization."""

from autoorganize.filesystem.discovery import (
    enumerate_sources,
    is_candidate,
)
from autoorganize.filesystem.file_ops import FileOps
from autoorganize.filesystem.naming import (
    build_destination,
    build_episode_filename,
    build_episode_path,
    build_movie_path,
    format_season_folder,
    format_title_with_year,
)

__all__ = [
    "enumerate_sources",
    "is_candidate",
    "FileOps",
    "build_destination",
    "build_episode_filename",
    "build_episode_path",
    "build_movie_path",
    "format_season_folder",
    "format_title_with_year",
]
