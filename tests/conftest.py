"""Pytest configuration and fixtures."""

import dataclasses
from pathlib import Path
from typing import Dict, Optional
from unittest.mock import MagicMock

import pytest

from autoorganize.config.options import AutoOrganizeOptions, OrganizeOptions
from autoorganize.filesystem.file_ops import FileOps
from autoorganize.models.media import ParsedTokens, Target
from autoorganize.models.result import OrganizerType
from autoorganize.pipeline import Collaborators, InProgressGuard, OrganizationEngine
from autoorganize.storage import ResultStore, SmartMatchStore


class FakeParser:
    """Filename parser returning canned tokens per filename."""

    def __init__(self, tokens_by_name: Optional[Dict[str, ParsedTokens]] = None):
        self.tokens_by_name = dict(tokens_by_name or {})

    def __call__(self, path: Path) -> ParsedTokens:
        path = Path(path)
        tokens = self.tokens_by_name.get(path.name)
        if tokens is None:
            return ParsedTokens(extension=path.suffix)
        return dataclasses.replace(tokens)


class FakeResolver:
    """Provider lookup returning canned targets per title and recording calls."""

    def __init__(self, targets: Optional[Dict[str, Target]] = None):
        self.targets = dict(targets or {})
        self.calls = []

    def __call__(self, tokens: ParsedTokens, organizer_type: OrganizerType) -> Optional[Target]:
        self.calls.append((tokens.title, organizer_type))
        return self.targets.get(tokens.title)


@pytest.fixture
def sample_video_names():
    """Sample video filenames for testing."""
    return [
        "The.Matrix.1999.MULTi.1080p.BluRay.x264-GROUP.mkv",
        "Breaking.Bad.S01E01.720p.WEB-DL.x265.mkv",
        "Inception.2010.FRENCH.BDRip.x264.mkv",
    ]


@pytest.fixture
def watch_dir(tmp_path):
    directory = tmp_path / "downloads"
    directory.mkdir()
    return directory


@pytest.fixture
def tv_library(tmp_path):
    return tmp_path / "library" / "TV"


@pytest.fixture
def movie_library(tmp_path):
    return tmp_path / "library" / "Movies"


@pytest.fixture
def options(watch_dir, tv_library, movie_library):
    """Engine options over temporary folders, accepting files of any size."""
    return AutoOrganizeOptions(
        watch_locations=[watch_dir],
        min_file_size_mb=0,
        tv=OrganizeOptions(library_dir=tv_library),
        movie=OrganizeOptions(library_dir=movie_library),
    )


@pytest.fixture
def guard():
    return InProgressGuard()


@pytest.fixture
def result_store(tmp_path, guard):
    store = ResultStore(tmp_path / "test.db", guard=guard)
    yield store
    store.close()


@pytest.fixture
def smart_match_store(tmp_path):
    store = SmartMatchStore(tmp_path / "test.db")
    yield store
    store.close()


@pytest.fixture
def parser():
    return FakeParser()


@pytest.fixture
def resolver():
    return FakeResolver()


@pytest.fixture
def collaborators(parser, resolver):
    """Collaborators with canned parsing and provider, real file operations."""
    return Collaborators(
        parse_tokens=parser,
        resolve_target=resolver,
        file_ops=FileOps(),
        notify_library_changed=MagicMock(),
    )


@pytest.fixture
def engine(options, result_store, smart_match_store, guard, collaborators):
    organization_engine = OrganizationEngine(
        options, result_store, smart_match_store, guard=guard, collaborators=collaborators
    )
    yield organization_engine
    organization_engine.close()


@pytest.fixture
def show_target():
    return Target(id="1396", name="Show", year=2008, organizer_type=OrganizerType.EPISODE)


@pytest.fixture
def movie_target():
    return Target(id="603", name="The Matrix", year=1999, organizer_type=OrganizerType.MOVIE)


@pytest.fixture
def mock_tmdb_response():
    """Mock TMDB API response."""
    return {
        "total_results": 1,
        "results": [{
            "id": 603,
            "title": "The Matrix",
            "original_title": "The Matrix",
            "release_date": "1999-03-30",
        }]
    }


@pytest.fixture
def mock_tmdb_series_response():
    """Mock TMDB API response for TV series."""
    return {
        "total_results": 1,
        "results": [{
            "id": 1396,
            "name": "Breaking Bad",
            "original_name": "Breaking Bad",
            "first_air_date": "2008-01-20",
        }]
    }
