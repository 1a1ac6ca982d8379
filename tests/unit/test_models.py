"""Tests for data models."""

import pytest

from autoorganize.config.options import AutoOrganizeOptions
from autoorganize.exceptions import ConfigurationError, ContentionError
from autoorganize.models.media import EpisodeCorrectionRequest, MovieCorrectionRequest, ParsedTokens
from autoorganize.models.result import FileSortingStatus, OrganizationResult, OrganizerType
from autoorganize.utils.hash import result_id_for_path


class TestOrganizationResult:

    def test_id_derived_from_path(self):
        result = OrganizationResult(original_path="/d/a.mkv", type=OrganizerType.MOVIE)
        assert result.id == result_id_for_path("/d/a.mkv")
        assert result.original_file_name == "a.mkv"

    def test_defaults(self):
        result = OrganizationResult(original_path="/d/a.mkv", type=OrganizerType.MOVIE)
        assert result.status == FileSortingStatus.FAILURE
        assert result.is_in_progress is False
        assert result.date > 0

    @pytest.mark.parametrize("status, completed", [
        (FileSortingStatus.SUCCESS, True),
        (FileSortingStatus.SKIPPED_EXISTING, True),
        (FileSortingStatus.FAILURE, False),
        (FileSortingStatus.NEEDS_CORRECTION, False),
    ])
    def test_completed_statuses(self, status, completed):
        assert status.is_completed is completed


class TestCorrectionRequests:

    def test_episode_request_target(self):
        request = EpisodeCorrectionRequest(source_path="/d/x.mkv", series_id="1", series_name="Show",
                                           series_year=2008)
        target = request.to_target()
        assert request.organizer_type == OrganizerType.EPISODE
        assert (target.id, target.name, target.year) == ("1", "Show", 2008)
        assert request.remember_correction is True

    def test_movie_request_target(self):
        request = MovieCorrectionRequest(source_path="/d/x.mkv", movie_id="603", movie_name="The Matrix")
        assert request.to_target().organizer_type == OrganizerType.MOVIE

    def test_tokens_episode_flag(self):
        assert ParsedTokens(episode=1).is_episode
        assert not ParsedTokens(title="Film").is_episode


class TestOptionsAndErrors:

    def test_options_for_type(self):
        options = AutoOrganizeOptions()
        assert options.options_for(OrganizerType.EPISODE) is options.tv
        assert options.options_for(OrganizerType.MOVIE) is options.movie

    def test_options_for_unknown_type(self):
        with pytest.raises(ConfigurationError):
            AutoOrganizeOptions().options_for("Music")

    def test_contention_message(self):
        error = ContentionError("/d/a.mkv")
        assert error.path == "/d/a.mkv"
        assert str(error) == "Path is currently processed otherwise. Please try again later."
