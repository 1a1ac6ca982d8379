"""Tests for the organization engine."""

import threading
from unittest.mock import MagicMock

import pytest

from autoorganize.exceptions import ConfigurationError, ContentionError, OrganizationError
from autoorganize.models.media import (
    EpisodeCorrectionRequest,
    MovieCorrectionRequest,
    ParsedTokens,
)
from autoorganize.models.query import ResultQuery
from autoorganize.models.result import (
    FileSortingStatus,
    OrganizationResult,
    OrganizerType,
)
from autoorganize.pipeline import InProgressGuard, OrganizationEngine


@pytest.fixture
def episode_file(watch_dir, parser):
    path = watch_dir / "Show.S01E02.mkv"
    path.write_bytes(b"episode content")
    parser.tokens_by_name[path.name] = ParsedTokens(title="Show", season=1, episode=2, extension=".mkv")
    return path


@pytest.fixture
def unknown_movie(watch_dir, parser):
    path = watch_dir / "Obscure.Film.2011.mkv"
    path.write_bytes(b"movie content")
    parser.tokens_by_name[path.name] = ParsedTokens(title="Obscure Film", year=2011, extension=".mkv")
    return path


class TestConstruction:

    def test_guard_is_shared_with_result_store(self, options, result_store, smart_match_store):
        result_store.guard = None
        engine = OrganizationEngine(options, result_store, smart_match_store)
        try:
            assert isinstance(engine.guard, InProgressGuard)
            assert result_store.guard is engine.guard
        finally:
            engine.close()

    def test_existing_store_guard_is_reused(self, options, result_store, smart_match_store, guard):
        engine = OrganizationEngine(options, result_store, smart_match_store)
        try:
            assert engine.guard is guard
        finally:
            engine.close()


class TestProcessOne:

    def test_saves_result(self, engine, episode_file, resolver, show_target, result_store):
        resolver.targets["Show"] = show_target

        result = engine.process_one(episode_file)

        assert result.status == FileSortingStatus.SUCCESS
        stored = result_store.get_by_original_path(str(episode_file))
        assert stored.status == FileSortingStatus.SUCCESS
        assert stored.is_in_progress is False
        assert len(engine.guard) == 0

    def test_contention_raises_and_saves_nothing(self, engine, episode_file, result_store):
        engine.guard.try_acquire(str(episode_file))

        with pytest.raises(ContentionError, match="currently processed otherwise"):
            engine.process_one(episode_file)

        assert result_store.get_by_original_path(str(episode_file)) is None
        assert str(episode_file) in engine.guard

    def test_concurrent_second_caller_gets_contention(self, engine, episode_file, parser,
                                                      resolver, show_target, result_store):
        resolver.targets["Show"] = show_target
        entered = threading.Event()
        proceed = threading.Event()

        def slow_parser(path):
            entered.set()
            proceed.wait(timeout=5)
            return parser(path)

        engine.collaborators.parse_tokens = slow_parser
        outcome = {}
        worker = threading.Thread(target=lambda: outcome.update(result=engine.process_one(episode_file)))
        worker.start()
        try:
            assert entered.wait(timeout=5)
            with pytest.raises(ContentionError):
                engine.process_one(episode_file)
        finally:
            proceed.set()
            worker.join(timeout=5)

        assert outcome["result"].status == FileSortingStatus.SUCCESS
        assert result_store.query(ResultQuery(limit=None)).total_record_count == 1

    def test_unexpected_error_becomes_failure(self, engine, episode_file, collaborators, result_store):
        collaborators.parse_tokens = MagicMock(side_effect=RuntimeError("parser crashed"))

        result = engine.process_one(episode_file)

        assert result.status == FileSortingStatus.FAILURE
        assert result.status_message == "Unexpected error: parser crashed"
        assert result_store.get(result.id).status == FileSortingStatus.FAILURE
        assert len(engine.guard) == 0

    def test_notifies_library_on_success(self, engine, episode_file, resolver, show_target, collaborators):
        resolver.targets["Show"] = show_target

        result = engine.process_one(episode_file)
        engine.close()

        collaborators.notify_library_changed.assert_called_once_with(result.target_path)

    def test_no_notification_without_success(self, engine, unknown_movie, collaborators):
        engine.process_one(unknown_movie)
        engine.close()

        collaborators.notify_library_changed.assert_not_called()

    def test_notification_error_is_contained(self, engine, episode_file, resolver, show_target, collaborators):
        resolver.targets["Show"] = show_target
        collaborators.notify_library_changed.side_effect = RuntimeError("library offline")

        result = engine.process_one(episode_file)
        engine.close()

        assert result.status == FileSortingStatus.SUCCESS


class TestProcessNewFiles:

    def test_processes_every_candidate(self, engine, episode_file, unknown_movie, resolver, show_target):
        resolver.targets["Show"] = show_target

        results = engine.process_new_files()

        statuses = {r.original_file_name: r.status for r in results}
        assert statuses == {
            "Show.S01E02.mkv": FileSortingStatus.SUCCESS,
            "Obscure.Film.2011.mkv": FileSortingStatus.NEEDS_CORRECTION,
        }

    def test_completed_files_are_skipped(self, engine, options, episode_file, resolver, show_target):
        resolver.targets["Show"] = show_target
        options.tv.copy_original_file = True

        assert len(engine.process_new_files()) == 1
        assert engine.process_new_files() == []
        assert len(resolver.calls) == 1

    def test_unresolved_files_are_retried(self, engine, unknown_movie, resolver):
        engine.process_new_files()
        engine.process_new_files()

        assert len(resolver.calls) == 2

    def test_busy_file_is_skipped(self, engine, episode_file, unknown_movie, result_store):
        engine.guard.try_acquire(str(episode_file))

        results = engine.process_new_files()

        assert [r.original_file_name for r in results] == ["Obscure.Film.2011.mkv"]

    def test_cancelled_scan_processes_nothing(self, engine, episode_file):
        cancel = threading.Event()
        cancel.set()

        assert engine.process_new_files(cancel_event=cancel) == []

    def test_error_on_one_file_does_not_stop_scan(self, engine, episode_file, unknown_movie, result_store):
        real_save = result_store.save

        def flaky_save(result):
            if result.original_file_name == "Obscure.Film.2011.mkv":
                raise OSError("database locked")
            return real_save(result)

        result_store.save = flaky_save

        results = engine.process_new_files()

        assert [r.original_file_name for r in results] == ["Show.S01E02.mkv"]
        assert len(engine.guard) == 0

    def test_dry_run_scan_leaves_file_for_real_scan(self, engine, options, episode_file, resolver,
                                                   show_target, result_store, collaborators, tv_library):
        resolver.targets["Show"] = show_target
        options.tv.dry_run = True

        simulated = engine.process_new_files()

        assert [r.status for r in simulated] == [FileSortingStatus.SUCCESS]
        assert result_store.get_by_original_path(str(episode_file)) is None
        assert episode_file.exists()

        options.tv.dry_run = False
        results = engine.process_new_files()
        engine.close()

        destination = tv_library / "Show (2008)" / "Season 01" / "Show - S01E02.mkv"
        assert [r.target_path for r in results] == [str(destination)]
        assert destination.exists()
        assert not episode_file.exists()
        assert result_store.get_by_original_path(str(episode_file)).status == FileSortingStatus.SUCCESS
        collaborators.notify_library_changed.assert_called_once_with(str(destination))


class TestSubmitCorrection:

    def test_correction_is_learned(self, engine, unknown_movie, smart_match_store, movie_library):
        request = MovieCorrectionRequest(source_path=str(unknown_movie), movie_id="42",
                                         movie_name="Obscure Film", movie_year=2011)

        result = engine.submit_correction(request)

        assert result.status == FileSortingStatus.SUCCESS
        assert result.target_path == str(movie_library / "Obscure Film (2011)" / "Obscure Film (2011).mkv")
        learned = smart_match_store.get("42", OrganizerType.MOVIE)
        assert learned.match_strings == {"obscure film"}
        assert learned.display_name == "Obscure Film"

    def test_correction_not_learned_when_declined(self, engine, unknown_movie, smart_match_store):
        request = MovieCorrectionRequest(source_path=str(unknown_movie), movie_id="42",
                                         movie_name="Obscure Film", remember_correction=False)

        engine.submit_correction(request)

        assert smart_match_store.get("42") is None

    def test_failed_correction_raises_and_learns_nothing(self, engine, watch_dir, parser,
                                                         smart_match_store, result_store):
        missing = watch_dir / "Gone.S01E01.mkv"
        parser.tokens_by_name[missing.name] = ParsedTokens(title="Gone", season=1, episode=1, extension=".mkv")
        request = EpisodeCorrectionRequest(source_path=str(missing), series_id="7", series_name="Gone")

        with pytest.raises(OrganizationError):
            engine.submit_correction(request)

        assert smart_match_store.get("7") is None
        assert result_store.get_by_original_path(str(missing)).status == FileSortingStatus.FAILURE
        assert len(engine.guard) == 0

    def test_dry_run_correction_records_and_learns_nothing(self, engine, options, unknown_movie,
                                                          smart_match_store, result_store, collaborators):
        options.movie.dry_run = True
        request = MovieCorrectionRequest(source_path=str(unknown_movie), movie_id="42",
                                         movie_name="Obscure Film", movie_year=2011)

        result = engine.submit_correction(request)
        engine.close()

        assert result.status == FileSortingStatus.SUCCESS
        assert unknown_movie.exists()
        assert smart_match_store.get("42", OrganizerType.MOVIE) is None
        assert result_store.get_by_original_path(str(unknown_movie)) is None
        collaborators.notify_library_changed.assert_not_called()
        assert len(engine.guard) == 0

    def test_correction_contention(self, engine, unknown_movie):
        engine.guard.try_acquire(str(unknown_movie))
        request = MovieCorrectionRequest(source_path=str(unknown_movie), movie_id="42", movie_name="X")

        with pytest.raises(ContentionError):
            engine.submit_correction(request)


class TestPerformOrganization:

    def test_unknown_result(self, engine):
        with pytest.raises(ConfigurationError):
            engine.perform_organization("missing")

    def test_result_without_target(self, engine, unknown_movie, result_store):
        result = engine.process_one(unknown_movie)

        with pytest.raises(ConfigurationError, match="No target path available."):
            engine.perform_organization(result.id)

    def test_retry_places_file(self, engine, episode_file, resolver, show_target, result_store, tv_library):
        result_store.save(OrganizationResult(
            original_path=str(episode_file),
            type=OrganizerType.EPISODE,
            status=FileSortingStatus.FAILURE,
            status_message="Disk was full",
            target_path=str(tv_library / "Show (2008)" / "Season 01" / "Show - S01E02.mkv"),
        ))
        resolver.targets["Show"] = show_target

        result = engine.perform_organization(result_store.get_by_original_path(str(episode_file)).id)

        assert result.status == FileSortingStatus.SUCCESS
        assert not episode_file.exists()


class TestDeleteOriginal:

    def test_deletes_file_and_record(self, engine, unknown_movie, result_store):
        result = engine.process_one(unknown_movie)

        engine.delete_original(result.id)

        assert not unknown_movie.exists()
        assert result_store.get(result.id) is None
        assert len(engine.guard) == 0

    def test_missing_file_is_not_an_error(self, engine, unknown_movie, result_store):
        result = engine.process_one(unknown_movie)
        unknown_movie.unlink()

        engine.delete_original(result.id)

        assert result_store.get(result.id) is None
        assert len(engine.guard) == 0

    def test_unknown_result(self, engine):
        with pytest.raises(ConfigurationError):
            engine.delete_original("missing")

    def test_busy_path(self, engine, unknown_movie):
        result = engine.process_one(unknown_movie)
        engine.guard.try_acquire(str(unknown_movie))

        with pytest.raises(ContentionError):
            engine.delete_original(result.id)
        assert unknown_movie.exists()


class TestLogMaintenance:

    def test_clear_completed_then_clear_log(self, engine, episode_file, unknown_movie, resolver, show_target):
        resolver.targets["Show"] = show_target
        engine.process_new_files()

        assert engine.clear_completed() == 1
        remaining = engine.get_results(ResultQuery(limit=None))
        assert [r.status for r in remaining.items] == [FileSortingStatus.NEEDS_CORRECTION]

        assert engine.clear_log() == 1
        assert engine.get_results().total_record_count == 0

    def test_smart_match_passthroughs(self, engine, unknown_movie):
        engine.submit_correction(MovieCorrectionRequest(
            source_path=str(unknown_movie), movie_id="42", movie_name="Obscure Film"))

        assert [m.id for m in engine.get_smart_matches().items] == ["42"]
        assert engine.delete_smart_match_entry("42", "Obscure Film") is True
        assert engine.get_smart_matches().total_record_count == 0
