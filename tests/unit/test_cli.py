"""Tests for CLI parsing and configuration assembly."""

from pathlib import Path

import pytest

from autoorganize.api.resolver import TmdbResolver
from autoorganize.config.cli import args_to_cli_args, parse_arguments
from autoorganize.config.manager import ConfigurationManager
from autoorganize.config.settings import DEFAULT_WATCH_DIR
from autoorganize.pipeline.collaborators import no_provider


class TestParseArguments:

    def test_defaults(self):
        cli_args = args_to_cli_args(parse_arguments(["scan"]))
        assert cli_args.command == "scan"
        assert cli_args.watch_dirs == [DEFAULT_WATCH_DIR]
        assert cli_args.skip_duplicates is True
        assert cli_args.dry_run is False

    def test_global_options(self):
        cli_args = args_to_cli_args(parse_arguments([
            "-w", "/a", "-w", "/b", "--copy", "--overwrite", "--no-skip-duplicates",
            "--delete-duplicates", "--dry-run", "--min-size", "10", "scan",
        ]))
        assert cli_args.watch_dirs == [Path("/a"), Path("/b")]
        assert cli_args.copy and cli_args.overwrite and cli_args.dry_run
        assert cli_args.skip_duplicates is False
        assert cli_args.delete_duplicates is True
        assert cli_args.min_size_mb == 10

    def test_correct_episode_arguments(self):
        namespace = parse_arguments(["correct-episode", "/d/x.mkv", "1396", "Show",
                                     "--season", "2", "--episode", "3", "--no-remember"])
        assert namespace.series_name == "Show"
        assert namespace.season == 2
        assert namespace.no_remember is True

    def test_command_required(self):
        with pytest.raises(SystemExit):
            parse_arguments([])

    def test_invalid_status_rejected(self):
        with pytest.raises(SystemExit):
            parse_arguments(["results", "--status", "Done"])


class TestConfigurationManager:

    def test_cli_args_before_parse(self):
        with pytest.raises(RuntimeError):
            _ = ConfigurationManager().cli_args

    def test_build_options(self, tmp_path):
        manager = ConfigurationManager()
        manager.parse_args(["-w", str(tmp_path), "--tv-library", "/tv", "--copy", "--dry-run", "scan"])

        options = manager.build_options()

        assert options.watch_locations == [tmp_path]
        assert options.tv.library_dir == Path("/tv")
        assert options.tv.copy_original_file is True
        assert options.movie.dry_run is True

    def test_validate_watch_directories(self, tmp_path):
        manager = ConfigurationManager()
        manager.parse_args(["-w", str(tmp_path / "missing"), "scan"])

        validation = manager.validate_watch_directories()

        assert validation.valid is False
        assert "missing" in validation.error_message

    def test_load_environment_reads_env_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TMDB_API_KEY", "placeholder")
        monkeypatch.delenv("TMDB_API_KEY")
        env_file = tmp_path / ".env"
        env_file.write_text("TMDB_API_KEY=secret\n")

        assert ConfigurationManager(env_path=env_file).load_environment() == "secret"

    @pytest.mark.parametrize("api_key, provider_type", [(None, type(no_provider)), ("key", TmdbResolver)])
    def test_build_engine_wires_provider(self, tmp_path, api_key, provider_type):
        manager = ConfigurationManager()
        manager.parse_args(["--db", str(tmp_path / "cli.db"), "scan"])

        engine = manager.build_engine(api_key)
        try:
            assert isinstance(engine.collaborators.resolve_target, provider_type)
            assert engine.result_store.guard is engine.guard
        finally:
            engine.close()
            engine.result_store.close()
            engine.smart_match_store.close()
