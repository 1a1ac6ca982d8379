"""Tests for source file discovery."""

from autoorganize.config.options import AutoOrganizeOptions
from autoorganize.filesystem.discovery import enumerate_sources, is_candidate


def write(path, size=10):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    return path


class TestIsCandidate:

    def test_video_accepted(self, tmp_path):
        options = AutoOrganizeOptions(min_file_size_mb=0)
        assert is_candidate(write(tmp_path / "a.mkv"), options)

    def test_other_extension_rejected(self, tmp_path):
        options = AutoOrganizeOptions(min_file_size_mb=0)
        assert not is_candidate(write(tmp_path / "a.nfo"), options)

    def test_hidden_and_partial_rejected(self, tmp_path):
        options = AutoOrganizeOptions(min_file_size_mb=0)
        assert not is_candidate(write(tmp_path / ".hidden.mkv"), options)
        assert not is_candidate(write(tmp_path / "a.mkv.partial"), options)

    def test_small_file_rejected(self, tmp_path):
        options = AutoOrganizeOptions(min_file_size_mb=1)
        assert not is_candidate(write(tmp_path / "sample.mkv"), options)


class TestEnumerateSources:

    def test_recursive_and_sorted(self, tmp_path):
        watch = tmp_path / "watch"
        write(watch / "b.mkv")
        write(watch / "sub" / "a.avi")
        write(watch / "notes.txt")
        options = AutoOrganizeOptions(watch_locations=[watch], min_file_size_mb=0)

        assert [p.name for p in enumerate_sources(options)] == ["b.mkv", "a.avi"]

    def test_missing_location_skipped(self, tmp_path):
        options = AutoOrganizeOptions(watch_locations=[tmp_path / "missing"], min_file_size_mb=0)
        assert list(enumerate_sources(options)) == []
