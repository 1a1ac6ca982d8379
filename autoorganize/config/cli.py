"""Command-line interface argument parsing."""

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from autoorganize.config.settings import (
    DATABASE_FILENAME,
    DEFAULT_MIN_FILE_SIZE_MB,
    DEFAULT_MOVIE_LIBRARY_DIR,
    DEFAULT_PAGE_SIZE,
    DEFAULT_TV_LIBRARY_DIR,
    DEFAULT_WATCH_DIR,
)

STATUS_CHOICES = ["Success", "Failure", "SkippedExisting", "NeedsCorrection"]
TYPE_CHOICES = ["Episode", "Movie"]


@dataclass
class CLIArgs:
    """
    Parsed global command-line arguments.

    Attributes:
        command: Sub-command to run.
        database: SQLite database holding results and smart matches.
        watch_dirs: Folders scanned for new files.
        tv_library: Root of the TV library.
        movie_library: Root of the movie library.
        min_size_mb: Minimum size of scanned files.
        copy: Copy files instead of moving them.
        overwrite: Replace different files already in the library.
        skip_duplicates: Skip files identical to a library file.
        delete_duplicates: Delete sources identical to a library file.
        dry_run: Decide placements without touching files.
        debug: Enable debug logging.
    """

    command: str = ""
    database: Path = Path(DATABASE_FILENAME)
    watch_dirs: List[Path] = field(default_factory=list)
    tv_library: Path = DEFAULT_TV_LIBRARY_DIR
    movie_library: Path = DEFAULT_MOVIE_LIBRARY_DIR
    min_size_mb: int = DEFAULT_MIN_FILE_SIZE_MB
    copy: bool = False
    overwrite: bool = False
    skip_duplicates: bool = True
    delete_duplicates: bool = False
    dry_run: bool = False
    debug: bool = False


def create_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog='autoorganize',
        description="""
        Moves downloaded episodes and movies into the library layout,
        keeps an audit log of every attempt and learns from corrections.
        """
    )

    parser.add_argument('--db', default=DATABASE_FILENAME,
                        help=f"SQLite database (default: {DATABASE_FILENAME})")
    parser.add_argument('-w', '--watch', action='append', default=[],
                        help=f"folder to scan, repeatable (default: {DEFAULT_WATCH_DIR})")
    parser.add_argument('--tv-library', default=str(DEFAULT_TV_LIBRARY_DIR),
                        help=f"TV library root (default: {DEFAULT_TV_LIBRARY_DIR})")
    parser.add_argument('--movie-library', default=str(DEFAULT_MOVIE_LIBRARY_DIR),
                        help=f"movie library root (default: {DEFAULT_MOVIE_LIBRARY_DIR})")
    parser.add_argument('--min-size', type=int, default=DEFAULT_MIN_FILE_SIZE_MB,
                        help=f"ignore files smaller than MIN_SIZE MB (default: {DEFAULT_MIN_FILE_SIZE_MB})")
    parser.add_argument('--copy', action='store_true',
                        help="copy files instead of moving them")
    parser.add_argument('--overwrite', action='store_true',
                        help="replace different files already in the library")
    parser.add_argument('--no-skip-duplicates', action='store_true',
                        help="replace identical files instead of skipping them")
    parser.add_argument('--delete-duplicates', action='store_true',
                        help="delete source files identical to a library file")
    parser.add_argument('--dry-run', action='store_true',
                        help="simulation mode - no file modifications")
    parser.add_argument('--debug', action='store_true', help="enable debug mode")

    sub = parser.add_subparsers(dest='command', required=True)

    sub.add_parser('scan', help="organize new files from the watch folders")

    results = sub.add_parser('results', help="list organization results")
    results.add_argument('--status', action='append', choices=STATUS_CHOICES, default=[])
    results.add_argument('--type', choices=TYPE_CHOICES)
    results.add_argument('--path', help="substring of the original path")
    results.add_argument('--start', type=int, default=0)
    results.add_argument('--limit', type=int, default=DEFAULT_PAGE_SIZE)

    show = sub.add_parser('show', help="show one result")
    show.add_argument('result_id')

    show_path = sub.add_parser('show-path', help="show the result of a source path")
    show_path.add_argument('path')

    retry = sub.add_parser('retry', help="organize the file of a result again")
    retry.add_argument('result_id')

    episode = sub.add_parser('correct-episode', help="organize an episode with an explicit series")
    episode.add_argument('path')
    episode.add_argument('series_id')
    episode.add_argument('series_name')
    episode.add_argument('--year', type=int)
    episode.add_argument('--season', type=int)
    episode.add_argument('--episode', type=int)
    episode.add_argument('--ending-episode', type=int)
    episode.add_argument('--no-remember', action='store_true',
                         help="do not learn this correction")

    movie = sub.add_parser('correct-movie', help="organize a movie with an explicit title")
    movie.add_argument('path')
    movie.add_argument('movie_id')
    movie.add_argument('movie_name')
    movie.add_argument('--year', type=int)
    movie.add_argument('--no-remember', action='store_true',
                       help="do not learn this correction")

    delete = sub.add_parser('delete-original', help="delete the source file of a result")
    delete.add_argument('result_id')

    sub.add_parser('clear-log', help="delete every result")
    sub.add_parser('clear-completed', help="delete Success and SkippedExisting results")

    matches = sub.add_parser('smart-matches', help="list learned corrections")
    matches.add_argument('--type', choices=TYPE_CHOICES)

    delete_match = sub.add_parser('delete-smart-match', help="forget one learned match string")
    delete_match.add_argument('target_id')
    delete_match.add_argument('match_string')

    return parser


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: List of argument strings (None for sys.argv).

    Returns:
        Parsed Namespace object.
    """
    parser = create_parser()
    return parser.parse_args(args)


def args_to_cli_args(namespace: argparse.Namespace) -> CLIArgs:
    """
    Convert argparse Namespace to CLIArgs dataclass.

    Args:
        namespace: Parsed argparse Namespace.

    Returns:
        CLIArgs instance.
    """
    watch_dirs = [Path(w) for w in namespace.watch] or [DEFAULT_WATCH_DIR]

    return CLIArgs(
        command=namespace.command,
        database=Path(namespace.db),
        watch_dirs=watch_dirs,
        tv_library=Path(namespace.tv_library),
        movie_library=Path(namespace.movie_library),
        min_size_mb=namespace.min_size,
        copy=namespace.copy,
        overwrite=namespace.overwrite,
        skip_duplicates=not namespace.no_skip_duplicates,
        delete_duplicates=namespace.delete_duplicates,
        dry_run=namespace.dry_run,
        debug=namespace.debug,
    )
