"""Configuration and CLI handling."""

from autoorganize.config.settings import (
    EXT_VIDEO,
    DATABASE_FILENAME,
    DEFAULT_MIN_FILE_SIZE_MB,
    DEFAULT_WATCH_DIR,
    DEFAULT_TV_LIBRARY_DIR,
    DEFAULT_MOVIE_LIBRARY_DIR,
    DEFAULT_PAGE_SIZE,
)
from autoorganize.config.cli import (
    CLIArgs,
    create_parser,
    parse_arguments,
    args_to_cli_args,
)

__all__ = [
    "EXT_VIDEO",
    "DATABASE_FILENAME",
    "DEFAULT_MIN_FILE_SIZE_MB",
    "DEFAULT_WATCH_DIR",
    "DEFAULT_TV_LIBRARY_DIR",
    "DEFAULT_MOVIE_LIBRARY_DIR",
    "DEFAULT_PAGE_SIZE",
    "CLIArgs",
    "create_parser",
    "parse_arguments",
    "args_to_cli_args",
]
