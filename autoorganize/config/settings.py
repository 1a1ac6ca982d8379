"""Configuration settings and constants for the autoorganize package."""

from pathlib import Path
from typing import Set

# Video file extensions considered by the scanner
EXT_VIDEO: Set[str] = {
    ".mkv", ".avi", ".wmv", ".mpeg", ".mpg", ".m4v", ".mp4", ".flv", ".ts", ".rm", ".rmvb",
    ".mov", ".webm", ".iso"
}

# Files smaller than this are samples or trailers (in MB)
DEFAULT_MIN_FILE_SIZE_MB: int = 50

# Default directories
DEFAULT_WATCH_DIR = Path('/media/downloads')
DEFAULT_TV_LIBRARY_DIR = Path('/media/library/TV')
DEFAULT_MOVIE_LIBRARY_DIR = Path('/media/library/Movies')

# SQLite database holding results, smart matches and the provider cache
DATABASE_FILENAME: str = "autoorganize.db"
RESULTS_TABLE: str = "organization_results"
SMART_MATCH_TABLE: str = "smart_matches"

# Naming
SEASON_FOLDER_PATTERN: str = "Season {season:02d}"
SPECIALS_FOLDER_NAME: str = "Specials"
EPISODE_NAME_PATTERN: str = "{series} - S{season:02d}E{episode:02d}"
MULTI_EPISODE_NAME_PATTERN: str = "{series} - S{season:02d}E{episode:02d}-E{ending_episode:02d}"
MOVIE_FOLDER_PATTERN: str = "{title} ({year})"

# Pagination
DEFAULT_PAGE_SIZE: int = 50

# Hashing used for duplicate detection
SMALL_FILE_THRESHOLD: int = 650 * 1024
PARTIAL_HASH_CHUNK_SIZE: int = 512 * 1024
HASH_FILE_POSITION_DIVISOR: int = 8

# Suffix of the temporary artifact written during a copy
PARTIAL_SUFFIX: str = ".partial"

# Provider lookups
CACHE_EXPIRATION_SECONDS: int = 86400
REQUEST_TIMEOUT_SECONDS: int = 10
MIN_MATCH_SCORE: int = 70

# Log file
LOG_FILENAME: str = "autoorganize.log"
