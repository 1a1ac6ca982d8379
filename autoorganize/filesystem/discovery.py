"""File discovery functions for finding files to organize."""

from pathlib import Path
from typing import Generator

from loguru import logger

from autoorganize.config.options import AutoOrganizeOptions
from autoorganize.config.settings import PARTIAL_SUFFIX


def is_candidate(file: Path, options: AutoOrganizeOptions) -> bool:
    """
    Check whether a file should be organized.

    Hidden files, partial copies, unsupported extensions and files below
    the minimum size are rejected.

    Args:
        file: File path to check.
        options: Engine options holding extensions and minimum size.

    Returns:
        True if the file is a candidate.
    """
    if file.name.startswith('.') or file.name.endswith(PARTIAL_SUFFIX):
        return False
    if file.suffix.lower() not in options.extensions:
        return False

    try:
        size_mb = file.stat().st_size / (1024 * 1024)
    except OSError as e:
        logger.debug(f"Cannot stat {file}: {e}")
        return False

    if size_mb < options.min_file_size_mb:
        logger.debug(f"Ignored (size {size_mb:.1f} MB): {file.name}")
        return False
    return True


def enumerate_sources(options: AutoOrganizeOptions) -> Generator[Path, None, None]:
    """
    Generate candidate source files from the watch locations.

    Args:
        options: Engine options with the watch locations.

    Yields:
        Path objects for each candidate file, sorted within each location.
    """
    for location in options.watch_locations:
        if not location.is_dir():
            logger.warning(f"Watch location not found: {location}")
            continue

        logger.debug(f"Scanning: {location}")
        file_count = 0
        try:
            for file in sorted(location.rglob("*")):
                if file.is_file() and is_candidate(file, options):
                    file_count += 1
                    yield file
        except OSError as e:
            logger.warning(f"Filesystem access error for {location}: {e}")
        logger.debug(f"  → {file_count} files found in {location}")
