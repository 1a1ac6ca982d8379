"""Hashing utilities: result identities and file deduplication."""

import hashlib
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from autoorganize.config.settings import (
    SMALL_FILE_THRESHOLD,
    PARTIAL_HASH_CHUNK_SIZE,
    HASH_FILE_POSITION_DIVISOR,
)


def result_id_for_path(path: Union[str, Path]) -> str:
    """
    Compute the identity of the organization result for a source path.

    The identity is the MD5 of the path string, so reprocessing the same
    path always lands on the same record.

    Args:
        path: Original source path.

    Returns:
        32 character hexadecimal digest.
    """
    return hashlib.md5(str(path).encode("utf-8"), usedforsecurity=False).hexdigest()


def checksum_md5(filename: Path) -> Optional[str]:
    """
    Compute the MD5 of a file's content.

    Small files (< 650 KB) are hashed entirely. For larger files only a
    512 KB chunk starting at 1/8 of the file is hashed, which is a good
    balance between accuracy and speed for deduplication.

    Args:
        filename: Path of the file to hash.

    Returns:
        Hexadecimal MD5, or None if the file is missing or unreadable.
    """
    if not filename.exists():
        return None

    # usedforsecurity=False for FIPS compliance (MD5 used for dedup, not crypto)
    md5 = hashlib.md5(usedforsecurity=False)
    try:
        with open(filename, 'rb') as f:
            size = filename.stat().st_size
            if size < SMALL_FILE_THRESHOLD:
                md5.update(f.read())
            else:
                f.seek(size // HASH_FILE_POSITION_DIVISOR)
                md5.update(f.read(PARTIAL_HASH_CHUNK_SIZE))
        return md5.hexdigest()
    except OSError as e:
        logger.debug(f'I/O error while hashing {filename}: {e}')
        return None
