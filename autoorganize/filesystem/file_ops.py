"""File operations for moving, copying and deleting organized files."""

import os
import shutil
from pathlib import Path

from loguru import logger

from autoorganize.config.settings import PARTIAL_SUFFIX
from autoorganize.utils.hash import checksum_md5


class FileOps:
    """
    Filesystem collaborator used by the organizers.

    Moves never go through a destructive rename: the source is copied next
    to the destination, verified, swapped into place, and only then removed.
    Any partial artifact is cleaned up before an error is re-raised.
    """

    def exists(self, path: Path) -> bool:
        """Check if a file exists at path."""
        return Path(path).is_file()

    def compare_content(self, path_a: Path, path_b: Path) -> bool:
        """
        Check whether two files hold the same content.

        Sizes are compared first, then the MD5 checksum.

        Returns:
            True if both files exist and are identical.
        """
        path_a, path_b = Path(path_a), Path(path_b)
        try:
            if path_a.stat().st_size != path_b.stat().st_size:
                return False
        except OSError as e:
            logger.debug(f"Cannot compare {path_a} and {path_b}: {e}")
            return False

        hash_a = checksum_md5(path_a)
        return hash_a is not None and hash_a == checksum_md5(path_b)

    def move_or_copy(self, source: Path, destination: Path, copy: bool = False) -> Path:
        """
        Place source at destination, replacing any existing file.

        Args:
            source: Source file path.
            destination: Destination file path.
            copy: If True, keep the source file.

        Returns:
            The destination path.

        Raises:
            OSError: If the copy, the verification or the swap fails. No
                partial file is left at the destination.
        """
        source, destination = Path(source), Path(destination)
        if not source.is_file():
            raise FileNotFoundError(f"Source file not found: {source}")

        destination.parent.mkdir(parents=True, exist_ok=True)
        partial = destination.with_name(destination.name + PARTIAL_SUFFIX)

        try:
            shutil.copy2(source, partial)
            if partial.stat().st_size != source.stat().st_size:
                raise OSError(f"Size mismatch after copying {source} to {partial}")
            os.replace(partial, destination)
        except OSError:
            self._cleanup(partial)
            raise

        logger.info(f"File {'copied' if copy else 'moved'}: {source.name} -> {destination}")

        if not copy:
            try:
                source.unlink()
            except OSError as e:
                logger.warning(f"File placed but source could not be removed {source}: {e}")

        return destination

    def delete(self, path: Path) -> None:
        """
        Delete a file.

        Raises:
            OSError: If the file cannot be removed (including when missing).
        """
        Path(path).unlink()
        logger.info(f"File deleted: {path}")

    @staticmethod
    def _cleanup(partial: Path) -> None:
        try:
            if partial.exists():
                partial.unlink()
                logger.debug(f"Partial file removed: {partial}")
        except OSError as e:
            logger.error(f"Could not remove partial file {partial}: {e}")
