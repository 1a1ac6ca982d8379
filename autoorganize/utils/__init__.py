"""Utility functions."""

from autoorganize.utils.hash import checksum_md5, result_id_for_path

__all__ = [
    "checksum_md5",
    "result_id_for_path",
]
