"""Metadata provider clients."""

from autoorganize.api.cache_db import CacheDB
from autoorganize.api.resolver import TmdbResolver, score_candidate
from autoorganize.api.tmdb_client import TmdbClient

__all__ = ["CacheDB", "TmdbClient", "TmdbResolver", "score_candidate"]
