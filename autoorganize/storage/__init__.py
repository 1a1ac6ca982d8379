"""Durable stores for results and smart matches."""

from autoorganize.storage.result_store import ResultStore
from autoorganize.storage.smart_match_store import SmartMatchStore

__all__ = ["ResultStore", "SmartMatchStore"]
