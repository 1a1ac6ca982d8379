"""Data models for file organization."""

from autoorganize.models.result import (
    FileSortingStatus,
    OrganizationResult,
    OrganizerType,
)
from autoorganize.models.smart_match import SmartMatch
from autoorganize.models.media import (
    EpisodeCorrectionRequest,
    MovieCorrectionRequest,
    ParsedTokens,
    Target,
)
from autoorganize.models.query import QueryResult, ResultQuery, SmartMatchQuery

__all__ = [
    "FileSortingStatus",
    "OrganizationResult",
    "OrganizerType",
    "SmartMatch",
    "EpisodeCorrectionRequest",
    "MovieCorrectionRequest",
    "ParsedTokens",
    "Target",
    "QueryResult",
    "ResultQuery",
    "SmartMatchQuery",
]
