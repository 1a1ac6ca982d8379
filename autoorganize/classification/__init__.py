"""Filename classification and text normalization."""

from autoorganize.classification.text_processing import (
    normalize,
    normalize_accents,
    normalize_match_string,
)
from autoorganize.classification.type_detector import (
    parse_tokens,
    detect_organizer_type,
)

__all__ = [
    "normalize",
    "normalize_accents",
    "normalize_match_string",
    "parse_tokens",
    "detect_organizer_type",
]
