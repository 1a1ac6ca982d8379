"""Resolve parsed filename tokens to a TMDB movie or series."""

from typing import Dict, List, Optional

from loguru import logger
from rapidfuzz import fuzz

from autoorganize.api.cache_db import CacheDB
from autoorganize.api.tmdb_client import TmdbClient
from autoorganize.classification.text_processing import normalize_match_string
from autoorganize.config.settings import MIN_MATCH_SCORE
from autoorganize.models.media import ParsedTokens, Target
from autoorganize.models.result import OrganizerType


def _candidate_year(candidate: Dict) -> Optional[int]:
    date = candidate.get('release_date') or candidate.get('first_air_date') or ''
    return int(date[:4]) if date[:4].isdigit() else None


def _candidate_names(candidate: Dict) -> List[str]:
    keys = ('title', 'original_title', 'name', 'original_name')
    return [candidate[key] for key in keys if candidate.get(key)]


def score_candidate(title: str, year: Optional[int], candidate: Dict) -> float:
    """
    Score how well a TMDB result matches a parsed title and year.

    The best fuzzy ratio over the candidate's names, plus a bonus when the
    year matches and a penalty when it clearly does not.

    Args:
        title: Parsed title.
        year: Parsed year, if any.
        candidate: One item of a TMDB ``results`` list.

    Returns:
        Score, roughly 0 to 110.
    """
    wanted = normalize_match_string(title)
    score = max(
        (fuzz.token_sort_ratio(wanted, normalize_match_string(name))
         for name in _candidate_names(candidate)),
        default=0.0,
    )

    candidate_year = _candidate_year(candidate)
    if year and candidate_year:
        if candidate_year == year:
            score += 10
        elif abs(candidate_year - year) > 1:
            score -= 20
    return score


class TmdbResolver:
    """
    Provider lookup collaborator backed by TMDB.

    Called as ``resolver(tokens, organizer_type)``; returns the best
    scoring Target or None.
    """

    def __init__(
        self,
        client: TmdbClient,
        cache: Optional[CacheDB] = None,
        min_score: int = MIN_MATCH_SCORE
    ) -> None:
        self.client = client
        self.cache = cache
        self.min_score = min_score

    def _search(self, title: str, year: Optional[int], organizer_type: OrganizerType) -> Dict:
        cache_key = f"{organizer_type.value}|{normalize_match_string(title)}|{year or ''}"
        if self.cache:
            cached = self.cache.get_tmdb(cache_key)
            if cached:
                logger.debug(f"TMDB cache hit: {cache_key}")
                return cached

        response = self.client.search(title, organizer_type, year) or {}
        if response and self.cache:
            self.cache.set_tmdb(cache_key, response)
        return response

    def __call__(self, tokens: ParsedTokens, organizer_type: OrganizerType) -> Optional[Target]:
        if not tokens.title:
            return None

        response = self._search(tokens.title, tokens.year, organizer_type)
        # a year parsed from the filename can be wrong, retry without it
        if not response.get('results') and tokens.year:
            response = self._search(tokens.title, None, organizer_type)

        candidates = [c for c in response.get('results') or [] if c.get('id') and _candidate_names(c)]
        if not candidates:
            logger.info(f"No TMDB result for '{tokens.title}'")
            return None

        best = max(candidates, key=lambda c: score_candidate(tokens.title, tokens.year, c))
        best_score = score_candidate(tokens.title, tokens.year, best)
        if best_score < self.min_score:
            logger.info(f"Best TMDB match for '{tokens.title}' too weak ({best_score:.0f})")
            return None

        names = _candidate_names(best)
        return Target(
            id=str(best['id']),
            name=names[0],
            year=_candidate_year(best),
            organizer_type=organizer_type,
        )
