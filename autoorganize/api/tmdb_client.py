"""TMDB (The Movie Database) API client."""

from typing import Dict, Optional

import requests
from loguru import logger

from autoorganize.config.settings import REQUEST_TIMEOUT_SECONDS
from autoorganize.models.result import OrganizerType


class TmdbClient:
    """
    Client for The Movie Database (TMDB) search API.

    Attributes:
        api_key: TMDB API key for authentication.
        language: Language code for results.
    """

    BASE_URL = 'https://api.themoviedb.org/3'
    SEARCH_MOVIE_ENDPOINT = '/search/movie'
    SEARCH_TV_ENDPOINT = '/search/tv'
    DEFAULT_LANGUAGE = 'en-US'

    def __init__(
        self,
        api_key: Optional[str] = None,
        language: str = DEFAULT_LANGUAGE,
        session: Optional[requests.Session] = None
    ) -> None:
        """
        Initialize TMDB client.

        Args:
            api_key: TMDB API key. If None, searches return None.
            language: Language code for results.
            session: HTTP session to reuse (a new one by default).
        """
        self.api_key = api_key
        self.language = language
        self.session = session or requests.Session()

    def build_params(self, query: str, year: Optional[int], organizer_type: OrganizerType) -> Dict:
        """
        Build query parameters for a search.

        Args:
            query: Searched title.
            year: Release year used to narrow the search.
            organizer_type: Movie or episode (TV) search.

        Returns:
            Parameter dict for the request.
        """
        params = {
            'api_key': self.api_key,
            'language': self.language,
            'query': query,
        }
        if year:
            key = 'year' if organizer_type == OrganizerType.MOVIE else 'first_air_date_year'
            params[key] = year
        return params

    def endpoint_for(self, organizer_type: OrganizerType) -> str:
        """Return the search URL for movies or TV series."""
        endpoint = (
            self.SEARCH_MOVIE_ENDPOINT
            if organizer_type == OrganizerType.MOVIE
            else self.SEARCH_TV_ENDPOINT
        )
        return f'{self.BASE_URL}{endpoint}'

    def search(
        self,
        name: str,
        organizer_type: OrganizerType,
        year: Optional[int] = None
    ) -> Optional[Dict]:
        """
        Search for a movie or TV series.

        Args:
            name: Title to search for.
            organizer_type: MOVIE searches movies, EPISODE searches TV series.
            year: Optional release year.

        Returns:
            API response as dict, or None if the request fails or the API
            key is missing.
        """
        if not self.api_key:
            logger.warning("TMDB API key missing")
            return None

        try:
            response = self.session.get(
                self.endpoint_for(organizer_type),
                params=self.build_params(name, year, organizer_type),
                timeout=REQUEST_TIMEOUT_SECONDS
            )
            if response.status_code == 200:
                return response.json()
            logger.warning(f"TMDB request error: {response.status_code}")
            return None
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"TMDB request error: {e}")
            return None
