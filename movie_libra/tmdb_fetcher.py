"""
Remote fetcher for The Movie Database (TMDb).
Collects the top-rated movies and flattens each one into the raw
mapping shape that DataLoader/Movie.from_raw understand.

Failures are split into transport errors (network, HTTP status) and
parse errors (unexpected body). The `on_error` policy decides whether a
failure aborts the run ("raise") or is logged and skipped ("skip").
"""

import math  # page count
from typing import Any, Dict, List, Optional

import requests  # HTTP client
from loguru import logger  # console logging

from .errors import FetchError, FetchParseError, FetchTransportError, ParseError
from .models import ACTORS_CAP, Movie

ON_ERROR_POLICIES = ('raise', 'skip')


class TmdbFetcher:
	"""
	Thin TMDb client: top-rated ids, then details + credits per movie.
	"""

	BASE_URL = "https://api.themoviedb.org/3/movie"
	IMDB_URI = "http://www.imdb.com/title/"
	PAGE_SIZE = 20  # results per top_rated page

	def __init__(
		self,
		api_key: str,
		movie_count: int = 250,
		actors_count: int = ACTORS_CAP,
		on_error: str = 'raise',
		session: Optional[requests.Session] = None,
		base_url: Optional[str] = None,
		timeout: float = 10.0,
	):
		if not api_key:
			raise ValueError("No TMDb API key passed")
		if on_error not in ON_ERROR_POLICIES:
			raise ValueError(f"on_error must be one of {ON_ERROR_POLICIES}, got {on_error!r}")
		if movie_count <= 0:
			raise ValueError(f"movie_count must be positive, got {movie_count}")
		self.api_key = api_key
		self.movie_count = movie_count
		self.actors_count = actors_count
		self.on_error = on_error
		self.session = session or requests.Session()
		self.base_url = (base_url or self.BASE_URL).rstrip('/')
		self.timeout = timeout
		self.ids: List[int] = []  # ids collected from top_rated
		self.movies: List[Dict[str, Any]] = []  # flattened results

	@property
	def page_count(self) -> int:
		return math.ceil(self.movie_count / self.PAGE_SIZE)

	def run(self) -> List[Dict[str, Any]]:
		"""Fetch up to movie_count movies and return their raw mappings."""
		logger.info(f"[Fetcher] Fetching up to {self.movie_count} top-rated movies")
		self.movies = []
		ids = self.top_movie_ids()
		for index, movie_id in enumerate(ids, 1):
			try:
				self.movies.append(self.fetch_movie(movie_id))
			except FetchError as e:
				self._handle(e, f"movie {movie_id}")
			logger.debug(f"[Fetcher] {index}/{len(ids)} processed")
		logger.info(f"[Fetcher] Fetched {len(self.movies)} of {len(ids)} movies")
		return self.movies

	def top_movie_ids(self) -> List[int]:
		"""Ids from the top_rated listing, capped at movie_count."""
		self.ids = []
		for page in range(1, self.page_count + 1):
			try:
				payload = self._get('top_rated', page=page)
				page_ids = [item['id'] for item in payload['results']]  # all or nothing per page
			except (KeyError, TypeError) as e:
				self._handle(FetchParseError(f"Unexpected top_rated page {page}: {e!r}"), f"page {page}")
				continue
			except FetchError as e:
				self._handle(e, f"page {page}")
				continue
			self.ids.extend(page_ids)
			if page >= payload.get('total_pages', page):  # no more pages upstream
				break
		self.ids = self.ids[:self.movie_count]
		return self.ids

	def fetch_movie(self, movie_id) -> Dict[str, Any]:
		"""Details and credits for one movie, flattened."""
		movie = self._get(str(movie_id))
		credits = self._get(f"{movie_id}/credits")
		try:
			record = self.flatten(movie, credits)
		except (KeyError, TypeError, ValueError) as e:
			raise FetchParseError(f"Unexpected payload for movie {movie_id}: {e!r}") from e
		try:
			Movie.from_raw(record)  # reject records the loader would refuse
		except ParseError as e:
			raise FetchParseError(f"Movie {movie_id} is incomplete: {e}") from e
		return record

	def flatten(self, movie: Dict[str, Any], credits: Dict[str, Any]) -> Dict[str, Any]:
		"""Map TMDb detail/credits payloads onto the symbolic field vocabulary."""
		release_date = movie.get('release_date') or None
		imdb_id = movie.get('imdb_id')
		countries = [c['iso_3166_1'] for c in movie.get('production_countries') or []]
		return {
			'link': self.IMDB_URI + imdb_id if imdb_id else None,
			'name': movie['title'],
			'year': int(release_date[:4]) if release_date else None,
			'country': countries[0] if countries else None,
			'date': release_date,
			'genre': [g['name'] for g in movie.get('genres') or []],
			'duration': movie.get('runtime'),
			'rating': movie.get('vote_average'),
			'director': self.director(credits),
			'actors': self.actors(credits),
		}

	@staticmethod
	def director(credits: Dict[str, Any]) -> Optional[str]:
		"""Name of the first crew member credited as Director, if any."""
		for member in credits.get('crew') or []:
			if member.get('job') == 'Director':
				return member['name']
		return None

	def actors(self, credits: Dict[str, Any]) -> List[str]:
		return [member['name'] for member in (credits.get('cast') or [])[:self.actors_count]]

	def _get(self, path: str, page: Optional[int] = None) -> Dict[str, Any]:
		params: Dict[str, Any] = {'api_key': self.api_key}
		if page is not None:
			params['page'] = page
		url = f"{self.base_url}/{path}"
		try:
			response = self.session.get(url, params=params, timeout=self.timeout)
		except requests.RequestException as e:
			raise FetchTransportError(f"Request to {url} failed: {e}") from e
		if response.status_code >= 400:
			raise FetchTransportError(f"Request to {url} returned status {response.status_code}", status_code=response.status_code)
		try:
			payload = response.json()
		except ValueError as e:
			raise FetchParseError(f"Response from {url} is not valid JSON: {e}") from e
		if not isinstance(payload, dict):
			raise FetchParseError(f"Response from {url} is not a JSON object")
		return payload

	def _handle(self, error: FetchError, what: str) -> None:
		if self.on_error == 'raise':
			raise error
		logger.warning(f"[Fetcher] Skipping {what}: {error}")
