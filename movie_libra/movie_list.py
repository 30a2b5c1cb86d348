"""
Query engine module.
Holds a loaded movie collection and answers find/sort/filter/aggregate
queries over it. Sort algorithms and filters are plain functions
registered by name, so the embedding application decides what exists.
"""

from collections import Counter  # insertion-ordered counting
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from loguru import logger

from .data_loader import DataLoader
from .errors import UnknownAlgorithm, UnknownFilter
from .models import Movie

SortKey = Callable[[Movie], Any]  # Movie -> comparable key
Predicate = Callable[..., bool]  # (Movie, *args) -> bool


class MovieList:
	"""
	An immutable, ordered collection of movies plus two name -> function
	tables: `algorithms` for sorting and `filters` for narrowing.
	Both tables start empty; see defaults.register_defaults().

	Not thread-safe: register everything before sharing the instance.
	"""

	def __init__(self, path=None, movies: Optional[Iterable[Union[Movie, Mapping[str, Any]]]] = None, loader: Optional[DataLoader] = None):
		if path is not None and movies is not None:
			raise ValueError("Pass either a path or movies, not both")
		loader = loader or DataLoader()
		if path is not None:
			loaded = loader.load(path)  # raises before any query can run
		else:
			loaded = loader.build_movies(movies or [])
		self._movies = tuple(loaded)
		self.algorithms: Dict[Any, SortKey] = {}
		self.filters: Dict[Any, Predicate] = {}
		logger.info(f"[MovieList] Collection ready with {len(self._movies)} movies")

	@classmethod
	def from_records(cls, records: Iterable[Union[Movie, Mapping[str, Any]]]) -> 'MovieList':
		"""Build a collection from raw mappings (e.g. fetcher output) or Movie objects."""
		return cls(movies=records)

	@property
	def movies(self):
		return self._movies

	def __iter__(self) -> Iterator[Movie]:
		return iter(self._movies)

	def __len__(self) -> int:
		return len(self._movies)

	def find(self, name: str) -> Optional[Movie]:
		"""First movie whose name matches case-insensitively, or None."""
		if not isinstance(name, str) or not name.strip():
			raise ValueError("Movie name cannot be empty")
		wanted = name.casefold()
		return next((m for m in self._movies if m.name.casefold() == wanted), None)

	def render(self, fn: Callable[[Movie], str]) -> List[str]:
		"""One formatted line per movie, e.g. render(lambda m: f"{m.year}: {m.name}")."""
		return [fn(m) for m in self._movies]

	def register_sort(self, name, fn: SortKey) -> None:
		"""Register (or silently replace) a named sort key function."""
		self.algorithms[name] = fn

	def sorted_by(self, name=None, key: Optional[SortKey] = None) -> List[Movie]:
		"""
		Stable sort of the whole collection.
		A registered `name` takes precedence; otherwise the inline `key`
		function is used; with neither, UnknownAlgorithm is raised.
		"""
		if name is not None and name in self.algorithms:
			key_fn = self.algorithms[name]
		elif key is not None:
			key_fn = key
		else:
			raise UnknownAlgorithm(name)
		logger.debug(f"[MovieList] sorted_by name={name!r} inline={key_fn is key}")
		return sorted(self._movies, key=key_fn)

	def register_filter(self, name, fn: Predicate) -> None:
		"""Register (or silently replace) a named predicate (movie, *args) -> bool."""
		self.filters[name] = fn

	def filter(self, criteria: Mapping[Any, Any]) -> List[Movie]:
		"""
		AND-compose registered filters in the mapping's iteration order.
		List/tuple values are spread as positional arguments; any other
		value is passed as the single argument.
		"""
		# An unknown key aborts the whole call, whatever its position
		for name in criteria:
			if name not in self.filters:
				raise UnknownFilter(name)

		result = list(self._movies)
		for name, value in criteria.items():
			predicate = self.filters[name]
			args = tuple(value) if isinstance(value, (list, tuple)) else (value,)
			result = [m for m in result if predicate(m, *args)]
			logger.debug(f"[MovieList] filter {name!r}={value!r} kept {len(result)} movies")
		return result

	def longest(self, n: int) -> List[Movie]:
		"""
		The n longest movies, shortest of them first: stable ascending
		sort by duration, then the last n.
		"""
		if n < 0:
			raise ValueError(f"n must be non-negative, got {n}")
		if n == 0:
			return []
		return sorted(self._movies, key=lambda m: m.duration)[-n:]

	def select_by_genre(self, genre: str) -> List[Movie]:
		"""Movies tagged with `genre` (exact, case-sensitive), oldest first."""
		return sorted((m for m in self._movies if genre in m.genre), key=lambda m: m.date)

	def directors(self) -> List[str]:
		"""
		Distinct directors sorted by the last word of the name.
		Movies without a director contribute nothing.
		"""
		unique = list(dict.fromkeys(m.director for m in self._movies if m.director is not None))
		return sorted(unique, key=lambda d: d.split(' ')[-1])

	def skip_country(self, country: str) -> int:
		"""How many movies were not made in `country`."""
		return sum(1 for m in self._movies if m.country != country)

	def count_by_director(self) -> Dict[str, int]:
		"""
		director -> number of movies, most prolific first. Ties keep the
		order in which directors first appear. Missing directors are skipped.
		"""
		counts = Counter(m.director for m in self._movies if m.director is not None)
		return _by_count_desc(counts)

	def by_director(self, director: str) -> List[str]:
		"""Names of the movies by `director`, in collection order."""
		return [m.name for m in self._movies if m.director == director]

	def count_by_actor(self) -> Dict[str, int]:
		"""actor -> appearances across all casts, most frequent first."""
		counts = Counter(actor for m in self._movies for actor in m.actors)
		return _by_count_desc(counts)

	def month_stats(self) -> Dict[int, int]:
		"""
		Release month (1-12) -> number of movies, ascending by month.
		Months with no releases are absent rather than mapped to 0.
		"""
		counts = Counter(m.date.month for m in self._movies)
		return dict(sorted(counts.items()))


def _by_count_desc(counts: Counter) -> Dict[Any, int]:
	# sorted() is stable with reverse=True, so equal counts keep first-seen order
	return dict(sorted(counts.items(), key=lambda item: item[1], reverse=True))
