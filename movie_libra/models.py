"""
Data models for MovieLibra.
Defines the Movie record and the normalization that turns a raw field
mapping (from a file or from the remote fetcher) into one.
"""

# Import dataclass to define immutable "record-like" classes without boilerplate
from dataclasses import dataclass, asdict  # auto-generates __init__, __eq__, etc.
from datetime import date, datetime  # release dates
import re  # duration text like "142 min"
# Import typing helpers for precise and self-documenting types
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import ParseError

# Only the top-billed actors are kept on a record
ACTORS_CAP = 5

# Symbolic field vocabulary shared by both file formats, in export order
FIELDS = ('link', 'name', 'year', 'country', 'date', 'genre', 'duration', 'rating', 'director', 'actors')

_RE_LEADING_INT = re.compile(r"^\s*(-?\d+)(?:\.0+)?(?![\d.])")  # "142 min" -> 142, "142.5" rejected


@dataclass(frozen=True)
class Movie:
	"""
	One normalized movie. Instances are immutable once built;
	sequence fields are tuples so nothing can be appended later.
	"""
	name: str  # display title, never empty
	year: int  # release year
	country: Optional[str]  # first production country code (e.g. "US")
	date: date  # full release date
	genre: Tuple[str, ...]  # genre labels in source order, duplicates kept
	duration: int  # runtime in minutes, >= 0
	rating: float  # average vote score
	director: Optional[str] = None  # None when nobody held the role
	actors: Tuple[str, ...] = ()  # top credited cast, at most ACTORS_CAP
	link: Optional[str] = None  # canonical detail page URI

	@property
	def month(self) -> int:
		"""Calendar month (1-12) of the release date."""
		return self.date.month

	def has_genres(self, *genres: str) -> bool:
		"""True when every given genre label is on this movie."""
		return all(g in self.genre for g in genres)

	def to_dict(self) -> Dict[str, Any]:
		"""Plain mapping in the symbolic vocabulary with JSON-friendly values."""
		data = asdict(self)
		data['date'] = self.date.isoformat()  # ISO text for serialization
		data['genre'] = list(self.genre)
		data['actors'] = list(self.actors)
		return {key: data[key] for key in FIELDS}  # stable key order

	@classmethod
	def from_raw(cls, data: Mapping[str, Any]) -> 'Movie':
		"""
		Convert a raw mapping with symbolic keys into a Movie.
		Numbers and dates are coerced here, not by the loader, so every
		source goes through the same rules. Raises ParseError when a
		required field is missing or a value cannot be coerced.
		"""
		name = _scalar_text(data.get('name'))  # title text
		if not name:
			raise ParseError("Movie record is missing 'name'")

		release = _parse_date(data.get('date'), name)  # full release date
		genre = _text_tuple(data.get('genre'))  # ordered labels
		if not genre:
			raise ParseError(f"Movie {name!r} is missing 'genre'")

		raw_year = data.get('year')
		year = _parse_int(raw_year, 'year', name) if _present(raw_year) else release.year  # fall back to the date

		duration = _parse_int(data.get('duration'), 'duration', name) if _present(data.get('duration')) else 0
		if duration < 0:
			raise ParseError(f"Movie {name!r} has negative duration {duration}")

		rating = _parse_float(data.get('rating'), 'rating', name) if _present(data.get('rating')) else 0.0

		country = data.get('country')
		if isinstance(country, (list, tuple)):  # fetcher may hand over all codes
			country = country[0] if country else None
		country = _scalar_text(country) or None

		return cls(
			name=name,
			year=year,
			country=country,
			date=release,
			genre=genre,
			duration=duration,
			rating=rating,
			director=_scalar_text(data.get('director')) or None,  # empty means no director
			actors=_text_tuple(data.get('actors'))[:ACTORS_CAP],  # top N credited
			link=_scalar_text(data.get('link')) or None,
		)


def _present(value) -> bool:
	"""A value counts as present unless it is None or blank text."""
	if value is None:
		return False
	if isinstance(value, str) and not value.strip():
		return False
	return True


def _scalar_text(value) -> str:
	"""
	Text for a single-valued field. The tabular reader splits any cell
	containing a comma, so a list here is joined back together.
	"""
	if value is None:
		return ''
	if isinstance(value, (list, tuple)):
		value = ','.join(str(v) for v in value)
	return str(value).strip()


def _text_tuple(value) -> Tuple[str, ...]:
	"""Tuple of clean labels from a scalar or a sequence; order and duplicates kept."""
	if value is None:
		return ()
	if isinstance(value, str):
		value = [value]
	if not isinstance(value, (list, tuple)):
		value = [value]
	return tuple(str(item).strip() for item in value if item is not None and str(item).strip())


def _parse_date(value, name: str) -> date:
	if isinstance(value, datetime):
		return value.date()
	if isinstance(value, date):
		return value
	text = _scalar_text(value)
	if not text:
		raise ParseError(f"Movie {name!r} is missing 'date'")
	try:
		if len(text) == 4 and text.isdigit():  # year-only release date
			return date(int(text), 1, 1)
		return date.fromisoformat(text)
	except ValueError as e:
		raise ParseError(f"Movie {name!r} has invalid date {text!r}: {e}") from e


def _parse_int(value, field: str, name: str) -> int:
	if isinstance(value, bool):
		raise ParseError(f"Movie {name!r} has invalid {field} {value!r}")
	if isinstance(value, int):
		return value
	if isinstance(value, float) and value.is_integer():
		return int(value)
	match = _RE_LEADING_INT.match(_scalar_text(value))
	if not match:
		raise ParseError(f"Movie {name!r} has invalid {field} {value!r}")
	return int(match.group(1))


def _parse_float(value, field: str, name: str) -> float:
	try:
		return float(_scalar_text(value) if isinstance(value, (list, tuple)) else value)
	except (TypeError, ValueError) as e:
		raise ParseError(f"Movie {name!r} has invalid {field} {value!r}") from e
