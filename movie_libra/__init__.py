"""
MovieLibra: load a movie collection from JSON/CSV and query it in memory.
"""

from .errors import (
	MovieLibraError,
	FormatError,
	ParseError,
	UnknownAlgorithm,
	UnknownFilter,
	FetchError,
	FetchTransportError,
	FetchParseError,
)
from .models import Movie, ACTORS_CAP
from .data_loader import DataLoader
from .movie_list import MovieList
from .defaults import register_defaults

__all__ = [
	'MovieLibraError',
	'FormatError',
	'ParseError',
	'UnknownAlgorithm',
	'UnknownFilter',
	'FetchError',
	'FetchTransportError',
	'FetchParseError',
	'Movie',
	'ACTORS_CAP',
	'DataLoader',
	'MovieList',
	'register_defaults',
]
