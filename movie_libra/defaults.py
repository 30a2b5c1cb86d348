"""
Default sort algorithms and filters.
MovieList ships with empty tables; applications call register_defaults()
(or register their own) before querying.
"""

from typing import Optional

from .models import Movie


def by_year(movie: Movie):
	return movie.year


def by_genres_years(movie: Movie):
	# composite key: genre labels first, then year
	return (movie.genre, movie.year)


def by_rating(movie: Movie):
	return movie.rating


def by_duration(movie: Movie):
	return movie.duration


def by_name(movie: Movie):
	return movie.name.casefold()


def by_date(movie: Movie):
	return movie.date


SORT_ALGORITHMS = {
	'years': by_year,
	'genres_years': by_genres_years,
	'rating': by_rating,
	'duration': by_duration,
	'name': by_name,
	'date': by_date,
}


def has_genres(movie: Movie, *genres: str) -> bool:
	"""Movie carries every one of `genres`."""
	return movie.has_genres(*genres)


def has_any_genre(movie: Movie, *genres: str) -> bool:
	return any(g in movie.genre for g in genres)


def released_between(movie: Movie, start: int, end: Optional[int] = None) -> bool:
	"""Inclusive year range; a single year means exactly that year."""
	if end is None:
		end = start
	return start <= movie.year <= end


def made_in(movie: Movie, country: str) -> bool:
	return movie.country == country


def directed_by(movie: Movie, *directors: str) -> bool:
	return movie.director in directors


def starring(movie: Movie, *actors: str) -> bool:
	"""Every given actor is in the cast."""
	return all(a in movie.actors for a in actors)


def rated_at_least(movie: Movie, minimum: float) -> bool:
	return movie.rating >= float(minimum)


FILTERS = {
	'genres': has_genres,
	'genre': has_genres,  # singular alias
	'any_genre': has_any_genre,
	'years': released_between,
	'country': made_in,
	'director': directed_by,
	'actor': starring,
	'min_rating': rated_at_least,
}


def register_defaults(movie_list):
	"""Install every built-in algorithm and filter on `movie_list` and return it."""
	for name, fn in SORT_ALGORITHMS.items():
		movie_list.register_sort(name, fn)
	for name, fn in FILTERS.items():
		movie_list.register_filter(name, fn)
	return movie_list
