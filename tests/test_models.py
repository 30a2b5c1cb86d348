"""
Unit tests for Movie.from_raw: coercion rules and immutability.
"""

from dataclasses import FrozenInstanceError
from datetime import date

import pytest

from movie_libra import ACTORS_CAP, Movie, ParseError


def raw(**overrides):
	data = {
		'name': 'The Shawshank Redemption',
		'year': '1994',
		'country': 'US',
		'date': '1994-09-23',
		'genre': ['Drama', 'Crime'],
		'duration': '142',
		'rating': '8.7',
		'director': 'Frank Darabont',
		'actors': ['Tim Robbins', 'Morgan Freeman'],
		'link': 'http://www.imdb.com/title/tt0111161',
	}
	data.update(overrides)
	return data


def test_numbers_and_dates_are_coerced():
	movie = Movie.from_raw(raw())
	assert movie.year == 1994
	assert movie.duration == 142
	assert movie.rating == 8.7
	assert movie.date == date(1994, 9, 23)
	assert movie.genre == ('Drama', 'Crime')
	assert movie.actors == ('Tim Robbins', 'Morgan Freeman')


def test_duration_with_unit_suffix():
	assert Movie.from_raw(raw(duration='142 min')).duration == 142


def test_year_falls_back_to_release_date():
	assert Movie.from_raw(raw(year=None)).year == 1994


def test_year_only_release_date():
	movie = Movie.from_raw(raw(date='1994'))
	assert movie.date == date(1994, 1, 1)


def test_scalar_genre_becomes_tuple():
	assert Movie.from_raw(raw(genre='Western')).genre == ('Western',)


def test_genre_duplicates_and_order_preserved():
	assert Movie.from_raw(raw(genre=['Drama', 'Crime', 'Drama'])).genre == ('Drama', 'Crime', 'Drama')


def test_split_title_is_joined_back():
	movie = Movie.from_raw(raw(name=['The Good', ' the Bad and the Ugly']))
	assert movie.name == 'The Good, the Bad and the Ugly'


def test_country_list_keeps_first():
	assert Movie.from_raw(raw(country=['US', 'GB'])).country == 'US'


def test_missing_director_is_none():
	assert Movie.from_raw(raw(director='')).director is None
	assert Movie.from_raw(raw(director=None)).director is None


def test_actors_truncated_to_cap():
	actors = [f"Actor {i}" for i in range(ACTORS_CAP + 3)]
	assert Movie.from_raw(raw(actors=actors)).actors == tuple(actors[:ACTORS_CAP])


@pytest.mark.parametrize('field', ['name', 'date', 'genre'])
def test_required_fields(field):
	with pytest.raises(ParseError):
		Movie.from_raw(raw(**{field: None}))


def test_invalid_values_raise_parse_error():
	with pytest.raises(ParseError):
		Movie.from_raw(raw(date='23/09/1994'))
	with pytest.raises(ParseError):
		Movie.from_raw(raw(duration='long'))
	with pytest.raises(ParseError):
		Movie.from_raw(raw(duration=-1))
	with pytest.raises(ParseError):
		Movie.from_raw(raw(rating='great'))


def test_movie_is_immutable():
	movie = Movie.from_raw(raw())
	with pytest.raises(FrozenInstanceError):
		movie.name = 'Other'


def test_to_dict_uses_symbolic_keys():
	data = Movie.from_raw(raw()).to_dict()
	assert list(data) == ['link', 'name', 'year', 'country', 'date', 'genre', 'duration', 'rating', 'director', 'actors']
	assert data['date'] == '1994-09-23'
	assert data['genre'] == ['Drama', 'Crime']


@pytest.mark.parametrize('duration', ['142.5', 142.5, '142.5 min'])
def test_fractional_duration_is_rejected(duration):
	with pytest.raises(ParseError):
		Movie.from_raw(raw(duration=duration))


@pytest.mark.parametrize('duration', ['142.0', 142.0, '142min'])
def test_whole_number_duration_forms(duration):
	assert Movie.from_raw(raw(duration=duration)).duration == 142
