"""
Tests for the JSON/CSV writers: what they write loads back unchanged.
"""

from pathlib import Path

from movie_libra import DataLoader, Movie
from movie_libra.export import export_csv, export_json

DATA = Path(__file__).resolve().parent / 'data'


def fetched_record():
	# shape produced by TmdbFetcher.flatten
	return {
		'link': None,
		'name': 'Metropolis',
		'year': 1927,
		'country': 'DE',
		'date': '1927-02-06',
		'genre': ['Drama', 'Science Fiction'],
		'duration': 153,
		'rating': 8.2,
		'director': None,
		'actors': ['Brigitte Helm'],
	}


def test_export_round_trip_both_formats(tmp_path):
	loader = DataLoader()
	movies = loader.load(DATA / 'movies.json')
	json_path = export_json(movies, tmp_path / 'out.json')
	csv_path = export_csv(movies, tmp_path / 'out.csv')
	assert loader.load(json_path) == movies
	assert loader.load(csv_path) == movies


def test_export_raw_records(tmp_path):
	expected = [Movie.from_raw(fetched_record())]
	loader = DataLoader()
	assert loader.load(export_csv([fetched_record()], tmp_path / 'raw.csv')) == expected
	assert loader.load(export_json([fetched_record()], tmp_path / 'raw.json')) == expected


def test_csv_layout(tmp_path):
	path = export_csv([fetched_record()], tmp_path / 'nested' / 'raw.csv')
	lines = path.read_text(encoding='utf-8').splitlines()
	assert lines[0] == 'link|name|year|country|date|genre|duration|rating|director|actors'
	assert lines[1] == '|Metropolis|1927|DE|1927-02-06|Drama,Science Fiction|153|8.2||Brigitte Helm'
