"""
Tests for DataLoader: both file formats, format parity, and load errors.
"""

from pathlib import Path

import pytest

from movie_libra import DataLoader, FormatError, ParseError
from movie_libra.data_loader import normalize_key

DATA = Path(__file__).resolve().parent / 'data'


def write(tmp_path, name, text):
	path = tmp_path / name
	path.write_text(text, encoding='utf-8')
	return path


def test_load_json():
	movies = DataLoader().load(DATA / 'movies.json')
	assert len(movies) == 6
	assert movies[0].name == 'The Shawshank Redemption'
	assert movies[0].director == 'Frank Darabont'


def test_load_csv():
	movies = DataLoader().load(DATA / 'movies.csv')
	assert len(movies) == 6
	assert movies[2].genre == ('Drama', 'Action', 'Crime', 'Thriller')


def test_formats_load_identical_records():
	loader = DataLoader()
	assert loader.load(DATA / 'movies.json') == loader.load(DATA / 'movies.csv')


def test_csv_single_value_cell_stays_scalar():
	raw = DataLoader().load_raw(DATA / 'movies.csv')
	ugly = raw[5]
	assert ugly['genre'] == 'Western'  # no comma, no split
	assert ugly['name'] == ['The Good', ' the Bad and the Ugly']  # split by the reader
	assert DataLoader().build_movies([ugly])[0].name == 'The Good, the Bad and the Ugly'


def test_unsupported_extension(tmp_path):
	path = write(tmp_path, 'movies.txt', 'name\nx\n')
	with pytest.raises(FormatError):
		DataLoader().load(path)


def test_missing_file(tmp_path):
	with pytest.raises(FormatError):
		DataLoader().load(tmp_path / 'nope.json')


def test_extension_is_case_insensitive(tmp_path):
	path = write(tmp_path, 'MOVIES.JSON', (DATA / 'movies.json').read_text(encoding='utf-8'))
	assert len(DataLoader().load(path)) == 6


def test_invalid_json(tmp_path):
	path = write(tmp_path, 'movies.json', '[{"name": ')
	with pytest.raises(ParseError):
		DataLoader().load(path)


def test_json_must_be_array_of_objects(tmp_path):
	with pytest.raises(ParseError):
		DataLoader().load(write(tmp_path, 'a.json', '{"name": "x"}'))
	with pytest.raises(ParseError):
		DataLoader().load(write(tmp_path, 'b.json', '["x"]'))


def test_ragged_csv_row(tmp_path):
	path = write(tmp_path, 'movies.csv', 'name|date|genre\nAlien|1979-05-25\n')
	with pytest.raises(ParseError):
		DataLoader().load(path)


def test_missing_required_field_aborts_load(tmp_path):
	text = 'name|date|genre\nAlien|1979-05-25|Horror\n|1986-07-18|Action\n'
	with pytest.raises(ParseError) as e:
		DataLoader().load(write(tmp_path, 'movies.csv', text))
	assert 'Record 2' in str(e.value)


def test_header_keys_are_normalized(tmp_path):
	text = ' Name |Date|GENRE|Director\nAlien|1979-05-25|Horror,Sci-Fi|\n'
	movies = DataLoader().load(write(tmp_path, 'movies.csv', text))
	assert movies[0].name == 'Alien'
	assert movies[0].genre == ('Horror', 'Sci-Fi')
	assert movies[0].director is None  # empty cell


def test_json_keys_are_normalized(tmp_path):
	path = write(tmp_path, 'movies.json', '[{"Name": "Alien", "Date": "1979-05-25", "Genre": ["Horror"]}]')
	assert DataLoader().load(path)[0].name == 'Alien'


def test_blank_csv_lines_are_ignored(tmp_path):
	text = 'name|date|genre\nAlien|1979-05-25|Horror\n\n'
	assert len(DataLoader().load(write(tmp_path, 'movies.csv', text))) == 1


def test_normalize_key():
	assert normalize_key(' Release Date ') == 'release_date'
	assert normalize_key('Rating (IMDb)') == 'rating_imdb'
