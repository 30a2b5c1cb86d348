"""
Data loading module.
Reads a movie collection from JSON or pipe-delimited CSV and normalizes
every row into a Movie record.
"""

# Standard libs for JSON/CSV parsing, regex, typing, and paths
import csv  # pipe-delimited tabular files
import json  # structured-text files
import re  # header key normalization
from typing import Any, Callable, Dict, Iterable, List, Mapping  # type hints
from pathlib import Path  # filesystem-safe paths

# Import our Movie data class used across the project
from .models import Movie  # structured movie record
from .errors import FormatError, ParseError  # loader failure kinds

# Console logging
from loguru import logger  # console logger

RawMovie = Dict[str, Any]  # one movie as read from disk, symbolic keys

_RE_SPACES = re.compile(r"\s+")  # runs of whitespace in header names
_RE_NON_WORD = re.compile(r"[^\w]")  # anything that cannot be in a key


def normalize_key(key: str) -> str:
	"""
	Turn a header/object key into the symbolic field name:
	"Release Date " -> "release_date", "Name" -> "name".
	"""
	key = _RE_SPACES.sub('_', str(key).strip().lower())  # lower and snake
	return _RE_NON_WORD.sub('', key)  # drop punctuation


def normalize_keys(data: Mapping[str, Any]) -> RawMovie:
	"""Apply normalize_key to every key of a raw mapping."""
	return {normalize_key(k): v for k, v in data.items()}


class DataLoader:
	"""
	Handles loading of movie collections from disk.
	Each supported extension maps to a raw loader (path -> list of mappings);
	all raw loaders feed one shared normalization step.
	"""

	DELIMITER = '|'  # tabular column separator
	LIST_SEPARATOR = ','  # cells containing this become lists

	def __init__(self):
		"""Set up the extension -> raw loader table."""
		self.raw_loaders: Dict[str, Callable[[Path], List[RawMovie]]] = {
			'.json': self._load_json,  # array of objects
			'.csv': self._load_csv,  # pipe-delimited with header
		}

	@property
	def formats(self) -> List[str]:
		"""Supported file extensions."""
		return sorted(self.raw_loaders)

	def load(self, path) -> List[Movie]:
		"""
		Load a movie file and return Movie objects in file order.
		Raises FormatError for a missing file or unknown extension and
		ParseError for malformed content; nothing is returned partially.
		"""
		raw_movies = self.load_raw(path)  # list of symbolic-key mappings
		movies = self.build_movies(raw_movies)  # shared normalization
		logger.info(f"[DataLoader] Successfully loaded {len(movies)} movies.")  # summary
		return movies

	def load_raw(self, path) -> List[RawMovie]:
		"""Read a file into raw mappings without building Movie objects."""
		filepath = Path(path)  # normalize path
		extension = filepath.suffix.lower()  # ".JSON" counts as ".json"

		# Validate the file presence and format before touching its content
		if not filepath.is_file() or extension not in self.raw_loaders:
			raise FormatError(f"File {filepath} not found or has an unsupported format (expected one of {self.formats}).")

		logger.info(f"[DataLoader] Loading movies from {filepath}...")  # log action
		raw_loader = self.raw_loaders[extension]  # pick strategy by extension
		return [normalize_keys(row) for row in raw_loader(filepath)]

	def build_movies(self, raw_movies: Iterable[Mapping[str, Any]]) -> List[Movie]:
		"""Normalize raw mappings into Movie objects; any bad row aborts the load."""
		movies = []  # accumulator for parsed Movie objects
		for index, data in enumerate(raw_movies, 1):  # keep position for diagnostics
			if isinstance(data, Movie):  # already normalized (e.g. re-wrapped collection)
				movies.append(data)
				continue
			try:
				movies.append(Movie.from_raw(normalize_keys(data)))  # dict -> Movie
			except ParseError as e:
				raise ParseError(f"Record {index}: {e}") from e
		return movies

	def _load_json(self, filepath: Path) -> List[RawMovie]:
		"""Parse a JSON array of objects."""
		try:
			with open(filepath, 'r', encoding='utf-8') as f:
				data = json.load(f)  # whole document at once
		except (json.JSONDecodeError, UnicodeDecodeError) as e:
			raise ParseError(f"Invalid JSON in {filepath}: {e}") from e

		# Top level must be a list of objects
		if not isinstance(data, list):
			raise ParseError(f"Expected a JSON array in {filepath}, got {type(data).__name__}")
		for index, item in enumerate(data, 1):
			if not isinstance(item, dict):
				raise ParseError(f"Expected an object at position {index} in {filepath}, got {type(item).__name__}")
		return data

	def _load_csv(self, filepath: Path) -> List[RawMovie]:
		"""
		Parse a pipe-delimited file with a header row.
		Cells containing a comma are split into lists; everything else stays text.
		"""
		rows = []  # parsed rows
		try:
			with open(filepath, 'r', encoding='utf-8', newline='') as f:
				reader = csv.reader(f, delimiter=self.DELIMITER)
				header = next(reader, None)  # first row names the fields
				if not header:
					raise ParseError(f"Missing header row in {filepath}")
				keys = [normalize_key(h) for h in header]

				for line_num, cells in enumerate(reader, 2):  # header is line 1
					if not any(cell.strip() for cell in cells):  # blank line
						continue
					if len(cells) != len(keys):  # ragged row
						raise ParseError(f"Line {line_num} of {filepath} has {len(cells)} cells, expected {len(keys)}")
					rows.append({key: self._convert_cell(cell) for key, cell in zip(keys, cells)})
		except (csv.Error, UnicodeDecodeError) as e:
			raise ParseError(f"Invalid CSV in {filepath}: {e}") from e
		return rows

	def _convert_cell(self, cell: str):
		"""Empty -> None, "a,b" -> ["a", "b"], anything else unchanged."""
		if cell == '':
			return None
		if self.LIST_SEPARATOR in cell:
			return cell.split(self.LIST_SEPARATOR)
		return cell


def load(path) -> List[Movie]:
	"""Shortcut for DataLoader().load(path)."""
	return DataLoader().load(path)
