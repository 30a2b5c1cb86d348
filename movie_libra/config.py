"""
Configuration.
Values come from environment variables (optionally a .env file at the
project root) with sensible defaults for local use.
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

BASE_DIR = Path(__file__).resolve().parents[1]  # project root

DEFAULT_DATA_PATH = 'data/movies.json'
DEFAULT_MOVIE_COUNT = 250
DEFAULT_ON_ERROR = 'raise'
DEFAULT_LOG_LEVEL = 'INFO'


@dataclass(frozen=True)
class Settings:
	"""Runtime settings for the API and the fetch script."""
	tmdb_api_key: Optional[str] = None
	data_path: str = DEFAULT_DATA_PATH
	movie_count: int = DEFAULT_MOVIE_COUNT
	fetch_on_error: str = DEFAULT_ON_ERROR
	log_level: str = DEFAULT_LOG_LEVEL

	def __post_init__(self):
		if self.movie_count <= 0:
			raise ValueError(f"movie_count must be positive, got {self.movie_count}")


def _int_env(name: str, default: int) -> int:
	raw = os.getenv(name)
	if raw is None or not raw.strip():
		return default
	try:
		return int(raw)
	except ValueError as e:
		raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def load_settings(env_file: Optional[Path] = None) -> Settings:
	"""Read Settings from the environment; a .env file fills in unset variables."""
	load_dotenv(env_file or BASE_DIR / '.env')  # missing file is fine
	return Settings(
		tmdb_api_key=os.getenv('TMDB_API_KEY') or None,
		data_path=os.getenv('MOVIE_LIBRA_DATA_PATH') or DEFAULT_DATA_PATH,
		movie_count=_int_env('MOVIE_LIBRA_MOVIE_COUNT', DEFAULT_MOVIE_COUNT),
		fetch_on_error=os.getenv('MOVIE_LIBRA_FETCH_ON_ERROR') or DEFAULT_ON_ERROR,
		log_level=(os.getenv('MOVIE_LIBRA_LOG_LEVEL') or DEFAULT_LOG_LEVEL).upper(),
	)


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
	"""Replace loguru's default sink with a stderr sink at `level`."""
	logger.remove()
	logger.add(sys.stderr, level=level)
