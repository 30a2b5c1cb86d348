"""
Fetch the top-rated movies from TMDb and save them for MovieLibra.

This script:
1) Reads settings (TMDB_API_KEY, MOVIE_LIBRA_MOVIE_COUNT, MOVIE_LIBRA_FETCH_ON_ERROR)
2) Fetches top-rated ids, then details + credits for each movie
3) Validates the results by building a MovieList from them
4) Saves data/movies.json and data/movies.csv

Usage:
    python -m scripts.fetch_movies

The API loads data/movies.json by default (see MOVIE_LIBRA_DATA_PATH).
"""

import time  # measure step timings
from pathlib import Path  # filesystem-safe paths

from loguru import logger  # console logging

from movie_libra import MovieList  # validation of fetched records
from movie_libra.config import configure_logging, load_settings  # env settings
from movie_libra.export import export_csv, export_json  # writers
from movie_libra.tmdb_fetcher import TmdbFetcher  # TMDb client


def main():
	settings = load_settings()  # env + .env
	configure_logging(settings.log_level)  # apply log level

	# Headline banner for visibility in console
	logger.info("=" * 60)
	logger.info("Fetch Top Rated Movies")
	logger.info("=" * 60)

	if not settings.tmdb_api_key:
		logger.error("TMDB_API_KEY is not set; add it to the environment or .env")
		raise SystemExit(1)

	# Resolve project root and output paths
	root = Path(__file__).resolve().parents[1]  # project root
	data_dir = root / 'data'  # output directory

	# 1) Fetch
	logger.info(f"[1/3] Fetching {settings.movie_count} movies (on_error={settings.fetch_on_error})...")
	t0 = time.time()  # start timer
	fetcher = TmdbFetcher(
		settings.tmdb_api_key,
		movie_count=settings.movie_count,
		on_error=settings.fetch_on_error,
	)
	records = fetcher.run()  # raw mappings
	logger.info(f"[OK] Fetched {len(records)} movies in {time.time() - t0:.2f}s")

	# 2) Validate: every record must normalize cleanly
	logger.info("[2/3] Validating records...")
	movies = MovieList.from_records(records)  # raises ParseError on bad data
	logger.info(f"[OK] {len(movies)} valid movies")

	# 3) Save both formats
	logger.info("[3/3] Saving...")
	export_json(movies, data_dir / 'movies.json')
	export_csv(movies, data_dir / 'movies.csv')
	logger.info("[OK] Saved.")  # done
	logger.info("=" * 60)


if __name__ == '__main__':
	main()  # invoke fetcher
