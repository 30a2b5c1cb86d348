"""
FastAPI server exposing read-only queries over the movie collection.
Endpoints:
- GET /health: basic health check
- GET /movies?sort=...&genre=...&country=...&director=...: filtered/sorted listing
- GET /movies/find?name=...: case-insensitive lookup by title
- GET /movies/longest?n=10: the n longest movies
- GET /genres/{genre}: movies of a genre, oldest first
- GET /directors, GET /directors/{director}
- GET /stats/directors, /stats/actors, /stats/months, /stats/skip_country?country=...

Startup loads the collection from MOVIE_LIBRA_DATA_PATH (default data/movies.json)
and registers the default sort algorithms and filters.
"""

# Import standard libraries for timing
import time  # measure startup latency
import datetime  # release dates in responses
from typing import Dict, List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for response models
from fastapi import FastAPI, HTTPException, Query  # FastAPI primitives
from pydantic import BaseModel  # response schema definitions

# Import our internal modules for loading and querying
from movie_libra import MovieList, Movie, UnknownAlgorithm, UnknownFilter, register_defaults
from movie_libra.config import configure_logging, load_settings

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Instantiate the FastAPI application with metadata
app = FastAPI(title="MovieLibra API", version="1.0.0")  # web app

# Globals that hold the collection and measured startup time
MOVIES: Optional[MovieList] = None  # will point to the loaded collection
STARTUP_TIME_S: float = 0.0  # measures how long startup took


# Pydantic model that describes the shape of a single movie in responses
class MovieOut(BaseModel):
	name: str  # display title
	year: int  # release year
	country: Optional[str] = None  # production country code
	date: datetime.date  # full release date
	genre: List[str]  # genre labels
	duration: int  # minutes
	rating: float  # average vote
	director: Optional[str] = None  # director name if present
	actors: List[str]  # top billed cast
	link: Optional[str] = None  # detail page

	@classmethod
	def from_movie(cls, m: Movie) -> 'MovieOut':
		return cls(
			name=m.name,
			year=m.year,
			country=m.country,
			date=m.date,
			genre=list(m.genre),
			duration=m.duration,
			rating=m.rating,
			director=m.director,
			actors=list(m.actors),
			link=m.link,
		)


# Pydantic model for list responses
class MovieListResponse(BaseModel):
	count: int  # number of movies returned
	movies: List[MovieOut]  # the movies themselves


# Pydantic model for name -> count statistics
class CountsResponse(BaseModel):
	counts: Dict[str, int]  # ordered as the engine returned them


def _collection() -> MovieList:
	"""Return the loaded collection or fail with 503 while not ready."""
	if MOVIES is None:  # startup has not run or failed
		logger.warning("[API] Query requested but collection not loaded")  # guard log
		raise HTTPException(status_code=503, detail="Movie collection not loaded")
	return MOVIES


def _listing(movies: List[Movie]) -> MovieListResponse:
	return MovieListResponse(count=len(movies), movies=[MovieOut.from_movie(m) for m in movies])


# FastAPI startup hook to load the collection once
@app.on_event("startup")
async def startup_event():
	"""Load the collection and register the default algorithms/filters."""
	global MOVIES, STARTUP_TIME_S  # refer to module-level globals
	start = time.time()  # start timer for startup latency

	settings = load_settings()  # env + .env
	configure_logging(settings.log_level)  # apply log level
	logger.info(f"[API] Startup: loading movies from {settings.data_path}...")  # log intent

	MOVIES = register_defaults(MovieList(settings.data_path))  # load + configure

	STARTUP_TIME_S = time.time() - start  # elapsed seconds
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s with {len(MOVIES)} movies.")  # summary log


# Simple health endpoint for readiness checks
@app.get("/health")
async def health():
	"""Return minimal health info for liveness/readiness probes."""
	return {
		"status": "ok",  # constant indicator
		"collection_ready": MOVIES is not None,  # True if loaded
		"movies": len(MOVIES) if MOVIES is not None else 0,  # collection size
		"startup_seconds": round(STARTUP_TIME_S, 2)  # startup latency
	}


@app.get("/movies", response_model=MovieListResponse)
async def list_movies(
	sort: Optional[str] = Query(None, description="Registered sort algorithm name"),
	genre: Optional[List[str]] = Query(None, description="Movie must have every genre given"),
	country: Optional[str] = None,
	director: Optional[str] = None,
):
	"""Filter with the registered filters, then sort with a registered algorithm."""
	movies = _collection()
	criteria = {}  # insertion order is application order
	if genre:
		criteria['genres'] = genre
	if country:
		criteria['country'] = country
	if director:
		criteria['director'] = director
	logger.debug(f"[API] /movies sort={sort} criteria={criteria}")  # debug log of input

	try:
		result = movies.filter(criteria)
		if sort:
			order = {id(m): i for i, m in enumerate(movies.sorted_by(sort))}  # position in sorted order
			result = sorted(result, key=lambda m: order[id(m)])
	except (UnknownAlgorithm, UnknownFilter) as e:
		raise HTTPException(status_code=400, detail=str(e)) from e
	return _listing(result)


@app.get("/movies/find", response_model=MovieOut)
async def find_movie(name: str = Query(..., description="Movie title, any case")):
	"""Case-insensitive exact title lookup."""
	if not name.strip():
		raise HTTPException(status_code=422, detail="Movie name cannot be empty")
	movie = _collection().find(name)
	if movie is None:
		raise HTTPException(status_code=404, detail=f"Movie {name!r} not found")
	return MovieOut.from_movie(movie)


@app.get("/movies/longest", response_model=MovieListResponse)
async def longest(n: int = Query(10, ge=0)):
	"""The n longest movies, shortest of them first."""
	return _listing(_collection().longest(n))


@app.get("/genres/{genre}", response_model=MovieListResponse)
async def by_genre(genre: str):
	"""Movies of one genre sorted by release date."""
	return _listing(_collection().select_by_genre(genre))


@app.get("/directors", response_model=List[str])
async def directors():
	"""Distinct directors ordered by last name."""
	return _collection().directors()


@app.get("/directors/{director}", response_model=List[str])
async def movies_by_director(director: str):
	"""Titles by one director."""
	return _collection().by_director(director)


@app.get("/stats/directors", response_model=CountsResponse)
async def count_by_director():
	return CountsResponse(counts=_collection().count_by_director())


@app.get("/stats/actors", response_model=CountsResponse)
async def count_by_actor():
	return CountsResponse(counts=_collection().count_by_actor())


@app.get("/stats/months", response_model=CountsResponse)
async def month_stats():
	"""Release month -> count; months without releases are omitted."""
	return CountsResponse(counts={str(k): v for k, v in _collection().month_stats().items()})


@app.get("/stats/skip_country")
async def skip_country(country: str = Query(...)):
	"""Number of movies not made in `country`."""
	return {"country": country, "count": _collection().skip_country(country)}
