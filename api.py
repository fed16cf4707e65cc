"""
FastAPI server exposing the movie finder.
Endpoints:
- GET /health: basic health check
- GET /movies?query=...: popular movies for an empty query, matches otherwise
- GET /trending: most searched terms with their poster

Startup reads settings from the environment (.env supported) and builds the
catalog and analytics clients once.
"""

# Import standard libraries for timing
import time  # measure startup and request latencies
from typing import List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for response models
from fastapi import FastAPI, HTTPException, Query  # FastAPI primitives
from pydantic import BaseModel  # response schema definitions

# Import our internal modules for settings and the two clients
from moviefinder.analytics import AnalyticsStore  # search analytics
from moviefinder.catalog import CatalogClient  # movie catalog
from moviefinder.config import build_analytics_store, build_catalog_client, configure_logging, load_settings
from moviefinder.models import QueryErr  # failed catalog outcome

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Instantiate the FastAPI application with metadata
app = FastAPI(title="Movie Finder API", version="1.0.0")  # web app

# Globals that hold the clients and measured startup time
CATALOG: Optional[CatalogClient] = None  # catalog client, set at startup
ANALYTICS: Optional[AnalyticsStore] = None  # analytics client, set at startup
IMAGE_BASE_URL: str = "https://image.tmdb.org/t/p/w500"  # poster host prefix
STARTUP_TIME_S: float = 0.0  # measures how long startup took


# Pydantic model that describes the shape of a single movie in responses
class MovieOut(BaseModel):
	id: int  # catalog id
	title: str  # display title
	poster_url: str  # full poster URL or placeholder
	rating: str  # one decimal or N/A
	original_language: str  # ISO code
	year: str  # release year or N/A


# Pydantic model for the complete search response payload
class MoviesResponse(BaseModel):
	query: str  # original query string
	elapsed_ms: float  # server-side time in ms
	results: List[MovieOut]  # movies in catalog order


# Pydantic model for one trending entry
class TrendingOut(BaseModel):
	rank: int  # 1-based position
	term: str  # searched term
	count: int  # number of searches
	movie_id: int  # representative movie
	poster_url: str  # poster of the representative movie


# FastAPI startup hook to initialize the clients once
@app.on_event("startup")
async def startup_event():
	"""Load settings and build the catalog and analytics clients."""
	global CATALOG, ANALYTICS, IMAGE_BASE_URL, STARTUP_TIME_S  # refer to module-level globals
	start = time.time()  # start timer for startup latency

	settings = load_settings()  # ConfigError here aborts startup
	configure_logging(settings.log_level)  # apply configured level
	logger.info("[API] Startup: building catalog and analytics clients...")  # log intent

	CATALOG = build_catalog_client(settings)  # TMDB client
	ANALYTICS = build_analytics_store(settings)  # Appwrite or in-memory store
	IMAGE_BASE_URL = settings.tmdb_image_base_url  # used for poster URLs

	STARTUP_TIME_S = time.time() - start  # elapsed seconds
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s (analytics backend: {settings.analytics_backend}).")


# Simple health endpoint for readiness checks
@app.get("/health")
async def health():
	"""Return minimal health info for liveness/readiness probes."""
	return {
		"status": "ok",  # constant indicator
		"catalog_ready": CATALOG is not None,  # True if client initialized
		"analytics_ready": ANALYTICS is not None,  # True if store initialized
		"startup_seconds": round(STARTUP_TIME_S, 2)  # startup latency
	}


# Main listing endpoint: discover mode for an empty query, search mode otherwise
@app.get("/movies", response_model=MoviesResponse)
def movies(query: str = Query("", description="Search term; empty for popular movies")):
	"""Run one catalog query and count the search when it found something."""
	if CATALOG is None:  # clients must be ready to serve
		logger.warning("[API] /movies requested but catalog not initialized")  # guard log
		raise HTTPException(status_code=503, detail="Catalog not initialized")

	start = time.time()  # start timer
	logger.debug(f"[API] /movies query='{query}'")  # debug log of input
	outcome = CATALOG.query(query)  # single attempt, never raises
	if isinstance(outcome, QueryErr):
		raise HTTPException(status_code=502, detail=outcome.message)  # surface catalog message

	# Count the search only for a real term with at least one match
	if query and outcome.movies and ANALYTICS is not None:
		ANALYTICS.record_search(query, outcome.movies[0])  # best effort, never raises

	elapsed_ms = (time.time() - start) * 1000  # compute ms
	logger.info(f"[API] /movies served {len(outcome.movies)} results in {elapsed_ms:.2f} ms")  # summary

	items = [
		MovieOut(
			id=m.id,
			title=m.title,
			poster_url=m.poster_url(IMAGE_BASE_URL),
			rating=m.rating_label,
			original_language=m.original_language,
			year=m.release_year,
		)
		for m in outcome.movies
	]
	return MoviesResponse(query=query, elapsed_ms=round(elapsed_ms, 2), results=items)


# Trending endpoint: empty list when the store is unavailable
@app.get("/trending", response_model=List[TrendingOut])
def trending():
	"""Return the most searched terms, best first."""
	if ANALYTICS is None:
		return []
	records = ANALYTICS.fetch_trending() or []  # None means the store failed
	return [
		TrendingOut(rank=i, term=t.term, count=t.count, movie_id=t.movie_id, poster_url=t.poster_url)
		for i, t in enumerate(records, start=1)
	]
