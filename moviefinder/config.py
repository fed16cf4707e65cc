"""
Configuration and logging setup.
Settings come from the process environment (optionally seeded from a .env file)
and are validated once at startup; missing values are fatal.
"""

import os  # environment access
import sys  # stderr sink for loguru
from dataclasses import dataclass  # settings record
from typing import Mapping, Optional  # type hints

from dotenv import load_dotenv  # .env support for local runs
from loguru import logger  # console logger

from .analytics import DEFAULT_IMAGE_BASE_URL, AnalyticsStore  # search analytics client
from .catalog import DEFAULT_API_BASE_URL, CatalogClient  # movie catalog client
from .document_store import DEFAULT_APPWRITE_ENDPOINT, AppwriteCollection, InMemoryCollection
from .errors import ConfigError  # fatal configuration problems


@dataclass
class Settings:
	tmdb_api_key: str
	tmdb_api_base_url: str = DEFAULT_API_BASE_URL
	tmdb_image_base_url: str = DEFAULT_IMAGE_BASE_URL
	appwrite_endpoint: str = DEFAULT_APPWRITE_ENDPOINT
	appwrite_project_id: str = ""
	appwrite_database_id: str = ""
	appwrite_collection_id: str = ""
	appwrite_api_key: str = ""
	analytics_backend: str = "appwrite"  # "appwrite" or "memory"
	debounce_ms: int = 500
	request_timeout: float = 10.0
	log_level: str = "INFO"


def _number(env: Mapping[str, str], key: str, default, cast):
	raw = env.get(key)
	if raw is None or raw.strip() == "":
		return default
	try:
		value = cast(raw)
	except ValueError:
		raise ConfigError(f"{key} must be a number, got {raw!r}")
	if value < 0:
		raise ConfigError(f"{key} must not be negative, got {raw!r}")
	return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
	"""
	Read and validate settings.
	When no mapping is given, a .env file in the working directory is loaded
	first (existing variables win) and os.environ is used.
	"""
	if environ is None:
		load_dotenv()  # no-op when there is no .env file
		environ = os.environ

	api_key = environ.get("TMDB_API_KEY", "").strip()
	if not api_key:
		raise ConfigError("TMDB_API_KEY is not set")

	backend = environ.get("ANALYTICS_BACKEND", "appwrite").strip().lower() or "appwrite"
	if backend not in ("appwrite", "memory"):
		raise ConfigError(f"ANALYTICS_BACKEND must be 'appwrite' or 'memory', got {backend!r}")

	settings = Settings(
		tmdb_api_key=api_key,
		tmdb_api_base_url=environ.get("TMDB_API_BASE_URL") or DEFAULT_API_BASE_URL,
		tmdb_image_base_url=environ.get("TMDB_IMAGE_BASE_URL") or DEFAULT_IMAGE_BASE_URL,
		appwrite_endpoint=environ.get("APPWRITE_ENDPOINT") or DEFAULT_APPWRITE_ENDPOINT,
		appwrite_project_id=environ.get("APPWRITE_PROJECT_ID", "").strip(),
		appwrite_database_id=environ.get("APPWRITE_DATABASE_ID", "").strip(),
		appwrite_collection_id=environ.get("APPWRITE_COLLECTION_ID", "").strip(),
		appwrite_api_key=environ.get("APPWRITE_API_KEY", "").strip(),
		analytics_backend=backend,
		debounce_ms=_number(environ, "DEBOUNCE_MS", 500, int),
		request_timeout=_number(environ, "REQUEST_TIMEOUT", 10.0, float),
		log_level=(environ.get("LOG_LEVEL") or "INFO").upper(),
	)

	if backend == "appwrite":
		missing = [
			name for name, value in (
				("APPWRITE_PROJECT_ID", settings.appwrite_project_id),
				("APPWRITE_DATABASE_ID", settings.appwrite_database_id),
				("APPWRITE_COLLECTION_ID", settings.appwrite_collection_id),
			)
			if not value
		]
		if missing:
			raise ConfigError(f"Missing Appwrite settings: {', '.join(missing)}")
	return settings


def configure_logging(level: str = "INFO", sink=None) -> None:
	"""Replace loguru's default sink with one sink (stderr unless given) at the given level."""
	logger.remove()  # drop the default DEBUG sink
	logger.add(sink if sink is not None else sys.stderr, level=level)


def build_catalog_client(settings: Settings) -> CatalogClient:
	return CatalogClient(
		api_key=settings.tmdb_api_key,
		base_url=settings.tmdb_api_base_url,
		timeout=settings.request_timeout,
	)


def build_analytics_store(settings: Settings) -> AnalyticsStore:
	"""Pick the document backend named in the settings and wrap it."""
	if settings.analytics_backend == "memory":
		logger.info("[Config] Using in-memory analytics backend (counts are not persisted)")
		collection = InMemoryCollection()
	else:
		collection = AppwriteCollection(
			endpoint=settings.appwrite_endpoint,
			project_id=settings.appwrite_project_id,
			database_id=settings.appwrite_database_id,
			collection_id=settings.appwrite_collection_id,
			api_key=settings.appwrite_api_key or None,
			timeout=settings.request_timeout,
		)
	return AnalyticsStore(collection, image_base_url=settings.tmdb_image_base_url)
