"""
Movie catalog client.
Issues search or discover requests against the TMDB v3 API and turns every
outcome into a QueryOutcome; failures never raise out of query().
"""

from typing import Any, Dict, List, Optional  # type hints
from urllib.parse import quote  # percent-encoding of search terms

# HTTP client used for all outbound calls
import requests  # blocking HTTP session

from loguru import logger  # console logger

from .errors import ApplicationError, ConfigError, TransportError
from .models import Movie, QueryErr, QueryOk, QueryOutcome

DEFAULT_API_BASE_URL = "https://api.themoviedb.org/3"  # TMDB v3 root

# Messages shown to the user when the server gives nothing better
GENERIC_ERROR_MESSAGE = "Error fetching movies. Please try again later."
APPLICATION_ERROR_FALLBACK = "Failed to fetch movies"

# Characters encodeURIComponent leaves as-is (besides alphanumerics and "-_.~")
_URI_COMPONENT_SAFE = "!*'()"


def encode_term(term: str) -> str:
	"""Percent-encode a search term for use as one query-string value."""
	return quote(term, safe=_URI_COMPONENT_SAFE)


class CatalogClient:
	"""
	Thin adapter over the catalog service.
	One attempt per call, no retries, no shared state beyond the HTTP session.
	"""

	def __init__(
		self,
		api_key: str,
		base_url: str = DEFAULT_API_BASE_URL,
		timeout: float = 10.0,
		session: Optional[requests.Session] = None,
	):
		# Configuration problems are fatal for the client
		if not api_key:
			raise ConfigError("Catalog API key is required")
		if not base_url:
			raise ConfigError("Catalog base URL is required")
		self.base_url = base_url.rstrip("/")  # avoid double slashes when joining
		self.timeout = timeout  # per-request timeout in seconds
		self.session = session or requests.Session()  # reused connection pool
		self.headers = {
			"Accept": "application/json",
			"Authorization": f"Bearer {api_key}",
		}

	def endpoint_for(self, term: str) -> str:
		"""Discover mode for an empty term, search mode otherwise."""
		if term:
			return f"{self.base_url}/search/movie?query={encode_term(term)}"
		return f"{self.base_url}/discover/movie?sort_by=popularity.desc"

	def query(self, term: str = "") -> QueryOutcome:
		"""Run one catalog request and report the outcome."""
		endpoint = self.endpoint_for(term)
		mode = "search" if term else "discover"
		logger.debug(f"[Catalog] {mode} request: {endpoint}")
		try:
			payload = self._get_json(endpoint)
			movies = self._parse_results(payload)
		except ApplicationError as e:
			logger.warning(f"[Catalog] Catalog reported failure for term='{term}': {e.message}")
			return QueryErr(message=e.message, kind="application")
		except TransportError as e:
			logger.error(f"[Catalog] Error fetching movies for term='{term}': {e.message}")
			return QueryErr(message=GENERIC_ERROR_MESSAGE, kind="transport")
		logger.info(f"[Catalog] {mode} returned {len(movies)} movies (term='{term}')")
		return QueryOk(movies=movies)

	def _get_json(self, endpoint: str) -> Dict[str, Any]:
		try:
			response = self.session.get(endpoint, headers=self.headers, timeout=self.timeout)
		except requests.RequestException as e:
			raise TransportError(f"Request failed: {e}") from e
		if not response.ok:
			raise TransportError(f"Failed to fetch movies (HTTP {response.status_code})")
		try:
			payload = response.json()
		except ValueError as e:
			raise TransportError(f"Invalid JSON body: {e}") from e
		if not isinstance(payload, dict):
			raise TransportError("Unexpected response body")
		return payload

	def _parse_results(self, payload: Dict[str, Any]) -> List[Movie]:
		# Application-level failure despite HTTP 200
		if payload.get("Response") == "False":
			raise ApplicationError(payload.get("Error") or APPLICATION_ERROR_FALLBACK)
		try:
			return [Movie.from_api(item) for item in payload.get("results") or []]
		except (TypeError, ValueError, AttributeError) as e:
			raise TransportError(f"Unexpected response body: {e}") from e

	def close(self) -> None:
		self.session.close()
