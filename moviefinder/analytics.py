"""
Search analytics client.
Keeps one record per distinct search term with a running count, and reads back
the most searched terms as the trending list. Best effort: errors are logged
and never reach the caller.
"""

from typing import List, Optional  # type hints

from loguru import logger  # console logger

from .document_store import DocumentCollection  # backend interface
from .errors import AnalyticsError, StoreError, TrendingLoadError
from .models import Movie, SearchTerm

DEFAULT_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"  # TMDB poster host
TRENDING_LIMIT = 5  # size of the trending list


class AnalyticsStore:
	def __init__(
		self,
		collection: DocumentCollection,
		image_base_url: str = DEFAULT_IMAGE_BASE_URL,
		trending_limit: int = TRENDING_LIMIT,
	):
		self.collection = collection  # document backend
		self.image_base_url = image_base_url  # prefix for poster URLs
		self.trending_limit = trending_limit  # number of trending records

	def poster_url_for(self, movie: Movie) -> str:
		# A missing poster path yields the bare prefix; stored as-is
		return f"{self.image_base_url}{movie.poster_path or ''}"

	def record_search(self, term: str, top_movie: Movie) -> None:
		"""
		Count one search of `term`.
		Existing record: count + 1 (read-then-write, concurrent callers may
		under-count). New term: create a record with count 1 pointing at the
		top result.
		"""
		try:
			self._upsert(term, top_movie)
		except AnalyticsError as e:
			logger.error(f"[Analytics] Could not record search for '{term}': {e}")
		except Exception:
			logger.exception(f"[Analytics] Unexpected error recording search for '{term}'")

	def _upsert(self, term: str, top_movie: Movie) -> None:
		try:
			existing = self.collection.list_documents(equal={"searchTerm": term})
			if existing:
				doc = existing[0]
				new_count = int(doc.get("count", 0)) + 1
				self.collection.update_document(doc["$id"], {"count": new_count})
				logger.debug(f"[Analytics] '{term}' searched {new_count} times")
			else:
				self.collection.create_document({
					"searchTerm": term,
					"count": 1,
					"movie_id": top_movie.id,
					"poster_url": self.poster_url_for(top_movie),
				})
				logger.debug(f"[Analytics] New search term '{term}' (movie_id={top_movie.id})")
		except StoreError as e:
			raise AnalyticsError(str(e)) from e

	def fetch_trending(self) -> Optional[List[SearchTerm]]:
		"""Top searched terms by count, or None when the store is unavailable."""
		try:
			trending = [SearchTerm.from_document(doc) for doc in self._load_trending()]
		except TrendingLoadError as e:
			logger.error(f"[Analytics] Error fetching trending movies: {e}")
			return None
		except Exception:
			logger.exception("[Analytics] Unexpected error loading trending movies")
			return None
		logger.info(f"[Analytics] Loaded {len(trending)} trending terms")
		return trending

	def _load_trending(self) -> List[dict]:
		try:
			return self.collection.list_documents(order_desc="count", limit=self.trending_limit)
		except StoreError as e:
			raise TrendingLoadError(str(e)) from e
