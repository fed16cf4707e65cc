"""
Unit tests for AnalyticsStore: search counting and the trending list.
"""

from loguru import logger

from fakes import make_movie
from moviefinder.analytics import AnalyticsStore
from moviefinder.document_store import InMemoryCollection
from moviefinder.errors import StoreError


class BrokenCollection(InMemoryCollection):
	def list_documents(self, equal=None, order_desc=None, limit=None):
		raise StoreError("store unavailable")


class FailingUpdateCollection(InMemoryCollection):
	def update_document(self, document_id, data):
		raise StoreError("write rejected")


class CrashingCollection(InMemoryCollection):
	def list_documents(self, equal=None, order_desc=None, limit=None):
		raise RuntimeError("sdk blew up")


def capture_errors():
	messages = []
	sink_id = logger.add(messages.append, level="ERROR", format="{message}")
	return messages, sink_id


def test_first_search_creates_one_record():
	coll = InMemoryCollection()
	store = AnalyticsStore(coll)
	store.record_search("dune", make_movie(438631, "Dune", "/abc.jpg"))

	docs = coll.list_documents()
	assert len(docs) == 1
	assert docs[0]["searchTerm"] == "dune"
	assert docs[0]["count"] == 1
	assert docs[0]["movie_id"] == 438631
	assert docs[0]["poster_url"] == "https://image.tmdb.org/t/p/w500/abc.jpg"


def test_repeat_search_increments_without_new_record():
	coll = InMemoryCollection()
	store = AnalyticsStore(coll)
	movie = make_movie(438631, "Dune", "/abc.jpg")
	store.record_search("dune", movie)
	store.record_search("dune", make_movie(1, "Other"))

	docs = coll.list_documents()
	assert len(docs) == 1
	assert docs[0]["count"] == 2
	assert docs[0]["movie_id"] == 438631  # representative movie kept


def test_missing_poster_path_is_not_an_error():
	coll = InMemoryCollection()
	AnalyticsStore(coll, image_base_url="https://img/w500").record_search("x", make_movie(7, poster_path=None))
	assert coll.list_documents()[0]["poster_url"] == "https://img/w500"


def test_store_errors_are_logged_not_raised():
	messages, sink_id = capture_errors()
	try:
		AnalyticsStore(BrokenCollection()).record_search("dune", make_movie(1))
		coll = FailingUpdateCollection([{"searchTerm": "dune", "count": 1}])
		AnalyticsStore(coll).record_search("dune", make_movie(1))
	finally:
		logger.remove(sink_id)
	assert len(messages) == 2
	assert "dune" in messages[0]


def records(counts):
	return [
		{"searchTerm": f"term{c}", "count": c, "movie_id": c, "poster_url": f"p{c}"}
		for c in counts
	]


def test_trending_orders_by_count_descending():
	trending = AnalyticsStore(InMemoryCollection(records([3, 1, 5, 2, 4]))).fetch_trending()
	assert [t.count for t in trending] == [5, 4, 3, 2, 1]
	assert trending[0].term == "term5"
	assert trending[0].movie_id == 5
	assert trending[0].poster_url == "p5"
	assert trending[0].document_id


def test_trending_is_limited_to_five():
	trending = AnalyticsStore(InMemoryCollection(records([3, 1, 5, 2, 4, 6, 7]))).fetch_trending()
	assert [t.count for t in trending] == [7, 6, 5, 4, 3]


def test_trending_failure_returns_none_and_logs():
	messages, sink_id = capture_errors()
	try:
		result = AnalyticsStore(BrokenCollection()).fetch_trending()
	finally:
		logger.remove(sink_id)
	assert result is None
	assert messages


def test_unexpected_backend_error_is_logged_not_raised():
	messages, sink_id = capture_errors()
	try:
		AnalyticsStore(CrashingCollection()).record_search("dune", make_movie(1))
	finally:
		logger.remove(sink_id)
	assert len(messages) == 1
	assert "dune" in messages[0]


def test_null_count_record_is_logged_not_raised():
	coll = InMemoryCollection([{"searchTerm": "dune", "count": None}])
	messages, sink_id = capture_errors()
	try:
		AnalyticsStore(coll).record_search("dune", make_movie(1))
	finally:
		logger.remove(sink_id)
	assert messages
	assert coll.list_documents()[0]["count"] is None


def test_trending_with_null_count_returns_none():
	coll = InMemoryCollection([{"searchTerm": "dune", "count": None, "movie_id": 1, "poster_url": "p"}])
	messages, sink_id = capture_errors()
	try:
		result = AnalyticsStore(coll).fetch_trending()
	finally:
		logger.remove(sink_id)
	assert result is None
	assert messages


def test_trending_unexpected_backend_error_returns_none():
	messages, sink_id = capture_errors()
	try:
		result = AnalyticsStore(CrashingCollection()).fetch_trending()
	finally:
		logger.remove(sink_id)
	assert result is None
	assert messages
