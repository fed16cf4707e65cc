"""
Unit tests for CatalogClient: endpoint selection, term encoding and outcome mapping.
Run: pytest tests/test_catalog.py
"""

import pytest
import requests

from fakes import FakeResponse, FakeSession
from moviefinder.catalog import (
	APPLICATION_ERROR_FALLBACK,
	GENERIC_ERROR_MESSAGE,
	CatalogClient,
	encode_term,
)
from moviefinder.errors import ConfigError
from moviefinder.models import QueryErr, QueryOk

BASE = "https://api.themoviedb.org/3"


def make_client(response=None, exc=None):
	session = FakeSession(response=response, exc=exc)
	return CatalogClient(api_key="secret", base_url=BASE, timeout=5, session=session), session


def test_empty_term_uses_discover_mode():
	client, session = make_client()
	client.query("")
	assert session.calls[0]["url"] == f"{BASE}/discover/movie?sort_by=popularity.desc"


def test_term_uses_search_mode():
	client, session = make_client()
	client.query("batman")
	assert session.calls[0]["url"] == f"{BASE}/search/movie?query=batman"


def test_term_with_spaces_is_percent_encoded():
	client, session = make_client()
	client.query("the dark knight")
	assert session.calls[0]["url"].endswith("query=the%20dark%20knight")


def test_special_characters_are_encoded():
	assert encode_term("fast & furious") == "fast%20%26%20furious"
	assert encode_term("50/50?") == "50%2F50%3F"
	assert encode_term("amélie") == "am%C3%A9lie"
	# same set encodeURIComponent keeps
	assert encode_term("it's (2017)!") == "it's%20(2017)!"


def test_headers_and_timeout():
	client, session = make_client()
	client.query("dune")
	call = session.calls[0]
	assert call["headers"]["Authorization"] == "Bearer secret"
	assert call["headers"]["Accept"] == "application/json"
	assert call["timeout"] == 5


def test_success_returns_movies():
	payload = {"results": [
		{"id": 438631, "title": "Dune", "poster_path": "/abc.jpg", "vote_average": 7.8,
		 "release_date": "2021-09-15", "original_language": "en", "popularity": 99.1},
		{"id": 693134, "title": "Dune: Part Two", "poster_path": None, "vote_average": None,
		 "release_date": "", "original_language": "en"},
	]}
	client, _ = make_client(FakeResponse(payload=payload))
	outcome = client.query("dune")
	assert isinstance(outcome, QueryOk)
	assert [m.id for m in outcome.movies] == [438631, 693134]
	assert outcome.movies[0].poster_path == "/abc.jpg"
	assert outcome.movies[1].vote_average is None


def test_zero_matches_is_ok_not_error():
	client, _ = make_client(FakeResponse(payload={"results": [], "total_results": 0}))
	outcome = client.query("zzzzzz")
	assert outcome == QueryOk(movies=[])


def test_http_failure_is_transport_error_with_generic_message():
	client, _ = make_client(FakeResponse(status_code=401, payload={"status_message": "Invalid API key"}))
	outcome = client.query("dune")
	assert isinstance(outcome, QueryErr)
	assert outcome.kind == "transport"
	assert outcome.message == GENERIC_ERROR_MESSAGE


def test_connection_failure_is_transport_error():
	client, _ = make_client(exc=requests.ConnectionError("boom"))
	outcome = client.query("")
	assert outcome == QueryErr(message=GENERIC_ERROR_MESSAGE, kind="transport")


def test_invalid_json_is_transport_error():
	client, _ = make_client(FakeResponse(payload=None))
	outcome = client.query("dune")
	assert isinstance(outcome, QueryErr)
	assert outcome.kind == "transport"


def test_application_failure_uses_server_message():
	payload = {"Response": "False", "Error": "Request limit reached"}
	client, _ = make_client(FakeResponse(payload=payload))
	outcome = client.query("dune")
	assert outcome == QueryErr(message="Request limit reached", kind="application")


def test_application_failure_without_message_uses_fallback():
	client, _ = make_client(FakeResponse(payload={"Response": "False"}))
	outcome = client.query("dune")
	assert outcome == QueryErr(message=APPLICATION_ERROR_FALLBACK, kind="application")


def test_missing_api_key_is_fatal():
	with pytest.raises(ConfigError):
		CatalogClient(api_key="", session=FakeSession())


def test_close_releases_session():
	client, session = make_client()
	client.close()
	assert session.closed


def test_malformed_result_item_is_transport_error():
	client, _ = make_client(FakeResponse(payload={"results": [{"id": None, "title": "x"}]}))
	outcome = client.query("dune")
	assert outcome == QueryErr(message=GENERIC_ERROR_MESSAGE, kind="transport")


def test_non_numeric_rating_is_transport_error():
	client, _ = make_client(FakeResponse(payload={"results": [{"id": 1, "vote_average": "abc"}]}))
	outcome = client.query("")
	assert isinstance(outcome, QueryErr)
	assert outcome.kind == "transport"
