"""
Data models for the Movie Finder.
Defines the records exchanged with the catalog and analytics services and the
UI state owned by the application controller.
"""

# Import dataclass helpers to define simple record-like classes
from dataclasses import dataclass, field, replace  # auto-generated __init__/__repr__
# Import enum for the mutually exclusive display states
from enum import Enum  # rendering decision values
# Import typing helpers for precise and self-documenting types
from typing import Any, Dict, List, Optional, Union  # common containers

# Placeholder shown by front ends when a movie has no poster
NO_POSTER_URL = "/no-movie.png"  # local fallback asset


@dataclass
class Movie:
	"""
	A single catalog entry as returned by the movie catalog service.
	Only the fields the browsing interface needs are kept.
	"""
	id: int  # catalog identifier
	title: str  # display title
	poster_path: Optional[str] = None  # path fragment on the image host
	vote_average: Optional[float] = None  # 0-10 audience rating
	release_date: Optional[str] = None  # ISO date or empty string
	original_language: str = ""  # ISO 639-1 code

	@classmethod
	def from_api(cls, data: Dict[str, Any]) -> "Movie":
		"""Build a Movie from one catalog result object, ignoring unknown keys."""
		vote = data.get("vote_average")
		return cls(
			id=int(data.get("id", 0)),
			title=data.get("title") or data.get("original_title") or "",
			poster_path=data.get("poster_path"),
			vote_average=float(vote) if vote is not None else None,
			release_date=data.get("release_date"),
			original_language=data.get("original_language") or "",
		)

	@property
	def rating_label(self) -> str:
		"""Rating with one decimal, or N/A when the catalog has none."""
		if not self.vote_average:
			return "N/A"
		return f"{self.vote_average:.1f}"

	@property
	def release_year(self) -> str:
		"""Year part of the release date, or N/A."""
		if not self.release_date:
			return "N/A"
		return self.release_date.split("-")[0]

	def poster_url(self, image_base_url: str) -> str:
		if not self.poster_path:
			return NO_POSTER_URL
		return f"{image_base_url}{self.poster_path}"


@dataclass
class SearchTerm:
	"""
	Aggregated analytics record: how often a term was searched and which movie
	represented it the first time.
	"""
	term: str  # unique key
	count: int  # number of searches, always >= 1
	movie_id: int  # representative movie id
	poster_url: str  # full poster URL of the representative movie
	document_id: Optional[str] = None  # id assigned by the document store

	@classmethod
	def from_document(cls, doc: Dict[str, Any]) -> "SearchTerm":
		"""Convert a stored document (original collection schema) to a SearchTerm."""
		return cls(
			term=doc.get("searchTerm", ""),
			count=int(doc.get("count", 0)),
			movie_id=int(doc.get("movie_id", 0)),
			poster_url=doc.get("poster_url", ""),
			document_id=doc.get("$id"),
		)


@dataclass
class QueryOk:
	movies: List[Movie]  # possibly empty result list


@dataclass
class QueryErr:
	message: str  # human-readable message shown to the user
	kind: str = "transport"  # "transport" or "application"


# Result of one catalog query attempt
QueryOutcome = Union[QueryOk, QueryErr]


class DisplayState(Enum):
	LOADING = "loading"
	ERROR = "error"
	RESULTS = "results"


@dataclass
class UIState:
	"""
	Process-local state of the browsing interface.
	Only the application controller mutates it; renderers receive snapshots.
	"""
	raw_search_input: str = ""  # what the user is typing
	settled_search_term: str = ""  # debounced value used for queries
	movies: List[Movie] = field(default_factory=list)  # current result list
	trending: List[SearchTerm] = field(default_factory=list)  # top searched terms
	is_loading: bool = False  # a query is in flight
	error_message: str = ""  # empty when there is no error

	def display(self) -> DisplayState:
		"""Loading takes priority, then error, then results."""
		if self.is_loading:
			return DisplayState.LOADING
		if self.error_message:
			return DisplayState.ERROR
		return DisplayState.RESULTS

	def snapshot(self) -> "UIState":
		"""Copy handed to renderers so they never share the live lists."""
		return replace(self, movies=list(self.movies), trending=list(self.trending))
