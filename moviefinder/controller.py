"""
Application controller.
Owns the UI state, wires the debounced search input to the catalog client,
records search analytics and loads the trending list once on mount.

Every transition goes through one of the _begin/_apply/_finish methods so the
state is only ever changed here; renderers get snapshots through on_change.
"""

import asyncio  # single event loop, blocking clients run in worker threads
from typing import Callable, List, Optional, Set  # type hints

from loguru import logger  # console logger

from .analytics import AnalyticsStore  # search analytics
from .catalog import GENERIC_ERROR_MESSAGE, CatalogClient  # movie catalog
from .debounce import Debouncer  # input debouncing
from .models import Movie, QueryErr, SearchTerm, UIState

DEFAULT_DEBOUNCE_MS = 500  # quiet window before a search is issued


class AppController:
	def __init__(
		self,
		catalog: CatalogClient,
		analytics: AnalyticsStore,
		debounce_ms: int = DEFAULT_DEBOUNCE_MS,
		on_change: Optional[Callable[[UIState], None]] = None,
	):
		self.catalog = catalog  # movie catalog client
		self.analytics = analytics  # analytics store client
		self.on_change = on_change  # render callback
		self.state = UIState()  # owned state
		self.debouncer: Debouncer[str] = Debouncer(self._on_settled, delay=debounce_ms / 1000)
		self._request_seq = 0  # id of the latest issued query
		self._tasks: Set[asyncio.Task] = set()  # scheduled queries and loads
		self._mounted = False
		self._closed = False

	# ----- public API ---------------------------------------------------

	async def mount(self) -> None:
		"""Start the initial discover query and the one-time trending load."""
		if self._mounted:
			return
		self._mounted = True
		logger.info("[Controller] Mounted; loading popular movies and trending terms")
		self._spawn(self.fetch_movies(self.state.settled_search_term))
		self._spawn(self.load_trending())

	def set_search_input(self, value: str) -> None:
		"""User edited the search box."""
		if self._closed:
			return
		self.state.raw_search_input = value
		self._emit()
		self.debouncer.push(value)

	async def fetch_movies(self, term: str) -> None:
		"""Query the catalog for `term` and apply the result if still current."""
		if self._closed:
			return
		self._request_seq += 1
		seq = self._request_seq
		self._begin_query()
		try:
			try:
				outcome = await asyncio.to_thread(self.catalog.query, term)
			except Exception:
				logger.exception(f"[Controller] Unexpected error querying term='{term}'")
				outcome = QueryErr(message=GENERIC_ERROR_MESSAGE)

			if isinstance(outcome, QueryErr):
				if self._is_current(seq):
					self._apply_error(outcome.message)
				return

			if self._is_current(seq):
				self._apply_results(outcome.movies)
			else:
				logger.debug(f"[Controller] Dropping superseded response #{seq} for term='{term}'")

			if term and outcome.movies:
				await asyncio.to_thread(self.analytics.record_search, term, outcome.movies[0])
		finally:
			if self._is_current(seq):
				self._finish_query()

	async def load_trending(self) -> None:
		trending = await asyncio.to_thread(self.analytics.fetch_trending)
		if trending is None or self._closed:
			return  # keep the previous value
		self._apply_trending(trending)

	async def wait_idle(self) -> None:
		"""Wait until no query or load scheduled by this controller is running."""
		while self._tasks:
			await asyncio.gather(*list(self._tasks), return_exceptions=True)

	async def close(self) -> None:
		"""Tear down: no pending debounce fires and late responses are ignored."""
		self._closed = True
		self.debouncer.close()
		self._request_seq += 1  # invalidates every in-flight query
		logger.info("[Controller] Closed")

	# ----- transitions --------------------------------------------------

	def _on_settled(self, value: str) -> None:
		self.state.settled_search_term = value
		self._emit()
		self._spawn(self.fetch_movies(value))

	def _begin_query(self) -> None:
		self.state.is_loading = True
		self.state.error_message = ""
		self._emit()

	def _apply_results(self, movies: List[Movie]) -> None:
		self.state.movies = list(movies)
		self._emit()

	def _apply_error(self, message: str) -> None:
		self.state.error_message = message
		self.state.movies = []
		self._emit()

	def _finish_query(self) -> None:
		self.state.is_loading = False
		self._emit()

	def _apply_trending(self, trending: List[SearchTerm]) -> None:
		self.state.trending = list(trending)
		self._emit()

	# ----- helpers ------------------------------------------------------

	def _is_current(self, seq: int) -> bool:
		return not self._closed and seq == self._request_seq

	def _spawn(self, coro) -> asyncio.Task:
		task = asyncio.get_running_loop().create_task(coro)
		self._tasks.add(task)
		task.add_done_callback(self._tasks.discard)
		return task

	def _emit(self) -> None:
		if self.on_change is not None:
			self.on_change(self.state.snapshot())
