"""
Terminal front end for the Movie Finder.
A Textual app: every keystroke goes to the controller, which debounces it and
pushes state snapshots back for rendering.

Run: python scripts/run_tui.py   (or the `moviefinder-tui` console script)
"""

from typing import List, Optional  # type hints

from loguru import logger  # console logger
from textual.app import App, ComposeResult  # application shell
from textual.containers import VerticalScroll  # scrollable results area
from textual.widgets import Footer, Header, Input, LoadingIndicator, Static  # widgets

from .config import build_analytics_store, build_catalog_client, configure_logging, load_settings
from .controller import AppController
from .models import DisplayState, Movie, SearchTerm, UIState

LOG_FILE = "moviefinder.log"  # log destination while the TUI owns the terminal


def format_movie(movie: Movie) -> str:
	"""One result line: title, rating, language and year like the web card."""
	return f"{movie.title}  *{movie.rating_label} | {movie.original_language} | {movie.release_year}"


def format_trending(trending: List[SearchTerm]) -> str:
	if not trending:
		return ""
	return "Trending: " + "   ".join(f"{i}. {t.term}" for i, t in enumerate(trending, start=1))


class MovieFinderApp(App):
	TITLE = "Find Movies You'll Enjoy Without the Hassle"
	BINDINGS = [("ctrl+q", "quit", "Quit")]
	CSS = """
	#trending { color: $accent; padding: 0 1; }
	#error { color: red; padding: 0 1; }
	#results { height: 1fr; }
	"""

	def __init__(self, controller_factory=None):
		super().__init__()
		self._controller_factory = controller_factory  # builds the controller from a render callback
		self.controller: Optional[AppController] = None

	def compose(self) -> ComposeResult:
		yield Header()
		yield Input(placeholder="Search through thousands of movies", id="search")
		yield Static("", id="trending", markup=False)
		yield LoadingIndicator(id="loading")
		yield Static("", id="error", markup=False)
		yield VerticalScroll(Static("", id="movies", markup=False), id="results")
		yield Footer()

	async def on_mount(self) -> None:
		if self._controller_factory is not None:
			self.controller = self._controller_factory(self.render_state)
		else:
			settings = load_settings()
			configure_logging(settings.log_level, sink=LOG_FILE)  # stderr belongs to the terminal UI
			self.controller = AppController(
				catalog=build_catalog_client(settings),
				analytics=build_analytics_store(settings),
				debounce_ms=settings.debounce_ms,
				on_change=self.render_state,
			)
		self.render_state(self.controller.state.snapshot())
		await self.controller.mount()

	def on_input_changed(self, event: Input.Changed) -> None:
		if self.controller is not None:
			self.controller.set_search_input(event.value)

	async def on_unmount(self) -> None:
		if self.controller is not None:
			await self.controller.close()

	def render_state(self, state: UIState) -> None:
		"""Show exactly one of loading / error / results."""
		view = state.display()
		self.query_one("#trending", Static).update(format_trending(state.trending))
		self.query_one("#loading", LoadingIndicator).display = view is DisplayState.LOADING
		error = self.query_one("#error", Static)
		error.display = view is DisplayState.ERROR
		error.update(state.error_message)
		results = self.query_one("#results", VerticalScroll)
		results.display = view is DisplayState.RESULTS
		self.query_one("#movies", Static).update("\n".join(format_movie(m) for m in state.movies))


def main() -> None:
	logger.info("[TUI] Starting Movie Finder")
	MovieFinderApp().run()


if __name__ == "__main__":
	main()
