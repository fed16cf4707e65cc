"""
Debounce timer.
Delays propagation of a rapidly changing value until it has been stable for a
quiet window. Only the last value is ever propagated.
"""

import asyncio  # event-loop timers
from typing import Callable, Generic, Optional, TypeVar  # type hints

from loguru import logger  # console logger

T = TypeVar("T")


class Debouncer(Generic[T]):
	"""
	Keeps at most one pending timer handle; each push cancels the previous one.
	Must be used from inside a running asyncio event loop.
	"""

	def __init__(self, callback: Callable[[T], None], delay: float = 0.5):
		"""
		Args:
			callback: called with the settled value once the quiet window elapses
			delay: quiet window in seconds
		"""
		self.callback = callback
		self.delay = delay
		self.settled: Optional[T] = None  # last propagated value
		self._handle: Optional[asyncio.TimerHandle] = None  # the single outstanding timer
		self._closed = False

	@property
	def pending(self) -> bool:
		return self._handle is not None

	def push(self, value: T) -> None:
		"""Record a new input value and restart the quiet window."""
		if self._closed:
			return
		self.cancel()
		loop = asyncio.get_running_loop()
		self._handle = loop.call_later(self.delay, self._fire, value)

	def _fire(self, value: T) -> None:
		self._handle = None
		if self._closed:
			return
		self.settled = value
		logger.debug(f"[Debounce] settled on {value!r}")
		self.callback(value)

	def cancel(self) -> None:
		"""Drop the pending propagation, if any."""
		if self._handle is not None:
			self._handle.cancel()
			self._handle = None

	def close(self) -> None:
		"""Cancel and ignore any later pushes (owner torn down)."""
		self.cancel()
		self._closed = True
