"""
Error types used across the Movie Finder.
Catalog errors are converted to user-facing messages; store errors are only logged.
"""


class MovieFinderError(Exception):
	"""Base class for all project errors."""


class ConfigError(MovieFinderError):
	"""Missing or invalid configuration. Fatal at startup."""


class CatalogError(MovieFinderError):
	def __init__(self, message: str):
		super().__init__(message)
		self.message = message


class TransportError(CatalogError):
	"""Non-success HTTP status, connection failure or unreadable body."""


class ApplicationError(CatalogError):
	"""The catalog answered 200 but flagged the request as failed (Response == "False")."""


class StoreError(MovieFinderError):
	"""A document store request failed."""


class AnalyticsError(StoreError):
	"""Reading or writing a search record failed."""


class TrendingLoadError(StoreError):
	"""Querying the trending list failed."""
