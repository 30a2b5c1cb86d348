"""
Error taxonomy for MovieLibra.
Each failure kind gets its own class so callers can tell a bad file
from bad data from a misused algorithm/filter name.
"""

from typing import Optional


class MovieLibraError(Exception):
	"""Base class for every error raised by this package."""


class FormatError(MovieLibraError):
	"""Input file is missing or has an unsupported extension."""


class ParseError(MovieLibraError):
	"""Input file matches a known format but its content is malformed."""


class UnknownAlgorithm(MovieLibraError, LookupError):
	"""sorted_by() got a name that was never registered and no key function."""

	def __init__(self, name):
		super().__init__(f"Unknown algorithm {name!r}")
		self.name = name  # offending key


class UnknownFilter(MovieLibraError, LookupError):
	"""filter() got a criteria key with no registered predicate."""

	def __init__(self, name):
		super().__init__(f"Unknown filter {name!r}")
		self.name = name  # offending key


class FetchError(MovieLibraError):
	"""Base class for remote fetch failures."""


class FetchTransportError(FetchError):
	"""Connection failure, timeout, or a non-success HTTP status."""

	def __init__(self, message: str, status_code: Optional[int] = None):
		super().__init__(message)
		self.status_code = status_code  # None when no response was received


class FetchParseError(FetchError):
	"""The remote API answered, but the body was not what we expected."""
