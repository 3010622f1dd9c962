"""
Exceptions raised by wiki-path.

Fetch and parse failures are fatal to a whole search: the first one
observed by any explorer ends it and is re-raised to the caller.
"""


class WikiPathError(Exception):
    """Base class for all wiki-path errors."""


class FetchError(WikiPathError):
    """A page could not be retrieved (connection or HTTP failure)."""

    def __init__(self, identifier: str, reason: str) -> None:
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"Error fetching '{identifier}': {reason}")


class ParseError(WikiPathError):
    """A retrieved page could not be parsed."""

    def __init__(self, identifier: str, reason: str) -> None:
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"Error parsing '{identifier}': {reason}")


class SearchTimeoutError(WikiPathError):
    """No outcome was delivered within the allotted time."""
