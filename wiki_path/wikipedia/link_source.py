"""
Link sources for the path search.

A link source turns an article identifier into the ordered list of
article identifiers it links to. WikiLinkSource does this against live
Wikipedia using requests + BeautifulSoup.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from urllib.parse import quote, unquote

import requests
from bs4 import BeautifulSoup

from wiki_path.config import (
    ANON_ARTICLE_URL,
    ANON_LINK_PREFIX,
    ANON_RATE_LIMIT,
    API_ARTICLE_URL,
    API_LINK_PREFIX,
    API_RATE_LIMIT,
    EXTERNAL_LINKS_ID,
    HOUR_SECS,
    MAIN_PAGE,
    NAMESPACE_SEPARATOR,
    USER_AGENT,
    WIKIPEDIA_TIMEOUT,
)
from wiki_path.errors import FetchError, ParseError

logger = logging.getLogger(__name__)


def normalize_title(title: str) -> str:
    """
    Convert a human-written article title to identifier form.

    Spaces become underscores and the first letter is capitalised, as
    Wikipedia does for every article title.
    """
    name = title.strip().replace(" ", "_")
    return name[:1].upper() + name[1:]


class LinkSource(ABC):
    """
    Abstract source of outbound links.

    Implementations do no rate limiting of their own; the search engine
    gates every fetch call.
    """

    # Minimum seconds between requests this source asks for
    request_interval: float = 0.0

    @abstractmethod
    def fetch(self, identifier: str) -> list[str]:
        """
        Get the outbound links of an article.

        Args:
            identifier: Article identifier (underscore form)

        Returns:
            Linked identifiers in document order, without duplicates

        Raises:
            FetchError: If the page could not be retrieved
            ParseError: If the page could not be parsed
        """
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class WikiLinkSource(LinkSource):
    """
    Fetches live Wikipedia articles and extracts article links.

    Without a token, rendered pages are scraped anonymously. With a
    personal API token the REST HTML endpoint is used instead, which
    carries a ten times larger hourly request budget.

    Links are excluded when they point at the Main Page or at any
    namespaced page (Special:, Talk:, File:, ...). Links after the
    "External links" heading are ignored unless include_external is set.
    """

    # An article document opens with a doctype or an <html> tag
    DOCUMENT_PATTERN = re.compile(r"^\s*<(!doctype|html)", re.IGNORECASE)

    def __init__(
        self,
        token: str | None = None,
        include_external: bool = False,
        session: requests.Session | None = None,
        timeout: float = WIKIPEDIA_TIMEOUT,
    ) -> None:
        """
        Initialize the link source.

        Args:
            token: Optional Wikimedia personal API token
            include_external: Also follow links in the External links section
            session: HTTP session to use (a new one is created if None)
            timeout: Request timeout in seconds
        """
        self._token = token or None
        self._include_external = include_external
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._session.headers.update({"User-Agent": USER_AGENT})
        if self._token:
            self._session.headers.update({"Authorization": f"Bearer {self._token}"})

    @property
    def authenticated(self) -> bool:
        return self._token is not None

    @property
    def prefix(self) -> str:
        """Href prefix marking an article link."""
        return API_LINK_PREFIX if self.authenticated else ANON_LINK_PREFIX

    @property
    def rate_limit(self) -> int:
        """Requests per hour allowed for this tier."""
        return API_RATE_LIMIT if self.authenticated else ANON_RATE_LIMIT

    @property
    def request_interval(self) -> float:
        """Minimum seconds between two requests for this tier."""
        return HOUR_SECS / self.rate_limit

    def identifier_to_url(self, identifier: str) -> str:
        if self.authenticated:
            return API_ARTICLE_URL.format(quote(identifier, safe="_"))
        return ANON_ARTICLE_URL + quote(identifier, safe="_/")

    def href_to_identifier(self, href: str | None) -> str | None:
        """
        Extract an article identifier from an href.

        Returns None when the href is not a followable article link.
        """
        if not href or not href.startswith(self.prefix):
            return None

        name = href[len(self.prefix):]
        # Remove #fragments and ?query strings
        name = name.split("#")[0].split("?")[0]
        name = unquote(name)

        if not name or name == MAIN_PAGE or NAMESPACE_SEPARATOR in name:
            return None
        return name

    def fetch(self, identifier: str) -> list[str]:
        url = self.identifier_to_url(identifier)
        logger.debug(f"Fetching: {url}")

        try:
            response = self._session.get(url, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(identifier, str(e)) from e

        return self.parse_links(response.text, identifier)

    def parse_links(self, html: str, identifier: str = "") -> list[str]:
        """
        Extract unique article links from page HTML, in document order.

        Raises:
            ParseError: If the body is not an HTML document with links
        """
        if not self.DOCUMENT_PATTERN.match(html):
            raise ParseError(identifier, "response is not an HTML document")

        soup = BeautifulSoup(html, "lxml")
        if soup.body is None or soup.find("a") is None:
            raise ParseError(identifier, "document has no body or no links")

        links: list[str] = []
        seen: set[str] = set()

        for element in soup.find_all(True):
            if not self._include_external and element.get("id") == EXTERNAL_LINKS_ID:
                break

            if element.name != "a":
                continue

            name = self.href_to_identifier(element.get("href"))
            if name and name not in seen:
                links.append(name)
                seen.add(name)

        logger.debug(f"Found {len(links)} links on '{identifier}'")
        return links

    def __repr__(self) -> str:
        tier = "api" if self.authenticated else "anonymous"
        return f"{self.__class__.__name__}(tier={tier!r})"
