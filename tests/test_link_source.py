"""
Tests for WikiLinkSource link extraction.

A fake session stands in for requests.Session; no network access.
"""

import pytest
import requests

from wiki_path.errors import FetchError, ParseError
from wiki_path.wikipedia.link_source import WikiLinkSource, normalize_title

ANON_PAGE = """
<html><body>
<div id="mw-content-text">
  <p>
    <a href="/wiki/Physics">Physics</a>
    <a href="/wiki/Physics#History">Physics history</a>
    <a href="/wiki/Main_Page">Main page</a>
    <a href="/wiki/Special:Random">Random</a>
    <a href="/wiki/Talk:Albert_Einstein">Talk</a>
    <a href="/wiki/Caf%C3%A9">Cafe</a>
    <a href="https://example.com/wiki/Elsewhere">External site</a>
    <a href="/w/index.php?title=Physics&action=edit">Edit</a>
    <a href="#cite_note-1">[1]</a>
    <a>No href</a>
  </p>
  <ul><li><a href="/wiki/Nobel_Prize">Nobel Prize</a></li></ul>
  <h2 id="External_links">External links</h2>
  <ul><li><a href="/wiki/Chemistry">Chemistry</a></li></ul>
</div>
</body></html>
"""

API_PAGE = """
<html><body>
  <p><a href="./Physics">Physics</a> <a href="./Category:Germans">Category</a></p>
  <p><a href="/wiki/Anon_Style">Wrong prefix</a> <a href="./Nobel_Prize#Laureates">Nobel</a></p>
</body></html>
"""


class FakeResponse:
    def __init__(self, text: str, status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """Records requests and returns canned responses."""

    def __init__(self, response=None, exc: Exception | None = None) -> None:
        self.headers: dict[str, str] = {}
        self.response = response
        self.exc = exc
        self.requests: list[tuple[str, float]] = []

    def get(self, url, timeout=None):
        self.requests.append((url, timeout))
        if self.exc is not None:
            raise self.exc
        return self.response


class TestAnonymousTier:
    """Rendered pages scraped without a token."""

    def test_links_extracted_in_order(self):
        source = WikiLinkSource(session=FakeSession(FakeResponse(ANON_PAGE)))
        assert source.fetch("Albert_Einstein") == ["Physics", "Café", "Nobel_Prize"]

    def test_external_links_included_on_request(self):
        session = FakeSession(FakeResponse(ANON_PAGE))
        source = WikiLinkSource(include_external=True, session=session)
        assert source.fetch("Albert_Einstein")[-1] == "Chemistry"

    def test_url_and_headers(self):
        session = FakeSession(FakeResponse(ANON_PAGE))
        source = WikiLinkSource(session=session, timeout=3)
        source.fetch("Albert_Einstein")

        url, timeout = session.requests[0]
        assert url == "https://en.wikipedia.org/wiki/Albert_Einstein"
        assert timeout == 3
        assert "User-Agent" in session.headers
        assert "Authorization" not in session.headers

    def test_special_characters_quoted(self):
        source = WikiLinkSource(session=FakeSession())
        url = source.identifier_to_url("Python_(programming_language)")
        assert url == "https://en.wikipedia.org/wiki/Python_%28programming_language%29"

    def test_rate_limit(self):
        source = WikiLinkSource(session=FakeSession())
        assert source.rate_limit == 500
        assert source.request_interval == pytest.approx(7.2)


class TestTokenTier:
    """REST HTML endpoint used with a personal API token."""

    def test_links_use_relative_prefix(self):
        source = WikiLinkSource(token="secret", session=FakeSession(FakeResponse(API_PAGE)))
        assert source.fetch("Albert_Einstein") == ["Physics", "Nobel_Prize"]

    def test_url_and_auth_header(self):
        session = FakeSession(FakeResponse(API_PAGE))
        source = WikiLinkSource(token="secret", session=session)
        source.fetch("AC/DC")

        url, _ = session.requests[0]
        assert url == "https://en.wikipedia.org/w/rest.php/v1/page/AC%2FDC/html"
        assert session.headers["Authorization"] == "Bearer secret"

    def test_rate_limit(self):
        source = WikiLinkSource(token="secret", session=FakeSession())
        assert source.rate_limit == 5000
        assert source.request_interval == pytest.approx(0.72)

    def test_empty_token_is_anonymous(self):
        source = WikiLinkSource(token="", session=FakeSession())
        assert not source.authenticated


class TestHrefFilter:
    """Which hrefs count as followable article links."""

    @pytest.mark.parametrize(
        "href, expected",
        [
            ("/wiki/Physics", "Physics"),
            ("/wiki/Physics#History", "Physics"),
            ("/wiki/Physics?oldid=1", "Physics"),
            ("/wiki/Main_Page", None),
            ("/wiki/File:Einstein.jpg", None),
            ("/wiki/", None),
            ("/wiki/#top", None),
            ("//en.wikipedia.org/wiki/Physics", None),
            (None, None),
        ],
    )
    def test_href_to_identifier(self, href, expected):
        source = WikiLinkSource(session=FakeSession())
        assert source.href_to_identifier(href) == expected


class TestErrors:
    """Transport failures become FetchError."""

    def test_http_error(self):
        source = WikiLinkSource(session=FakeSession(FakeResponse("", status_code=404)))
        with pytest.raises(FetchError) as exc_info:
            source.fetch("Missing_Article")
        assert exc_info.value.identifier == "Missing_Article"

    def test_connection_error(self):
        session = FakeSession(exc=requests.ConnectionError("no route to host"))
        with pytest.raises(FetchError):
            WikiLinkSource(session=session).fetch("Physics")


class TestNormalizeTitle:
    def test_spaces_to_underscores(self):
        assert normalize_title(" Albert Einstein ") == "Albert_Einstein"

    def test_identifier_unchanged(self):
        assert normalize_title("Albert_Einstein") == "Albert_Einstein"

    def test_first_letter_capitalised(self):
        """Wikipedia titles always start with a capital letter."""
        assert normalize_title("pizza") == "Pizza"
        assert normalize_title("albert einstein") == "Albert_einstein"

    def test_empty_title(self):
        assert normalize_title("  ") == ""


class TestParseErrors:
    """Bodies that are not article documents raise ParseError."""

    @pytest.mark.parametrize(
        "body",
        [
            "",
            "<<<>>>\x00<a href='/wiki/X'",
            "\xff\xfe garbage </html></html><",
            '{"json": true}',
            "<html><head><title>Empty</title></head></html>",
            "<!DOCTYPE html><html><body><p>No links at all</p></body></html>",
        ],
    )
    def test_malformed_body(self, body):
        source = WikiLinkSource(session=FakeSession())
        with pytest.raises(ParseError) as exc_info:
            source.parse_links(body, "Broken")
        assert exc_info.value.identifier == "Broken"

    def test_fetch_raises_on_non_html_response(self):
        """A 200 response that is not HTML is fatal, not a dead end."""
        source = WikiLinkSource(session=FakeSession(FakeResponse('{"json": true}')))
        with pytest.raises(ParseError):
            source.fetch("Physics")

    def test_doctype_document_parses(self):
        body = "<!DOCTYPE html><html><body><a href='/wiki/Physics'>x</a></body></html>"
        assert WikiLinkSource(session=FakeSession()).parse_links(body) == ["Physics"]
