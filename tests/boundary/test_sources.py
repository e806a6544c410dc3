"""Tests for the craftsmen directory client and the page fetcher."""

import json

import httpx
import pytest

from craftsman_rag.boundary.sources.craftsmen_api import CraftsmenApiClient
from craftsman_rag.boundary.sources import web_page
from craftsman_rag.boundary.sources.web_page import PageFetcher, clean_html
from craftsman_rag.core.exceptions import SourceAPIError

API_URL = "http://directory.local/api/client/search"


def _record(record_id: int, name: str) -> dict:
    return {
        "id": record_id,
        "name": name,
        "craft": {"id": 3, "name": "نجار"},
        "address": "شارع النيل",
        "cities": [{"id": 1, "city": "القاهرة"}],
        "average_rating": 4.5,
        "number_of_ratings": 12,
        "done_jobs_num": 30,
        "active_jobs_num": 2,
        "status": "free",
    }


def _api(handler, token: str | None = "secret") -> CraftsmenApiClient:
    return CraftsmenApiClient(
        url=API_URL,
        token=token,
        page_size=100,
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


class TestCraftsmenApiClient:
    def test_fetch_page_sends_payload_and_bearer_token(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(
                200,
                json={"status": True, "data": {"data": [_record(1, "أحمد")], "current_page": 1, "last_page": 3}},
            )

        page = _api(handler).fetch_page("نجار", 1)

        assert seen["body"] == {"pagination": 100, "page": 1, "craft": "نجار"}
        assert seen["auth"] == "Bearer secret"
        assert page is not None
        assert page.last_page == 3
        assert page.records[0].name == "أحمد"
        assert page.records[0].craft_name == "نجار"
        assert page.records[0].city_names == ["القاهرة"]

    def test_prefixed_token_is_not_prefixed_twice(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"status": True, "data": {"data": []}})

        _api(handler, token="Bearer abc").fetch_page("نجار")

        assert seen["auth"] == "Bearer abc"

    def test_status_false_returns_none(self) -> None:
        page = _api(lambda r: httpx.Response(200, json={"status": False, "message": "bad craft"})).fetch_page("x")

        assert page is None

    def test_http_error_returns_none(self) -> None:
        assert _api(lambda r: httpx.Response(401, text="unauthorized")).fetch_page("نجار") is None

    def test_malformed_record_is_skipped(self) -> None:
        body = {"status": True, "data": {"data": [{"id": 9}, _record(2, "سامي")], "last_page": 1}}

        page = _api(lambda r: httpx.Response(200, json=body)).fetch_page("نجار")

        assert [r.name for r in page.records] == ["سامي"]
        assert page.raw_count == 2
        assert not page.is_empty

    def test_check_connection_gets_base_endpoint(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"status": True})

        assert _api(handler).check_connection() is True
        assert seen == {"method": "GET", "url": "http://directory.local/api/client", "auth": "Bearer secret"}

    def test_check_connection_failures(self) -> None:
        assert _api(lambda r: httpx.Response(500)).check_connection() is False

        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        assert _api(refuse).check_connection() is False


@pytest.fixture
def no_main_content(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make trafilatura find nothing so the BeautifulSoup path runs."""
    monkeypatch.setattr(web_page.trafilatura, "extract", lambda *args, **kwargs: None)


ARTICLE = """
<html><head><title>Home repairs</title><script>var tracking = 1;</script></head>
<body>
<nav><a href="/">Home</a> | <a href="/about">About</a></nav>
<article>
<h1>How to fix a leaking tap</h1>
<p>A leaking tap usually means a worn washer. Turn off the water supply under the sink
before you start, then open the tap to drain the remaining water from the pipe.</p>
<p>Unscrew the handle, lift out the cartridge and replace the rubber washer with one of
the same size. Reassemble everything and turn the supply back on slowly.</p>
<p>If the tap still drips after a new washer, the valve seat may be damaged and it is
time to call a plumber &amp; ask for a seat replacement.</p>
</article>
</body></html>
"""


class TestCleanHtml:
    def test_extracts_article_text_without_scripts(self) -> None:
        text = clean_html(ARTICLE)

        assert "worn washer" in text
        assert "plumber & ask" in text
        assert "tracking" not in text
        assert "\n" not in text

    def test_uses_extracted_main_text(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(web_page.trafilatura, "extract", lambda *args, **kwargs: "Main\n\n text")

        assert clean_html("<p>ignored</p>") == "Main text"

    def test_blank_input(self) -> None:
        assert clean_html("   ") == ""

    def test_strips_tags_and_collapses_whitespace(self, no_main_content: None) -> None:
        html = "<html><body>\n<h1>Plumbing</h1>\t<p>Fix   leaks\nfast</p></body></html>"

        assert clean_html(html) == "Plumbing Fix leaks fast"

    def test_drops_script_and_style_bodies(self, no_main_content: None) -> None:
        html = "<style>p{color:red}</style><p>Visible</p><script>var x = 1;</script>"

        assert clean_html(html) == "Visible"

    def test_decodes_entities(self, no_main_content: None) -> None:
        assert clean_html("<p>Tom &amp; Jerry &#8211; نجار</p>") == "Tom & Jerry – نجار"

    def test_html_comments_are_dropped(self, no_main_content: None) -> None:
        assert clean_html("<p>a</p><!-- x > y --><p>b</p>") == "a b"

    def test_entities_and_comments_without_patching(self) -> None:
        text = clean_html("<p>Tom &amp; Jerry</p><!-- x > y --><p>نجار</p>")

        assert "Tom & Jerry" in text
        assert "&amp;" not in text
        assert "-->" not in text
        assert "x > y" not in text


class TestPageFetcher:
    def test_fetch_text_returns_clean_text(self, no_main_content: None) -> None:
        fetcher = PageFetcher(
            http_client=httpx.Client(
                transport=httpx.MockTransport(lambda r: httpx.Response(200, text="<p>Hello <b>world</b></p>"))
            )
        )

        assert fetcher.fetch_text("http://site.local/page") == "Hello world"

    def test_error_status_raises_source_error(self) -> None:
        fetcher = PageFetcher(
            http_client=httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(404)))
        )

        with pytest.raises(SourceAPIError) as exc_info:
            fetcher.fetch_text("http://site.local/missing")

        assert exc_info.value.details["status_code"] == 404
