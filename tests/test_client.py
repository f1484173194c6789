import aiohttp
import pytest
from core.client import fetch_and_parse
from core.proxy import create_app
from core.results import ErrorKind, ParseSuccess
from core.rss import parse_feed


@pytest.fixture
async def proxy_server(aiohttp_server):
    return await aiohttp_server(create_app(fetch_timeout=0.5))


def _feed_url(upstream, path):
    return str(upstream.make_url(path))


class TestFetchAndParseDirect:
    async def test_success(self, upstream):
        result = await fetch_and_parse(_feed_url(upstream, "/feed.xml"))
        assert isinstance(result, ParseSuccess)
        assert len(result.articles) == 3

    @pytest.mark.parametrize("url", [None, "", "   "])
    async def test_missing_url(self, url):
        result = await fetch_and_parse(url)
        assert result.kind is ErrorKind.MISSING_URL
        assert result.message == "RSS URL is required"

    async def test_not_found(self, upstream):
        result = await fetch_and_parse(_feed_url(upstream, "/missing.xml"))
        assert result.kind is ErrorKind.UPSTREAM_ERROR
        assert result.status == 404
        assert result.message == "RSS feed not found"

    async def test_timeout_is_unreachable(self, upstream):
        result = await fetch_and_parse(_feed_url(upstream, "/slow.xml"), timeout=0.3)
        assert result.kind is ErrorKind.UNREACHABLE

    async def test_malformed_body(self, upstream):
        result = await fetch_and_parse(_feed_url(upstream, "/broken.xml"))
        assert result.kind is ErrorKind.MALFORMED_FEED

    async def test_multibyte_encoded_feed(self, upstream):
        result = await fetch_and_parse(_feed_url(upstream, "/gb2312.xml"))
        assert isinstance(result, ParseSuccess)
        assert result.articles[0].title == "新闻快讯"

    async def test_reuses_caller_session(self, upstream):
        async with aiohttp.ClientSession() as session:
            result = await fetch_and_parse(_feed_url(upstream, "/feed.xml"), session=session)
            assert not session.closed
        assert result.error is False


class TestFetchAndParseThroughProxy:
    async def test_success(self, upstream, proxy_server):
        result = await fetch_and_parse(
            _feed_url(upstream, "/feed.xml"),
            proxy_url=str(proxy_server.make_url("/api/rss")),
        )
        assert len(result.items) == 3

    async def test_upstream_status_reaches_caller(self, upstream, proxy_server):
        result = await fetch_and_parse(
            _feed_url(upstream, "/forbidden.xml"),
            proxy_url=str(proxy_server.make_url("/api/rss")),
        )
        assert result.kind is ErrorKind.UPSTREAM_ERROR
        assert result.status == 403
        assert result.message == "Access to RSS feed denied"

    async def test_proxy_timeout_reads_as_server_unavailable(self, upstream, proxy_server):
        result = await fetch_and_parse(
            _feed_url(upstream, "/slow.xml"),
            proxy_url=str(proxy_server.make_url("/api/rss")),
        )
        assert result.status == 500
        assert result.message == "RSS server temporarily unavailable"

    async def test_round_trip_matches_direct_parse(self, upstream, proxy_server, rss_sample):
        via_proxy = await fetch_and_parse(
            _feed_url(upstream, "/feed.xml"),
            proxy_url=str(proxy_server.make_url("/api/rss")),
        )
        assert via_proxy.articles == parse_feed(rss_sample).articles
