import logging
from typing import Optional

import aiohttp

from core import config
from core.fetch import FeedFetchError, fetch_feed
from core.results import ErrorKind, ParseResult, classify_exception, failure
from core.rss import parse_feed

log = logging.getLogger("thumbfeed.client")


async def _fetch(session: aiohttp.ClientSession, url: str, timeout: float, proxy_url: Optional[str]) -> bytes:
    if proxy_url:
        return await fetch_feed(session, proxy_url, timeout=timeout, params={"url": url})
    return await fetch_feed(session, url, timeout=timeout)


async def fetch_and_parse(
    url: Optional[str],
    timeout: float = config.FEED_FETCH_TIMEOUT,
    *,
    proxy_url: Optional[str] = None,
    session: Optional[aiohttp.ClientSession] = None,
) -> ParseResult:
    """Fetch a feed (directly or through the proxy endpoint) and parse it.

    Stateless and never raises: every outcome is a ParseResult. Retrying is
    left to the caller.
    """
    if not url or not url.strip():
        return failure(ErrorKind.MISSING_URL)
    url = url.strip()

    try:
        if session is not None:
            body = await _fetch(session, url, timeout, proxy_url)
        else:
            async with aiohttp.ClientSession() as own:
                body = await _fetch(own, url, timeout, proxy_url)
    except FeedFetchError as e:
        result = classify_exception(e)
        log.warning("Feed %s: %s (%s)", url, result.kind.value, e)
        return result
    except Exception as e:
        log.exception("Feed %s: erreur inattendue pendant le fetch.", url)
        return classify_exception(e)

    try:
        return parse_feed(body)
    except Exception as e:
        log.exception("Feed %s: erreur inattendue pendant le parsing.", url)
        return classify_exception(e)
