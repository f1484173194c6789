"""Upstream feed retrieval shared by the proxy endpoint and the client."""

import asyncio
import logging
from typing import Dict, Optional

import aiohttp

from core import config

log = logging.getLogger("thumbfeed.fetch")


class FeedFetchError(Exception):
    """Base class for failures while retrieving a feed."""


class FeedUnreachableError(FeedFetchError):
    """Network error or timeout: no HTTP response was obtained."""


class FeedHTTPError(FeedFetchError):
    def __init__(self, status: int, url: str = ""):
        super().__init__(f"HTTP error! status: {status}")
        self.status = status
        self.url = url


def request_headers() -> Dict[str, str]:
    return {"User-Agent": config.FEED_USER_AGENT, "Accept": config.FEED_ACCEPT}


async def fetch_feed(
    session: aiohttp.ClientSession,
    url: str,
    timeout: float = config.FEED_FETCH_TIMEOUT,
    params: Optional[Dict[str, str]] = None,
) -> bytes:
    """GET ``url`` and return the body bytes untouched.

    Raises FeedHTTPError on a non-2xx status and FeedUnreachableError when no
    response arrives within ``timeout`` seconds.
    """
    try:
        async with session.get(
            url,
            params=params,
            headers=request_headers(),
            timeout=aiohttp.ClientTimeout(total=timeout),
        ) as resp:
            if not 200 <= resp.status < 300:
                log.warning("Upstream %s: status=%s", url, resp.status)
                raise FeedHTTPError(resp.status, url)
            return await resp.read()
    except asyncio.TimeoutError as e:
        log.warning("Upstream %s: timeout apres %ss", url, timeout)
        raise FeedUnreachableError(f"Timeout after {timeout}s") from e
    except (aiohttp.ClientError, ValueError) as e:
        # ValueError: URL that yarl/aiohttp refuses to build a request for
        log.warning("Upstream %s: erreur reseau %s", url, e)
        raise FeedUnreachableError(str(e) or type(e).__name__) from e
