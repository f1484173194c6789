"""Server-side hop that fetches a remote feed on behalf of browser clients."""

import logging
from typing import Dict, Optional

import aiohttp
from aiohttp import web

from core import config
from core.fetch import FeedHTTPError, FeedUnreachableError, fetch_feed

log = logging.getLogger("thumbfeed.proxy")

SESSION_KEY = web.AppKey("session", aiohttp.ClientSession)
TIMEOUT_KEY = web.AppKey("fetch_timeout", float)


def _cors_headers() -> Dict[str, str]:
    return {"Access-Control-Allow-Origin": "*"}


def _error_response(status: int, error: str, details: Optional[str] = None) -> web.Response:
    body = {"error": error}
    if details:
        body["details"] = details
    return web.json_response(body, status=status, headers=_cors_headers())


async def handle_feed(request: web.Request) -> web.Response:
    feed_url = request.query.get("url")
    if not feed_url:
        return _error_response(400, "RSS URL is required")

    try:
        body = await fetch_feed(
            request.app[SESSION_KEY], feed_url, timeout=request.app[TIMEOUT_KEY]
        )
    except FeedHTTPError as e:
        # 3xx that were not followed cannot be echoed with a body
        status = e.status if e.status >= 400 else 502
        return _error_response(status, "Failed to fetch RSS feed", str(e))
    except FeedUnreachableError as e:
        return _error_response(500, "Failed to fetch RSS feed", str(e))
    except Exception as e:
        log.exception("Proxy %s: erreur inattendue.", feed_url)
        return _error_response(500, "Failed to fetch RSS feed", str(e) or type(e).__name__)

    log.info("Proxy %s: %d octets.", feed_url, len(body))
    headers = _cors_headers()
    headers["Access-Control-Allow-Methods"] = "GET"
    headers["Cache-Control"] = f"public, max-age={config.PROXY_CACHE_MAX_AGE}"
    return web.Response(body=body, status=200, content_type="application/xml", headers=headers)


async def handle_preflight(request: web.Request) -> web.Response:
    headers = _cors_headers()
    headers["Access-Control-Allow-Methods"] = "GET, OPTIONS"
    headers["Access-Control-Allow-Headers"] = "Content-Type"
    return web.Response(status=200, headers=headers)


def create_app(
    fetch_timeout: float = config.FEED_FETCH_TIMEOUT,
    route: str = config.PROXY_ROUTE,
) -> web.Application:
    app = web.Application()
    app[TIMEOUT_KEY] = fetch_timeout

    async def client_session(app: web.Application):
        async with aiohttp.ClientSession() as session:
            app[SESSION_KEY] = session
            yield

    app.cleanup_ctx.append(client_session)
    app.router.add_get(route, handle_feed, allow_head=False)
    app.router.add_route("OPTIONS", route, handle_preflight)
    return app
