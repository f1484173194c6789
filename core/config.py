"""Centralized configuration for the thumbfeed proxy."""

import os
import logging

log = logging.getLogger("thumbfeed.config")

# =========================
# Proxy server
# =========================
PROXY_HOST: str = os.getenv("PROXY_HOST", "0.0.0.0")
PROXY_PORT: int = int(os.getenv("PROXY_PORT", "8080"))
PROXY_ROUTE: str = os.getenv("PROXY_ROUTE", "/api/rss")

# Shared caches may keep a proxied feed this long (seconds)
PROXY_CACHE_MAX_AGE: int = int(os.getenv("PROXY_CACHE_MAX_AGE", "300"))

# =========================
# Upstream fetch
# =========================
FEED_FETCH_TIMEOUT: float = float(os.getenv("FEED_FETCH_TIMEOUT", "10"))
FEED_USER_AGENT: str = os.getenv("FEED_USER_AGENT", "Mozilla/5.0 (compatible; RSS-Reader/1.0)")
FEED_ACCEPT: str = os.getenv("FEED_ACCEPT", "application/rss+xml, application/xml, text/xml")

# =========================
# Logging
# =========================
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


def validate_config() -> None:
    """Validate numeric settings. Call at startup."""
    problems = []
    if FEED_FETCH_TIMEOUT <= 0:
        problems.append(f"FEED_FETCH_TIMEOUT={FEED_FETCH_TIMEOUT}")
    if not 0 < PROXY_PORT < 65536:
        problems.append(f"PROXY_PORT={PROXY_PORT}")
    if PROXY_CACHE_MAX_AGE < 0:
        problems.append(f"PROXY_CACHE_MAX_AGE={PROXY_CACHE_MAX_AGE}")
    if not PROXY_ROUTE.startswith("/"):
        problems.append(f"PROXY_ROUTE={PROXY_ROUTE}")
    if problems:
        raise EnvironmentError(
            f"Configuration invalide: {', '.join(problems)}"
        )
    if not isinstance(logging.getLevelName(LOG_LEVEL), int):
        log.warning("LOG_LEVEL inconnu (%s), INFO utilise.", LOG_LEVEL)
