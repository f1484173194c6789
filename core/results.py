"""Tagged parse results and the failure taxonomy callers branch on."""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

import aiohttp

from core.fetch import FeedHTTPError, FeedUnreachableError
from core.models import Article


class ErrorKind(str, Enum):
    MISSING_URL = "MissingUrl"
    UNREACHABLE = "Unreachable"
    UPSTREAM_ERROR = "UpstreamError"
    MALFORMED_FEED = "MalformedFeed"
    EMPTY_FEED = "EmptyFeed"
    NO_ARTICLES = "NoArticles"
    UNKNOWN = "Unknown"


MESSAGES: Dict[ErrorKind, str] = {
    ErrorKind.MISSING_URL: "RSS URL is required",
    ErrorKind.UNREACHABLE: "Unable to connect to RSS feed - check your internet connection",
    ErrorKind.UPSTREAM_ERROR: "RSS feed is not available",
    ErrorKind.MALFORMED_FEED: "RSS feed format is invalid",
    ErrorKind.EMPTY_FEED: "RSS feed is empty",
    ErrorKind.NO_ARTICLES: "RSS feed contains no articles",
    ErrorKind.UNKNOWN: "Failed to load RSS feed - please try again later",
}

_NETWORK_HINTS = ("fetch", "connect", "network", "timed out", "timeout", "name resolution")


@dataclass(frozen=True)
class ParseSuccess:
    articles: List[Article]
    error = False
    status = None

    def __post_init__(self):
        if not self.articles:
            raise ValueError("ParseSuccess requires at least one article")

    @property
    def items(self) -> List[Article]:
        return self.articles

    @property
    def message(self) -> str:
        return f"Successfully loaded {len(self.articles)} articles"


@dataclass(frozen=True)
class ParseFailure:
    kind: ErrorKind
    message: str
    http_status: Optional[int] = None
    items: List[Article] = field(default_factory=list)
    error = True

    @property
    def status(self) -> Optional[int]:
        return self.http_status


ParseResult = Union[ParseSuccess, ParseFailure]


def failure(kind: ErrorKind, status: Optional[int] = None) -> ParseFailure:
    if kind is ErrorKind.UPSTREAM_ERROR and status is not None:
        return classify_status(status)
    return ParseFailure(kind=kind, message=MESSAGES[kind], http_status=status)


def status_message(status: int) -> str:
    if status == 404:
        return "RSS feed not found"
    if status == 403:
        return "Access to RSS feed denied"
    if status >= 500:
        return "RSS server temporarily unavailable"
    return MESSAGES[ErrorKind.UPSTREAM_ERROR]


def classify_status(status: int) -> ParseFailure:
    return ParseFailure(
        kind=ErrorKind.UPSTREAM_ERROR,
        message=status_message(status),
        http_status=status,
    )


def classify_exception(exc: BaseException) -> ParseFailure:
    """Map a low-level exception onto the taxonomy."""
    if isinstance(exc, FeedHTTPError):
        return classify_status(exc.status)
    if isinstance(exc, (FeedUnreachableError, aiohttp.ClientError, asyncio.TimeoutError, OSError)):
        return failure(ErrorKind.UNREACHABLE)
    text = str(exc).lower()
    if any(hint in text for hint in _NETWORK_HINTS):
        return failure(ErrorKind.UNREACHABLE)
    return failure(ErrorKind.UNKNOWN)


def to_payload(result: ParseResult) -> Dict[str, Any]:
    """Output contract for presentation code: branch on ``error`` first."""
    payload: Dict[str, Any] = {
        "error": result.error,
        "message": result.message,
        "items": [a.as_dict() for a in result.items],
    }
    if isinstance(result, ParseFailure):
        payload["kind"] = result.kind.value
        if result.http_status is not None:
            payload["status"] = result.http_status
    return payload
