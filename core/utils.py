import re
import html
from typing import Any

from bs4 import BeautifulSoup

IMAGE_EXTENSIONS = ("jpg", "jpeg", "png", "gif", "webp", "svg")

_IMAGE_EXT_RE = re.compile(r"\.(?:%s)(\?.*)?$" % "|".join(IMAGE_EXTENSIONS), re.I)
_HTTP_RE = re.compile(r"^https?://.+", re.I)
_DATA_IMAGE_RE = re.compile(r"^data:image/.+", re.I)


def is_valid_image_url(url: Any) -> bool:
    """Syntactic plausibility check applied to every resolved image URL."""
    if not url or not isinstance(url, str):
        return False
    if _IMAGE_EXT_RE.search(url) or _DATA_IMAGE_RE.match(url):
        return True
    return bool(_HTTP_RE.match(url)) and "javascript:" not in url


def strip_html_to_text(raw_html: str) -> str:
    raw_html = raw_html or ""
    text = BeautifulSoup(raw_html, "html.parser").get_text("\n")
    text = html.unescape(text)
    text = re.sub(r"[ \t]+\n", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text).strip()
    return text
