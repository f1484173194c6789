import re
from typing import List

from core.models import FeedEntry, ImageCandidate
from core.utils import is_valid_image_url
from core.xmltools import find_local, get_attr, text_content
from extractors.base import ImageStrategy

CUSTOM_TAGS = ("image", "thumbnail", "photo", "picture", "img")
URL_ATTRS = ("url", "src", "href")

_CUSTOM_TAG_RE = re.compile(
    r"""<(?:image|thumbnail|photo|picture)[^>]*(?:url|src|href)=["']([^"']+)["']"""
)


class CustomTagStrategy(ImageStrategy):
    """Nonstandard image-ish tags some publishers add to their items."""
    name = "custom"

    def extract(self, entry: FeedEntry) -> List[ImageCandidate]:
        for tag in CUSTOM_TAGS:
            el = find_local(entry.element, tag)
            if el is None:
                continue
            url = next((get_attr(el, a) for a in URL_ATTRS if get_attr(el, a)), None)
            if not url:
                url = text_content(el).strip()
            if url and is_valid_image_url(url):
                return [ImageCandidate(url=url, source=self.name)]

        m = _CUSTOM_TAG_RE.search(entry.raw or "")
        if m and is_valid_image_url(m.group(1)):
            return [ImageCandidate(url=m.group(1), source=self.name)]
        return []
