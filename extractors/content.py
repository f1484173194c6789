import re
from typing import List, Optional

from core.models import FeedEntry, ImageCandidate
from core.utils import IMAGE_EXTENSIONS, is_valid_image_url
from core.xmltools import NS_ATOM, find_local, find_qualified, text_content
from extractors.base import ImageStrategy

_EXT = "|".join(IMAGE_EXTENSIONS)

# (pattern, group holding the URL), tried in order
_IMG_PATTERNS = (
    (re.compile(r"""<img[^>]+src=["']([^"']+)["'][^>]*>""", re.I), 1),
    (re.compile(r"""<img[^>]+src=([^\s>]+)[^>]*>""", re.I), 1),
    (re.compile(r"""src=["']([^"']+\.(?:%s))["']""" % _EXT, re.I), 1),
    (re.compile(r"""https?://[^\s<>"]+\.(?:%s)(?:\?[^\s<>"]*)?""" % _EXT, re.I), 0),
)


def extract_image_from_html(html_content: str) -> Optional[str]:
    """First plausible image reference in an HTML fragment."""
    for pattern, group in _IMG_PATTERNS:
        m = pattern.search(html_content or "")
        if m and is_valid_image_url(m.group(group)):
            return m.group(group)
    return None


class ContentImageStrategy(ImageStrategy):
    name = "content"

    def extract(self, entry: FeedEntry) -> List[ImageCandidate]:
        for field in self._fields(entry):
            if field is None:
                continue
            url = extract_image_from_html(text_content(field))
            if url:
                return [ImageCandidate(url=url, source=self.name)]
        return []

    @staticmethod
    def _fields(entry: FeedEntry):
        el = entry.element
        # content:encoded, then description; Atom bodies last
        yield find_local(el, "encoded")
        yield find_local(el, "description")
        yield find_qualified(el, NS_ATOM, "content")
        yield find_qualified(el, NS_ATOM, "summary")
