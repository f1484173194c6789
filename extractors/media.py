import re
from typing import List, Optional

from core.models import FeedEntry, ImageCandidate
from core.xmltools import get_attr, iter_local
from extractors.base import ImageStrategy

# Fallback for documents where the media element is not reachable as a node
_MEDIA_PATTERNS = (
    re.compile(r"""<media:content[^>]+url=["']([^"']+)["'][^>]*medium=["']image["']"""),
    re.compile(r"""<media:content[^>]+url=["']([^"']+)["'][^>]*type=["']image/[^"']+["']"""),
    re.compile(r"""<content[^>]+url=["']([^"']+)["'][^>]*medium=["']image["']"""),
)
_WIDTH_RE = re.compile(r"""width=["'](\d+)["']""")
_HEIGHT_RE = re.compile(r"""height=["'](\d+)["']""")
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def parse_dimension(value: Optional[str]) -> int:
    """Leading integer of an attribute value ("640px" -> 640), 0 otherwise."""
    if not value:
        return 0
    m = _LEADING_INT_RE.match(value)
    return int(m.group(1)) if m else 0


def _is_image_media(el) -> bool:
    medium = get_attr(el, "medium") or ""
    mime = get_attr(el, "type") or ""
    return medium == "image" or mime.startswith("image")


class MediaContentStrategy(ImageStrategy):
    name = "media:content"

    def extract(self, entry: FeedEntry) -> List[ImageCandidate]:
        images = self._from_elements(entry)
        if not images:
            images = self._from_markup(entry.raw)
        return images

    def _from_elements(self, entry: FeedEntry) -> List[ImageCandidate]:
        out = []
        for el in iter_local(entry.element, "content"):
            if not _is_image_media(el):
                continue
            url = get_attr(el, "url")
            if not url:
                continue
            out.append(ImageCandidate(
                url=url,
                width=parse_dimension(get_attr(el, "width")),
                height=parse_dimension(get_attr(el, "height")),
                type=get_attr(el, "type") or "",
                source=self.name,
            ))
        return out

    def _from_markup(self, raw: str) -> List[ImageCandidate]:
        out = []
        for pattern in _MEDIA_PATTERNS:
            for m in pattern.finditer(raw or ""):
                full = m.group(0)
                w = _WIDTH_RE.search(full)
                h = _HEIGHT_RE.search(full)
                out.append(ImageCandidate(
                    url=m.group(1),
                    width=int(w.group(1)) if w else 0,
                    height=int(h.group(1)) if h else 0,
                    source="media:content-regex",
                ))
        return out
