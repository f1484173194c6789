from typing import List

from core.models import FeedEntry, ImageCandidate
from core.xmltools import find_local, get_attr, text_content
from extractors.base import ImageStrategy
from extractors.media import parse_dimension


class ThumbnailStrategy(ImageStrategy):
    """<media:thumbnail url="..."/> or a bare <thumbnail>...</thumbnail>."""
    name = "thumbnail"

    def extract(self, entry: FeedEntry) -> List[ImageCandidate]:
        el = find_local(entry.element, "thumbnail")
        if el is None:
            return []
        url = get_attr(el, "url") or text_content(el).strip()
        if not url:
            return []
        return [ImageCandidate(
            url=url,
            width=parse_dimension(get_attr(el, "width")),
            height=parse_dimension(get_attr(el, "height")),
            source=self.name,
        )]
