from typing import List

from core.models import FeedEntry, ImageCandidate
from core.xmltools import get_attr, iter_local
from extractors.base import ImageStrategy


class EnclosureStrategy(ImageStrategy):
    name = "enclosure"

    def extract(self, entry: FeedEntry) -> List[ImageCandidate]:
        for el in iter_local(entry.element, "enclosure"):
            if not (get_attr(el, "type") or "").startswith("image"):
                continue
            url = get_attr(el, "url")
            if not url:
                return []
            return [ImageCandidate(url=url, type=get_attr(el, "type") or "", source=self.name)]
        return []
