import re
from typing import List

from core.models import FeedEntry, ImageCandidate
from core.utils import is_valid_image_url
from extractors.base import ImageStrategy

# Attribute order is not canonical in the wild, hence both orders
_META_PATTERNS = (
    re.compile(r"""<meta[^>]*property=["']og:image["'][^>]*content=["']([^"']+)["']"""),
    re.compile(r"""<meta[^>]*name=["']twitter:image["'][^>]*content=["']([^"']+)["']"""),
    re.compile(r"""<meta[^>]*content=["']([^"']+)["'][^>]*property=["']og:image["']"""),
    re.compile(r"""<meta[^>]*content=["']([^"']+)["'][^>]*name=["']twitter:image["']"""),
)


class MetaTagStrategy(ImageStrategy):
    name = "meta"

    def extract(self, entry: FeedEntry) -> List[ImageCandidate]:
        raw = entry.raw or ""
        for pattern in _META_PATTERNS:
            m = pattern.search(raw)
            if m and is_valid_image_url(m.group(1)):
                return [ImageCandidate(url=m.group(1), source=self.name)]
        return []
