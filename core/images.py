import logging
from typing import Optional, Sequence

from core.models import FeedEntry
from core.scoring import select_best
from core.utils import is_valid_image_url
from extractors.base import ImageStrategy
from extractors.media import MediaContentStrategy
from extractors.enclosure import EnclosureStrategy
from extractors.thumbnail import ThumbnailStrategy
from extractors.content import ContentImageStrategy
from extractors.custom import CustomTagStrategy
from extractors.meta import MetaTagStrategy

log = logging.getLogger("thumbfeed.images")

# Typed sources first, mined guesses last
DEFAULT_STRATEGIES: Sequence[ImageStrategy] = (
    MediaContentStrategy(),
    EnclosureStrategy(),
    ThumbnailStrategy(),
    ContentImageStrategy(),
    CustomTagStrategy(),
    MetaTagStrategy(),
)


def resolve_image(entry: FeedEntry, strategies: Optional[Sequence[ImageStrategy]] = None) -> Optional[str]:
    """Best image URL for one entry, or None.

    Stops at the first strategy producing a valid candidate; candidates from
    that strategy are ranked by ``select_best``.
    """
    for strategy in DEFAULT_STRATEGIES if strategies is None else strategies:
        try:
            found = strategy.extract(entry)
        except Exception:
            log.exception("Strategie %s en echec, ignoree.", strategy.name)
            continue
        candidates = [c for c in found if is_valid_image_url(c.url)]
        if len(candidates) < len(found):
            log.debug("%s: %d candidat(s) rejete(s).", strategy.name, len(found) - len(candidates))
        if candidates:
            return select_best(candidates)
    return None
