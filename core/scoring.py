"""Ranking of competing image candidates found by the same strategy.

Weights were picked empirically for typical news thumbnails. They are kept as
tables so they can be tuned without touching the ranking code.
"""

from typing import Callable, List, Optional, Sequence, Tuple

from core.models import ImageCandidate

Rule = Tuple[Callable[[ImageCandidate], bool], int]

PREFERRED_SOURCE = "media:content"


def _in_ideal_band(c: ImageCandidate) -> bool:
    return 300 <= c.width <= 800 and 200 <= c.height <= 600


# First matching tier wins
DIMENSION_TIERS: List[Rule] = [
    (_in_ideal_band, 100),
    (lambda c: c.width >= 200 and c.height >= 150, 80),
    (lambda c: c.width * c.height > 0, 40),
    (lambda c: True, 20),  # no usable dimensions
]

# Every matching adjustment applies
ADJUSTMENTS: List[Rule] = [
    (lambda c: c.width > c.height, 20),  # landscape
    (lambda c: c.width > 1200 or c.height > 800, -30),  # oversized
    (lambda c: c.source == PREFERRED_SOURCE, 10),
    (lambda c: 0 < c.width < 100, -50),  # too small
]


def score_candidate(candidate: ImageCandidate) -> int:
    score = 0
    for predicate, weight in DIMENSION_TIERS:
        if predicate(candidate):
            score += weight
            break
    for predicate, weight in ADJUSTMENTS:
        if predicate(candidate):
            score += weight
    return score


def select_best(candidates: Sequence[ImageCandidate]) -> Optional[str]:
    if not candidates:
        return None
    if len(candidates) == 1:
        return candidates[0].url
    # sorted() is stable: equal scores keep discovery order
    ranked = sorted(candidates, key=score_candidate, reverse=True)
    return ranked[0].url
