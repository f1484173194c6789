import pytest
from core.models import ImageCandidate
from core.scoring import score_candidate, select_best


def _candidate(url="https://cdn.example.com/x.jpg", width=0, height=0, source="media:content"):
    return ImageCandidate(url=url, width=width, height=height, source=source)


# ── score_candidate ───────────────────────────────────────────

class TestScoreCandidate:
    def test_ideal_landscape(self):
        # 100 band + 20 landscape + 10 source
        assert score_candidate(_candidate(width=800, height=500)) == 130

    def test_tiny(self):
        # 40 area + 10 source - 50 too small
        assert score_candidate(_candidate(width=50, height=50)) == 0

    def test_oversized(self):
        # 80 large + 20 landscape - 30 oversized + 10 source
        assert score_candidate(_candidate(width=1600, height=1200)) == 80

    def test_no_dimensions(self):
        assert score_candidate(_candidate()) == 30

    def test_no_source_bonus_for_regex_candidates(self):
        assert score_candidate(_candidate(source="media:content-regex")) == 20

    def test_portrait_in_band(self):
        assert score_candidate(_candidate(width=400, height=600)) == 110

    def test_second_tier(self):
        assert score_candidate(_candidate(width=250, height=160, source="media:content-regex")) == 100

    def test_area_tier_without_small_penalty(self):
        # width >= 100 so no penalty, height too small for tier two
        assert score_candidate(_candidate(width=150, height=100, source="")) == 60


# ── select_best ───────────────────────────────────────────────

class TestSelectBest:
    def test_picks_ideal_band(self):
        candidates = [
            _candidate("https://cdn.example.com/main.jpg", 800, 500),
            _candidate("https://cdn.example.com/small.jpg", 50, 50),
            _candidate("https://cdn.example.com/huge.jpg", 1600, 1200),
        ]
        assert select_best(candidates) == "https://cdn.example.com/main.jpg"

    def test_order_does_not_matter_for_distinct_scores(self):
        candidates = [
            _candidate("https://cdn.example.com/small.jpg", 50, 50),
            _candidate("https://cdn.example.com/huge.jpg", 1600, 1200),
            _candidate("https://cdn.example.com/main.jpg", 800, 500),
        ]
        assert select_best(candidates) == "https://cdn.example.com/main.jpg"

    def test_ties_keep_discovery_order(self):
        candidates = [
            _candidate("https://cdn.example.com/first.jpg"),
            _candidate("https://cdn.example.com/second.jpg"),
        ]
        assert select_best(candidates) == "https://cdn.example.com/first.jpg"

    def test_single_candidate_skips_scoring(self):
        only = _candidate("https://cdn.example.com/tiny.jpg", 10, 10)
        assert select_best([only]) == "https://cdn.example.com/tiny.jpg"

    def test_empty(self):
        assert select_best([]) is None

    @pytest.mark.parametrize("width,height", [(300, 200), (800, 600)])
    def test_band_is_inclusive(self, width, height):
        candidates = [
            _candidate("https://cdn.example.com/edge.jpg", width, height),
            _candidate("https://cdn.example.com/large.jpg", 1000, 700),
        ]
        assert select_best(candidates) == "https://cdn.example.com/edge.jpg"
