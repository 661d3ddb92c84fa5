"""
Unit tests for the keep recommendation.
"""

import pytest

from simscan.utils.selection import keep_scores, recommend_keep


class TestKeepScores:
    """Test keep_scores function."""

    def test_best_in_every_factor_scores_100(self, fingerprint_factory):
        best = fingerprint_factory('/best.jpg', perceptual_hash='1' * 64, width=200, height=100,
                                   size=300, modified_time=2000)
        other = fingerprint_factory('/other.jpg', perceptual_hash='1' * 64, width=100, height=100,
                                    size=150, modified_time=1000)
        scores = keep_scores([best, other])
        assert scores[0] == pytest.approx(100.0)
        # 20 (resolution) + 15 (size) + 10 (recency) + 10 (fingerprint)
        assert scores[1] == pytest.approx(55.0)

    def test_zero_maximum_factor_is_skipped(self, fingerprint_factory):
        images = [fingerprint_factory('/a.jpg', size=0), fingerprint_factory('/b.jpg', size=0)]
        assert keep_scores(images) == [0.0, 0.0]

    def test_empty(self):
        assert keep_scores([]) == []


class TestRecommendKeep:
    """Test recommend_keep function."""

    def test_empty_group(self):
        assert recommend_keep([]) == ""

    def test_single_image(self, fingerprint_factory):
        assert recommend_keep([fingerprint_factory('/only.jpg')]) == '/only.jpg'

    def test_largest_file_wins(self, fingerprint_factory):
        images = [
            fingerprint_factory('/a.jpg', size=10),
            fingerprint_factory('/b.jpg', size=20),
            fingerprint_factory('/c.jpg', size=30),
        ]
        assert recommend_keep(images) == '/c.jpg'

    def test_resolution_outweighs_size(self, fingerprint_factory):
        images = [
            fingerprint_factory('/small.jpg', width=100, height=100, size=1000),
            fingerprint_factory('/large.jpg', width=400, height=400, size=600),
        ]
        assert recommend_keep(images) == '/large.jpg'

    def test_newer_file_wins_tie(self, fingerprint_factory):
        images = [
            fingerprint_factory('/old.jpg', size=100, modified_time=1000),
            fingerprint_factory('/new.jpg', size=100, modified_time=2000),
        ]
        assert recommend_keep(images) == '/new.jpg'

    def test_fingerprint_bonus(self, fingerprint_factory):
        images = [
            fingerprint_factory('/plain.jpg', size=100),
            fingerprint_factory('/hashed.jpg', size=100, perceptual_hash='0' * 64),
        ]
        assert recommend_keep(images) == '/hashed.jpg'

    def test_first_wins_exact_tie(self, fingerprint_factory):
        images = [
            fingerprint_factory('/first.jpg', size=100, modified_time=5),
            fingerprint_factory('/second.jpg', size=100, modified_time=5),
        ]
        assert recommend_keep(images) == '/first.jpg'
