"""
Unit tests for single-image fingerprinting and the parallel runner.
"""

import os

import pytest

from simscan.models import SkipReason
from simscan.scanner import fingerprint_image, fingerprint_images
from simscan.state import CancellationToken, ScanCancelled


class TestFingerprintImage:
    """Test fingerprint_image function."""

    def test_perceptual_mode(self, sample_images):
        outcome = fingerprint_image(sample_images['photo'])
        assert outcome.ok
        fp = outcome.fingerprint
        assert fp.file_path == sample_images['photo']
        assert len(fp.content_hash) == 32
        assert len(fp.perceptual_hash) == 64
        assert (fp.width, fp.height) == (64, 64)
        assert fp.size == os.path.getsize(sample_images['photo'])
        assert fp.modified_time == 1_700_000_000_000

    def test_exact_mode_skips_decoding(self, sample_images):
        fp = fingerprint_image(sample_images['photo'], use_perceptual=False).fingerprint
        assert fp.perceptual_hash is None
        assert fp.width is None
        assert fp.height is None
        assert len(fp.content_hash) == 32

    def test_both_modes_agree_on_content_hash(self, sample_images):
        exact = fingerprint_image(sample_images['photo'], use_perceptual=False).fingerprint
        perceptual = fingerprint_image(sample_images['photo']).fingerprint
        assert exact.content_hash == perceptual.content_hash

    def test_undecodable_image_keeps_content_hash(self, sample_images):
        outcome = fingerprint_image(sample_images['broken'])
        assert outcome.ok
        assert outcome.fingerprint.perceptual_hash is None
        assert outcome.fingerprint.content_hash
        assert outcome.fingerprint.width is None

    def test_missing_file(self, temp_dir):
        outcome = fingerprint_image(str(temp_dir / 'gone.jpg'))
        assert not outcome.ok
        assert outcome.skip_reason is SkipReason.NOT_FOUND


class TestFingerprintImages:
    """Test fingerprint_images function."""

    @pytest.mark.parametrize("workers", [1, 4])
    def test_results_in_input_order(self, sample_images, workers):
        paths = [sample_images['unique'], sample_images['photo'], sample_images['nested']]
        outcomes = fingerprint_images(paths, max_workers=workers)
        assert [o.path for o in outcomes] == paths
        assert all(o.ok for o in outcomes)

    @pytest.mark.parametrize("workers", [1, 4])
    def test_progress_is_monotonic(self, sample_images, workers):
        paths = [sample_images[key] for key in ('photo', 'photo_copy', 'photo_large', 'unique', 'nested')]
        calls = []
        fingerprint_images(paths, max_workers=workers,
                           progress_callback=lambda current, total, path: calls.append((current, total)))
        assert [current for current, _ in calls] == [1, 2, 3, 4, 5]
        assert all(total == 5 for _, total in calls)

    def test_missing_file_reported_not_raised(self, sample_images, temp_dir):
        paths = [sample_images['photo'], str(temp_dir / 'gone.png')]
        outcomes = fingerprint_images(paths, max_workers=2)
        assert outcomes[0].ok
        assert outcomes[1].skip_reason is SkipReason.NOT_FOUND

    @pytest.mark.parametrize("workers", [1, 4])
    def test_cancel_before_start(self, sample_images, workers):
        token = CancellationToken()
        token.cancel()
        with pytest.raises(ScanCancelled):
            fingerprint_images([sample_images['photo']], max_workers=workers, cancel_token=token)

    @pytest.mark.parametrize("workers", [1, 4])
    def test_cancel_from_progress_callback(self, sample_images, workers):
        paths = [sample_images[key] for key in ('photo', 'photo_copy', 'photo_large', 'unique', 'nested')]
        token = CancellationToken()
        calls = []

        def on_progress(current, total, path):
            calls.append(current)
            token.cancel()

        with pytest.raises(ScanCancelled):
            fingerprint_images(paths, max_workers=workers, progress_callback=on_progress, cancel_token=token)
        assert calls == [1]
