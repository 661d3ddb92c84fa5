"""
Unit tests for data models.
"""

import pytest
from simscan.models import (
    Algorithm,
    FingerprintOutcome,
    ImageFingerprint,
    ScanConfig,
    ScanProgress,
    ScanResult,
    ScanStatus,
    SimilarityGroup,
    SkipReason,
    format_size,
)


class TestFormatSize:
    """Test format_size function."""

    def test_bytes(self):
        assert format_size(512) == "512.0 B"

    def test_kilobytes(self):
        assert format_size(1536) == "1.5 KB"

    def test_megabytes(self):
        assert format_size(5 * 1024 * 1024) == "5.0 MB"


class TestAlgorithm:
    """Test Algorithm enum."""

    def test_values(self):
        assert Algorithm('hash') is Algorithm.HASH
        assert Algorithm('phash') is Algorithm.PHASH
        assert Algorithm('both') is Algorithm.BOTH

    def test_uses_perceptual(self):
        assert not Algorithm.HASH.uses_perceptual
        assert Algorithm.PHASH.uses_perceptual
        assert Algorithm.BOTH.uses_perceptual


class TestScanStatus:
    """Test ScanStatus enum."""

    @pytest.mark.parametrize("status", [ScanStatus.COMPLETED, ScanStatus.ERROR, ScanStatus.CANCELLED])
    def test_terminal_states(self, status):
        assert status.is_terminal

    @pytest.mark.parametrize("status", [ScanStatus.IDLE, ScanStatus.SCANNING,
                                        ScanStatus.HASHING, ScanStatus.COMPARING])
    def test_non_terminal_states(self, status):
        assert not status.is_terminal


class TestScanConfig:
    """Test ScanConfig dataclass."""

    def test_defaults(self):
        config = ScanConfig(scan_path='/photos')
        assert config.include_subdirectories is True
        assert config.min_file_size is None
        assert config.max_file_size is None
        assert config.excluded_folders == frozenset()
        assert config.excluded_extensions == frozenset()
        assert config.similarity_threshold == 90
        assert config.algorithm is Algorithm.BOTH

    def test_string_algorithm_coerced(self):
        config = ScanConfig(scan_path='/photos', algorithm='hash')
        assert config.algorithm is Algorithm.HASH
        assert not config.uses_perceptual

    def test_invalid_algorithm_left_for_validation(self, temp_dir):
        config = ScanConfig(scan_path=str(temp_dir), algorithm='fuzzy')
        assert config.algorithm == 'fuzzy'
        assert not config.uses_perceptual
        is_valid, error = config.validate()
        assert not is_valid
        assert 'fuzzy' in error

    def test_extensions_normalized(self):
        config = ScanConfig(scan_path='/photos', excluded_extensions=['.PNG', 'Gif', ' '])
        assert config.excluded_extensions == frozenset({'png', 'gif'})

    def test_is_immutable(self):
        config = ScanConfig(scan_path='/photos')
        with pytest.raises(AttributeError):
            config.similarity_threshold = 50

    def test_from_dict(self):
        config = ScanConfig.from_dict({
            'scanPath': '/photos',
            'includeSubdirectories': False,
            'minFileSize': 1000,
            'excludedFolders': ['/photos/raw'],
            'excludedExtensions': ['gif'],
            'similarityThreshold': 95,
            'algorithm': 'phash',
        })
        assert config.scan_path == '/photos'
        assert config.include_subdirectories is False
        assert config.min_file_size == 1000
        assert config.max_file_size is None
        assert config.excluded_folders == frozenset({'/photos/raw'})
        assert config.excluded_extensions == frozenset({'gif'})
        assert config.similarity_threshold == 95
        assert config.algorithm is Algorithm.PHASH

    def test_to_dict_round_trip(self):
        config = ScanConfig(scan_path='/photos', max_file_size=5000, excluded_extensions=['bmp'])
        assert ScanConfig.from_dict(config.to_dict()) == config


class TestImageFingerprint:
    """Test ImageFingerprint dataclass."""

    def test_filename(self):
        fp = ImageFingerprint(file_path='/photos/2023/beach.jpg', content_hash='abc')
        assert fp.filename == 'beach.jpg'

    def test_pixel_count_and_resolution(self):
        fp = ImageFingerprint(file_path='/a.jpg', content_hash='abc', width=1920, height=1080)
        assert fp.pixel_count == 1920 * 1080
        assert fp.resolution == '1920x1080'

    def test_unknown_dimensions(self):
        fp = ImageFingerprint(file_path='/a.jpg', content_hash='abc')
        assert fp.pixel_count == 0
        assert fp.resolution == '?'

    def test_to_dict_keys(self):
        fp = ImageFingerprint(file_path='/a.jpg', content_hash='abc', perceptual_hash='01' * 32,
                              width=10, height=20, size=300, modified_time=1234)
        assert fp.to_dict() == {
            'filePath': '/a.jpg',
            'fileHash': 'abc',
            'perceptualHash': '01' * 32,
            'width': 10,
            'height': 20,
            'size': 300,
            'modifiedTime': 1234,
        }
        assert ImageFingerprint.from_dict(fp.to_dict()) == fp


class TestFingerprintOutcome:
    """Test FingerprintOutcome dataclass."""

    def test_ok(self):
        fp = ImageFingerprint(file_path='/a.jpg', content_hash='abc')
        assert FingerprintOutcome(path='/a.jpg', fingerprint=fp).ok

    def test_skipped(self):
        outcome = FingerprintOutcome(path='/a.jpg', skip_reason=SkipReason.NOT_FOUND)
        assert not outcome.ok


class TestSimilarityGroup:
    """Test SimilarityGroup dataclass."""

    def _group(self, fingerprint_factory, keep='/c.jpg'):
        images = [
            fingerprint_factory('/a.jpg', size=10),
            fingerprint_factory('/b.jpg', size=20),
            fingerprint_factory('/c.jpg', size=30),
        ]
        return SimilarityGroup(id='group-1', images=images, similarity=97.5, recommended_keep=keep)

    def test_images_stored_as_tuple(self, fingerprint_factory):
        group = self._group(fingerprint_factory)
        assert isinstance(group.images, tuple)
        assert group.image_count == 3

    def test_keep_image_and_duplicates(self, fingerprint_factory):
        group = self._group(fingerprint_factory)
        assert group.keep_image.file_path == '/c.jpg'
        assert [img.file_path for img in group.duplicates] == ['/a.jpg', '/b.jpg']

    def test_potential_savings(self, fingerprint_factory):
        """Sizes [10, 20, 30] keeping the 30 byte file frees 30 bytes."""
        group = self._group(fingerprint_factory)
        assert group.potential_savings == 30

    def test_keep_image_falls_back_to_first(self, fingerprint_factory):
        group = self._group(fingerprint_factory, keep=None)
        assert group.keep_image.file_path == '/a.jpg'
        assert group.potential_savings == 50

    def test_to_dict(self, fingerprint_factory):
        data = self._group(fingerprint_factory).to_dict()
        assert data['id'] == 'group-1'
        assert data['similarity'] == 97.5
        assert data['recommendedKeep'] == '/c.jpg'
        assert [img['filePath'] for img in data['images']] == ['/a.jpg', '/b.jpg', '/c.jpg']


class TestScanProgress:
    """Test ScanProgress dataclass."""

    def test_percent(self):
        assert ScanProgress(current=1, total=3).percent == 33.3
        assert ScanProgress().percent == 0.0

    def test_copy_is_independent(self):
        progress = ScanProgress(status=ScanStatus.HASHING, current=1, total=2)
        snapshot = progress.copy()
        progress.current = 2
        assert snapshot.current == 1
        assert snapshot.status is ScanStatus.HASHING

    def test_to_dict(self):
        progress = ScanProgress(status=ScanStatus.COMPARING, current=5, total=5,
                                current_file='Comparing images...', groups_found=2)
        assert progress.to_dict() == {
            'status': 'comparing',
            'current': 5,
            'total': 5,
            'currentFile': 'Comparing images...',
            'groupsFound': 2,
        }


class TestScanResult:
    """Test ScanResult dataclass."""

    def test_empty_result(self):
        result = ScanResult()
        assert result.to_dict() == {
            'groups': [],
            'totalImages': 0,
            'totalGroups': 0,
            'potentialSpaceSaved': 0,
            'scanTime': 0,
        }

    def test_formatted_savings(self):
        assert ScanResult(potential_space_saved=2048).potential_space_saved_formatted == "2.0 KB"
