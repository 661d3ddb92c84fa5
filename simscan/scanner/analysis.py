"""
Image analysis module for the scanner package.

Fingerprints a single candidate file. Failures never raise: an unreadable
file becomes a FingerprintOutcome carrying a SkipReason, and an image that
cannot be decoded keeps its content hash without a perceptual hash.
"""

from __future__ import annotations

import os
from pathlib import Path

from ..config import HEIF_EXTENSIONS
from ..models import FingerprintOutcome, ImageFingerprint, SkipReason
from .decoder import read_metadata
from .dependencies import HAS_HEIF_SUPPORT, _logger
from .file_discovery import file_extension
from .hashing import calculate_file_hash, calculate_perceptual_hash, content_hash


def fingerprint_image(filepath: str | Path, use_perceptual: bool = True) -> FingerprintOutcome:
    """
    Compute the fingerprints of one image file.

    Args:
        filepath: Path to the image file
        use_perceptual: Also decode the image for its dimensions and perceptual hash

    Returns:
        FingerprintOutcome with either a fingerprint or a skip reason
    """
    filepath = str(filepath)

    try:
        stat = os.stat(filepath)
    except FileNotFoundError:
        _logger.warning(f"File disappeared before hashing: {filepath}")
        return FingerprintOutcome(path=filepath, skip_reason=SkipReason.NOT_FOUND, error="File not found")
    except OSError as e:
        _logger.warning(f"Cannot stat {filepath}: {e}")
        return FingerprintOutcome(path=filepath, skip_reason=SkipReason.UNREADABLE, error=str(e))

    size = stat.st_size
    modified_time = stat.st_mtime_ns // 1_000_000

    if not use_perceptual:
        # Exact-hash mode never needs the whole file in memory
        file_hash = calculate_file_hash(filepath)
        if not file_hash:
            _logger.warning(f"Cannot read {filepath}")
            return FingerprintOutcome(path=filepath, skip_reason=SkipReason.UNREADABLE, error="File not readable")
        fingerprint = ImageFingerprint(
            file_path=filepath,
            content_hash=file_hash,
            size=size,
            modified_time=modified_time,
        )
        return FingerprintOutcome(path=filepath, fingerprint=fingerprint)

    try:
        data = Path(filepath).read_bytes()
    except OSError as e:
        _logger.warning(f"Cannot read {filepath}: {e}")
        return FingerprintOutcome(path=filepath, skip_reason=SkipReason.UNREADABLE, error=str(e))

    width = height = None
    phash = None

    if file_extension(filepath) in HEIF_EXTENSIONS and not HAS_HEIF_SUPPORT:
        _logger.debug(f"Skipping perceptual hash for {filepath}: pillow-heif not installed")
    else:
        try:
            metadata = read_metadata(data)
            width, height = metadata['width'], metadata['height']
            phash = calculate_perceptual_hash(data)
        except Exception as e:
            _logger.warning(f"Cannot decode image {filepath}: {e}")

        if phash is None:
            _logger.debug(f"No perceptual hash for {filepath}; comparing by content hash only")

    fingerprint = ImageFingerprint(
        file_path=filepath,
        content_hash=content_hash(data),
        perceptual_hash=phash,
        width=width,
        height=height,
        size=size,
        modified_time=modified_time,
    )
    return FingerprintOutcome(path=filepath, fingerprint=fingerprint)


__all__ = ['fingerprint_image']
