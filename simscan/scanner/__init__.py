"""
Scanner package for the Similar Image Scanner.

Provides image discovery, fingerprinting and similarity grouping.

Public API:
- iter_image_files / find_image_files: Discover candidate image files
- content_hash / calculate_file_hash: MD5 of file contents
- perceptual_hash / calculate_perceptual_hash: 64-bit average hash
- similarity: Percentage similarity of two perceptual hashes
- decode_greyscale / read_metadata: Image decoding helpers
- fingerprint_image: Fingerprint a single file
- fingerprint_images: Fingerprint many files in parallel
- group_similar_images: Greedy similarity clustering
- has_heif_support: Check if HEIC/HEIF support is available
"""

from __future__ import annotations

from .file_discovery import iter_image_files, find_image_files
from .hashing import (
    content_hash,
    calculate_file_hash,
    perceptual_hash,
    calculate_perceptual_hash,
    hamming_distance,
    similarity,
)
from .decoder import decode_greyscale, read_metadata
from .analysis import fingerprint_image
from .parallel import fingerprint_images
from .grouping import group_similar_images, pair_similarity, group_similarity

from .dependencies import HAS_HEIF_SUPPORT


def has_heif_support() -> bool:
    """Check if HEIC/HEIF support is available."""
    return HAS_HEIF_SUPPORT


__all__ = [
    # File discovery
    'iter_image_files',
    'find_image_files',
    # Hashing
    'content_hash',
    'calculate_file_hash',
    'perceptual_hash',
    'calculate_perceptual_hash',
    'hamming_distance',
    'similarity',
    # Decoding
    'decode_greyscale',
    'read_metadata',
    # Fingerprinting
    'fingerprint_image',
    'fingerprint_images',
    # Grouping
    'group_similar_images',
    'pair_similarity',
    'group_similarity',
    # Feature detection
    'has_heif_support',
]
