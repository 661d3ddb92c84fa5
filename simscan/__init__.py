"""
Similar Image Scanner
=====================
Finds exact duplicate and visually similar images in a folder tree.

Features:
- MD5 content hash for exact duplicates
- 64-bit average hash for visually similar images
- Greedy threshold clustering with a keep recommendation per group
- Parallel fingerprinting with progress reporting and cancellation
- JSON API server for a calling application
- CLI with TXT/CSV/JSON export
"""

__version__ = "1.0.0"

from .models import (
    Algorithm,
    ScanStatus,
    SkipReason,
    ScanConfig,
    ImageFingerprint,
    FingerprintOutcome,
    SimilarityGroup,
    ScanProgress,
    ScanResult,
)
from .config import IMAGE_EXTENSIONS, DEFAULT_THRESHOLD, DEFAULT_ALGORITHM
from .scanner import (
    content_hash,
    perceptual_hash,
    similarity,
    find_image_files,
    fingerprint_image,
    group_similar_images,
    has_heif_support,
)
from .utils.selection import recommend_keep
from .state import CancellationToken, ScanCancelled
from .orchestrator import ScanConfigError, ScanOrchestrator, scan

__all__ = [
    "Algorithm",
    "ScanStatus",
    "SkipReason",
    "ScanConfig",
    "ImageFingerprint",
    "FingerprintOutcome",
    "SimilarityGroup",
    "ScanProgress",
    "ScanResult",
    "IMAGE_EXTENSIONS",
    "DEFAULT_THRESHOLD",
    "DEFAULT_ALGORITHM",
    "content_hash",
    "perceptual_hash",
    "similarity",
    "find_image_files",
    "fingerprint_image",
    "group_similar_images",
    "has_heif_support",
    "recommend_keep",
    "CancellationToken",
    "ScanCancelled",
    "ScanConfigError",
    "ScanOrchestrator",
    "scan",
]
