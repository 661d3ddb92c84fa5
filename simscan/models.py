"""
Data models for the Similar Image Scanner.

Contains dataclasses for the scan configuration, per-image fingerprints,
similarity groups, progress snapshots and the final scan result.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Optional

from .config import DEFAULT_ALGORITHM, DEFAULT_THRESHOLD


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable form."""
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} TB"


class Algorithm(str, Enum):
    """
    Which fingerprints are compared during a scan.

    Attributes:
        HASH: Exact content hash only
        PHASH: Perceptual hash (exact content matches still score 100)
        BOTH: Content hash and perceptual hash
    """
    HASH = 'hash'
    PHASH = 'phash'
    BOTH = 'both'

    @property
    def uses_perceptual(self) -> bool:
        return self in (Algorithm.PHASH, Algorithm.BOTH)


class ScanStatus(str, Enum):
    """Lifecycle of a single scan."""
    IDLE = 'idle'
    SCANNING = 'scanning'
    HASHING = 'hashing'
    COMPARING = 'comparing'
    COMPLETED = 'completed'
    ERROR = 'error'
    CANCELLED = 'cancelled'

    @property
    def is_terminal(self) -> bool:
        return self in (ScanStatus.COMPLETED, ScanStatus.ERROR, ScanStatus.CANCELLED)


class SkipReason(str, Enum):
    """Why a candidate file produced no fingerprint."""
    NOT_FOUND = 'not_found'
    UNREADABLE = 'unreadable'
    CANCELLED = 'cancelled'


def _normalize_extensions(extensions: Iterable[str]) -> frozenset:
    return frozenset(
        ext.strip().lower().lstrip('.')
        for ext in extensions
        if ext and ext.strip()
    )


@dataclass(frozen=True)
class ScanConfig:
    """
    Options for one scan. Immutable once the scan starts.

    Attributes:
        scan_path: Root directory to scan
        include_subdirectories: Descend into subdirectories
        min_file_size: Skip files smaller than this many bytes (inclusive bound)
        max_file_size: Skip files larger than this many bytes (inclusive bound)
        excluded_folders: Absolute directory paths to skip (exact match only)
        excluded_extensions: Lower-cased extensions (no dot) to skip
        similarity_threshold: Minimum similarity (0-100) to join a group
        algorithm: Which fingerprints to compare
    """
    scan_path: str
    include_subdirectories: bool = True
    min_file_size: Optional[int] = None
    max_file_size: Optional[int] = None
    excluded_folders: frozenset = field(default_factory=frozenset)
    excluded_extensions: frozenset = field(default_factory=frozenset)
    similarity_threshold: float = DEFAULT_THRESHOLD
    algorithm: Algorithm = Algorithm(DEFAULT_ALGORITHM)

    def __post_init__(self):
        # Coerce loosely-typed input once so the rest of the scan can trust it
        object.__setattr__(self, 'scan_path', str(self.scan_path) if self.scan_path else '')
        object.__setattr__(self, 'excluded_folders', frozenset(str(p) for p in self.excluded_folders))
        object.__setattr__(self, 'excluded_extensions', _normalize_extensions(self.excluded_extensions))
        if not isinstance(self.algorithm, Algorithm):
            try:
                object.__setattr__(self, 'algorithm', Algorithm(self.algorithm))
            except ValueError:
                pass  # reported by validate()

    @property
    def uses_perceptual(self) -> bool:
        return isinstance(self.algorithm, Algorithm) and self.algorithm.uses_perceptual

    def validate(self) -> tuple[bool, str]:
        """
        Validate the configuration.

        Returns:
            Tuple of (is_valid, error_message)
        """
        from .utils.validators import validate_scan_config
        return validate_scan_config(self)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'scanPath': self.scan_path,
            'includeSubdirectories': self.include_subdirectories,
            'minFileSize': self.min_file_size,
            'maxFileSize': self.max_file_size,
            'excludedFolders': sorted(self.excluded_folders),
            'excludedExtensions': sorted(self.excluded_extensions),
            'similarityThreshold': self.similarity_threshold,
            'algorithm': self.algorithm.value if isinstance(self.algorithm, Algorithm) else self.algorithm,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ScanConfig':
        """Create ScanConfig from a camelCase dictionary (API/JSON input)."""
        return cls(
            scan_path=data.get('scanPath', ''),
            include_subdirectories=data.get('includeSubdirectories', True),
            min_file_size=data.get('minFileSize'),
            max_file_size=data.get('maxFileSize'),
            excluded_folders=data.get('excludedFolders') or (),
            excluded_extensions=data.get('excludedExtensions') or (),
            similarity_threshold=data.get('similarityThreshold', DEFAULT_THRESHOLD),
            algorithm=data.get('algorithm', DEFAULT_ALGORITHM),
        )


@dataclass(frozen=True)
class ImageFingerprint:
    """
    Fingerprints and metadata of one image file.

    Attributes:
        file_path: Absolute path (unique key)
        content_hash: MD5 of the file bytes as lowercase hex
        perceptual_hash: 64 character '0'/'1' average hash, None if not computed
        width: Image width in pixels, if known
        height: Image height in pixels, if known
        size: File size in bytes
        modified_time: Modification time in epoch milliseconds
    """
    file_path: str
    content_hash: str
    perceptual_hash: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    size: int = 0
    modified_time: int = 0

    @property
    def filename(self) -> str:
        """Return just the filename portion of the path."""
        return os.path.basename(self.file_path)

    @property
    def pixel_count(self) -> int:
        """Total pixels, 0 when dimensions are unknown."""
        if self.width and self.height:
            return self.width * self.height
        return 0

    @property
    def resolution(self) -> str:
        """Return resolution as 'WxH' string ('?' when unknown)."""
        if self.width and self.height:
            return f"{self.width}x{self.height}"
        return "?"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'filePath': self.file_path,
            'fileHash': self.content_hash,
            'perceptualHash': self.perceptual_hash,
            'width': self.width,
            'height': self.height,
            'size': self.size,
            'modifiedTime': self.modified_time,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ImageFingerprint':
        """Create ImageFingerprint from dictionary."""
        return cls(
            file_path=data['filePath'],
            content_hash=data.get('fileHash', ''),
            perceptual_hash=data.get('perceptualHash'),
            width=data.get('width'),
            height=data.get('height'),
            size=data.get('size', 0),
            modified_time=data.get('modifiedTime', 0),
        )


@dataclass(frozen=True)
class FingerprintOutcome:
    """Result of fingerprinting one candidate: a fingerprint or a skip reason."""
    path: str
    fingerprint: Optional[ImageFingerprint] = None
    skip_reason: Optional[SkipReason] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.fingerprint is not None


@dataclass(frozen=True)
class SimilarityGroup:
    """
    A cluster of two or more similar images.

    Attributes:
        id: Sequence-assigned identifier ('group-<n>')
        images: Member fingerprints in discovery order
        similarity: Mean pairwise similarity of all members (2 decimals)
        recommended_keep: Path of the suggested survivor
    """
    id: str
    images: tuple = ()
    similarity: float = 0.0
    recommended_keep: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'images', tuple(self.images))

    @property
    def image_count(self) -> int:
        return len(self.images)

    @property
    def keep_image(self) -> Optional[ImageFingerprint]:
        """The recommended image, or the first one when there is no recommendation."""
        if not self.images:
            return None
        if self.recommended_keep:
            for img in self.images:
                if img.file_path == self.recommended_keep:
                    return img
        return self.images[0]

    @property
    def duplicates(self) -> list:
        """All images except the one to keep."""
        keep = self.keep_image
        return [img for img in self.images if img is not keep]

    @property
    def potential_savings(self) -> int:
        """Bytes that could be freed by removing the duplicates."""
        return sum(img.size for img in self.duplicates)

    @property
    def potential_savings_formatted(self) -> str:
        return format_size(self.potential_savings)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'images': [img.to_dict() for img in self.images],
            'similarity': self.similarity,
            'recommendedKeep': self.recommended_keep,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'SimilarityGroup':
        images = [ImageFingerprint.from_dict(img) for img in data.get('images', [])]
        return cls(
            id=data['id'],
            images=tuple(images),
            similarity=data.get('similarity', 0.0),
            recommended_keep=data.get('recommendedKeep'),
        )


@dataclass
class ScanProgress:
    """
    Snapshot of a running scan, handed to progress callbacks.

    Attributes:
        status: Current stage
        current: Files processed so far in the hashing stage
        total: Number of candidate files
        current_file: Human-readable description of the current step
        groups_found: Number of groups found so far
    """
    status: ScanStatus = ScanStatus.IDLE
    current: int = 0
    total: int = 0
    current_file: Optional[str] = None
    groups_found: int = 0

    @property
    def percent(self) -> float:
        if self.total <= 0:
            return 0.0
        return round(self.current / self.total * 100, 1)

    def copy(self) -> 'ScanProgress':
        return ScanProgress(
            status=self.status,
            current=self.current,
            total=self.total,
            current_file=self.current_file,
            groups_found=self.groups_found,
        )

    def to_dict(self) -> dict:
        return {
            'status': self.status.value,
            'current': self.current,
            'total': self.total,
            'currentFile': self.current_file,
            'groupsFound': self.groups_found,
        }


@dataclass
class ScanResult:
    """
    Final output of a completed scan.

    Attributes:
        groups: All similarity groups
        total_images: Number of fingerprinted images
        total_groups: Number of groups
        potential_space_saved: Bytes held by non-kept images across all groups
        scan_time: Wall-clock duration in milliseconds
    """
    groups: list = field(default_factory=list)
    total_images: int = 0
    total_groups: int = 0
    potential_space_saved: int = 0
    scan_time: int = 0

    @property
    def potential_space_saved_formatted(self) -> str:
        return format_size(self.potential_space_saved)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'groups': [g.to_dict() for g in self.groups],
            'totalImages': self.total_images,
            'totalGroups': self.total_groups,
            'potentialSpaceSaved': self.potential_space_saved,
            'scanTime': self.scan_time,
        }
