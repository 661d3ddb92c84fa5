"""
Hashing module for the scanner package.

Provides the content hash (MD5 of the file bytes), the 64-bit average
perceptual hash, and the similarity score between two perceptual hashes.

The perceptual hash is an average hash (aHash): the image is stretched to an
8x8 greyscale grid and each bit records whether a pixel is brighter than the
grid's mean. It survives re-encoding and resizing, but not rotation, cropping
or mirroring.
"""

from __future__ import annotations

import hashlib
import math
from pathlib import Path
from typing import Any, Optional

from ..config import HASH_CHUNK_SIZE, HASH_SIZE
from .decoder import decode_greyscale
from .dependencies import imagehash, np, _logger

CONTENT_HASH_ALGORITHM = 'md5'


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return math.floor(value + 0.5)


def content_hash(data: bytes, algorithm: str = CONTENT_HASH_ALGORITHM) -> str:
    """
    Calculate the exact-content fingerprint of raw bytes.

    Args:
        data: File contents
        algorithm: Digest algorithm (default: md5)

    Returns:
        Lowercase hex digest
    """
    hasher = hashlib.new(algorithm)
    hasher.update(data)
    return hasher.hexdigest()


def calculate_file_hash(filepath: str | Path, algorithm: str = CONTENT_HASH_ALGORITHM) -> str:
    """
    Calculate the content hash of a file without reading it into memory at once.

    Args:
        filepath: Path to the file
        algorithm: Digest algorithm (default: md5)

    Returns:
        Hex digest of the file hash, or empty string on error
    """
    hasher = hashlib.new(algorithm)
    try:
        with open(filepath, 'rb') as f:
            for chunk in iter(lambda: f.read(HASH_CHUNK_SIZE), b''):
                hasher.update(chunk)
        return hasher.hexdigest()
    except OSError as e:
        _logger.debug(f"File hash calculation failed for {filepath}: {e}")
        return ""


def hash_to_bits(image_hash: imagehash.ImageHash) -> str:
    """Render an ImageHash as a row-major string of '0'/'1' characters."""
    return ''.join('1' if bit else '0' for bit in image_hash.hash.flatten())


def perceptual_hash(pixels: Any) -> str:
    """
    Calculate the average hash of a greyscale pixel grid.

    Args:
        pixels: 2-D (or flat) greyscale buffer, normally 8x8

    Returns:
        One '1'/'0' character per pixel in row-major order; '1' when the
        pixel is strictly brighter than the mean of all pixels

    Raises:
        ValueError: If the buffer is empty

    Examples:
        >>> perceptual_hash([[0, 255], [255, 0]])
        '0110'
    """
    values = np.asarray(pixels, dtype=np.float64)
    if values.size == 0:
        raise ValueError("Cannot hash an empty pixel buffer")

    average = values.mean()
    return hash_to_bits(imagehash.ImageHash(values > average))


def calculate_perceptual_hash(data: bytes, hash_size: int = HASH_SIZE) -> Optional[str]:
    """
    Decode image bytes and calculate their perceptual hash.

    Args:
        data: Encoded image bytes
        hash_size: Grid edge length (default 8, resulting in a 64-bit hash)

    Returns:
        The hash string, or None if the image could not be decoded
    """
    try:
        pixels = decode_greyscale(data, width=hash_size, height=hash_size, fit='fill')
        return perceptual_hash(pixels)
    except Exception as e:
        _logger.debug(f"Perceptual hash calculation failed: {e}")
        return None


def hamming_distance(hash_a: str, hash_b: str) -> int:
    """Count the positions at which two equal-length hashes differ."""
    return sum(1 for a, b in zip(hash_a, hash_b) if a != b)


def similarity(hash_a: Optional[str], hash_b: Optional[str]) -> float:
    """
    Percentage of matching positions between two perceptual hashes.

    Args:
        hash_a: First hash
        hash_b: Second hash

    Returns:
        Similarity in the range 0-100 rounded to 2 decimals; 0 when the
        hashes are missing or differ in length

    Examples:
        >>> similarity('11110000', '11110001')
        87.5
    """
    if not hash_a or not hash_b or len(hash_a) != len(hash_b):
        return 0.0

    length = len(hash_a)
    distance = hamming_distance(hash_a, hash_b)
    return round_half_up((length - distance) / length * 10000) / 100


__all__ = [
    'CONTENT_HASH_ALGORITHM',
    'round_half_up',
    'content_hash',
    'calculate_file_hash',
    'hash_to_bits',
    'perceptual_hash',
    'calculate_perceptual_hash',
    'hamming_distance',
    'similarity',
]
