"""
Keep recommendation for the Similar Image Scanner.

Scores the members of a similarity group to suggest which image to retain.
Each image is scored out of 100 relative to the best value in its group:

- Resolution (pixel count) - up to 40 points
- File size - up to 30 points
- Recency (modification time) - up to 20 points
- Perceptual fingerprint present - flat 10 points
"""

from __future__ import annotations

from typing import Sequence

from ..config import (
    KEEP_WEIGHT_FILE_SIZE,
    KEEP_WEIGHT_FINGERPRINT,
    KEEP_WEIGHT_RECENCY,
    KEEP_WEIGHT_RESOLUTION,
)
from ..models import ImageFingerprint


def keep_scores(images: Sequence[ImageFingerprint]) -> list[float]:
    """
    Calculate the keep score of every image in a group.

    Args:
        images: Group members

    Returns:
        Scores in the same order as ``images``

    Notes:
        A factor whose group maximum is 0 (unknown dimensions, empty files,
        missing timestamps) contributes nothing to any image.
    """
    if not images:
        return []

    max_pixels = max(img.pixel_count for img in images)
    max_size = max(img.size for img in images)
    max_time = max(img.modified_time for img in images)

    scores = []
    for img in images:
        score = 0.0
        if img.pixel_count and max_pixels > 0:
            score += (img.pixel_count / max_pixels) * KEEP_WEIGHT_RESOLUTION
        if max_size > 0:
            score += (img.size / max_size) * KEEP_WEIGHT_FILE_SIZE
        if max_time > 0:
            score += (img.modified_time / max_time) * KEEP_WEIGHT_RECENCY
        if img.perceptual_hash:
            score += KEEP_WEIGHT_FINGERPRINT
        scores.append(score)

    return scores


def recommend_keep(images: Sequence[ImageFingerprint]) -> str:
    """
    Suggest which image of a group to keep.

    Args:
        images: Group members (normally two or more)

    Returns:
        Path of the highest scoring image; the first one wins ties.
        Empty string for an empty group.

    Examples:
        >>> small = ImageFingerprint('/a.jpg', 'x', size=10, modified_time=1)
        >>> large = ImageFingerprint('/b.jpg', 'x', size=30, modified_time=1)
        >>> recommend_keep([small, large])
        '/b.jpg'
    """
    if not images:
        return ""
    if len(images) == 1:
        return images[0].file_path

    scores = keep_scores(images)
    best_index = 0
    for index, score in enumerate(scores):
        if score > scores[best_index]:
            best_index = index

    return images[best_index].file_path


__all__ = ['keep_scores', 'recommend_keep']
