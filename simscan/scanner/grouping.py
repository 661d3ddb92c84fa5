"""
Grouping module for the scanner package.

Clusters fingerprints into similarity groups with a greedy, seed-driven
single pass:

1. Walk the fingerprints in discovery order; each one not yet placed seeds
   a candidate group.
2. Every later, unplaced fingerprint whose similarity *to the seed* meets
   the threshold joins that group and is marked as placed.
3. Candidate groups with a single member are dropped.

This is deliberately not a transitive closure: two images that both match a
third image can end up in different groups (or none) depending on order.
The output is deterministic for a given input order and threshold.
"""

from __future__ import annotations

import logging
from itertools import combinations
from typing import Optional, Sequence

from ..models import ImageFingerprint, SimilarityGroup
from ..state import CancellationToken
from ..utils.selection import recommend_keep
from .hashing import round_half_up, similarity

_logger = logging.getLogger(__name__)

EXACT_MATCH_SIMILARITY = 100.0


def pair_similarity(a: ImageFingerprint, b: ImageFingerprint, use_perceptual: bool = True) -> float:
    """
    Similarity of two fingerprints (0-100).

    Identical content hashes score 100. Otherwise the perceptual hashes are
    compared when enabled and both are present; anything else scores 0.
    """
    if a.content_hash and a.content_hash == b.content_hash:
        return EXACT_MATCH_SIMILARITY
    if use_perceptual and a.perceptual_hash and b.perceptual_hash:
        return similarity(a.perceptual_hash, b.perceptual_hash)
    return 0.0


def group_similarity(images: Sequence[ImageFingerprint], use_perceptual: bool = True) -> float:
    """Mean similarity over every pair of members, rounded to 2 decimals."""
    pairs = list(combinations(images, 2))
    if not pairs:
        return 0.0
    total = sum(pair_similarity(a, b, use_perceptual) for a, b in pairs)
    return round_half_up(total / len(pairs) * 100) / 100


def group_similar_images(
    images: Sequence[ImageFingerprint],
    threshold: float,
    use_perceptual: bool = True,
    cancel_token: Optional[CancellationToken] = None,
) -> list[SimilarityGroup]:
    """
    Partition fingerprints into similarity groups.

    Args:
        images: Fingerprints in discovery order
        threshold: Minimum similarity to the seed (0-100) to join its group
        use_perceptual: Compare perceptual hashes (False = content hash only)
        cancel_token: Checked before each new seed

    Returns:
        Groups with ids 'group-1', 'group-2', ... in the order they were formed

    Raises:
        ScanCancelled: If the token is cancelled while grouping
    """
    groups: list[SimilarityGroup] = []
    processed: set[str] = set()

    for i, seed in enumerate(images):
        if seed.file_path in processed:
            continue
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()

        members = [seed]
        processed.add(seed.file_path)

        for candidate in images[i + 1:]:
            if candidate.file_path in processed:
                continue
            if pair_similarity(seed, candidate, use_perceptual) >= threshold:
                members.append(candidate)
                processed.add(candidate.file_path)

        if len(members) < 2:
            continue

        groups.append(SimilarityGroup(
            id=f"group-{len(groups) + 1}",
            images=tuple(members),
            similarity=group_similarity(members, use_perceptual),
            recommended_keep=recommend_keep(members),
        ))

    _logger.debug(f"Grouped {len(images):,} images into {len(groups):,} groups (threshold={threshold})")
    return groups


__all__ = [
    'EXACT_MATCH_SIMILARITY',
    'pair_similarity',
    'group_similarity',
    'group_similar_images',
]
