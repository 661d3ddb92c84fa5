"""
Report formatting and display for the CLI interface.

Prints similarity groups with the recommended image first and the keep
score of every member.
"""

from __future__ import annotations

from ..models import ScanResult, SimilarityGroup, format_size
from ..utils.formatters import format_duration_ms, format_number
from ..utils.selection import keep_scores


def _print_section_header(title: str) -> None:
    """Print a section header with divider lines."""
    print("\n" + "-" * 70)
    print(title)
    print("-" * 70)


def _print_group(group: SimilarityGroup) -> None:
    print(f"\n{group.id} ({group.image_count} files, {group.similarity:.2f}% similar):")
    keep = group.keep_image
    scores = keep_scores(group.images)

    # Recommended image first, then by keep score
    ranked = sorted(
        zip(group.images, scores),
        key=lambda pair: (pair[0] is not keep, -pair[1]),
    )
    for img, score in ranked:
        marker = "  [KEEP]" if img is keep else "  [DUPE]"
        print(f"{marker} {img.file_path}")
        print(f"         {img.resolution} | {format_size(img.size)} | Score: {score:.1f}")


def print_similarity_report(result: ScanResult) -> None:
    """
    Print a report of the similarity groups in a scan result.

    Notes:
        - Prints to stdout
        - Best image marked with [KEEP], others with [DUPE]
    """
    print("\n" + "=" * 70)
    print("SIMILAR IMAGE REPORT")
    print("=" * 70)

    duplicate_count = sum(len(group.duplicates) for group in result.groups)
    print(f"\nImages fingerprinted: {format_number(result.total_images)}")
    print(f"Similar images found: {format_number(duplicate_count)} files in "
          f"{format_number(result.total_groups)} groups")
    print(f"Scan time: {format_duration_ms(result.scan_time)}")

    if result.groups:
        _print_section_header("SIMILARITY GROUPS")
        for group in result.groups:
            _print_group(group)

    print("\n" + "=" * 70)
    print(f"Total space recoverable: {format_size(result.potential_space_saved)}")
    print("=" * 70)


__all__ = ['print_similarity_report']
