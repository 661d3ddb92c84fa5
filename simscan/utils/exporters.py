"""
Export functionality for the Similar Image Scanner.

Provides functions to export scan results to TXT, CSV and JSON files.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TextIO

from ..models import ScanResult, format_size

EXPORT_FORMATS = ('txt', 'csv', 'json')


def _export_txt(result: ScanResult, file_handle: TextIO) -> None:
    """
    Export scan results to TXT format.

    Args:
        result: Completed scan result
        file_handle: Open file handle to write to
    """
    file_handle.write("SIMILAR IMAGE REPORT\n")
    file_handle.write("=" * 70 + "\n\n")
    file_handle.write(f"Images scanned: {result.total_images}\n")
    file_handle.write(f"Groups found: {result.total_groups}\n")
    file_handle.write(f"Potential space saved: {format_size(result.potential_space_saved)}\n")

    for group in result.groups:
        file_handle.write(f"\n{group.id} ({group.image_count} files, {group.similarity:.2f}% similar):\n")
        keep = group.keep_image
        for img in group.images:
            marker = "[KEEP]" if img is keep else "[DUPE]"
            file_handle.write(f"  {marker} {img.file_path}\n")


def _export_csv(result: ScanResult, file_handle: TextIO) -> None:
    """
    Export scan results to CSV format.

    Notes:
        CSV includes: group_id, similarity, status, path, width, height,
                     file_size, content_hash
    """
    file_handle.write("group_id,similarity,status,path,width,height,file_size,content_hash\n")

    for group in result.groups:
        keep = group.keep_image
        for img in group.images:
            status = "keep" if img is keep else "duplicate"
            file_handle.write(
                f'{group.id},{group.similarity:.2f},{status},"{img.file_path}",'
                f'{img.width or ""},{img.height or ""},{img.size},{img.content_hash}\n'
            )


def _export_json(result: ScanResult, file_handle: TextIO) -> None:
    """Export scan results as the JSON document returned by the API."""
    json.dump(result.to_dict(), file_handle, indent=2)
    file_handle.write("\n")


def export_result(
    result: ScanResult,
    output_path: Path,
    export_format: str = 'txt'
) -> None:
    """
    Export a scan result to a file.

    Args:
        result: Completed scan result
        output_path: Path to output file
        export_format: 'txt', 'csv' or 'json'. Default: 'txt'

    Raises:
        ValueError: If export_format is not supported
        OSError: If file cannot be written

    Examples:
        >>> export_result(result, Path('results.csv'), 'csv')
    """
    if export_format not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {export_format}. Use 'txt', 'csv' or 'json'.")

    with open(output_path, 'w', encoding='utf-8') as f:
        if export_format == 'txt':
            _export_txt(result, f)
        elif export_format == 'csv':
            _export_csv(result, f)
        else:
            _export_json(result, f)


__all__ = ['EXPORT_FORMATS', 'export_result']
