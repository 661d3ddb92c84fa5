"""
File discovery module for the scanner package.

Walks a directory tree and yields the image files a scan should fingerprint,
applying the extension allow-list, excluded folders and extensions, and the
file size bounds of a ScanConfig.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator

from ..config import IMAGE_EXTENSIONS
from ..models import ScanConfig

_logger = logging.getLogger(__name__)


def file_extension(name: str) -> str:
    """
    Lower-cased text after the last '.', or '' when there is none.

    Examples:
        >>> file_extension('IMG_001.JPG')
        'jpg'
        >>> file_extension('README')
        ''
    """
    if '.' not in name:
        return ''
    return name.rsplit('.', 1)[1].lower()


def is_candidate_extension(ext: str, excluded_extensions: frozenset = frozenset()) -> bool:
    """True if the extension is a supported image type and not excluded."""
    return ext in IMAGE_EXTENSIONS and ext not in excluded_extensions


def passes_size_filter(size: int, config: ScanConfig) -> bool:
    """
    Apply the optional file size bounds. Both bounds are inclusive; a bound
    of 0 or None is treated as unset.
    """
    if config.min_file_size and size < config.min_file_size:
        return False
    if config.max_file_size and size > config.max_file_size:
        return False
    return True


def _list_directory(path: str) -> list[os.DirEntry]:
    with os.scandir(path) as entries:
        return sorted(entries, key=lambda entry: entry.name)


def iter_image_files(config: ScanConfig) -> Iterator[str]:
    """
    Lazily yield candidate image files for a scan.

    Args:
        config: Scan configuration (root, recursion, filters)

    Yields:
        Absolute file paths in depth-first traversal order

    Notes:
        - Subdirectories listed verbatim in ``excluded_folders`` are not
          entered; there is no prefix or glob matching
        - A directory or file that cannot be read is logged and skipped
        - Symlinked directories are not entered, and a file reachable
          through several paths is yielded once, under its first path
    """
    root = os.path.abspath(str(config.scan_path))
    yield from _walk(root, config, set())


def _walk(directory: str, config: ScanConfig, seen: set) -> Iterator[str]:
    try:
        entries = _list_directory(directory)
    except OSError as e:
        _logger.warning(f"Cannot read directory {directory}: {e}")
        return

    for entry in entries:
        full_path = os.path.join(directory, entry.name)
        try:
            if entry.is_dir(follow_symlinks=False):
                if config.include_subdirectories and full_path not in config.excluded_folders:
                    yield from _walk(full_path, config, seen)
                continue

            if not entry.is_file():
                continue

            if not is_candidate_extension(file_extension(entry.name), config.excluded_extensions):
                continue

            size = entry.stat().st_size
        except OSError as e:
            _logger.warning(f"Cannot stat {full_path}: {e}")
            continue

        if not passes_size_filter(size, config):
            continue

        # Track resolved paths to avoid duplicates
        resolved = os.path.realpath(full_path)
        if resolved in seen:
            _logger.debug(f"Skipping {full_path}: already found as {resolved}")
            continue
        seen.add(resolved)
        yield full_path


def find_image_files(
    root_path: str | Path | ScanConfig,
    recursive: bool = True,
) -> list[str]:
    """
    Find all candidate image files.

    Args:
        root_path: Directory to search, or a complete ScanConfig
        recursive: If True, search subdirectories (ignored for a ScanConfig)

    Returns:
        List of absolute file paths as strings
    """
    if isinstance(root_path, ScanConfig):
        config = root_path
    else:
        config = ScanConfig(scan_path=str(root_path), include_subdirectories=recursive)
    return list(iter_image_files(config))


__all__ = [
    'file_extension',
    'is_candidate_extension',
    'passes_size_filter',
    'iter_image_files',
    'find_image_files',
]
