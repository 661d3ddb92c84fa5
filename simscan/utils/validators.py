"""
Input validation for the Similar Image Scanner.

Provides validators for the scan root, the similarity threshold, size bounds
and worker counts. Every validator returns an ``(is_valid, error_message)``
tuple instead of raising.
"""

from __future__ import annotations

import numbers
import os
from typing import Any, Optional

from ..models import Algorithm, ScanConfig


def validate_directory(directory: str) -> tuple[bool, str]:
    """
    Check that the scan root is an existing, listable directory.

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_directory('/no/such/folder')
        (False, 'Directory not found: /no/such/folder')
    """
    if not directory:
        return False, "Directory path is required"

    checks = (
        (os.path.exists, "Directory not found"),
        (os.path.isdir, "Scan path is not a directory"),
        (lambda path: os.access(path, os.R_OK | os.X_OK), "Directory is not readable"),
    )
    for check, message in checks:
        if not check(directory):
            return False, f"{message}: {directory}"

    return True, ""


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def validate_threshold(threshold: Any) -> tuple[bool, str]:
    """
    Validate that a similarity threshold is within 0-100.

    Examples:
        >>> validate_threshold(90)
        (True, '')
        >>> validate_threshold(150)
        (False, 'Threshold must be between 0 and 100')
    """
    if not _is_number(threshold):
        return False, "Threshold must be a number"
    if not 0 <= threshold <= 100:
        return False, "Threshold must be between 0 and 100"
    return True, ""


def validate_size_bounds(
    min_file_size: Optional[int],
    max_file_size: Optional[int],
) -> tuple[bool, str]:
    """
    Validate optional file size bounds (bytes).

    Examples:
        >>> validate_size_bounds(1000, None)
        (True, '')
        >>> validate_size_bounds(2000, 1000)
        (False, 'Minimum file size cannot exceed maximum file size')
    """
    for name, value in (('Minimum', min_file_size), ('Maximum', max_file_size)):
        if value is None:
            continue
        if not _is_number(value):
            return False, f"{name} file size must be a number"
        if value < 0:
            return False, f"{name} file size cannot be negative"

    if min_file_size and max_file_size and min_file_size > max_file_size:
        return False, "Minimum file size cannot exceed maximum file size"

    return True, ""


def validate_workers(workers: Any) -> tuple[bool, str]:
    """Validate the number of hashing worker threads (1-32)."""
    if isinstance(workers, bool) or not isinstance(workers, int):
        return False, "Workers must be an integer"
    if not 1 <= workers <= 32:
        return False, "Workers must be between 1 and 32"
    return True, ""


def validate_scan_config(config: ScanConfig) -> tuple[bool, str]:
    """
    Validate a complete scan configuration.

    Args:
        config: Configuration to check

    Returns:
        Tuple of (is_valid, error_message)
    """
    is_valid, error = validate_directory(config.scan_path)
    if not is_valid:
        return False, error

    if not isinstance(config.algorithm, Algorithm):
        choices = ', '.join(a.value for a in Algorithm)
        return False, f"Unknown algorithm: {config.algorithm!r} (expected one of: {choices})"

    is_valid, error = validate_threshold(config.similarity_threshold)
    if not is_valid:
        return False, error

    return validate_size_bounds(config.min_file_size, config.max_file_size)


__all__ = [
    'validate_directory',
    'validate_threshold',
    'validate_size_bounds',
    'validate_workers',
    'validate_scan_config',
]
