"""
Parallel processing module for the scanner package.

Fingerprints many files on a bounded thread pool. Results are collected by
input index so callers still see discovery order, and progress callbacks
are issued only from the calling thread, so ``current`` never decreases.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Optional, Sequence

from ..config import DEFAULT_WORKERS
from ..models import FingerprintOutcome, SkipReason
from ..state import CancellationToken, ScanCancelled
from .analysis import fingerprint_image

_logger = logging.getLogger(__name__)

# callback(current, total, filepath)
ProgressCallback = Callable[[int, int, str], None]


def _fingerprint_unless_cancelled(
    filepath: str,
    use_perceptual: bool,
    cancel_token: Optional[CancellationToken],
) -> FingerprintOutcome:
    if cancel_token is not None and cancel_token.cancelled:
        return FingerprintOutcome(path=filepath, skip_reason=SkipReason.CANCELLED)
    return fingerprint_image(filepath, use_perceptual=use_perceptual)


def fingerprint_images(
    filepaths: Sequence[str],
    use_perceptual: bool = True,
    max_workers: int = DEFAULT_WORKERS,
    progress_callback: Optional[ProgressCallback] = None,
    cancel_token: Optional[CancellationToken] = None,
) -> list[FingerprintOutcome]:
    """
    Fingerprint multiple images, in parallel when max_workers > 1.

    Args:
        filepaths: Image paths in discovery order
        use_perceptual: Also compute dimensions and perceptual hashes
        max_workers: Number of worker threads (1 runs inline)
        progress_callback: Optional callback(current, total, filepath) after every file
        cancel_token: Checked between files

    Returns:
        One FingerprintOutcome per input path, in input order

    Raises:
        ScanCancelled: If the token is cancelled before all files are done
    """
    total = len(filepaths)
    outcomes: list[Optional[FingerprintOutcome]] = [None] * total

    if max_workers <= 1:
        for index, filepath in enumerate(filepaths):
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()
            outcomes[index] = fingerprint_image(filepath, use_perceptual=use_perceptual)
            if progress_callback:
                progress_callback(index + 1, total, filepath)
        return outcomes

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(_fingerprint_unless_cancelled, path, use_perceptual, cancel_token): index
            for index, path in enumerate(filepaths)
        }

        try:
            for done, future in enumerate(as_completed(futures), 1):
                index = futures[future]
                filepath = filepaths[index]
                try:
                    outcomes[index] = future.result()
                except Exception as e:
                    _logger.warning(f"Fingerprinting failed for {filepath}: {e}")
                    outcomes[index] = FingerprintOutcome(
                        path=filepath,
                        skip_reason=SkipReason.UNREADABLE,
                        error=str(e),
                    )

                if cancel_token is not None:
                    cancel_token.raise_if_cancelled()

                if progress_callback:
                    progress_callback(done, total, filepath)
        except ScanCancelled:
            # Running files finish when the executor shuts down; queued ones never start
            for future in futures:
                future.cancel()
            raise

    return outcomes


__all__ = ['ProgressCallback', 'fingerprint_images']
