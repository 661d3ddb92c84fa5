"""
Scan orchestration for the Similar Image Scanner.

Provides the ScanOrchestrator class that sequences file discovery,
fingerprinting, grouping and keep recommendation, reporting progress through
a callback and honouring a cancellation token.

Status flow: scanning -> hashing -> comparing -> completed, with error and
cancelled reachable from any stage.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .config import DEFAULT_WORKERS
from .models import ImageFingerprint, ScanConfig, ScanProgress, ScanResult, ScanStatus, SimilarityGroup
from .scanner import fingerprint_images, group_similar_images, iter_image_files
from .state import CancellationToken, ScanCancelled
from .utils import formatters
from .utils.validators import validate_workers

# Module logger
_logger = logging.getLogger(__name__)

ProgressListener = Callable[[ScanProgress], None]


class ScanConfigError(ValueError):
    """The scan configuration is invalid; raised before scanning starts."""


class ProgressReporter:
    """
    Owns the ScanProgress of one scan and forwards snapshots to a listener.

    Listeners receive a copy, so holding on to a snapshot is safe.
    """

    def __init__(self, listener: Optional[ProgressListener] = None):
        self.listener = listener
        self.progress = ScanProgress()

    def emit(self, **changes) -> None:
        for name, value in changes.items():
            setattr(self.progress, name, value)
        if self.listener:
            self.listener(self.progress.copy())


class ScanOrchestrator:
    """
    Orchestrates one complete scan.

    Each instance owns its fingerprints, groups and counters; run it once.
    """

    def __init__(
        self,
        config: ScanConfig,
        on_progress: Optional[ProgressListener] = None,
        cancel_token: Optional[CancellationToken] = None,
        workers: int = DEFAULT_WORKERS,
    ):
        """
        Initialize the scan orchestrator.

        Args:
            config: Validated at the start of run()
            on_progress: Called with a ScanProgress snapshot on every update
            cancel_token: Cooperative cancellation flag, checked between files
            workers: Number of hashing threads
        """
        self.config = config
        self.cancel_token = cancel_token or CancellationToken()
        self.workers = workers
        self.reporter = ProgressReporter(on_progress)

    @property
    def progress(self) -> ScanProgress:
        return self.reporter.progress

    def run(self) -> ScanResult:
        """
        Execute the complete scan process.

        Returns:
            The ScanResult of a completed scan

        Raises:
            ScanConfigError: If the configuration is invalid (nothing is scanned)
            ScanCancelled: If the token was cancelled; no partial result exists
        """
        start_time = time.monotonic()
        self._validate()

        try:
            # Phase 1: Find images
            image_files = self._find_images()
            if not image_files:
                _logger.info(f"No images found in {self.config.scan_path}")
                return self._finalize_results([], 0, start_time)

            # Phase 2: Fingerprint images
            fingerprints = self._hash_images(image_files)

            # Phase 3: Group similar images
            groups = self._compare(fingerprints)

            # Phase 4: Finalize results
            return self._finalize_results(groups, len(fingerprints), start_time)

        except ScanCancelled:
            self.reporter.emit(status=ScanStatus.CANCELLED, current_file='Scan cancelled by user')
            _logger.info(f"Scan of {self.config.scan_path} cancelled")
            raise
        except Exception as e:
            self.reporter.emit(status=ScanStatus.ERROR, current_file=f'Error: {e}')
            _logger.exception(f"Scan error: {e}")
            raise

    def _validate(self) -> None:
        is_valid, error = self.config.validate()
        if is_valid:
            is_valid, error = validate_workers(self.workers)
        if not is_valid:
            self.reporter.emit(status=ScanStatus.ERROR, current_file=error)
            _logger.error(f"Invalid scan configuration: {error}")
            raise ScanConfigError(error)

    def _find_images(self) -> list[str]:
        """
        Phase 1: Find candidate image files.

        Returns:
            Absolute paths in traversal order
        """
        self.reporter.emit(status=ScanStatus.SCANNING, current_file='Scanning for image files...')

        image_files = []
        for filepath in iter_image_files(self.config):
            self.cancel_token.raise_if_cancelled()
            image_files.append(filepath)

        self.cancel_token.raise_if_cancelled()
        self.reporter.emit(total=len(image_files))
        _logger.info(f"Found {formatters.format_number(len(image_files))} image files in {self.config.scan_path}")
        return image_files

    def _hash_images(self, filepaths: list[str]) -> list[ImageFingerprint]:
        """
        Phase 2: Fingerprint every candidate.

        Returns:
            Fingerprints of the readable files, in discovery order
        """
        total = len(filepaths)
        self.reporter.emit(status=ScanStatus.HASHING, current=0, total=total,
                           current_file='Calculating hashes...')

        def on_file_done(current: int, total: int, filepath: str) -> None:
            self.reporter.emit(current=current, total=total, current_file=filepath)

        outcomes = fingerprint_images(
            filepaths,
            use_perceptual=self.config.uses_perceptual,
            max_workers=self.workers,
            progress_callback=on_file_done,
            cancel_token=self.cancel_token,
        )

        fingerprints = [outcome.fingerprint for outcome in outcomes if outcome.ok]
        skipped = [outcome for outcome in outcomes if not outcome.ok]
        if skipped:
            _logger.warning(f"Skipped {formatters.format_number(len(skipped))} unreadable files")
            for outcome in skipped:
                _logger.debug(f"  {outcome.path}: {outcome.skip_reason.value} {outcome.error or ''}")

        return fingerprints

    def _compare(self, fingerprints: list[ImageFingerprint]) -> list[SimilarityGroup]:
        """Phase 3: Cluster fingerprints into similarity groups."""
        self.cancel_token.raise_if_cancelled()
        self.reporter.emit(status=ScanStatus.COMPARING, current_file='Comparing images...')

        groups = group_similar_images(
            fingerprints,
            threshold=self.config.similarity_threshold,
            use_perceptual=self.config.uses_perceptual,
            cancel_token=self.cancel_token,
        )

        self.reporter.emit(groups_found=len(groups))
        return groups

    def _finalize_results(
        self,
        groups: list[SimilarityGroup],
        total_images: int,
        start_time: float,
    ) -> ScanResult:
        """Phase 4: Build the ScanResult and report completion."""
        potential_space_saved = sum(group.potential_savings for group in groups)
        scan_time = int((time.monotonic() - start_time) * 1000)

        result = ScanResult(
            groups=groups,
            total_images=total_images,
            total_groups=len(groups),
            potential_space_saved=potential_space_saved,
            scan_time=scan_time,
        )

        total = self.progress.total
        self.reporter.emit(
            status=ScanStatus.COMPLETED,
            current=total,
            total=total,
            current_file=None,
            groups_found=len(groups),
        )

        _logger.info(
            f"Found {formatters.format_number(len(groups))} groups among "
            f"{formatters.format_number(total_images)} images "
            f"({formatters.format_size(potential_space_saved)} recoverable) "
            f"in {formatters.format_duration_ms(scan_time)}"
        )
        return result


def scan(
    config: ScanConfig,
    on_progress: Optional[ProgressListener] = None,
    cancel_token: Optional[CancellationToken] = None,
    workers: int = DEFAULT_WORKERS,
) -> ScanResult:
    """
    Scan a directory for similar images.

    Args:
        config: Scan configuration
        on_progress: Optional callback receiving ScanProgress snapshots
        cancel_token: Optional token; call ``cancel()`` on it to stop the scan
        workers: Number of hashing threads

    Returns:
        ScanResult of the completed scan

    Raises:
        ScanConfigError: Invalid configuration
        ScanCancelled: The scan was cancelled

    Examples:
        >>> result = scan(ScanConfig(scan_path='/photos', similarity_threshold=95))
        >>> result.total_groups
        3
    """
    return ScanOrchestrator(config, on_progress, cancel_token, workers).run()


__all__ = [
    'ProgressListener',
    'ProgressReporter',
    'ScanCancelled',
    'ScanConfigError',
    'ScanOrchestrator',
    'scan',
]
