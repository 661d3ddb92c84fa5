"""
Terminal progress display for CLI scans.

Turns ScanProgress snapshots into a tqdm bar for the hashing stage and a
log line for every other stage change.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..models import ScanProgress, ScanStatus
from ..scanner.dependencies import HAS_TQDM, _tqdm_class

_STAGE_MESSAGES = {
    ScanStatus.SCANNING: "Scanning for image files...",
    ScanStatus.HASHING: "Fingerprinting images...",
    ScanStatus.COMPARING: "Comparing images...",
}


class ProgressDisplay:
    """
    Progress listener for the CLI.

    Pass an instance as ``on_progress``; call close() when the scan ends.
    """

    def __init__(self, logger: logging.Logger, show_progress: bool = True):
        self.logger = logger
        self.show_progress = show_progress
        self._status: Optional[ScanStatus] = None
        self._pbar: Optional[Any] = None

    def __call__(self, progress: ScanProgress) -> None:
        if progress.status != self._status:
            self._stage_changed(progress)

        if self._pbar is not None and progress.status == ScanStatus.HASHING:
            self._pbar.update(progress.current - self._pbar.n)

    def _stage_changed(self, progress: ScanProgress) -> None:
        self.close()
        self._status = progress.status

        message = _STAGE_MESSAGES.get(progress.status)
        if message:
            self.logger.info(message)

        if (progress.status == ScanStatus.HASHING and self.show_progress
                and HAS_TQDM and _tqdm_class is not None and progress.total > 0):
            self._pbar = _tqdm_class(
                total=progress.total,
                desc="Fingerprinting",
                unit="img",
                ncols=80,
            )

    def close(self) -> None:
        if self._pbar is not None:
            self._pbar.close()
            self._pbar = None


__all__ = ['ProgressDisplay']
