"""
Background scan jobs.

A ScanJob runs one ScanOrchestrator on a daemon thread and keeps the latest
progress snapshot so other threads can poll it. A ScanRegistry hands out
job ids and lets callers cancel an in-flight scan by id. Registries are
plain objects owned by their creator (the web app keeps one per app).
"""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Optional

from .config import DEFAULT_WORKERS, MAX_FINISHED_SCANS
from .models import ScanConfig, ScanProgress, ScanResult, ScanStatus
from .orchestrator import ProgressListener, ScanConfigError, ScanOrchestrator
from .state import CancellationToken, ScanCancelled

_logger = logging.getLogger(__name__)


class ScanJob:
    """One scan running in the background."""

    def __init__(
        self,
        config: ScanConfig,
        workers: int = DEFAULT_WORKERS,
        job_id: Optional[str] = None,
        on_progress: Optional[ProgressListener] = None,
    ):
        self.id = job_id or uuid.uuid4().hex
        self.config = config
        self.workers = workers
        self.on_progress = on_progress
        self.token = CancellationToken()
        self.result: Optional[ScanResult] = None
        self.error: Optional[str] = None
        self._progress = ScanProgress()
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._finished = threading.Event()

    @property
    def progress(self) -> ScanProgress:
        with self._lock:
            return self._progress.copy()

    @property
    def status(self) -> ScanStatus:
        return self.progress.status

    @property
    def done(self) -> bool:
        """True once run() has returned and result/error are final."""
        return self._finished.is_set()

    def _record_progress(self, progress: ScanProgress) -> None:
        with self._lock:
            self._progress = progress
        if self.on_progress is not None:
            self.on_progress(progress)

    def run(self) -> None:
        """Run the scan on the current thread, capturing its outcome."""
        orchestrator = ScanOrchestrator(
            self.config,
            on_progress=self._record_progress,
            cancel_token=self.token,
            workers=self.workers,
        )
        try:
            self.result = orchestrator.run()
        except ScanCancelled:
            self.result = None
        except ScanConfigError as e:
            self.error = str(e)
        except Exception as e:
            # Already logged by the orchestrator
            self.error = str(e)
        finally:
            self._finished.set()

    def start(self) -> 'ScanJob':
        """Start the scan on a daemon thread."""
        self._thread = threading.Thread(target=self.run, name=f"scan-{self.id[:8]}", daemon=True)
        self._thread.start()
        return self

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the scan thread; returns True if the job has finished."""
        if self._thread is not None:
            self._thread.join(timeout)
            return self.done
        return self._finished.wait(timeout)

    def cancel(self) -> bool:
        """
        Request cancellation.

        Returns:
            True if the scan was still running when cancel was requested
        """
        if self.done:
            return False
        self.token.cancel()
        return True

    def to_status_dict(self) -> dict:
        """Return current status for API responses."""
        return {
            'scanId': self.id,
            'config': self.config.to_dict(),
            'progress': self.progress.to_dict(),
            'done': self.done,
            'error': self.error,
            'cancelRequested': self.token.cancelled,
        }


class ScanRegistry:
    """
    Tracks scan jobs by id.

    Running scans are always kept. Once more than ``max_finished`` scans have
    finished, the oldest finished ones are dropped when a new scan starts.
    """

    def __init__(self, max_finished: int = MAX_FINISHED_SCANS):
        self.max_finished = max_finished
        self._jobs: dict[str, ScanJob] = {}
        self._lock = threading.Lock()

    def start(self, config: ScanConfig, workers: int = DEFAULT_WORKERS) -> ScanJob:
        """Create and start a job."""
        job = ScanJob(config, workers=workers)
        with self._lock:
            self._evict_finished()
            self._jobs[job.id] = job
        _logger.info(f"Starting scan {job.id} of {config.scan_path}")
        return job.start()

    def _evict_finished(self) -> None:
        # Caller holds self._lock; jobs are in start order
        finished = [job_id for job_id, job in self._jobs.items() if job.done]
        for job_id in finished[:max(0, len(finished) - self.max_finished)]:
            del self._jobs[job_id]
            _logger.debug(f"Dropped finished scan {job_id}")

    def get(self, job_id: str) -> Optional[ScanJob]:
        with self._lock:
            return self._jobs.get(job_id)

    def cancel(self, job_id: str) -> bool:
        """Cancel a job by id. Returns False for unknown or finished jobs."""
        job = self.get(job_id)
        if job is None:
            return False
        return job.cancel()

    def remove(self, job_id: str) -> Optional[ScanJob]:
        with self._lock:
            return self._jobs.pop(job_id, None)

    def jobs(self) -> list[ScanJob]:
        with self._lock:
            return list(self._jobs.values())


__all__ = ['ScanJob', 'ScanRegistry']
