"""
CLI workflow orchestration for the Similar Image Scanner.

Provides the CLIOrchestrator class that coordinates the CLI scanning
workflow from argument parsing through final reporting.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from ..jobs import ScanJob
from ..models import ScanConfig, ScanResult
from ..utils.exporters import export_result
from ..utils.validators import validate_workers
from .arg_parser import parse_arguments
from .progress import ProgressDisplay
from .reporting import print_similarity_report

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CANCELLED = 130

# Seconds between checks for Ctrl+C while the scan thread runs
_JOIN_INTERVAL = 0.5


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure logging for the CLI.

    Args:
        verbose: Enable verbose (DEBUG level) logging

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    return logging.getLogger(__name__)


class CLIOrchestrator:
    """
    Orchestrates the CLI scanning workflow.

    The scan itself runs on a ScanJob thread so Ctrl+C can cancel it
    through the job's token.
    """

    def __init__(self, argv=None):
        self.argv = argv
        self.logger: Optional[logging.Logger] = None
        self.args = None
        self.config: Optional[ScanConfig] = None
        self.result: Optional[ScanResult] = None

    def run(self) -> int:
        """
        Execute the complete CLI workflow.

        Returns:
            Exit code (0 success, 1 error, 130 cancelled)

        Workflow phases:
        1. Setup & argument parsing
        2. Validation & configuration
        3. Scan
        4. Reporting & export
        """
        self._setup_phase()

        exit_code = self._configure_phase()
        if exit_code != EXIT_OK:
            return exit_code

        exit_code = self._scan_phase()
        if exit_code != EXIT_OK:
            return exit_code

        return self._report_phase()

    def _setup_phase(self) -> None:
        """Phase 1: Parse arguments and setup logging."""
        self.args = parse_arguments(self.argv)
        self.logger = setup_logging(self.args.verbose)

    def _configure_phase(self) -> int:
        """
        Phase 2: Build and validate the scan configuration.

        Returns:
            0 for success, 1 for validation error
        """
        args = self.args
        self.config = ScanConfig(
            scan_path=os.path.abspath(args.directory),
            include_subdirectories=not args.no_recursive,
            min_file_size=args.min_size,
            max_file_size=args.max_size,
            excluded_folders=[os.path.abspath(folder) for folder in args.exclude_folder],
            excluded_extensions=args.exclude_ext,
            similarity_threshold=args.threshold,
            algorithm=args.algorithm,
        )

        is_valid, error = self.config.validate()
        if is_valid:
            is_valid, error = validate_workers(args.workers)
        if not is_valid:
            self.logger.error(error)
            return EXIT_ERROR

        self.logger.info(
            f"Scanning {self.config.scan_path} "
            f"(algorithm={self.config.algorithm.value}, threshold={self.config.similarity_threshold})"
        )
        return EXIT_OK

    def _scan_phase(self) -> int:
        """
        Phase 3: Run the scan, cancelling it on Ctrl+C.

        Returns:
            0 for success, 1 for scan error, 130 if cancelled
        """
        display = ProgressDisplay(self.logger, show_progress=not self.args.no_progress)
        job = ScanJob(self.config, workers=self.args.workers, on_progress=display)

        job.start()
        try:
            while not job.join(timeout=_JOIN_INTERVAL):
                pass
        except KeyboardInterrupt:
            self.logger.warning("Interrupted - cancelling scan...")
            job.cancel()
            job.join()
        finally:
            display.close()

        if job.error:
            self.logger.error(f"Scan failed: {job.error}")
            return EXIT_ERROR
        if job.result is None:
            self.logger.info("Scan cancelled.")
            return EXIT_CANCELLED

        self.result = job.result
        return EXIT_OK

    def _report_phase(self) -> int:
        """Phase 4: Display the report and handle exports."""
        print_similarity_report(self.result)

        if self.args.export:
            try:
                export_result(self.result, self.args.export, self.args.export_format)
            except OSError as e:
                self.logger.error(f"Failed to export results: {e}")
                return EXIT_ERROR
            self.logger.info(f"Results exported to: {self.args.export}")

        return EXIT_OK


__all__ = ['CLIOrchestrator', 'setup_logging', 'EXIT_OK', 'EXIT_ERROR', 'EXIT_CANCELLED']
