"""
CLI package for the Similar Image Scanner.

Provides the command-line interface for scanning a folder, printing the
similarity report and exporting results.

Public API:
- main: Entry point for CLI execution
- CLIOrchestrator: CLI workflow orchestration class
- print_similarity_report: Function to display results report
"""

from __future__ import annotations

from .orchestrator import CLIOrchestrator, setup_logging
from .arg_parser import create_parser, parse_arguments
from .progress import ProgressDisplay
from .reporting import print_similarity_report


def main(argv=None) -> int:
    """
    Main entry point for the CLI.

    Returns:
        Exit code (0 success, 1 error, 130 cancelled)
    """
    orchestrator = CLIOrchestrator(argv)
    return orchestrator.run()


__all__ = [
    # Main entry point
    'main',
    # Core classes
    'CLIOrchestrator',
    'ProgressDisplay',
    # Utilities
    'setup_logging',
    'create_parser',
    'parse_arguments',
    'print_similarity_report',
]
