"""
Utilities package for the Similar Image Scanner.

Provides:
- formatters: Human-readable formatting for numbers, time, and file sizes
- validators: Scan configuration validation
- selection: Keep recommendation scoring
- exporters: Export scan results to files
"""

from __future__ import annotations

# Import submodules for convenient access
from . import formatters
from . import validators
from . import selection
from . import exporters

# Export commonly used functions
from .formatters import format_number, format_time_estimate, format_duration_ms, format_size
from .validators import (
    validate_directory,
    validate_threshold,
    validate_size_bounds,
    validate_workers,
    validate_scan_config,
)
from .selection import keep_scores, recommend_keep
from .exporters import EXPORT_FORMATS, export_result

__all__ = [
    # Submodules
    'formatters',
    'validators',
    'selection',
    'exporters',
    # Formatters
    'format_number',
    'format_time_estimate',
    'format_duration_ms',
    'format_size',
    # Validators
    'validate_directory',
    'validate_threshold',
    'validate_size_bounds',
    'validate_workers',
    'validate_scan_config',
    # Selection
    'keep_scores',
    'recommend_keep',
    # Exporters
    'EXPORT_FORMATS',
    'export_result',
]
