"""
Argument parsing for the CLI interface.

Provides functions to create and configure the argument parser for the
similar image scanner command-line interface.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from ..models import Algorithm
from ..user_config import get_user_config
from ..utils.exporters import EXPORT_FORMATS


def _extension_list(value: str) -> list[str]:
    """Parse 'png,.GIF' into ['png', 'gif']."""
    return [ext.strip().lower().lstrip('.') for ext in value.split(',') if ext.strip()]


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    user_config = get_user_config()

    parser = argparse.ArgumentParser(
        description='Find visually similar and duplicate images',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s /path/to/photos
      Scan for similar images (report only, no changes)

  %(prog)s /path/to/photos --threshold 95 --algorithm phash
      Stricter perceptual matching

  %(prog)s /path/to/photos --algorithm hash --no-recursive
      Exact duplicates in the top-level folder only

  %(prog)s /path/to/photos --min-size 10240 --exclude-ext gif,bmp
      Skip files under 10 KB and all GIF/BMP files

  %(prog)s /path/to/photos --export results.csv --export-format csv
      Export results to CSV for external review
        """
    )

    parser.add_argument(
        'directory',
        type=Path,
        help='Directory to scan for similar images'
    )

    # Scanning options
    parser.add_argument(
        '-r', '--no-recursive',
        action='store_true',
        help='Do not scan subdirectories'
    )

    parser.add_argument(
        '-t', '--threshold',
        type=float,
        default=user_config.default_threshold,
        help=f'Similarity threshold (0-100, higher=stricter). Default: {user_config.default_threshold}'
    )

    parser.add_argument(
        '-a', '--algorithm',
        choices=[a.value for a in Algorithm],
        default=user_config.default_algorithm,
        help='hash = exact duplicates only, phash = perceptual, both = hash + perceptual. '
             f'Default: {user_config.default_algorithm}'
    )

    # Filters
    parser.add_argument(
        '--min-size',
        type=int,
        metavar='BYTES',
        help='Skip files smaller than this many bytes'
    )

    parser.add_argument(
        '--max-size',
        type=int,
        metavar='BYTES',
        help='Skip files larger than this many bytes'
    )

    parser.add_argument(
        '--exclude-folder',
        action='append',
        default=[],
        metavar='DIR',
        help='Skip this folder (exact path, repeatable)'
    )

    parser.add_argument(
        '--exclude-ext',
        action='extend',
        type=_extension_list,
        default=[],
        metavar='EXT[,EXT]',
        help='Skip these extensions (comma separated, repeatable)'
    )

    # Performance options
    parser.add_argument(
        '-w', '--workers',
        type=int,
        default=user_config.default_workers,
        help=f'Number of parallel workers. Default: {user_config.default_workers}'
    )

    # Export options
    parser.add_argument(
        '-e', '--export',
        type=Path,
        help='Export results to file'
    )

    parser.add_argument(
        '--export-format',
        choices=list(EXPORT_FORMATS),
        default='txt',
        help='Export format. Default: txt'
    )

    # Output options
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )

    parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable progress bars (useful for piping output)'
    )

    return parser


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Examples:
        >>> args = parse_arguments(['/path/to/photos', '--threshold', '95'])
        >>> args.threshold
        95.0
    """
    parser = create_parser()
    return parser.parse_args(argv)


__all__ = [
    'create_parser',
    'parse_arguments',
]
