"""
Configuration constants for the Similar Image Scanner.

This module contains all configurable settings including:
- Supported image extensions
- Default scan options (threshold, algorithm, workers)
- Keep-recommendation scoring weights
"""

import os

# Extensions considered by the directory scanner (lower-case, no dot)
IMAGE_EXTENSIONS = frozenset({
    'jpg', 'jpeg', 'png', 'gif', 'bmp', 'webp',
    'heic', 'heif', 'tiff', 'tif',
})

# Formats that need the pillow-heif plugin to decode
HEIF_EXTENSIONS = frozenset({'heic', 'heif'})

# Default similarity threshold (0-100, percentage of matching hash bits)
# 100 = only identical perceptual hashes (or identical content)
DEFAULT_THRESHOLD = 90

# Default detection algorithm: 'hash', 'phash' or 'both'
DEFAULT_ALGORITHM = 'both'

# Default number of parallel workers for hashing
DEFAULT_WORKERS = 4

# Finished scans a ScanRegistry keeps before dropping the oldest
MAX_FINISHED_SCANS = 20

# Perceptual hash grid (8x8 = 64-bit average hash)
HASH_SIZE = 8

# Chunk size used when streaming file contents through the digest
HASH_CHUNK_SIZE = 65536

# Keep recommendation weights (sum to 100)
KEEP_WEIGHT_RESOLUTION = 40
KEEP_WEIGHT_FILE_SIZE = 30
KEEP_WEIGHT_RECENCY = 20
KEEP_WEIGHT_FINGERPRINT = 10

# Decompression bomb limit for Pillow (500 megapixels)
MAX_IMAGE_PIXELS = 500_000_000

# User configuration directory (~/.simscan/config.json)
CONFIG_DIR = os.path.join(os.path.expanduser('~'), '.simscan')
