"""
Pytest configuration and shared fixtures for test suite.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from PIL import Image
import os


def make_pattern(kind: str, size: int = 64) -> Image.Image:
    """
    Build a black/white test image on a 4x4 block grid.

    kind:
        'checker'  - checkerboard
        'inverse'  - inverted checkerboard
        'stripes'  - vertical stripes
    """
    block = size // 4
    img = Image.new('L', (size, size), color=0)
    pixels = img.load()
    for y in range(size):
        for x in range(size):
            col, row = x // block, y // block
            if kind == 'checker':
                white = (col + row) % 2 == 1
            elif kind == 'inverse':
                white = (col + row) % 2 == 0
            elif kind == 'stripes':
                white = col % 2 == 1
            else:
                raise ValueError(kind)
            pixels[x, y] = 255 if white else 0
    return img.convert('RGB')


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def sample_images(temp_dir):
    """
    Create a set of sample images for testing.

    Returns:
        dict with paths to:
        - photo.png, photo_copy.png (byte-identical)
        - photo_large.png (same picture at twice the resolution)
        - unique.png (inverted picture, nothing in common)
        - broken.jpg (image extension, not an image)
        - notes.txt (not an image extension)
        - sub/nested.png (different picture in a subdirectory)
    """
    images = {}

    photo = temp_dir / "photo.png"
    make_pattern('checker', 64).save(photo, 'PNG')
    images['photo'] = str(photo)

    copy = temp_dir / "photo_copy.png"
    shutil.copyfile(photo, copy)
    images['photo_copy'] = str(copy)

    large = temp_dir / "photo_large.png"
    make_pattern('checker', 128).save(large, 'PNG')
    images['photo_large'] = str(large)

    unique = temp_dir / "unique.png"
    make_pattern('inverse', 64).save(unique, 'PNG')
    images['unique'] = str(unique)

    broken = temp_dir / "broken.jpg"
    broken.write_bytes(b"definitely not a jpeg")
    images['broken'] = str(broken)

    notes = temp_dir / "notes.txt"
    notes.write_text("not an image")
    images['notes'] = str(notes)

    subdir = temp_dir / "sub"
    subdir.mkdir()
    nested = subdir / "nested.png"
    make_pattern('stripes', 64).save(nested, 'PNG')
    images['nested'] = str(nested)

    # Deterministic modification times (seconds since epoch)
    for offset, key in enumerate(['photo', 'photo_copy', 'photo_large', 'unique', 'nested']):
        stamp = 1_700_000_000 + offset
        os.utime(images[key], (stamp, stamp))

    return images


@pytest.fixture
def sized_files(temp_dir):
    """Files of exactly 999, 1000 and 5000 bytes with image extensions."""
    paths = {}
    for size in (999, 1000, 5000):
        path = temp_dir / f"file_{size}.jpg"
        path.write_bytes(b"x" * size)
        paths[size] = str(path)
    return paths


@pytest.fixture
def fingerprint_factory():
    """Build ImageFingerprint objects with sensible defaults."""
    from simscan.models import ImageFingerprint

    def _make(path, content_hash=None, perceptual_hash=None, size=100,
              width=None, height=None, modified_time=0):
        return ImageFingerprint(
            file_path=path,
            content_hash=content_hash if content_hash is not None else f"hash-of-{path}",
            perceptual_hash=perceptual_hash,
            width=width,
            height=height,
            size=size,
            modified_time=modified_time,
        )

    return _make


@pytest.fixture
def isolated_user_config(temp_dir, monkeypatch):
    """Point the shared user config at an empty temporary directory."""
    from simscan import user_config

    config_dir = temp_dir / "config"
    monkeypatch.setenv('SIMSCAN_CONFIG_DIR', str(config_dir))
    for var in ('SIMSCAN_THRESHOLD', 'SIMSCAN_ALGORITHM', 'SIMSCAN_WORKERS', 'SIMSCAN_MAX_PIXELS'):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(user_config, '_user_config', None)
    return config_dir
