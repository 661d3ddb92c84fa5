"""
Image decoding for the scanner package.

Thin wrapper around Pillow that turns raw file bytes into small greyscale
pixel grids (for perceptual hashing) and reads image dimensions. Errors are
raised to the caller; the hashing layer decides how to recover.
"""

from __future__ import annotations

from io import BytesIO

from .dependencies import Image, ImageOps, np

FIT_MODES = ('fill', 'cover')


def _open(data: bytes):
    return Image.open(BytesIO(data))


def decode_greyscale(data: bytes, width: int = 8, height: int = 8, fit: str = 'fill') -> np.ndarray:
    """
    Decode image bytes into a greyscale pixel grid.

    Args:
        data: Encoded image bytes
        width: Output width in pixels
        height: Output height in pixels
        fit: 'fill' stretches to the exact size ignoring aspect ratio,
             'cover' crops the centre to the target aspect ratio first

    Returns:
        uint8 array of shape (height, width)

    Raises:
        ValueError: If fit is not a supported mode
        PIL.UnidentifiedImageError / OSError: If the data cannot be decoded
    """
    if fit not in FIT_MODES:
        raise ValueError(f"Unsupported fit mode: {fit}. Use 'fill' or 'cover'.")

    with _open(data) as img:
        img.load()  # Force load to detect truncated/corrupt images early
        grey = img.convert('L')
        if fit == 'fill':
            grey = grey.resize((width, height), Image.Resampling.LANCZOS)
        else:
            grey = ImageOps.fit(grey, (width, height), Image.Resampling.LANCZOS)
        return np.asarray(grey, dtype=np.uint8)


def read_metadata(data: bytes) -> dict:
    """
    Read image dimensions without decoding the pixel data.

    Returns:
        Dict with 'width' and 'height' in pixels
    """
    with _open(data) as img:
        return {'width': img.width, 'height': img.height}


__all__ = ['FIT_MODES', 'decode_greyscale', 'read_metadata']
