"""
EXIF orientation: read the tag, undo the camera's rotation/mirroring.

Orientation tag values, see http://sylvana.net/jpegcrop/exif_orientation.html
"""

from pathlib import Path

from PIL import Image

ORIENTATION_TAG = 0x0112

TOP_LEFT = 1       # normal
TOP_RIGHT = 2      # mirrored left-right
BOTTOM_RIGHT = 3   # upside down
BOTTOM_LEFT = 4    # mirrored top-bottom
LEFT_TOP = 5       # mirrored, rotated
RIGHT_TOP = 6      # rotated 90 CW to display
RIGHT_BOTTOM = 7   # mirrored, rotated
LEFT_BOTTOM = 8    # rotated 90 CCW to display

_TRANSPOSE = {
    TOP_RIGHT: Image.Transpose.FLIP_LEFT_RIGHT,
    BOTTOM_RIGHT: Image.Transpose.ROTATE_180,
    BOTTOM_LEFT: Image.Transpose.FLIP_TOP_BOTTOM,
    LEFT_TOP: Image.Transpose.TRANSPOSE,
    RIGHT_TOP: Image.Transpose.ROTATE_270,
    RIGHT_BOTTOM: Image.Transpose.TRANSVERSE,
    LEFT_BOTTOM: Image.Transpose.ROTATE_90,
}


def exif_orientation(path: Path) -> int:
    """Orientation tag of the file at `path`, or TOP_LEFT if there isn't a usable one."""
    try:
        with Image.open(path) as img:
            value = img.getexif().get(ORIENTATION_TAG)
    except Exception:
        return TOP_LEFT

    if isinstance(value, tuple) and value:
        value = value[0]
    try:
        value = int(value)
    except (TypeError, ValueError):
        return TOP_LEFT
    if not TOP_LEFT <= value <= LEFT_BOTTOM:
        return TOP_LEFT
    return value


def reorient(img: Image.Image, orientation: int) -> Image.Image:
    """Return an upright copy of `img`. Unknown values give a plain copy."""
    method = _TRANSPOSE.get(orientation)
    if method is None:
        return img.copy()
    return img.transpose(method)
