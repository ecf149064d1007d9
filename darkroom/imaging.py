"""
Decode, reorient, downscale and encode images.

Each gallery image yields a PNG thumbnail and a JPEG display copy. Outputs
that already exist are left alone unless the build is told to regenerate.
"""

import logging
import os
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path

from PIL import Image

from . import models
from .config import BuildConfig, JPEG_QUALITY
from .errors import DecodeError
from .orientation import exif_orientation, reorient
from .paths import replace_ext

logger = logging.getLogger(__name__)

DECODE_FORMATS = ("JPEG", "PNG")


# ---------------------------------------------------------------------------
# Normalizing
# ---------------------------------------------------------------------------

def _has_alpha(img: Image.Image) -> bool:
    return img.mode in ("RGBA", "LA", "PA") or (
        img.mode == "P" and "transparency" in img.info
    )


def load_image(path: Path) -> Image.Image:
    """Decode `path` (JPEG or PNG only) and return it upright, in RGB or RGBA."""
    try:
        with Image.open(path, formats=DECODE_FORMATS) as img:
            img.load()
            m = img.convert("RGBA" if _has_alpha(img) else "RGB")
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeError(f"cannot decode {path}: {e}") from e
    return reorient(m, exif_orientation(path))


def downscale(img: Image.Image, size: int) -> Image.Image:
    """Scale to a height of `size`, keeping the aspect ratio.

    Images no wider than `size` are returned as they are.
    """
    width, height = img.size
    if width <= size:
        return img
    target = (max(1, width * size // height), size)
    return img.resize(target, Image.Resampling.BICUBIC)


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def _save(img: Image.Image, path: Path, fmt: str, **params):
    path.parent.mkdir(parents=True, exist_ok=True)
    # A half-written file would count as cached on the next run.
    part = path.with_name(path.name + ".part")
    try:
        img.save(part, fmt, **params)
        os.replace(part, path)
    finally:
        if part.exists():
            part.unlink()


def save_png(img: Image.Image, path: Path) -> Path:
    path = replace_ext(Path(path), ".png")
    _save(img, path, "PNG")
    return path


def save_jpg(img: Image.Image, path: Path, quality: int = JPEG_QUALITY) -> Path:
    path = replace_ext(Path(path), ".jpg")
    if img.mode != "RGB":
        img = img.convert("RGB")
    _save(img, path, "JPEG", quality=quality)
    return path


# ---------------------------------------------------------------------------
# Per-image job
# ---------------------------------------------------------------------------

@dataclass
class ImageResult:
    skipped: bool = False   # both outputs were already there
    failed: bool = False    # source could not be decoded
    written: list[Path] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def file_exists(path: Path) -> bool:
    return os.path.lexists(path)


def process_image(image: "models.Image", config: BuildConfig) -> ImageResult:
    """Produce the thumbnail and display copy of one gallery image."""
    result = ImageResult()
    thumbname = config.public_dir / image.thumb
    imagename = config.public_dir / image.path

    if not config.regenerate and file_exists(thumbname) and file_exists(imagename):
        logger.debug("Up to date: %s", image.raw)
        result.skipped = True
        return result

    logger.info("Downscaling %s", image.raw)
    try:
        m = load_image(Path(image.raw))
    except DecodeError as e:
        logger.warning("Skipping %s: %s", image.raw, e)
        result.failed = True
        return result

    jobs = [
        (thumbname, config.thumb_size, save_png),
        (imagename, config.large_size, partial(save_jpg, quality=config.jpeg_quality)),
    ]
    for target, size, save in jobs:
        if not config.regenerate and file_exists(target):
            continue
        try:
            result.written.append(save(downscale(m, size), target))
        except (OSError, ValueError) as e:
            logger.warning("Writing %s failed: %s", target, e)
            result.errors.append(str(e))
    return result
