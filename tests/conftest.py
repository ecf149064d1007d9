import os
from pathlib import Path, PurePath

import pytest
from PIL import Image

from darkroom import models
from darkroom.config import BuildConfig


def pattern(size):
    """An RGB image where every pixel is different, so any flip or turn shows."""
    width, height = size
    img = Image.new("RGB", size)
    for y in range(height):
        for x in range(width):
            img.putpixel((x, y), ((x * 37) % 256, (y * 53) % 256, (x * 11 + y * 7) % 256))
    return img


def gradient(size):
    """A cheap image of any size, smooth enough to survive resampling."""
    ramp = Image.linear_gradient("L")
    return Image.merge("RGB", [
        ramp.resize(size),
        ramp.rotate(90).resize(size),
        Image.new("L", size, 80),
    ])


def write_image(path, size=(64, 48), fmt=None, orientation=None, mtime=None, img=None):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    img = img if img is not None else gradient(size)
    fmt = fmt or ("PNG" if path.suffix.lower() == ".png" else "JPEG")
    params = {}
    if orientation is not None:
        exif = Image.Exif()
        exif[0x0112] = orientation
        params["exif"] = exif
    img.save(path, fmt, **params)
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def images_dir(tmp_path):
    d = tmp_path / "images"
    d.mkdir()
    return d


@pytest.fixture
def config(tmp_path, images_dir):
    return BuildConfig(
        images_dir=images_dir,
        public_dir=tmp_path / "public",
        css_dir=tmp_path / "css",
        workers=2,
    )


def gallery_image(src, unbound, mtime=0.0):
    unbound = PurePath(unbound)
    return models.Image(
        name=unbound.stem,
        raw=Path(src),
        unbound=unbound,
        source=unbound,
        mtime=mtime,
    )
