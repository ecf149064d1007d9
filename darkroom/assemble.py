"""
Walk the images tree and group its images into galleries.

One gallery per directory holding at least one image; nested directories are
galleries of their own.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Optional

from .models import Gallery, Image
from .paths import gallery_key, gallery_name, gallery_unbound, is_image, replace_ext, unbound

logger = logging.getLogger(__name__)


@dataclass
class Assembly:
    galleries: dict[str, Gallery]
    error: Optional[OSError] = None  # set when the walk stopped early


def _raise(err: OSError):
    raise err


def assemble(images_dir: Path) -> Assembly:
    """Collect every gallery under `images_dir`, sorted and linked.

    The walk stops at the first unreadable entry. Galleries found up to that
    point are still returned, together with the error.
    """
    root = Path(images_dir)
    galleries: dict[str, Gallery] = {}
    error = None

    try:
        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
            dirnames.sort()
            directory = Path(dirpath)
            for filename in sorted(filenames):
                path = directory / filename
                if not is_image(path):
                    continue
                # lstat: a dangling link is left for the decoder to reject
                info = path.lstat()

                key = gallery_key(path)
                gallery = galleries.get(key)
                if gallery is None:
                    rel = gallery_unbound(directory, root)
                    gallery = Gallery(
                        name=gallery_name(path) or rel.name,
                        path=directory,
                        unbound=rel,
                    )
                    galleries[key] = gallery

                gallery.images.append(Image(
                    name=path.stem,
                    raw=path,
                    unbound=gallery.unbound / filename,
                    source=unbound(path, root),
                    mtime=info.st_mtime,
                ))
    except OSError as e:
        logger.error("Walking %s failed: %s", root, e)
        error = e

    for gallery in galleries.values():
        sort_images(gallery)
    drop_collisions(galleries)
    for gallery in galleries.values():
        wire_navigation(gallery)

    return Assembly(galleries, error)


def sort_images(gallery: Gallery):
    """Most recently modified first; equal times fall back to the name."""
    gallery.images.sort(key=lambda image: (-image.mtime, image.name))


def _output_key(path: PurePath) -> str:
    return path.as_posix().lower()


def drop_collisions(galleries: dict[str, Gallery]):
    """Leave out images whose outputs would overwrite another image's.

    `a.jpg` and `a.png` in one folder both become `a.jpg`/`a.png`/`a.html`;
    the first in gallery order keeps its outputs. Galleries left empty are
    removed, and so is a gallery whose listing page is already taken.
    """
    claimed = set()
    for key in sorted(galleries):
        gallery = galleries[key]
        page = _output_key(gallery.unbound / "index")
        if page in claimed:
            logger.warning("Gallery %s publishes to the same place as another one, leaving it out", gallery.path)
            del galleries[key]
            continue
        claimed.add(page)
        kept = []
        for image in gallery.images:
            out = _output_key(replace_ext(image.unbound, ""))
            if out in claimed:
                logger.warning("%s collides with another image's output, leaving it out", image.raw)
                continue
            claimed.add(out)
            kept.append(image)
        gallery.images = kept
        if not kept:
            del galleries[key]


def wire_navigation(gallery: Gallery):
    """Point each image's prev/next at its neighbours in the current order."""
    images = gallery.images
    for i, image in enumerate(images):
        image.prev = images[i - 1].page_link if i > 0 else ""
        image.next = images[i + 1].page_link if i + 1 < len(images) else ""
