"""Plain recursive copies for stylesheets and the original images."""

import logging
import os
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def copy_dir(src: Path, dst: Path):
    """Copy the tree at `src` into `dst`, keeping directory modes."""
    src, dst = Path(src), Path(dst)
    info = src.stat()
    dst.mkdir(parents=True, exist_ok=True)

    for entry in sorted(src.iterdir()):
        target = dst / entry.name
        if entry.is_dir():
            copy_dir(entry, target)
        else:
            copy_file(entry, target)

    # last, so a read-only source dir doesn't block its own children
    try:
        os.chmod(dst, info.st_mode & 0o7777)
    except OSError as e:
        logger.warning("Could not copy permissions to %s: %s", dst, e)


def copy_file(src: Path, dst: Path):
    """Copy the bytes of `src`, then try to give `dst` the same permissions."""
    shutil.copyfile(src, dst)
    try:
        shutil.copymode(src, dst)
    except OSError as e:
        logger.warning("Could not copy permissions to %s: %s", dst, e)
