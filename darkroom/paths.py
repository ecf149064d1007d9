"""Classify files in the images tree and derive gallery/image identities."""

from pathlib import Path, PurePath
from urllib.parse import quote

from .config import IMAGE_EXTENSIONS


def is_image(path: PurePath) -> bool:
    return path.suffix.lower() in IMAGE_EXTENSIONS


def gallery_key(path: PurePath) -> str:
    """Map key for the gallery owning `path`.

    Case-folded so that `images/Trip` and `images/trip` end up in one gallery
    on case-insensitive filesystems.
    """
    return str(path.parent).lower()


def gallery_name(path: PurePath) -> str:
    return path.parent.name


def unbound(path: PurePath, root: PurePath) -> PurePath:
    """`path` relative to the images root."""
    return path.relative_to(root)


def gallery_unbound(directory: PurePath, root: PurePath) -> PurePath:
    rel = directory.relative_to(root)
    # Images sitting directly in the root would otherwise get their listing
    # written over the global index.html.
    if rel == PurePath("."):
        return PurePath(Path(root).resolve().name or "gallery")
    return rel


def replace_ext(path: PurePath, ext: str) -> PurePath:
    return path.with_name(path.stem + ext)


def link(path: PurePath) -> str:
    """Site-absolute, URL-quoted link for an output path."""
    return "/" + quote(path.as_posix().lstrip("/"))
