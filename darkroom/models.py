"""Galleries and the images they own."""

from dataclasses import dataclass, field
from pathlib import PurePath

from .config import ORIGINALS_DIR, THUMBS_DIR
from .paths import link, replace_ext


@dataclass
class Image:
    name: str             # file stem, used as the page title
    raw: PurePath         # source file
    unbound: PurePath     # site-relative, still carrying the source extension
    source: PurePath      # source file relative to the images root
    mtime: float
    prev: str = ""
    next: str = ""

    @property
    def path(self) -> PurePath:
        """Display image, relative to the publish dir."""
        return replace_ext(self.unbound, ".jpg")

    @property
    def thumb(self) -> PurePath:
        return PurePath(THUMBS_DIR) / replace_ext(self.unbound, ".png")

    @property
    def page(self) -> PurePath:
        return replace_ext(self.unbound, ".html")

    @property
    def page_link(self) -> str:
        return link(self.page)

    @property
    def image_link(self) -> str:
        return link(self.path)

    @property
    def thumb_link(self) -> str:
        return link(self.thumb)

    @property
    def raw_link(self) -> str:
        return link(PurePath(ORIGINALS_DIR) / self.source)


@dataclass
class Gallery:
    name: str
    path: PurePath        # source directory
    unbound: PurePath
    images: list[Image] = field(default_factory=list)

    @property
    def page(self) -> PurePath:
        return self.unbound / "index.html"

    @property
    def page_link(self) -> str:
        return link(self.unbound)

    def first_images(self, n: int) -> list[Image]:
        return self.images[:n]
