"""Build settings, passed explicitly from the CLI into the pipeline."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png"}

THUMB_SIZE = 256
LARGE_SIZE = 1024
JPEG_QUALITY = 93

THUMBS_DIR = "thumbs"
ORIGINALS_DIR = "originals"


@dataclass
class BuildConfig:
    images_dir: Path = Path("images")
    public_dir: Path = Path("public")
    css_dir: Path = Path("css")
    templates_dir: Optional[Path] = None
    thumb_size: int = THUMB_SIZE
    large_size: int = LARGE_SIZE
    jpeg_quality: int = JPEG_QUALITY
    pages_only: bool = False       # skip image work, only write HTML
    regenerate: bool = False       # ignore existing outputs
    copy_originals: bool = False   # publish the source tree under originals/
    workers: Optional[int] = None  # None means os.cpu_count()
    title: str = "Galleries"

    def __post_init__(self):
        self.images_dir = Path(self.images_dir)
        self.public_dir = Path(self.public_dir)
        self.css_dir = Path(self.css_dir)
        if self.templates_dir is not None:
            self.templates_dir = Path(self.templates_dir)
