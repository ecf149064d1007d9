"""
Command line entry point.

Usage:
    darkroom [--images images] [--public public] [--pages] [--regenerate]

Reads galleries from ./images/ and writes the static site to ./public/.
"""

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .config import BuildConfig
from .errors import DarkroomError
from .pipeline import build

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="darkroom", description="Build a static photo gallery.")
    parser.add_argument("--images", type=Path, default=Path("images"),
                        help="Folder tree of source images (default: images).")
    parser.add_argument("--public", type=Path, default=Path("public"),
                        help="Output folder for the site (default: public).")
    parser.add_argument("--css", type=Path, default=Path("css"),
                        help="Stylesheet folder copied to public/css (default: css).")
    parser.add_argument("--templates", type=Path, default=None,
                        help="Folder with image.html, gallery.html or index.html overrides.")
    parser.add_argument("--title", default="Galleries", help="Title of the index page.")
    parser.add_argument("--pages", action="store_true",
                        help="Generate only pages, leave images alone.")
    parser.add_argument("--regenerate", action="store_true",
                        help="Regenerate thumbnails and display images even if they exist.")
    parser.add_argument("--copy-originals", action="store_true",
                        help="Publish the source images under public/originals.")
    parser.add_argument("-j", "--jobs", type=int, default=None,
                        help="Parallel image jobs (default: number of CPUs).")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default: INFO).")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    config = BuildConfig(
        images_dir=args.images,
        public_dir=args.public,
        css_dir=args.css,
        templates_dir=args.templates,
        pages_only=args.pages,
        regenerate=args.regenerate,
        copy_originals=args.copy_originals,
        workers=args.jobs,
        title=args.title,
    )

    print(f"Building {config.images_dir}/ into {config.public_dir}/...")
    try:
        stats = build(config)
    except DarkroomError as e:
        logger.error("%s", e)
        return 1

    print(f"  {stats.galleries} galleries, {stats.images} images")
    if not config.pages_only:
        print(f"  {stats.encoded} encoded, {stats.skipped} up to date, {stats.failed} failed")
    print(f"  {stats.pages} pages")
    print(f"\nDone! Site written to {config.public_dir}/")
    print(f"Run: python3 -m http.server -d {config.public_dir} 8000")
    return 0


if __name__ == "__main__":
    sys.exit(main())
