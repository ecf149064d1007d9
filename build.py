# /// script
# dependencies = ["pillow", "jinja2"]
# ///
"""
Darkroom: build a static photo gallery from a folder tree of images.

Usage:
    uv run --script build.py [--pages] [--regenerate]

Expects images in ./images/, one gallery per folder.
Outputs a static site to ./public/
"""

import sys

from darkroom.cli import main

if __name__ == "__main__":
    sys.exit(main())
