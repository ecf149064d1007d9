"""
The build: assemble galleries, make thumbnails and display images, write
pages, copy assets.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial

from .assemble import assemble, wire_navigation
from .config import BuildConfig, ORIGINALS_DIR
from .copy import copy_dir
from .errors import TraversalError
from .imaging import process_image
from .models import Gallery
from .render import PageRenderer, make_environment, write_stylesheet

logger = logging.getLogger(__name__)

PREVIEW_COUNT = 8


@dataclass
class BuildStats:
    galleries: int = 0
    images: int = 0
    skipped: int = 0   # outputs already present, nothing decoded
    encoded: int = 0   # at least one output written
    failed: int = 0    # could not be decoded
    pages: int = 0


def process_gallery(executor: ThreadPoolExecutor, gallery: Gallery, config: BuildConfig, stats: BuildStats):
    """Run the image jobs of one gallery in parallel and wait for all of them.

    Images that could not be decoded are dropped from the gallery and the
    navigation links are redone without them.
    """
    results = list(executor.map(partial(process_image, config=config), gallery.images))

    kept = []
    for image, result in zip(gallery.images, results):
        if result.skipped:
            stats.skipped += 1
        if result.written:
            stats.encoded += 1
        if result.failed:
            stats.failed += 1
            continue
        kept.append(image)

    if len(kept) != len(gallery.images):
        gallery.images = kept
        wire_navigation(gallery)


def render_gallery(renderer: PageRenderer, gallery: Gallery, config: BuildConfig):
    for image in gallery.images:
        renderer.create_page(
            image.page,
            "image.html",
            title=image.name,
            gallery=gallery,
            image=image,
            prev=image.prev,
            next=image.next,
            originals=config.copy_originals,
        )

    renderer.create_page(
        gallery.page,
        "gallery.html",
        title=gallery.name,
        gallery=gallery,
    )


def copy_assets(config: BuildConfig):
    css_out = config.public_dir / "css"
    if config.css_dir.is_dir():
        try:
            copy_dir(config.css_dir, css_out)
        except OSError as e:
            logger.error("Copying %s failed: %s", config.css_dir, e)
    else:
        logger.info("No %s folder, writing the default stylesheet", config.css_dir)
        write_stylesheet(css_out)

    if config.copy_originals:
        try:
            copy_dir(config.images_dir, config.public_dir / ORIGINALS_DIR)
        except OSError as e:
            logger.error("Copying originals from %s failed: %s", config.images_dir, e)


def build(config: BuildConfig) -> BuildStats:
    """Build the whole site described by `config`.

    Raises TraversalError once everything that could be built has been, if
    the images tree could not be walked completely, and RenderError as soon
    as a page fails to render.
    """
    stats = BuildStats()
    assembly = assemble(config.images_dir)
    galleries = [assembly.galleries[key] for key in sorted(assembly.galleries)]

    renderer = PageRenderer(make_environment(config.templates_dir), config.public_dir)
    workers = config.workers or os.cpu_count() or 1

    with ThreadPoolExecutor(max_workers=workers) as executor:
        for gallery in galleries:
            stats.images += len(gallery.images)
            if not config.pages_only:
                logger.info("Processing %s (%d images)", gallery.name, len(gallery.images))
                process_gallery(executor, gallery, config, stats)
            if gallery.images:
                render_gallery(renderer, gallery, config)

    listed = sorted((g for g in galleries if g.images), key=lambda g: (g.name.lower(), str(g.unbound)))
    stats.galleries = len(listed)
    renderer.create_page(
        "index.html",
        "index.html",
        title=config.title,
        galleries=listed,
        image_count=sum(len(g.images) for g in listed),
        preview=PREVIEW_COUNT,
    )
    stats.pages = renderer.count

    copy_assets(config)

    if assembly.error is not None:
        raise TraversalError(f"could not read {config.images_dir}: {assembly.error}") from assembly.error
    return stats
