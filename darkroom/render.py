"""
HTML pages: built-in templates, optional overrides from a template folder,
and the default stylesheet.
"""

import logging
from pathlib import Path
from typing import Optional

from jinja2 import ChoiceLoader, DictLoader, Environment, FileSystemLoader, StrictUndefined, TemplateError

from .errors import RenderError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Shared CSS (written to css/style.css when the site has no css folder)
# ---------------------------------------------------------------------------

SHARED_CSS = """\
body {
  margin: 0 auto; padding: 20px; max-width: 1280px;
  font: 15px/1.5 system-ui, sans-serif;
  background: #fafaf7; color: #222;
}
a { color: #35608a; text-decoration: none; }
a:hover { text-decoration: underline; }
h1 { font-size: 1.4em; font-weight: 600; margin: 0 0 4px; }
.subtitle { color: #777; font-size: 0.9em; margin: 0 0 20px; }

/* galleries on the index, thumbnails everywhere */
.gallery-section { margin-bottom: 28px; }
.gallery-header { font-size: 1.1em; margin: 0 0 8px; }
.gallery-header span { color: #999; font-size: 0.8em; font-weight: normal; }
.grid { display: flex; flex-wrap: wrap; gap: 6px; }
.grid img { height: 128px; display: block; background: #e5e5e0; }

/* single image */
.nav { display: flex; gap: 14px; font-size: 0.9em; margin-bottom: 14px; }
.media img { max-width: 100%; max-height: 85vh; display: block; margin: 12px 0; }
.original-link { font-size: 0.85em; }

@media (max-width: 640px) {
  body { padding: 10px; }
  .grid img { height: 80px; }
}
"""

INDEX_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{{ title }}</title>
<link rel="stylesheet" href="/css/style.css">
</head>
<body>
<h1>{{ title }}</h1>
<p class="subtitle">{{ galleries|length }} galleries, {{ image_count }} images</p>
{% for gallery in galleries %}
<div class="gallery-section">
<h2 class="gallery-header"><a href="{{ gallery.page_link }}/">{{ gallery.name }}</a> <span>{{ gallery.images|length }} images</span></h2>
<div class="grid">
{% for image in gallery.first_images(preview) %}<a href="{{ image.page_link }}" title="{{ image.name }}"><img src="{{ image.thumb_link }}" alt="" loading="lazy"></a>
{% endfor %}
</div>
</div>
{% endfor %}
</body>
</html>
"""

GALLERY_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{{ title }}</title>
<link rel="stylesheet" href="/css/style.css">
</head>
<body>
<div class="nav"><a href="/">&larr; all galleries</a></div>
<h1>{{ gallery.name }}</h1>
<p class="subtitle">{{ gallery.images|length }} images</p>
<div class="grid">
{% for image in gallery.images %}<a href="{{ image.page_link }}" title="{{ image.name }}"><img src="{{ image.thumb_link }}" alt="" loading="lazy"></a>
{% endfor %}
</div>
</body>
</html>
"""

IMAGE_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{{ title }} — {{ gallery.name }}</title>
<link rel="stylesheet" href="/css/style.css">
</head>
<body class="image-page">
<div class="nav">
  <a href="/">&larr; all galleries</a>
  <a href="{{ gallery.page_link }}/">{{ gallery.name }}</a>
  {% if prev %}<a href="{{ prev }}" rel="prev">&larr; prev</a>{% endif %}
  {% if next %}<a href="{{ next }}" rel="next">next &rarr;</a>{% endif %}
</div>

<h1>{{ image.name }}</h1>

<div class="media">
  <img src="{{ image.image_link }}" alt="{{ image.name }}">
</div>

{% if originals %}
<div class="original-link">
  <a href="{{ image.raw_link }}" download>Download original</a>
</div>
{% endif %}

</body>
</html>
"""

BUILTIN_TEMPLATES = {
    "index.html": INDEX_TEMPLATE,
    "gallery.html": GALLERY_TEMPLATE,
    "image.html": IMAGE_TEMPLATE,
}


def make_environment(templates_dir: Optional[Path] = None) -> Environment:
    """Template set for one build. Files in `templates_dir` win over the built-ins."""
    loaders = [DictLoader(BUILTIN_TEMPLATES)]
    if templates_dir is not None:
        loaders.insert(0, FileSystemLoader(str(templates_dir)))
    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=True,
        undefined=StrictUndefined,
    )


class PageRenderer:
    """Renders named templates into files under the publish dir."""

    def __init__(self, env: Environment, public_dir: Path):
        self.env = env
        self.public_dir = Path(public_dir)
        self.count = 0

    def create_page(self, name, template: str, **data) -> Path:
        path = self.public_dir / name
        try:
            html = self.env.get_template(template).render(**data)
        except (TemplateError, TypeError, ValueError, AttributeError) as e:
            raise RenderError(f"rendering {template} for {name} failed: {e}") from e

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(html, encoding="utf-8")
        except OSError as e:
            raise RenderError(f"writing {path} failed: {e}") from e

        logger.debug("Wrote %s", path)
        self.count += 1
        return path


def write_stylesheet(css_dir: Path) -> Path:
    path = Path(css_dir) / "style.css"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(SHARED_CSS, encoding="utf-8")
    return path
