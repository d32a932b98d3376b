"""HTML renderer for the related-posts block."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from markupsafe import Markup

from more_from_widget.renderers.base import MoreFromView, PostEntry, RenderOptions, Renderer

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
TEMPLATE_NAME = "more_from.html"

ALLOWED_PROTOCOLS = (
    "http",
    "https",
    "ftp",
    "ftps",
    "mailto",
    "news",
    "irc",
    "gopher",
    "nntp",
    "feed",
    "telnet",
)

_URL_DISALLOWED_RE = re.compile(r"[^a-z0-9\-~+_.?#=!&;,/:%@$|*'()\[\]\x80-\uffff]", re.IGNORECASE)
_ENCODED_CONTROL_RE = re.compile(r"%0[0-9a-f]", re.IGNORECASE)
_SCHEME_RE = re.compile(r"^([a-z][a-z0-9+.\-]*):", re.IGNORECASE)


def esc_url(url: str | None) -> str:
    """Sanitise a URL for use in ``href``/``src`` attributes.

    Characters outside the URL alphabet are dropped, encoded control
    characters removed, and schemes outside ``ALLOWED_PROTOCOLS`` rejected.
    Scheme-less URLs that are not relative get ``http://``. HTML escaping of
    the result is left to the template.
    """
    if not url:
        return ""
    cleaned = url.strip().replace(" ", "%20")
    cleaned = _URL_DISALLOWED_RE.sub("", cleaned)
    previous = None
    while previous != cleaned:
        previous = cleaned
        cleaned = _ENCODED_CONTROL_RE.sub("", cleaned)
    if not cleaned:
        return ""

    match = _SCHEME_RE.match(cleaned)
    if match:
        if match.group(1).lower() not in ALLOWED_PROTOCOLS:
            return ""
        return cleaned

    if cleaned.startswith(("/", "#", "?")) or re.match(r"^[a-z0-9\-]+?\.php", cleaned, re.IGNORECASE):
        return cleaned
    return f"http://{cleaned}"


def build_environment(templates_dir: Path = TEMPLATES_DIR) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
    )


@dataclass(slots=True)
class HtmlRenderer(Renderer):
    _environment: Environment = field(default_factory=build_environment)
    template_name: str = TEMPLATE_NAME

    def render(
        self,
        view: MoreFromView,
        *,
        options: RenderOptions | None = None,
    ) -> str:
        opts = options or RenderOptions()
        template = self._environment.get_template(self.template_name)
        return template.render(
            title=self._title_markup(view.title, opts),
            list_class=view.list_class,
            entries=[_sanitise(entry) for entry in view.entries],
        )

    @staticmethod
    def _title_markup(title: str | None, options: RenderOptions) -> str | Markup | None:
        if not title:
            return None
        if options.escape_title:
            return title
        # Legacy output inserts the heading text as-is.
        return Markup(title)


def _sanitise(entry: PostEntry) -> PostEntry:
    return replace(
        entry,
        permalink=esc_url(entry.permalink),
        thumbnail_url=esc_url(entry.thumbnail_url) or None,
    )


__all__ = ["ALLOWED_PROTOCOLS", "HtmlRenderer", "TEMPLATE_NAME", "build_environment", "esc_url"]
