"""Jinja2-based page renderer.

Metadata (titles, categories, tags) is HTML-escaped by the template
environment. Page bodies are embedded verbatim: code blocks, blockquotes
and links reach the output exactly as the author wrote them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from jinja2 import Environment, PackageLoader, TemplateError, select_autoescape

from pagesmith.filesystem.toml_manager import SiteConfig
from pagesmith.models.page import PageKind
from pagesmith.services.datetime_service import format_display_date, format_iso
from pagesmith.services.slug_service import generate_slug

if TYPE_CHECKING:
    from pagesmith.models.page import Page
    from pagesmith.services.site_index import SiteIndex

logger = logging.getLogger(__name__)

INDEX_OUTPUT = "index.html"

_POST_TEMPLATE = "post.html"
_PAGE_TEMPLATE = "page.html"
_INDEX_TEMPLATE = "index.html"


class RenderError(RuntimeError):
    """Raised when a page cannot be rendered (missing layout data, template failure)."""


def _create_environment() -> Environment:
    env = Environment(
        loader=PackageLoader("pagesmith.rendering", "templates"),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["display_date"] = format_display_date
    env.filters["iso"] = format_iso
    env.filters["slugify"] = generate_slug
    return env


_env = _create_environment()


def output_path(page: Page) -> str:
    """Output location of a page, relative to the output directory."""
    if page.kind is PageKind.POST:
        return f"posts/{page.slug}/index.html"
    return f"{page.slug}/index.html"


def _url_helpers(site: SiteConfig) -> dict[str, Any]:
    def site_url(path: str) -> str:
        return f"{site.base_url}{path}"

    def page_url(page: Page) -> str:
        return site_url("/" + output_path(page).removesuffix("index.html"))

    return {"site_url": site_url, "page_url": page_url}


def _render_template(name: str, **context: Any) -> str:
    try:
        return _env.get_template(name).render(**context)
    except TemplateError as exc:
        raise RenderError(f"Template {name} failed: {exc}") from exc


def render_page(page: Page, index: SiteIndex, site: SiteConfig | None = None) -> str:
    """Render one page to an HTML document.

    Posts get date and taxonomy chrome; static pages do not. The result
    depends only on the arguments, so rendering twice gives identical output.
    """
    site = site or SiteConfig()
    context: dict[str, Any] = {
        "page": page,
        "index": index,
        "site": site,
        **_url_helpers(site),
    }

    if page.kind is PageKind.POST:
        if page.date is None:
            raise RenderError(f"{page.path}: post has no date to render")
        if not page.title:
            raise RenderError(f"{page.path}: post has no title to render")
        context["categories"] = sorted(page.categories)
        context["tags"] = sorted(page.tags)
        logger.debug("Rendering post %s", page.path)
        return _render_template(_POST_TEMPLATE, **context)

    logger.debug("Rendering page %s", page.path)
    return _render_template(_PAGE_TEMPLATE, **context)


def render_index(index: SiteIndex, site: SiteConfig | None = None) -> str:
    """Render the site index: posts newest-first, grouped by category and tag."""
    site = site or SiteConfig()
    return _render_template(
        _INDEX_TEMPLATE,
        index=index,
        site=site,
        categories=list(index.posts_by_category()),
        tags=list(index.posts_by_tag()),
        **_url_helpers(site),
    )
