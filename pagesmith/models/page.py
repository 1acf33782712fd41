"""Page model: one publishable document."""

from __future__ import annotations

import enum
import posixpath
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from pagesmith.exceptions import MissingRequiredField
from pagesmith.services.slug_service import generate_slug

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime

    from pagesmith.filesystem.frontmatter import FrontMatter

_DATE_PREFIX_RE = re.compile(r"^\d{4}-\d{2}-\d{2}-?")


class PageKind(enum.StrEnum):
    POST = "post"
    STATIC_PAGE = "static_page"


@dataclass(frozen=True, eq=False)
class Page:
    """A parsed, validated content file.

    Pages are identified by ``path``: two Page objects with the same path
    compare equal and hash alike.
    """

    path: str
    kind: PageKind
    body: str
    title: str | None = None
    date: datetime | None = None
    categories: frozenset[str] = frozenset()
    tags: frozenset[str] = frozenset()
    layout_options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Page):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    @property
    def is_post(self) -> bool:
        return self.kind is PageKind.POST

    @property
    def stem(self) -> str:
        """File name without extension; ``index.md`` uses its directory name."""
        name = posixpath.basename(self.path)
        stem = posixpath.splitext(name)[0]
        if stem == "index":
            parent = posixpath.basename(posixpath.dirname(self.path))
            if parent:
                stem = parent
        return stem

    @property
    def slug(self) -> str:
        """URL-safe output name, with any ``YYYY-MM-DD-`` prefix stripped."""
        return generate_slug(_DATE_PREFIX_RE.sub("", self.stem))

    @property
    def display_title(self) -> str:
        """Title for rendering; untitled pages fall back to their file name."""
        if self.title:
            return self.title
        name = _DATE_PREFIX_RE.sub("", self.stem)
        return name.replace("-", " ").replace("_", " ").title() or "Untitled"

    @property
    def icon(self) -> str | None:
        icon = self.layout_options.get("icon")
        if icon is None:
            return None
        return str(icon).strip() or None

    @property
    def order(self) -> int | None:
        """Navigation order from the ``order`` option, if it is an integer."""
        raw = self.layout_options.get("order")
        if isinstance(raw, bool):
            return None
        if isinstance(raw, int):
            return raw
        if isinstance(raw, str):
            try:
                return int(raw)
            except ValueError:
                return None
        return None


def is_in_posts_dir(path: str, posts_dir: str) -> bool:
    """Return True if a content-relative path lies under the posts directory."""
    prefix = posts_dir.strip("/")
    if not prefix:
        return False
    parts = path.split("/")
    prefix_parts = prefix.split("/")
    return parts[: len(prefix_parts)] == prefix_parts and len(parts) > len(prefix_parts)


def build_page(path: str, front_matter: FrontMatter, body: str, posts_dir: str = "_posts") -> Page:
    """Construct a Page from parsed front matter, validating per-kind fields.

    Files under ``posts_dir`` become posts and need a title and a date.
    Everything else is a static page, which needs a title or an icon.
    """
    kind = PageKind.POST if is_in_posts_dir(path, posts_dir) else PageKind.STATIC_PAGE

    if kind is PageKind.POST:
        if not front_matter.title:
            raise MissingRequiredField("title", path)
        if front_matter.date is None:
            raise MissingRequiredField("date", path)
    elif not front_matter.title:
        icon = front_matter.options.get("icon")
        if icon is None or not str(icon).strip():
            raise MissingRequiredField("title", path)

    return Page(
        path=path,
        kind=kind,
        body=body,
        title=front_matter.title,
        date=front_matter.date,
        categories=frozenset(front_matter.categories),
        tags=frozenset(front_matter.tags),
        layout_options=MappingProxyType(dict(front_matter.options)),
    )
