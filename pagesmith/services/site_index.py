"""Site index: posts ordered newest-first and grouped by category and tag."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from pagesmith.exceptions import MissingRequiredField
from pagesmith.models.page import Page, PageKind

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping


@dataclass(frozen=True)
class SiteIndex:
    """Immutable aggregate of every page in one build.

    ``posts`` is sorted by date descending with ties broken by path
    ascending, so identical inputs always give identical ordering.
    """

    posts: tuple[Page, ...]
    pages: tuple[Page, ...]
    categories: Mapping[str, frozenset[Page]]
    tags: Mapping[str, frozenset[Page]]

    def by_category(self, name: str) -> frozenset[Page]:
        """Posts filed under a category; empty for unknown names."""
        return self.categories.get(name, frozenset())

    def by_tag(self, name: str) -> frozenset[Page]:
        """Posts carrying a tag; empty for unknown names."""
        return self.tags.get(name, frozenset())

    def posts_by_category(self) -> Iterator[tuple[str, tuple[Page, ...]]]:
        """Yield (category, posts newest-first) pairs sorted by category."""
        return self._grouped(self.categories)

    def posts_by_tag(self) -> Iterator[tuple[str, tuple[Page, ...]]]:
        """Yield (tag, posts newest-first) pairs sorted by tag."""
        return self._grouped(self.tags)

    def _grouped(
        self, mapping: Mapping[str, frozenset[Page]]
    ) -> Iterator[tuple[str, tuple[Page, ...]]]:
        for name in sorted(mapping):
            members = mapping[name]
            yield name, tuple(post for post in self.posts if post in members)


def sort_posts(posts: Iterable[Page]) -> list[Page]:
    """Sort posts by date descending, then path ascending."""
    result = sorted(posts, key=lambda p: p.path)
    for post in result:
        if post.date is None:
            raise MissingRequiredField("date", post.path)
    # list.sort is stable, also with reverse=True, so path order survives
    # among posts sharing a date.
    result.sort(key=lambda p: p.date, reverse=True)  # type: ignore[arg-type,return-value]
    return result


def sort_static_pages(pages: Iterable[Page]) -> list[Page]:
    """Sort static pages by their ``order`` option (unordered last), then path."""

    def _key(page: Page) -> tuple[bool, int, str]:
        order = page.order
        return (order is None, order or 0, page.path)

    return sorted(pages, key=_key)


def _group(posts: Iterable[Page], attr: str) -> Mapping[str, frozenset[Page]]:
    groups: dict[str, set[Page]] = {}
    for post in posts:
        for name in getattr(post, attr):
            groups.setdefault(name, set()).add(post)
    return MappingProxyType({name: frozenset(members) for name, members in groups.items()})


def build_index(pages: Iterable[Page]) -> SiteIndex:
    """Build the SiteIndex for a complete set of pages."""
    all_pages = list(pages)
    posts = sort_posts(p for p in all_pages if p.kind is PageKind.POST)
    static_pages = sort_static_pages(p for p in all_pages if p.kind is PageKind.STATIC_PAGE)
    return SiteIndex(
        posts=tuple(posts),
        pages=tuple(static_pages),
        categories=_group(posts, "categories"),
        tags=_group(posts, "tags"),
    )
