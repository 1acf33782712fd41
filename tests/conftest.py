"""Shared test fixtures for Pagesmith."""

from __future__ import annotations

from datetime import UTC, datetime
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import pytest

from pagesmith.config import Settings
from pagesmith.models.page import Page, PageKind

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

ABOUT_PAGE = """\
---
# the default layout is 'page'
icon: fas fa-info-circle
order: 4
---

Add Markdown syntax content to file `_tabs/about.md`{: .filepath } and it will show up on this page.
"""


def make_post(
    path: str,
    date: datetime | None,
    title: str = "A post",
    categories: tuple[str, ...] = (),
    tags: tuple[str, ...] = (),
    body: str = "Body\n",
) -> Page:
    """Build a Post directly, bypassing the parser."""
    return Page(
        path=path,
        kind=PageKind.POST,
        body=body,
        title=title,
        date=date,
        categories=frozenset(categories),
        tags=frozenset(tags),
    )


def make_static_page(
    path: str,
    title: str | None = None,
    body: str = "Body\n",
    **options: Any,
) -> Page:
    return Page(
        path=path,
        kind=PageKind.STATIC_PAGE,
        body=body,
        title=title,
        layout_options=MappingProxyType(options),
    )


def utc(year: int, month: int, day: int, hour: int = 0) -> datetime:
    return datetime(year, month, day, hour, tzinfo=UTC)


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Empty content directory with the standard posts and tabs folders."""
    root = tmp_path / "content"
    (root / "_posts").mkdir(parents=True)
    (root / "_tabs").mkdir()
    return root


@pytest.fixture
def write_content(content_dir: Path) -> Callable[[str, str], Path]:
    """Write a content file relative to the content directory."""

    def _write(rel_path: str, text: str) -> Path:
        path = content_dir / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def test_settings(content_dir: Path, tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        content_dir=content_dir,
        output_dir=tmp_path / "site",
        max_workers=2,
    )
