"""Build service: content directory -> rendered site."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pagesmith.filesystem.content_manager import BuildError, ContentManager
from pagesmith.rendering.renderer import (
    INDEX_OUTPUT,
    RenderError,
    output_path,
    render_index,
    render_page,
)
from pagesmith.services.site_index import build_index

if TYPE_CHECKING:
    from pathlib import Path

    from pagesmith.config import Settings
    from pagesmith.filesystem.toml_manager import SiteConfig
    from pagesmith.models.page import Page
    from pagesmith.services.site_index import SiteIndex

logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    """Outcome of one build: documents written and files that failed."""

    pages_written: list[str] = field(default_factory=list)
    errors: list[BuildError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def summary(self) -> str:
        lines = [f"Wrote {len(self.pages_written)} documents, {len(self.errors)} errors"]
        for error in self.errors:
            lines.append(f"  ! {error.path} ({error.kind}): {error.message}")
        return "\n".join(lines)


def resolve_output_collisions(pages: list[Page]) -> tuple[list[Page], list[BuildError]]:
    """Drop pages whose output location is already taken by an earlier path."""
    claimed: dict[str, str] = {INDEX_OUTPUT: "<site index>"}
    kept: list[Page] = []
    errors: list[BuildError] = []
    for page in sorted(pages, key=lambda p: p.path):
        target = output_path(page)
        owner = claimed.get(target)
        if owner is not None:
            errors.append(
                BuildError(
                    path=page.path,
                    kind="OutputCollision",
                    message=f"Output {target} is already produced by {owner}",
                )
            )
            continue
        claimed[target] = page.path
        kept.append(page)
    return kept, errors


def _write_document(output_dir: Path, rel_path: str, document: str) -> None:
    target = output_dir / rel_path
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(document, encoding="utf-8")


def _render_pages(
    pages: list[Page], index: SiteIndex, site: SiteConfig
) -> tuple[list[tuple[str, str]], list[BuildError]]:
    """Render pages in memory; return (output path, document) pairs and failures."""
    documents: list[tuple[str, str]] = []
    failures: list[BuildError] = []
    for page in sorted(pages, key=lambda p: p.path):
        try:
            document = render_page(page, index, site)
        except RenderError as exc:
            logger.error("Failed to render %s: %s", page.path, exc)
            failures.append(BuildError.from_exception(page.path, exc))
            continue
        documents.append((output_path(page), document))
    return documents, failures


def build_site(settings: Settings) -> BuildReport:
    """Build the whole site described by settings.

    Every content file is attempted before anything is reported. Files that
    fail to parse, validate or render are left out of the output and listed
    in the returned report. Raises ValueError for unusable configuration.
    """
    settings.validate_paths()
    content_manager = ContentManager(
        content_dir=settings.content_dir,
        posts_dir=settings.posts_dir,
        require_utc_offset=settings.require_utc_offset,
        max_workers=settings.max_workers,
    )
    site = content_manager.site_config

    scan = content_manager.scan_pages()
    report = BuildReport(errors=list(scan.errors))
    pages, collisions = resolve_output_collisions(scan.pages)
    report.errors.extend(collisions)

    # Navigation and listings must only link pages that end up written, so a
    # render failure drops the page and every page is rendered again against
    # the smaller index.
    while True:
        index = build_index(pages)
        documents, failures = _render_pages(pages, index, site)
        if not failures:
            break
        report.errors.extend(failures)
        failed = {error.path for error in failures}
        pages = [page for page in pages if page.path not in failed]
    logger.info("Indexed %d posts and %d pages", len(index.posts), len(index.pages))

    for rel_path, document in documents:
        _write_document(settings.output_dir, rel_path, document)
        report.pages_written.append(rel_path)

    _write_document(settings.output_dir, INDEX_OUTPUT, render_index(index, site))
    report.pages_written.append(INDEX_OUTPUT)

    if report.ok:
        logger.info("Build finished: %d documents written", len(report.pages_written))
    else:
        logger.error("Build finished with %d errors", len(report.errors))
    return report
