"""Content directory scanner."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pagesmith.exceptions import ContentError, UnsafePath
from pagesmith.filesystem.frontmatter import parse_front_matter
from pagesmith.filesystem.toml_manager import SiteConfig, parse_site_config
from pagesmith.models.page import Page, build_page

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

CONTENT_SUFFIX = ".md"


@dataclass(frozen=True)
class BuildError:
    """One file that could not be included in the build."""

    path: str
    kind: str
    message: str

    @classmethod
    def from_exception(cls, path: str, exc: Exception) -> BuildError:
        message = exc.args[0] if isinstance(exc, ContentError) and exc.args else str(exc)
        return cls(path=path, kind=type(exc).__name__, message=str(message))


@dataclass
class ScanResult:
    """Pages that loaded cleanly plus the errors for those that did not."""

    pages: list[Page] = field(default_factory=list)
    errors: list[BuildError] = field(default_factory=list)


def discover_content(content_dir: Path) -> list[Path]:
    """Recursively discover content files, skipping hidden files and directories."""
    if not content_dir.is_dir():
        return []
    found: list[Path] = []
    for path in content_dir.rglob(f"*{CONTENT_SUFFIX}"):
        rel_parts = path.relative_to(content_dir).parts
        if any(part.startswith(".") for part in rel_parts):
            continue
        if path.is_file():
            found.append(path)
    return sorted(found)


@dataclass
class ContentManager:
    """Reads content files and turns them into Pages."""

    content_dir: Path
    posts_dir: str = "_posts"
    require_utc_offset: bool = False
    max_workers: int = 1
    _site_config: SiteConfig | None = field(default=None, repr=False)

    @property
    def site_config(self) -> SiteConfig:
        """Get site configuration, loading if needed."""
        if self._site_config is None:
            self._site_config = parse_site_config(self.content_dir)
        return self._site_config

    def _validate_path(self, rel_path: str) -> Path:
        """Validate that a relative path stays within the content directory.

        Raises UnsafePath if the resolved path escapes content_dir.
        """
        full_path = (self.content_dir / rel_path).resolve()
        if not full_path.is_relative_to(self.content_dir.resolve()):
            raise UnsafePath(f"Path traversal detected: {rel_path}", rel_path)
        return full_path

    def load_page(self, rel_path: str) -> Page:
        """Read, parse and validate a single content file.

        Raises ContentError for content problems and OSError or
        UnicodeDecodeError when the file cannot be read.
        """
        full_path = self._validate_path(rel_path)
        raw_content = full_path.read_text(encoding="utf-8")
        front_matter, body = parse_front_matter(
            raw_content,
            file_path=rel_path,
            default_tz=self.site_config.timezone,
            require_offset=self.require_utc_offset,
        )
        return build_page(rel_path, front_matter, body, posts_dir=self.posts_dir)

    def _try_load(self, rel_path: str) -> Page | BuildError:
        try:
            return self.load_page(rel_path)
        except (ContentError, OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping %s: %s", rel_path, exc)
            return BuildError.from_exception(rel_path, exc)

    def scan_pages(self) -> ScanResult:
        """Load every content file, collecting per-file errors.

        Every file is attempted; a bad file never stops the others. Files are
        independent, so with ``max_workers > 1`` they load in a thread pool.
        Results keep discovery order either way.
        """
        # Load site config up front so worker threads only read it.
        _ = self.site_config
        rel_paths = [
            path.relative_to(self.content_dir).as_posix()
            for path in discover_content(self.content_dir)
        ]
        logger.info("Found %d content files in %s", len(rel_paths), self.content_dir)

        if self.max_workers > 1 and len(rel_paths) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                outcomes = list(executor.map(self._try_load, rel_paths))
        else:
            outcomes = [self._try_load(rel_path) for rel_path in rel_paths]

        result = ScanResult()
        for outcome in outcomes:
            if isinstance(outcome, BuildError):
                result.errors.append(outcome)
            else:
                result.pages.append(outcome)
        return result
