"""TOML configuration reader/writer for index.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import pendulum
import tomli_w

from pagesmith.services.datetime_service import DEFAULT_DISPLAY_FORMAT

if TYPE_CHECKING:
    from pathlib import Path

SITE_CONFIG_FILE = "index.toml"


@dataclass(frozen=True)
class SiteConfig:
    """Parsed site configuration from index.toml."""

    title: str = "My Blog"
    description: str = ""
    author: str = ""
    base_url: str = ""
    timezone: str = "UTC"
    date_format: str = DEFAULT_DISPLAY_FORMAT


def parse_site_config(content_dir: Path) -> SiteConfig:
    """Parse index.toml from the content directory.

    A missing file yields the defaults. Raises ValueError for unreadable
    TOML or a ``[site]`` entry that is not a table.
    """
    index_path = content_dir / SITE_CONFIG_FILE
    if not index_path.exists():
        return SiteConfig()

    try:
        data = tomllib.loads(index_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid {SITE_CONFIG_FILE}: {exc}") from None

    site_data = data.get("site", {})
    if not isinstance(site_data, dict):
        msg = f"[site] in {SITE_CONFIG_FILE} must be a table"
        raise ValueError(msg)

    defaults = SiteConfig()
    timezone = str(site_data.get("timezone", defaults.timezone))
    try:
        pendulum.timezone(timezone)
    except (ValueError, KeyError):
        raise ValueError(f"Unknown timezone in {SITE_CONFIG_FILE}: {timezone}") from None

    return SiteConfig(
        title=str(site_data.get("title", defaults.title)),
        description=str(site_data.get("description", defaults.description)),
        author=str(site_data.get("author", defaults.author)),
        base_url=str(site_data.get("base_url", defaults.base_url)).rstrip("/"),
        timezone=timezone,
        date_format=str(site_data.get("date_format", defaults.date_format)),
    )


def write_site_config(content_dir: Path, config: SiteConfig) -> None:
    """Write site configuration back to index.toml."""
    site_data: dict[str, Any] = {
        "title": config.title,
        "description": config.description,
        "author": config.author,
        "base_url": config.base_url,
        "timezone": config.timezone,
        "date_format": config.date_format,
    }

    index_path = content_dir / SITE_CONFIG_FILE
    index_path.write_bytes(tomli_w.dumps({"site": site_data}).encode("utf-8"))
