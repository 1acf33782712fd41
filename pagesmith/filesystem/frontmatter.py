"""YAML front matter parser/serializer for content files."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import frontmatter
import yaml

from pagesmith.exceptions import InvalidDate, MalformedFrontMatter
from pagesmith.services.datetime_service import format_datetime, parse_datetime

RECOGNIZED_FIELDS: frozenset[str] = frozenset(
    {
        "title",
        "date",
        "categories",
        "tags",
    }
)

_handler = frontmatter.YAMLHandler()


@dataclass(frozen=True)
class FrontMatter:
    """Typed view of a leading metadata block.

    Keys outside RECOGNIZED_FIELDS are kept verbatim in ``options`` so that
    layout hints such as ``icon`` or ``order`` survive parsing.
    """

    title: str | None = None
    date: datetime | None = None
    categories: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    options: dict[str, Any] = field(default_factory=dict)


def split_front_matter(raw_content: str, file_path: str = "") -> tuple[dict[str, Any], str]:
    """Split raw file content into its metadata mapping and body.

    The content must open with a ``---`` line and the block must be closed by
    a second ``---`` line. Leading blank lines of the body are dropped; the
    rest of the body is returned verbatim.
    """
    text = raw_content.removeprefix("\ufeff")
    if not _handler.detect(text):
        raise MalformedFrontMatter("File does not start with a '---' delimiter", file_path)
    try:
        fm_text, body = _handler.split(text)
    except ValueError:
        raise MalformedFrontMatter("Front matter block is not closed by '---'", file_path) from None

    try:
        metadata = _handler.load(fm_text)
    except yaml.YAMLError as exc:
        raise MalformedFrontMatter(f"Invalid YAML in front matter: {exc}", file_path) from None
    except ValueError as exc:
        # The YAML loader builds dates itself; out-of-range ones such as
        # 2025-02-30 fail there with a plain ValueError.
        raise InvalidDate(f"Invalid date in front matter: {exc}", file_path) from None

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise MalformedFrontMatter("Front matter must be a mapping of keys to values", file_path)
    return metadata, body.lstrip("\r\n")


def parse_string_list(raw_value: object | None, key: str, file_path: str = "") -> tuple[str, ...]:
    """Parse a list-of-strings value such as ``categories`` or ``tags``.

    A bare scalar is a single-element list. Empty entries and duplicates are
    dropped; first occurrence wins.
    """
    if raw_value is None:
        return ()
    if isinstance(raw_value, dict):
        raise MalformedFrontMatter(f"'{key}' must be a list of strings", file_path)
    items: list[object] = raw_value if isinstance(raw_value, list) else [raw_value]

    result: list[str] = []
    for item in items:
        if isinstance(item, (dict, list)):
            raise MalformedFrontMatter(f"'{key}' entries must be plain strings", file_path)
        value = str(item).strip()
        if value and value not in result:
            result.append(value)
    return tuple(result)


def parse_front_matter(
    raw_content: str,
    file_path: str = "",
    default_tz: str = "UTC",
    require_offset: bool = False,
) -> tuple[FrontMatter, str]:
    """Parse a content file into its FrontMatter and raw body."""
    metadata, body = split_front_matter(raw_content, file_path)

    # Non-string titles (e.g. title: 42) are coerced to string.
    raw_title = metadata.get("title")
    title: str | None = None
    if raw_title is not None:
        title = str(raw_title).strip() or None

    raw_date = metadata.get("date")
    date_value: datetime | None = None
    if raw_date is not None:
        try:
            date_value = parse_datetime(
                raw_date, default_tz=default_tz, require_offset=require_offset
            )
        except InvalidDate as exc:
            raise InvalidDate(str(exc.args[0]), file_path) from None

    options = {key: value for key, value in metadata.items() if key not in RECOGNIZED_FIELDS}

    front_matter = FrontMatter(
        title=title,
        date=date_value,
        categories=parse_string_list(metadata.get("categories"), "categories", file_path),
        tags=parse_string_list(metadata.get("tags"), "tags", file_path),
        options=options,
    )
    return front_matter, body


def serialize_front_matter(front_matter: FrontMatter, body: str) -> str:
    """Serialize FrontMatter and a body back to a content file."""
    metadata: dict[str, Any] = {}
    if front_matter.title is not None:
        metadata["title"] = front_matter.title
    if front_matter.date is not None:
        metadata["date"] = format_datetime(front_matter.date)
    if front_matter.categories:
        metadata["categories"] = list(front_matter.categories)
    if front_matter.tags:
        metadata["tags"] = list(front_matter.tags)
    metadata.update(front_matter.options)

    if not metadata:
        return f"---\n---\n\n{body}"
    block = _handler.export(metadata, sort_keys=False)
    return f"---\n{block}\n---\n\n{body}"
