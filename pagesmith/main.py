"""Command-line entry point for Pagesmith."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from pagesmith.config import Settings
from pagesmith.filesystem.toml_manager import SITE_CONFIG_FILE, SiteConfig, write_site_config
from pagesmith.services.build_service import build_site

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

_SCAFFOLD_DIRS = ("_posts", "_tabs")


def _configure_logging(debug: bool) -> None:
    """Configure application logging."""
    level = logging.DEBUG if debug else logging.INFO
    fmt = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
    logging.basicConfig(
        level=level,
        format=fmt,
        stream=sys.stdout,
        force=True,
    )


def ensure_content_dir(content_dir: Path) -> None:
    """Ensure required content scaffold entries exist without overwriting existing files."""
    if content_dir.exists() and not content_dir.is_dir():
        msg = f"Content path exists but is not a directory: {content_dir}"
        raise NotADirectoryError(msg)

    if not content_dir.exists():
        logger.info("Creating default content directory at %s", content_dir)
        content_dir.mkdir(parents=True)

    for name in _SCAFFOLD_DIRS:
        scaffold_dir = content_dir / name
        if not scaffold_dir.exists():
            scaffold_dir.mkdir()
            logger.info("Created missing content scaffold directory: %s", scaffold_dir)

    index_toml = content_dir / SITE_CONFIG_FILE
    if not index_toml.exists():
        write_site_config(content_dir, SiteConfig())
        logger.info("Created missing content scaffold file: %s", index_toml)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pagesmith",
        description="Build a static site from Markdown files with YAML front matter",
    )
    subparsers = parser.add_subparsers(dest="command")

    build = subparsers.add_parser("build", help="Build the site")
    build.add_argument("--debug", action="store_true", help="Enable debug logging")
    build.add_argument("--content", "-c", help="Content directory (default: CONTENT_DIR)")
    build.add_argument("--output", "-o", help="Output directory (default: OUTPUT_DIR)")
    build.add_argument("--workers", "-j", type=int, help="Parallel file readers")
    build.add_argument(
        "--strict-dates",
        action="store_true",
        help="Reject dates without an explicit UTC offset",
    )

    init = subparsers.add_parser("init", help="Create a content directory scaffold")
    init.add_argument("directory", help="Content directory to create")
    init.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def _settings_from_args(args: argparse.Namespace) -> Settings:
    overrides: dict[str, object] = {}
    if args.debug:
        overrides["debug"] = True
    if args.content:
        overrides["content_dir"] = Path(args.content)
    if args.output:
        overrides["output_dir"] = Path(args.output)
    if args.workers is not None:
        overrides["max_workers"] = args.workers
    if args.strict_dates:
        overrides["require_utc_offset"] = True
    return Settings(**overrides)  # type: ignore[arg-type]


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "init":
        _configure_logging(args.debug)
        try:
            ensure_content_dir(Path(args.directory))
        except OSError as exc:
            print(f"Error: {exc}")
            sys.exit(1)
        print(f"Initialized content directory {args.directory}")
        return

    if args.command != "build":
        parser.print_help()
        return

    try:
        settings = _settings_from_args(args)
    except ValidationError as exc:
        print(f"Error: invalid settings: {exc}")
        sys.exit(1)
    # settings.debug also reflects the DEBUG environment variable.
    _configure_logging(settings.debug)

    logger.info("Building %s -> %s", settings.content_dir, settings.output_dir)
    try:
        report = build_site(settings)
    except ValueError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    print(report.summary())
    if not report.ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
