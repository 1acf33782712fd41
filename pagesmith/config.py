"""Build configuration loaded from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Pagesmith build settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False

    # Paths
    content_dir: Path = Path("./content")
    output_dir: Path = Path("./_site")
    posts_dir: str = "_posts"

    # Dates
    require_utc_offset: bool = False

    # Build
    max_workers: int = Field(default=4, ge=1, le=64)

    @property
    def posts_path(self) -> Path:
        """Absolute location of the posts-designated area."""
        return self.content_dir / self.posts_dir

    def validate_paths(self) -> None:
        """Validate that the configured directories can be used for a build."""
        violations: list[str] = []
        if not self.content_dir.is_dir():
            violations.append(f"CONTENT_DIR is not a directory: {self.content_dir}")
        if self.output_dir.exists() and not self.output_dir.is_dir():
            violations.append(f"OUTPUT_DIR exists but is not a directory: {self.output_dir}")
        if self.output_dir.resolve() == self.content_dir.resolve():
            violations.append("OUTPUT_DIR must differ from CONTENT_DIR")

        if violations:
            joined = "; ".join(violations)
            raise ValueError(f"Invalid build configuration: {joined}")
