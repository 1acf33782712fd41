"""Tests for the pagesmith command line."""

from __future__ import annotations

import logging
import tomllib
from typing import TYPE_CHECKING

import pytest

from pagesmith.main import ensure_content_dir, main

if TYPE_CHECKING:
    from pathlib import Path

POST = "---\ntitle: Hello\ndate: 2025-02-25 10:00:00 +0800\n---\n\nHello body\n"


class TestEnsureContentDir:
    def test_creates_default_structure(self, tmp_path: Path) -> None:
        content_dir = tmp_path / "content"

        ensure_content_dir(content_dir)

        assert (content_dir / "_posts").is_dir()
        assert (content_dir / "_tabs").is_dir()
        config = tomllib.loads((content_dir / "index.toml").read_text())
        assert config["site"]["title"] == "My Blog"
        assert config["site"]["timezone"] == "UTC"

    def test_does_not_overwrite(self, tmp_path: Path) -> None:
        (tmp_path / "index.toml").write_text('[site]\ntitle = "Mine"\n')
        ensure_content_dir(tmp_path)
        assert "Mine" in (tmp_path / "index.toml").read_text()

    def test_rejects_file(self, tmp_path: Path) -> None:
        target = tmp_path / "file"
        target.write_text("x")
        with pytest.raises(NotADirectoryError):
            ensure_content_dir(target)


class TestMain:
    def test_init(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["init", str(tmp_path / "site-src")])
        assert (tmp_path / "site-src" / "_posts").is_dir()
        assert "Initialized content directory" in capsys.readouterr().out

    def test_build_success(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        src = tmp_path / "src"
        ensure_content_dir(src)
        (src / "_posts" / "2025-02-25-hello.md").write_text(POST)
        out = tmp_path / "out"

        main(["build", "--content", str(src), "--output", str(out), "--workers", "1"])

        assert (out / "posts" / "hello" / "index.html").is_file()
        assert "Wrote 2 documents, 0 errors" in capsys.readouterr().out

    def test_build_failure_exits_nonzero(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        src = tmp_path / "src"
        ensure_content_dir(src)
        (src / "_posts" / "good.md").write_text(POST)
        (src / "_posts" / "bad.md").write_text("no front matter\n")

        with pytest.raises(SystemExit) as exc_info:
            main(["build", "-c", str(src), "-o", str(tmp_path / "out")])

        assert exc_info.value.code == 1
        output = capsys.readouterr().out
        assert "_posts/bad.md (MalformedFrontMatter)" in output
        assert (tmp_path / "out" / "posts" / "good" / "index.html").is_file()

    def test_strict_dates(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        src = tmp_path / "src"
        ensure_content_dir(src)
        (src / "_posts" / "naive.md").write_text("---\ntitle: N\ndate: 2025-02-25\n---\nBody\n")

        with pytest.raises(SystemExit):
            main(["build", "-c", str(src), "-o", str(tmp_path / "out"), "--strict-dates"])

        assert "InvalidDate" in capsys.readouterr().out

    def test_missing_content_dir(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["build", "-c", str(tmp_path / "nope"), "-o", str(tmp_path / "out")])
        assert exc_info.value.code == 1
        assert "CONTENT_DIR is not a directory" in capsys.readouterr().out

    def test_invalid_workers(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["build", "-c", str(tmp_path), "-o", str(tmp_path / "out"), "-j", "0"])
        assert exc_info.value.code == 1
        assert "invalid settings" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        main([])
        assert "usage: pagesmith" in capsys.readouterr().out

    def test_build_debug_flag_after_subcommand(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        ensure_content_dir(src)
        (src / "_posts" / "2025-02-25-hello.md").write_text(POST)

        main(["build", "--debug", "-c", str(src), "-o", str(tmp_path / "out")])

        assert logging.getLogger().level == logging.DEBUG

    def test_debug_from_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DEBUG", "true")
        src = tmp_path / "src"
        ensure_content_dir(src)

        main(["build", "-c", str(src), "-o", str(tmp_path / "out")])

        assert logging.getLogger().level == logging.DEBUG

    def test_info_level_without_debug(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("DEBUG", raising=False)
        src = tmp_path / "src"
        ensure_content_dir(src)

        main(["build", "-c", str(src), "-o", str(tmp_path / "out")])

        assert logging.getLogger().level == logging.INFO

    def test_init_accepts_debug_flag(self, tmp_path: Path) -> None:
        main(["init", "--debug", str(tmp_path / "site-src")])
        assert (tmp_path / "site-src" / "_posts").is_dir()
        assert logging.getLogger().level == logging.DEBUG
