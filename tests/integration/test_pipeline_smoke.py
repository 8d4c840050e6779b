"""End-to-end smoke tests for the scaffolding pipeline.

These run the real pipeline, real subprocesses and real file writes against
stand-in ``ng`` and ``npm`` executables placed on ``PATH`` by the
``fake_toolchain`` fixture.  No Node.js installation is required.
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from ngtail.config import Config
from ngtail.pipeline import Pipeline
from ngtail.scaffolder.templates import GUIDANCE_DOC, POSTCSS_CONFIG


def _pipeline(output_dir: Path, *answers: str) -> Pipeline:
    stream = io.StringIO("".join(f"{a}\n" for a in answers))
    return Pipeline(Config(output_dir=output_dir), prompt_stream=stream)


def _commands(log: Path) -> list[str]:
    if not log.exists():
        return []
    return log.read_text(encoding="utf-8").splitlines()


@pytest.mark.integration
class TestPipelineSmoke:
    async def test_full_run_css(self, tmp_path: Path, fake_toolchain: Path):
        result = await _pipeline(tmp_path, "my app", "").run()

        assert result["success"] is True
        root = tmp_path / "my app"
        assert (root / ".postcssrc.json").read_text(encoding="utf-8") == POSTCSS_CONFIG
        assert (root / "CLAUDE.md").read_text(encoding="utf-8") == GUIDANCE_DOC
        assert (root / "src" / "styles.css").read_bytes() == (
            b'@import "tailwindcss";\n/* global styles */\n'
        )
        assert _commands(fake_toolchain) == [
            "ng version",
            "ng new my app --style css --skip-git --defaults",
            "npm install tailwindcss @tailwindcss/postcss postcss --force",
            "npm run build",
        ]

    async def test_full_run_sass(self, tmp_path: Path, fake_toolchain: Path):
        result = await _pipeline(tmp_path, "Widgets", "3").run()

        assert result["success"] is True
        stylesheet = tmp_path / "Widgets" / "src" / "styles.sass"
        assert stylesheet.read_text(encoding="utf-8").startswith('@import "tailwindcss";\n')
        assert not (tmp_path / "Widgets" / "src" / "styles.css").exists()

    async def test_missing_cli_creates_nothing(
        self, tmp_path: Path, fake_toolchain: Path, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setenv("NGTAIL_FAKE_NG_FAIL", "version")
        result = await _pipeline(tmp_path, "app", "").run()

        assert result["failed_stage"] == 1
        assert not (tmp_path / "app").exists()
        assert _commands(fake_toolchain) == ["ng version"]

    async def test_generator_failure_stops_before_install(
        self, tmp_path: Path, fake_toolchain: Path, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setenv("NGTAIL_FAKE_NG_FAIL", "new")
        result = await _pipeline(tmp_path, "app", "").run()

        assert result["failed_stage"] == 3
        assert not any(cmd.startswith("npm") for cmd in _commands(fake_toolchain))

    async def test_install_failure_leaves_project_unmodified(
        self, tmp_path: Path, fake_toolchain: Path, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setenv("NGTAIL_FAKE_NPM_FAIL", "install")
        result = await _pipeline(tmp_path, "app", "2").run()

        assert result["failed_stage"] == 4
        root = tmp_path / "app"
        assert root.is_dir()
        assert not (root / ".postcssrc.json").exists()
        assert (root / "src" / "styles.scss").read_text(encoding="utf-8") == "/* global styles */\n"

    async def test_build_failure_keeps_project(
        self, tmp_path: Path, fake_toolchain: Path, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setenv("NGTAIL_FAKE_NPM_FAIL", "run")
        result = await _pipeline(tmp_path, "app", "4").run()

        assert result["failed_stage"] == 5
        root = tmp_path / "app"
        assert (root / "CLAUDE.md").exists()
        assert (root / "src" / "styles.less").read_text(encoding="utf-8").startswith(
            '@import "tailwindcss";\n'
        )
