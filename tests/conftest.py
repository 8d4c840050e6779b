"""Shared pytest fixtures for the ngtail test suite.

Provides reusable fixtures for:
- Configs pointing at temporary output directories
- Generated-project directories shaped like ``ng new`` output
- Prompt answer streams
- Mock subprocess helpers
- Fake ``ng`` / ``npm`` executables for end-to-end runs
"""

from __future__ import annotations

import io
import os
import stat
import sys
import textwrap
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from ngtail.config import Config
from ngtail.models import GeneratedProject, ScaffoldParameters, StyleFormat


# ---------------------------------------------------------------------------
# Config & parameters
# ---------------------------------------------------------------------------

@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Config whose output directory is an empty temp directory."""
    return Config(output_dir=tmp_path)


@pytest.fixture
def params() -> ScaffoldParameters:
    return ScaffoldParameters(project_name="my-app", style_format=StyleFormat.CSS)


# ---------------------------------------------------------------------------
# Generated project
# ---------------------------------------------------------------------------

@pytest.fixture
def generated_project(tmp_path: Path) -> GeneratedProject:
    """A directory resembling a freshly generated Angular project."""
    root = tmp_path / "my-app"
    (root / "src").mkdir(parents=True)
    (root / "src" / "styles.css").write_text(
        "/* You can add global styles to this file, and also import other style files */\n",
        encoding="utf-8",
    )
    (root / "package.json").write_text('{"name": "my-app"}\n', encoding="utf-8")
    return GeneratedProject(root=root)


# ---------------------------------------------------------------------------
# Prompt answers
# ---------------------------------------------------------------------------

@pytest.fixture
def answers():
    """Build a stream that feeds one answer per prompt.

    Usage:
        def test_prompt(answers):
            stream = answers("my app", "3")
    """
    def factory(*lines: str) -> io.StringIO:
        return io.StringIO("".join(f"{line}\n" for line in lines))

    return factory


# ---------------------------------------------------------------------------
# Mock subprocesses
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


# ---------------------------------------------------------------------------
# Fake Node toolchain
# ---------------------------------------------------------------------------

_FAKE_NG = textwrap.dedent(
    """\
    import os
    import sys

    args = sys.argv[1:]
    log = os.environ.get("NGTAIL_FAKE_LOG")
    if log:
        with open(log, "a", encoding="utf-8") as fh:
            fh.write("ng " + " ".join(args) + "\\n")

    if os.environ.get("NGTAIL_FAKE_NG_FAIL") == args[0]:
        sys.exit(3)

    if args[0] == "version":
        print("Angular CLI: 19.0.0")
        sys.exit(0)

    if args[0] == "new":
        name = args[1]
        style = args[args.index("--style") + 1]
        os.makedirs(os.path.join(name, "src"))
        with open(os.path.join(name, "src", "styles." + style), "w", encoding="utf-8") as fh:
            fh.write("/* global styles */\\n")
        with open(os.path.join(name, "package.json"), "w", encoding="utf-8") as fh:
            fh.write('{"name": "app"}\\n')
        sys.exit(0)

    sys.exit(2)
    """
)

_FAKE_NPM = textwrap.dedent(
    """\
    import os
    import sys

    args = sys.argv[1:]
    log = os.environ.get("NGTAIL_FAKE_LOG")
    if log:
        with open(log, "a", encoding="utf-8") as fh:
            fh.write("npm " + " ".join(args) + "\\n")

    if os.environ.get("NGTAIL_FAKE_NPM_FAIL") == args[0]:
        sys.exit(1)

    if args[0] == "run":
        sys.exit(0 if os.path.exists(".postcssrc.json") else 1)

    sys.exit(0)
    """
)


def _write_script(path: Path, body: str) -> None:
    path.write_text(f"#!{sys.executable}\n{body}", encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


@pytest.fixture
def fake_toolchain(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Put executable ``ng`` and ``npm`` stand-ins first on ``PATH``.

    Every invocation is appended to the returned log file.  Set
    ``NGTAIL_FAKE_NG_FAIL`` / ``NGTAIL_FAKE_NPM_FAIL`` to a sub-command name
    (``version``, ``new``, ``install``, ``run``) to make it exit non-zero.
    """
    if sys.platform == "win32":
        pytest.skip("shebang scripts are not executable on Windows")

    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    _write_script(bin_dir / "ng", _FAKE_NG)
    _write_script(bin_dir / "npm", _FAKE_NPM)

    log = tmp_path / "commands.log"
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    monkeypatch.setenv("NGTAIL_FAKE_LOG", str(log))
    return log
