"""Shared utility functions for ngtail.

Provides async command execution, atomic file writes, and Rich-based console
reporting.  Commands are always launched from an argument vector (never via a
shell) so project names containing spaces reach the child process intact.
"""

from __future__ import annotations

import asyncio
import os
import shlex
import shutil
import tempfile
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

console = Console()
err_console = Console(stderr=True)

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


def format_command(cmd: list[str]) -> str:
    """Render an argument vector as a copy-pasteable shell line."""
    return shlex.join(cmd)


def resolve_executable(cmd: list[str]) -> list[str]:
    """Replace ``cmd[0]`` with its full path when it can be found on ``PATH``.

    On Windows the Node tools ship as ``.cmd`` shims which ``exec`` will not
    find by bare name; ``shutil.which`` honours ``PATHEXT`` and does.
    """
    if not cmd:
        raise ValueError("Cannot run an empty command")
    found = shutil.which(cmd[0])
    if found is None:
        return list(cmd)
    return [found, *cmd[1:]]


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: float | None = None,
    capture: bool = True,
    env: dict[str, str] | None = None,
    stdin: int | None = None,
) -> tuple[int, str, str]:
    """Run a command asynchronously and wait for it to exit.

    Args:
        cmd: Argument vector; ``cmd[0]`` is resolved against ``PATH``.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
            ``None`` waits for as long as the child runs.
        capture: Whether to capture stdout/stderr (if ``False`` they inherit
            the parent's streams and the child's output appears live).
        env: Optional extra environment variables merged on top of ``os.environ``.
        stdin: Standard input for the child, e.g. ``asyncio.subprocess.DEVNULL``.
            ``None`` inherits the parent's stdin.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  If *capture* is ``False``
        the stdout/stderr strings will be empty.  A timed-out command returns
        ``-1`` with ``"timed out after <timeout>s"`` as its stderr.

    Raises:
        FileNotFoundError: If the executable does not exist.
    """
    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    stdout_pipe = asyncio.subprocess.PIPE if capture else None
    stderr_pipe = asyncio.subprocess.PIPE if capture else None

    process = await asyncio.create_subprocess_exec(
        *resolve_executable(cmd),
        stdin=stdin,
        stdout=stdout_pipe,
        stderr=stderr_pipe,
        cwd=str(cwd) if cwd else None,
        env=merged_env,
    )

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (-1, "", f"timed out after {timeout}s")

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def write_bytes_atomic(path: str | Path, content: bytes) -> Path:
    """Write *content* to *path* so readers see either the old or new file.

    The bytes are written to a temporary file in the destination directory and
    then moved over the target with ``os.replace``.

    Raises:
        OSError: If the directory is missing or any write step fails.  The
            temporary file is removed before the error propagates.
    """
    target = Path(path)
    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "wb",
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(content)
        os.replace(tmp_name, target)
    except OSError:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise
    return target


def write_text_atomic(path: str | Path, content: str) -> Path:
    """UTF-8 encode *content* and write it with :func:`write_bytes_atomic`.

    No newline translation happens, so ``\\r\\n`` stays ``\\r\\n`` on disk.
    """
    return write_bytes_atomic(path, content.encode("utf-8"))


def read_bytes_if_exists(path: str | Path) -> bytes:
    """Return the file's raw bytes, or ``b""`` when it does not exist."""
    file_path = Path(path)
    if not file_path.exists():
        return b""
    return file_path.read_bytes()


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(3.7)    -> "3.7s"
        format_duration(65.2)   -> "1m 5s"
        format_duration(3661.0) -> "1h 1m 1s"
    """
    if seconds < 0:
        return "0.0s"

    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = seconds % 60

    parts: list[str] = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")

    if hours > 0 or minutes > 0:
        parts.append(f"{int(secs)}s")
    else:
        parts.append(f"{secs:.1f}s")

    return " ".join(parts)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


STAGE_NAMES: dict[int, str] = {
    1: "PROBE",
    2: "COLLECT",
    3: "GENERATE",
    4: "MUTATE",
    5: "VERIFY",
}

STAGE_COLORS: dict[int, str] = {
    1: "bright_cyan",
    2: "bright_green",
    3: "bright_yellow",
    4: "bright_magenta",
    5: "bright_blue",
}


def print_stage_header(stage: int, name: str) -> None:
    """Print a full-width rule announcing a pipeline stage."""
    color = STAGE_COLORS.get(stage, "white")
    console.print()
    console.print(
        Rule(
            f"[bold {color}] Stage {stage}: {name.upper()} [/bold {color}]",
            style=color,
        )
    )
    console.print()


def print_command(cmd: list[str]) -> None:
    """Echo a command line before it is executed."""
    console.print(f"\n[bold]>[/bold] {escape(format_command(cmd))}\n", highlight=False)


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message to stderr."""
    err_console.print(f"[bold red]{escape(message)}[/bold red]", soft_wrap=True)


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
