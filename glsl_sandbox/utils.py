"""Shared utility functions for create-glsl-sandbox.

Provides async command execution, tool probing, atomic file writes, and the
Rich-based console helpers every other module prints through.
"""

from __future__ import annotations

import asyncio
import contextlib
import os
import shlex
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from glsl_sandbox.errors import FileWriteError

console = Console()

# Exit status reported when a command could not be spawned at all.
SPAWN_FAILED = 127

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: float | None = None,
    capture: bool = True,
    env: dict[str, str] | None = None,
) -> tuple[int, str, str]:
    """Run an external executable and wait for it to exit.

    Args:
        cmd: Executable followed by its arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
            ``None`` waits indefinitely (used for the dev server).
        capture: Whether to capture stdout/stderr.  If ``False`` the child
            inherits the parent's streams so the user sees live output.
        env: Optional extra environment variables merged on top of ``os.environ``.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  If *capture* is ``False``
        the stdout/stderr strings will be empty.  A command that cannot be
        spawned (missing executable, permission error) yields
        ``SPAWN_FAILED`` with the error text as stderr; a timeout yields -1.
    """
    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    stdout_pipe = asyncio.subprocess.PIPE if capture else None
    stderr_pipe = asyncio.subprocess.PIPE if capture else None

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=stdout_pipe,
            stderr=stderr_pipe,
            cwd=str(cwd) if cwd else None,
            env=merged_env,
        )
    except OSError as exc:
        return (SPAWN_FAILED, "", str(exc))

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (-1, "", f"Command timed out after {timeout}s: {format_command(cmd)}")

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


async def command_available(name: str) -> bool:
    """Return ``True`` if ``<name> --version`` exits with status 0.

    Any failure to run the check counts as the tool being absent.
    """
    returncode, _, _ = await run_command([name, "--version"], timeout=30)
    return returncode == 0


def format_command(cmd: list[str]) -> str:
    """Render an argument list as a copy-pasteable shell command."""
    return shlex.join(cmd)


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def is_empty_dir(path: Path) -> bool:
    """Return ``True`` if *path* does not exist or is a directory with no entries."""
    if not path.exists():
        return True
    if not path.is_dir():
        return False
    return next(path.iterdir(), None) is None


def write_file(path: str | Path, content: str) -> Path:
    """Write *content* to *path*, creating parent directories as needed.

    The content goes to a temporary sibling first and is moved into place
    with ``os.replace``, so a failed write never leaves a truncated file.

    Raises:
        FileWriteError: If any directory creation or write fails.
    """
    file_path = Path(path)
    tmp_path = file_path.with_name(f".{file_path.name}.tmp")
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(content, encoding="utf-8")
        os.replace(tmp_path, file_path)
    except OSError as exc:
        with contextlib.suppress(OSError):
            tmp_path.unlink(missing_ok=True)
        raise FileWriteError(file_path, exc.strerror or str(exc)) from exc
    return file_path


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


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
        table.add_row(escape(key), escape(str(value)))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


def print_hint(message: str) -> None:
    """Print a dimmed informational message."""
    console.print(f"[dim]{escape(message)}[/dim]")


def print_manual_command(command: str, intro: str = "You can run it manually later with:") -> None:
    """Tell the user how to finish a skipped or failed step by hand."""
    print_hint(intro)
    console.print(f"  [dim]{escape(command)}[/dim]", highlight=False, soft_wrap=True)
