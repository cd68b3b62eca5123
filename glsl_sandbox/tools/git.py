"""Git repository setup for a freshly scaffolded project.

Initialises the repository on a ``main`` branch, makes the initial commit,
and attaches the LYGIA shader library as a submodule.  Every failure here
is reported as a warning; the scaffold itself has already succeeded.
"""

from __future__ import annotations

from pathlib import Path

from glsl_sandbox.config import SHADER_LIB_BRANCH, SHADER_LIB_PATH, SHADER_LIB_URL, ScaffoldConfig
from glsl_sandbox.utils import (
    command_available,
    console,
    format_command,
    print_hint,
    print_manual_command,
    print_success,
    print_warning,
    run_command,
)

INITIAL_COMMIT_MESSAGE = "init"
SHADER_LIB_COMMIT_MESSAGE = "add lygia submodule"

# Seconds allowed for local git commands. Network clones run without a limit.
GIT_TIMEOUT = 120


class GitError(Exception):
    """Raised when a git command exits with a non-zero status."""

    def __init__(self, message: str, command: str = "", stderr: str = ""):
        self.command = command
        self.stderr = stderr
        super().__init__(message)


async def _run_git(*args: str, cwd: str | Path, timeout: float | None = GIT_TIMEOUT) -> str:
    """Run a git command with captured output and return its stdout.

    A *timeout* of ``None`` waits for git to finish, however long it takes.

    Raises GitError if the command exits with a non-zero code.
    """
    cmd = ["git", *args]
    returncode, stdout, stderr = await run_command(cmd, cwd=cwd, timeout=timeout)
    if returncode != 0:
        cmd_str = format_command(cmd)
        detail = stderr.splitlines()[-1] if stderr else f"exit {returncode}"
        raise GitError(f"{cmd_str} failed: {detail}", command=cmd_str, stderr=stderr)
    return stdout


async def init_repository(root: Path, message: str = INITIAL_COMMIT_MESSAGE) -> bool:
    """Initialise a git repository in *root* and commit everything.

    Skipped when git is not installed or *root* already holds a repository.

    Returns:
        ``True`` if a repository was created and committed.
    """
    if not await command_available("git"):
        print_hint("Git not found, skipping git init")
        return False

    if (root / ".git").exists():
        print_hint("Git repository already exists")
        return False

    console.print("Initializing git repository...")
    try:
        returncode, _, _ = await run_command(["git", "init", "-b", "main"], cwd=root, timeout=GIT_TIMEOUT)
        if returncode != 0:
            # git < 2.28 has no -b; point the unborn HEAD at main instead.
            await _run_git("init", cwd=root)
            await _run_git("symbolic-ref", "HEAD", "refs/heads/main", cwd=root)
        await _run_git("add", "-A", cwd=root)
        await _run_git("commit", "-m", message, cwd=root)
    except GitError as exc:
        print_warning(f"Git init failed: {exc}")
        print_manual_command(
            f'git init -b main && git add -A && git commit -m "{message}"',
            intro="You can initialize the repository manually with:",
        )
        return False

    print_success("Git repository initialized")
    return True


async def add_shader_library(config: ScaffoldConfig) -> bool:
    """Attach LYGIA as a git submodule at ``src/shaders/lygia`` and commit it.

    The clone is not time-limited, so a slow network never leaves a
    half-registered submodule behind.

    Skipped when git is not installed or the submodule path already exists.

    Returns:
        ``True`` if the submodule was added and committed.
    """
    manual = format_command(["git", "submodule", "add", SHADER_LIB_URL, SHADER_LIB_PATH])

    if not await command_available("git"):
        print_hint("Git not found, skipping LYGIA submodule")
        return False

    root = config.target_dir
    if config.shader_lib_path.exists():
        print_hint("LYGIA submodule already exists")
        return False

    console.print("Adding LYGIA submodule...")
    try:
        await _run_git(
            "submodule", "add", SHADER_LIB_URL, SHADER_LIB_PATH, cwd=root, timeout=None
        )

        returncode, _, _ = await run_command(
            ["git", "submodule", "set-branch", "--branch", SHADER_LIB_BRANCH, SHADER_LIB_PATH],
            cwd=root,
            timeout=GIT_TIMEOUT,
        )
        if returncode != 0:
            print_hint(f"Could not pin LYGIA to the {SHADER_LIB_BRANCH} branch (needs git >= 2.22)")

        await _run_git("add", "-A", cwd=root)
        await _run_git("commit", "-m", SHADER_LIB_COMMIT_MESSAGE, cwd=root)
    except GitError as exc:
        print_warning(f"Failed to add LYGIA submodule: {exc}")
        print_manual_command(manual, intro="You can add it manually later with:")
        return False

    print_success("LYGIA submodule added successfully")
    return True
