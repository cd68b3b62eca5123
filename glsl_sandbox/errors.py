"""Fatal scaffold errors.

Every failure that must abort a run is a ``ScaffoldError``.  Components raise
these and never exit the process themselves; ``glsl_sandbox.cli.main`` is the
single place that turns them into a message and an exit status.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Raised when a scaffold run cannot continue."""

    exit_code: int = 1


# ---------------------------------------------------------------------------
# Project name validation
# ---------------------------------------------------------------------------


class ProjectNameError(ScaffoldError):
    """Raised when a project name is rejected by the validator."""


class EmptyNameError(ProjectNameError):
    def __init__(self) -> None:
        super().__init__("Project name cannot be empty")


class InvalidCharactersError(ProjectNameError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            "Project name can only contain letters, numbers, hyphens and underscores"
        )


class ReservedNameError(ProjectNameError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'"{name}" is a reserved name. Please choose a different name.')


class NameTooLongError(ProjectNameError):
    def __init__(self, name: str, limit: int) -> None:
        self.name = name
        self.limit = limit
        super().__init__(f"Project name is too long (max {limit} characters)")


# ---------------------------------------------------------------------------
# Filesystem
# ---------------------------------------------------------------------------


class DirectoryNotEmptyError(ScaffoldError):
    """The target directory already exists and contains entries."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f'Directory "{path.name}" is not empty.')


class DirectoryCreateError(ScaffoldError):
    """The target directory could not be created."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f'Failed to create directory "{path}": {reason}')


class FileWriteError(ScaffoldError):
    """A generated file could not be written."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to write {path}: {reason}")


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


class PromptCancelledError(ScaffoldError):
    """The user aborted an interactive prompt."""

    def __init__(self) -> None:
        super().__init__("Cancelled.")
