"""Scaffold orchestrator.

Runs the scaffold stages strictly in order:

ValidateName -> CheckTargetEmpty -> CreateDirectory -> RenderAndWriteAllFiles
-> [Install] -> [GitInit -> [ShaderLibAttach]] -> [EditorOpen] -> [RunDevServer]

Bracketed stages are controlled by ``ScaffoldConfig`` flags.  The unbracketed
stages raise ``ScaffoldError`` on failure; the bracketed ones only warn.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field
from rich.markup import escape
from rich.panel import Panel

from glsl_sandbox.config import ScaffoldConfig
from glsl_sandbox.errors import DirectoryCreateError, DirectoryNotEmptyError
from glsl_sandbox.scaffolder import ProjectGenerator
from glsl_sandbox.tools import (
    add_shader_library,
    init_repository,
    install_dependencies,
    open_editor,
    start_dev_server,
)
from glsl_sandbox.utils import (
    console,
    format_command,
    is_empty_dir,
    print_summary_table,
    print_success,
)
from glsl_sandbox.validation import validate_project_name


class ScaffoldResult(BaseModel):
    """Outcome of a scaffold run.

    Optional steps are ``None`` when not requested, ``True`` when completed
    and ``False`` when skipped or failed (the reason has been printed).
    """

    project_root: Path
    files: list[Path] = Field(default_factory=list)
    installed: bool | None = None
    git_initialized: bool | None = None
    shader_lib_added: bool | None = None
    editor_opened: bool | None = None
    dev_server_ran: bool | None = None


class Scaffolder:
    """Drives one scaffold run from a resolved ``ScaffoldConfig``.

    Attributes:
        config: The resolved configuration.
        generator: Renders and writes the project files.
    """

    def __init__(self, config: ScaffoldConfig, generator: ProjectGenerator | None = None) -> None:
        self.config = config
        self.generator = generator or ProjectGenerator(config)

    # ------------------------------------------------------------------
    # Fatal stages
    # ------------------------------------------------------------------

    def check_target(self) -> bool:
        """Fail fast if the target directory is unusable.

        Returns:
            ``True`` if the directory already exists (and is empty).

        Raises:
            DirectoryCreateError: The target exists but is not a directory.
            DirectoryNotEmptyError: The target directory has entries.
        """
        root = self.config.target_dir
        if root.exists() and not root.is_dir():
            raise DirectoryCreateError(root, "a file with that name already exists")
        if not is_empty_dir(root):
            raise DirectoryNotEmptyError(root)
        return root.exists()

    def create_directory(self, existed: bool) -> None:
        """Create the target directory.

        A directory that did not exist at check time is created exclusively,
        so one that appears in between is reported instead of written into.
        """
        root = self.config.target_dir
        try:
            root.mkdir(parents=True, exist_ok=existed)
        except FileExistsError as exc:
            raise DirectoryCreateError(root, "it was created by another process") from exc
        except OSError as exc:
            raise DirectoryCreateError(root, exc.strerror or str(exc)) from exc

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    async def run(self) -> ScaffoldResult:
        """Execute every stage and return the outcome.

        Raises:
            ScaffoldError: If a fatal stage fails.  Nothing is written when
                validation or the target check fails.
        """
        config = self.config
        validate_project_name(config.project_name)

        existed = self.check_target()
        self.create_directory(existed)

        console.print("Creating project files...")
        files = await self.generator.generate(config.target_dir)
        print_success("Project files created")

        result = ScaffoldResult(project_root=config.target_dir, files=files)

        console.print(
            Panel(
                f"[bold]{config.project_name}[/bold] in {escape(str(config.target_dir))}",
                title="[bold bright_cyan]Scaffolded[/bold bright_cyan]",
                border_style="bright_cyan",
            )
        )

        if config.auto_install:
            result.installed = await install_dependencies(config)
        else:
            console.print("\nNext steps:")
            console.print(f"  [green]cd[/green] {config.project_name}")
            console.print(f"  {format_command(config.install_command)}")

        if config.auto_git:
            result.git_initialized = await init_repository(config.target_dir)
            if config.auto_shader_lib:
                result.shader_lib_added = await add_shader_library(config)

        if config.auto_editor:
            result.editor_opened = await open_editor(config.target_dir, config.editor)

        self._print_summary(result)

        if config.auto_run:
            result.dev_server_ran = await start_dev_server(config)

        return result

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def _print_summary(self, result: ScaffoldResult) -> None:
        config = self.config
        print_summary_table(
            {
                "Project": config.project_name,
                "Location": str(config.target_dir),
                "Template": config.template + (" + TypeScript" if config.typescript else ""),
                "Package manager": config.package_manager,
                "Files": str(len(result.files)),
                "Dependencies": _outcome(result.installed, "installed"),
                "Git": _outcome(result.git_initialized, "initialized"),
                "LYGIA": _outcome(result.shader_lib_added, "added"),
            },
            title="Scaffold Results",
        )
        console.print("To start development:")
        console.print(f"  {format_command(config.dev_command)}")
        console.print(
            f"\nEdit [cyan]src/shaders/*.glsl[/cyan] and [cyan]{config.entry_path}[/cyan] "
            "to create your shaders."
        )


def _outcome(value: bool | None, done: str) -> str:
    if value is None:
        return "skipped"
    return done if value else "not completed"
