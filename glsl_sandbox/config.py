"""Scaffold configuration.

A single typed ``ScaffoldConfig`` describes one invocation of the CLI.  It is
resolved once from command-line arguments, prompts and the environment by
``glsl_sandbox.cli`` and then passed, unchanged, to every other component.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from glsl_sandbox.validation import MAX_NAME_LENGTH

PackageManager = Literal["npm", "pnpm", "yarn", "bun"]
TemplateName = Literal["three", "raw"]

PACKAGE_MANAGERS: tuple[str, ...] = ("npm", "pnpm", "yarn", "bun")
TEMPLATES: tuple[str, ...] = ("three", "raw")

DEFAULT_PROJECT_NAME = "glsl-sandbox"
DEFAULT_EDITOR = "code"

# Environment variables consulted by the CLI entry point.
USER_AGENT_ENV = "npm_config_user_agent"
EDITOR_ENV = "GLSL_SANDBOX_EDITOR"

# LYGIA shader library, attached as a git submodule.
SHADER_LIB_URL = "https://github.com/patriciogonzalezvivo/lygia.git"
SHADER_LIB_PATH = "src/shaders/lygia"
SHADER_LIB_BRANCH = "main"


class ScaffoldConfig(BaseModel):
    """Everything needed to scaffold one project.

    ``project_name`` is expected to have passed
    :func:`glsl_sandbox.validation.validate_project_name` already; the field
    constraints here only guard the character set and length.
    """

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(
        ..., min_length=1, max_length=MAX_NAME_LENGTH, pattern=r"^[A-Za-z0-9_-]+$"
    )
    target_dir: Path = Field(..., description="Directory the project is written into")
    template: TemplateName = Field(default="three")
    typescript: bool = Field(default=False)
    shadertoy: bool = Field(
        default=False, description="Wrap the fragment shader in a Shadertoy-style mainImage()"
    )
    package_manager: PackageManager = Field(default="npm")
    auto_install: bool = Field(default=True)
    auto_git: bool = Field(default=True)
    auto_shader_lib: bool = Field(default=True, description="Only honoured when auto_git is set")
    auto_editor: bool = Field(default=True)
    auto_run: bool = Field(default=True)
    editor: str = Field(default=DEFAULT_EDITOR, min_length=1)

    # ------------------------------------------------------------------
    # Derived values (read-only properties)
    # ------------------------------------------------------------------

    @property
    def use_shader_lib(self) -> bool:
        """Whether LYGIA is attached (and included from the fragment shader)."""
        return self.auto_git and self.auto_shader_lib

    @property
    def script_ext(self) -> str:
        return "ts" if self.typescript else "js"

    @property
    def entry_path(self) -> str:
        """Project-relative path of the rendering bootstrap module."""
        return f"src/main.{self.script_ext}"

    @property
    def shader_lib_path(self) -> Path:
        """Absolute path of the LYGIA submodule inside the project."""
        return self.target_dir / SHADER_LIB_PATH

    @property
    def install_command(self) -> list[str]:
        return [self.package_manager, "install"]

    @property
    def dev_command(self) -> list[str]:
        """Command that starts the Vite dev server.

        yarn runs package scripts directly; the others need ``run``.
        """
        if self.package_manager == "yarn":
            return ["yarn", "dev"]
        return [self.package_manager, "run", "dev"]


def detect_package_manager(env: Mapping[str, str]) -> PackageManager:
    """Guess which package manager launched the CLI.

    Package managers advertise themselves in ``npm_config_user_agent``
    (e.g. ``"pnpm/8.15.0 npm/? node/v20.11.0 linux x64"``).  Anything
    unrecognised falls back to npm.
    """
    user_agent = env.get(USER_AGENT_ENV, "")
    if user_agent.startswith("pnpm"):
        return "pnpm"
    if user_agent.startswith("yarn"):
        return "yarn"
    if user_agent.startswith("bun"):
        return "bun"
    return "npm"
