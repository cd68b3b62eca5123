"""Project file generation.

Takes a ``ScaffoldConfig`` and renders the files of a Vite + GLSL shader
sandbox: manifest, build config, HTML entry point, rendering bootstrap,
shader sources, ``.gitignore`` and README.  Rendering is a pure function of
the config; writing is a separate step.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from glsl_sandbox.config import SHADER_LIB_PATH, ScaffoldConfig
from glsl_sandbox.utils import format_command, write_file

from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Dependency versions written into package.json
# ---------------------------------------------------------------------------

THREE_VERSION = "^0.160.0"
VITE_VERSION = "^5.4.0"
GLSL_PLUGIN_VERSION = "^1.3.0"
TYPESCRIPT_VERSION = "^5.4.0"
THREE_TYPES_VERSION = "^0.160.0"

SHADER_EXTENSIONS: tuple[str, ...] = ("glsl", "vert", "frag", "vs", "fs", "wgsl")


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Renders and writes the files of one shader sandbox project.

    The file set depends on the config:

    - ``package.json``, ``index.html``, ``.gitignore``, ``README.md``
    - ``vite.config.js`` (``.ts`` under TypeScript)
    - ``src/main.js`` (``.ts``), from the ``three`` or ``raw`` bootstrap
    - ``src/shaders/vert.glsl`` and ``src/shaders/frag.glsl``
    - ``tsconfig.json`` and ``src/vite-env.d.ts`` under TypeScript
    """

    def __init__(self, config: ScaffoldConfig, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    def build_manifest(self) -> dict[str, Any]:
        """Return the ``package.json`` contents as a dict."""
        config = self.config
        build_script = "tsc && vite build" if config.typescript else "vite build"

        dependencies: dict[str, str] = {}
        if config.template == "three":
            dependencies["three"] = THREE_VERSION

        dev_dependencies: dict[str, str] = {
            "vite": VITE_VERSION,
            "vite-plugin-glsl": GLSL_PLUGIN_VERSION,
        }
        if config.typescript:
            dev_dependencies["typescript"] = TYPESCRIPT_VERSION
            if config.template == "three":
                dev_dependencies["@types/three"] = THREE_TYPES_VERSION

        manifest: dict[str, Any] = {
            "name": config.project_name,
            "version": "0.0.1",
            "private": True,
            "type": "module",
            "scripts": {
                "dev": "vite",
                "build": build_script,
                "preview": "vite preview",
            },
        }
        if dependencies:
            manifest["dependencies"] = dependencies
        manifest["devDependencies"] = dict(sorted(dev_dependencies.items()))
        return manifest

    def render_files(self) -> dict[str, str]:
        """Render every project file.

        Returns:
            Ordered mapping of project-relative POSIX path to file content.
        """
        context = self._build_context()
        files: dict[str, str] = {
            "package.json": json.dumps(self.build_manifest(), indent=2) + "\n",
        }
        for template_name, output_name in self._file_table():
            files[output_name] = self.renderer.render(template_name, context)
        return files

    async def generate(self, project_root: str | Path) -> list[Path]:
        """Render all files and write them under *project_root*.

        Files are written one at a time; the first failure aborts.

        Returns:
            Paths of the written files, in write order.

        Raises:
            FileWriteError: If any file cannot be written.
        """
        root = Path(project_root)
        written: list[Path] = []
        for rel_path, content in self.render_files().items():
            path = await asyncio.to_thread(write_file, root / rel_path, content)
            written.append(path)
        return written

    # -- Context building --------------------------------------------------

    def _build_context(self) -> dict[str, Any]:
        """Build the Jinja2 template context from the project config."""
        config = self.config
        return {
            "project_name": config.project_name,
            "template": config.template,
            "typescript": config.typescript,
            "shadertoy": config.shadertoy,
            "shader_lib": config.use_shader_lib,
            "shader_lib_path": SHADER_LIB_PATH,
            "shader_extensions": SHADER_EXTENSIONS,
            "entry_path": config.entry_path,
            "install_cmd": format_command(config.install_command),
            "dev_cmd": format_command(config.dev_command),
            "build_cmd": _script_command(config.package_manager, "build"),
            "preview_cmd": _script_command(config.package_manager, "preview"),
        }

    # -- File table --------------------------------------------------------

    def _file_table(self) -> list[tuple[str, str]]:
        """Return ``(template, output path)`` pairs for the current config."""
        ext = self.config.script_ext
        table = [
            ("vite.config.j2", f"vite.config.{ext}"),
            ("index.html.j2", "index.html"),
            (f"{self.config.template}/main.js.j2", self.config.entry_path),
            ("shaders/vert.glsl.j2", "src/shaders/vert.glsl"),
            ("shaders/frag.glsl.j2", "src/shaders/frag.glsl"),
            ("gitignore.j2", ".gitignore"),
            ("README.md.j2", "README.md"),
        ]
        if self.config.typescript:
            table.extend([
                ("tsconfig.json.j2", "tsconfig.json"),
                ("vite-env.d.ts.j2", "src/vite-env.d.ts"),
            ])
        return table


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _script_command(package_manager: str, script: str) -> str:
    """Return the shell command that runs a ``package.json`` script."""
    if package_manager == "yarn":
        return f"yarn {script}"
    return f"{package_manager} run {script}"
