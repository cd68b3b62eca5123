"""Project file generation for create-glsl-sandbox.

Renders the Vite + GLSL sandbox file set from a ``ScaffoldConfig``.

Quick usage::

    from glsl_sandbox.config import ScaffoldConfig
    from glsl_sandbox.scaffolder import ProjectGenerator

    config = ScaffoldConfig(project_name="demo", target_dir=Path("demo"))
    files = ProjectGenerator(config).render_files()
"""

from glsl_sandbox.scaffolder.generator import ProjectGenerator
from glsl_sandbox.scaffolder.templates import TemplateRenderer

__all__ = [
    "ProjectGenerator",
    "TemplateRenderer",
]
