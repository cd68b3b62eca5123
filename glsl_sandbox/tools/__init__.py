"""External tool steps run after the project files are written.

Each step calls one external executable (git, a package manager, an editor
launcher) and returns ``True`` on success.  None of them raise for tool
failures: they print a warning and the command to finish the step by hand.
"""

from glsl_sandbox.tools.editor import open_editor
from glsl_sandbox.tools.git import GitError, add_shader_library, init_repository
from glsl_sandbox.tools.package_manager import install_dependencies, start_dev_server

__all__ = [
    "GitError",
    "add_shader_library",
    "init_repository",
    "install_dependencies",
    "open_editor",
    "start_dev_server",
]
