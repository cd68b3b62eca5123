"""Dependency installation and dev-server launch.

Both steps run the configured package manager in the project root with the
terminal attached, so the user sees its output live.  Failures only warn.
"""

from __future__ import annotations

from glsl_sandbox.config import ScaffoldConfig
from glsl_sandbox.utils import (
    console,
    format_command,
    print_manual_command,
    print_success,
    print_warning,
    run_command,
)


def _manual(config: ScaffoldConfig, cmd: list[str]) -> str:
    return f"cd {config.project_name} && {format_command(cmd)}"


async def install_dependencies(config: ScaffoldConfig) -> bool:
    """Run ``<pm> install`` in the project root.

    Returns:
        ``True`` if the package manager exited with status 0.
    """
    console.print(f"\nInstalling dependencies with {config.package_manager}...")
    returncode, _, stderr = await run_command(
        config.install_command, cwd=config.target_dir, capture=False
    )
    if returncode != 0:
        reason = stderr or f"exit status {returncode}"
        print_warning(f"Installation failed: {reason}")
        print_manual_command(
            _manual(config, config.install_command),
            intro="You can install manually later with:",
        )
        return False

    print_success("Dependencies installed")
    return True


async def start_dev_server(config: ScaffoldConfig) -> bool:
    """Run the ``dev`` script and block until the server exits.

    Returns:
        ``True`` if the dev server exited with status 0.
    """
    console.print("\nStarting development server...")
    returncode, _, stderr = await run_command(
        config.dev_command, cwd=config.target_dir, capture=False
    )
    if returncode != 0:
        reason = stderr or f"exit status {returncode}"
        print_warning(f"Failed to start dev server: {reason}")
        print_manual_command(
            _manual(config, config.dev_command),
            intro="You can start it manually with:",
        )
        return False
    return True
