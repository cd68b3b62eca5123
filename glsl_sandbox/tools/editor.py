"""Open the new project in an editor via its command-line launcher."""

from __future__ import annotations

from pathlib import Path

from rich.markup import escape

from glsl_sandbox.config import DEFAULT_EDITOR
from glsl_sandbox.utils import command_available, console, print_hint, print_success, run_command


async def open_editor(root: Path, editor: str = DEFAULT_EDITOR) -> bool:
    """Run ``<editor> .`` in *root*.

    A missing launcher is not an error; the user just gets a hint.

    Returns:
        ``True`` if the launcher exited with status 0.
    """
    if not await command_available(editor):
        if editor == DEFAULT_EDITOR:
            print_hint(
                "VS Code 'code' command not found. Install it via the Command Palette "
                "(Shell Command: Install 'code' command in PATH)."
            )
        else:
            print_hint(f"Editor command '{editor}' not found, skipping")
        return False

    console.print(f"Opening {escape(editor)}...")
    # Terminal editors need the tty and run until the user quits.
    returncode, _, _ = await run_command([editor, "."], cwd=root, timeout=None, capture=False)
    if returncode != 0:
        print_hint(f"'{editor} .' exited with status {returncode}")
        return False

    print_success(f"Opened project in {editor}")
    return True
