"""Command-line entry point for ``create-glsl-sandbox``.

Usage::

    create-glsl-sandbox my-shader
    create-glsl-sandbox my-shader --pm pnpm --run
    create-glsl-sandbox my-shader --no-git --no-lygia
    python -m glsl_sandbox my-shader --template raw --ts

This is the only module that reads process-wide state (arguments, working
directory, environment, whether stdin is a terminal).  It resolves a
``ScaffoldConfig``, hands it to the ``Scaffolder`` and turns a
``ScaffoldError`` into an exit status.
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any

from rich.panel import Panel
from rich.prompt import Prompt

from glsl_sandbox import __version__
from glsl_sandbox.config import (
    DEFAULT_EDITOR,
    DEFAULT_PROJECT_NAME,
    EDITOR_ENV,
    PACKAGE_MANAGERS,
    TEMPLATES,
    ScaffoldConfig,
    detect_package_manager,
)
from glsl_sandbox.errors import (
    DirectoryNotEmptyError,
    ProjectNameError,
    PromptCancelledError,
    ScaffoldError,
)
from glsl_sandbox.pipeline import Scaffolder
from glsl_sandbox.utils import console, print_error, print_hint
from glsl_sandbox.validation import validate_project_name

PromptFn = Callable[..., Any]

EXIT_INTERRUPTED = 130


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def _str_to_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("true", "1", "yes", "on"):
        return True
    if lowered in ("false", "0", "no", "off"):
        return False
    raise ValueError(f"expected true or false, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.  Unknown flags are rejected with exit status 2."""
    parser = argparse.ArgumentParser(
        prog="create-glsl-sandbox",
        description="Scaffold a three.js + Vite GLSL shader sandbox",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-glsl-sandbox my-shader\n"
            "  create-glsl-sandbox my-shader --pm pnpm --run\n"
            "  create-glsl-sandbox my-shader --no-git --no-lygia\n"
            "  create-glsl-sandbox my-shader --template raw --ts --shadertoy\n"
        ),
    )

    parser.add_argument(
        "name",
        nargs="?",
        default=None,
        help="Project name and directory (prompted if omitted)",
    )
    parser.add_argument(
        "--template",
        choices=TEMPLATES,
        default="three",
        help="Rendering bootstrap: three.js or raw WebGL (default: three)",
    )
    parser.add_argument(
        "--ts",
        dest="typescript",
        action="store_true",
        help="Generate TypeScript instead of JavaScript (also --ts=true|false)",
    )
    # Target of --ts=false; see parse_args.
    parser.add_argument(
        "--no-ts",
        dest="typescript",
        action="store_false",
        help=argparse.SUPPRESS,
    )
    parser.add_argument(
        "--shadertoy",
        action="store_true",
        help="Wrap the fragment shader in a Shadertoy-style mainImage()",
    )
    parser.add_argument(
        "--pm",
        choices=PACKAGE_MANAGERS,
        default=None,
        help="Package manager (default: detected from the invoking tool, else npm)",
    )
    parser.add_argument(
        "--no-install",
        dest="install",
        action="store_false",
        help="Skip dependency installation",
    )
    parser.add_argument(
        "--no-git",
        dest="git",
        action="store_false",
        help="Skip git initialization",
    )
    parser.add_argument(
        "--no-lygia",
        dest="lygia",
        action="store_false",
        help="Skip adding the LYGIA shader library submodule",
    )
    parser.add_argument(
        "--no-code",
        dest="code",
        action="store_false",
        help="Skip opening the project in the editor",
    )
    parser.add_argument(
        "--run",
        action="store_true",
        help="Start the dev server after setup",
    )
    parser.add_argument(
        "--no-run",
        action="store_true",
        help="Do not start the dev server after installing",
    )
    parser.add_argument(
        "--editor",
        default=None,
        help=f"Editor launcher command (default: ${EDITOR_ENV} or '{DEFAULT_EDITOR}')",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse *argv* (default ``sys.argv[1:]``).

    ``--ts`` never consumes the following token; an explicit value is only
    accepted as ``--ts=true`` / ``--ts=false``.
    """
    parser = build_parser()
    tokens = list(sys.argv[1:] if argv is None else argv)

    normalised: list[str] = []
    for index, token in enumerate(tokens):
        if token == "--":
            normalised.extend(tokens[index:])
            break
        if token.startswith("--ts="):
            try:
                enabled = _str_to_bool(token.partition("=")[2])
            except ValueError as exc:
                parser.error(f"argument --ts: {exc}")
            normalised.append("--ts" if enabled else "--no-ts")
        else:
            normalised.append(token)
    return parser.parse_args(normalised)


# ---------------------------------------------------------------------------
# Config resolution
# ---------------------------------------------------------------------------


def _ask(prompt: PromptFn, *args: Any, **kwargs: Any) -> str:
    """Call *prompt*, turning Ctrl-C / EOF into ``PromptCancelledError``."""
    try:
        return prompt(*args, **kwargs)
    except (KeyboardInterrupt, EOFError) as exc:
        raise PromptCancelledError() from exc


def _prompt_project_name(prompt: PromptFn) -> str:
    """Ask for a project name until a valid one is given."""
    while True:
        answer = _ask(prompt, "Project name", default=DEFAULT_PROJECT_NAME)
        try:
            return validate_project_name(answer)
        except ProjectNameError as exc:
            print_error(str(exc))


def resolve_config(
    args: argparse.Namespace,
    *,
    cwd: Path,
    env: Mapping[str, str],
    interactive: bool,
    prompt: PromptFn = Prompt.ask,
) -> ScaffoldConfig:
    """Turn parsed arguments into a ``ScaffoldConfig``.

    Fields missing from the command line are prompted for when *interactive*,
    and otherwise fall back to their defaults.

    Raises:
        ProjectNameError: The project name is invalid.
        PromptCancelledError: The user aborted a prompt.
    """
    if args.name is not None:
        project_name = validate_project_name(args.name)
    elif interactive:
        console.print(
            Panel(
                "Create a new GLSL shader development environment",
                title="[bold bright_cyan]create-glsl-sandbox[/bold bright_cyan]",
                border_style="bright_cyan",
            )
        )
        project_name = _prompt_project_name(prompt)
    else:
        project_name = validate_project_name(DEFAULT_PROJECT_NAME)

    package_manager = args.pm
    if package_manager is None:
        detected = detect_package_manager(env)
        if interactive:
            package_manager = _ask(
                prompt, "Package manager", choices=list(PACKAGE_MANAGERS), default=detected
            )
        else:
            package_manager = detected

    editor = args.editor or env.get(EDITOR_ENV) or DEFAULT_EDITOR

    return ScaffoldConfig(
        project_name=project_name,
        target_dir=(cwd / project_name).resolve(),
        template=args.template,
        typescript=args.typescript,
        shadertoy=args.shadertoy,
        package_manager=package_manager,
        auto_install=args.install,
        auto_git=args.git,
        auto_shader_lib=args.lygia,
        auto_editor=args.code,
        auto_run=args.run or (args.install and not args.no_run),
        editor=editor,
    )


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point.  Returns the process exit status."""
    args = parse_args(argv)

    try:
        config = resolve_config(
            args,
            cwd=Path.cwd(),
            env=os.environ,
            interactive=sys.stdin.isatty(),
        )
        asyncio.run(Scaffolder(config).run())
    except PromptCancelledError:
        print_hint("\nCancelled.")
        return PromptCancelledError.exit_code
    except DirectoryNotEmptyError as exc:
        print_error(str(exc))
        print_hint("Please choose a different name or remove the existing directory.")
        return exc.exit_code
    except ScaffoldError as exc:
        print_error(str(exc))
        return exc.exit_code
    except KeyboardInterrupt:
        print_hint("\nInterrupted.")
        return EXIT_INTERRUPTED

    return 0
