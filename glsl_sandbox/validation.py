"""Project name validation.

Names become a directory name, the ``name`` field of ``package.json`` and the
HTML ``<title>``, so they are restricted to a character set that is safe in
all three without escaping.
"""

from __future__ import annotations

import re

from glsl_sandbox.errors import (
    EmptyNameError,
    InvalidCharactersError,
    NameTooLongError,
    ReservedNameError,
)

NAME_PATTERN = re.compile(r"[A-Za-z0-9_-]+")

RESERVED_NAMES: frozenset[str] = frozenset(
    {"node_modules", "dist", "build", "src", "public", "test", "tests"}
)

MAX_NAME_LENGTH = 50


def validate_project_name(name: str | None) -> str:
    """Validate a project name and return it trimmed.

    Rules are applied in order and the first failure wins:

    1. empty after trimming -> ``EmptyNameError``
    2. characters outside ``[A-Za-z0-9-_]`` -> ``InvalidCharactersError``
    3. a reserved name, case-insensitively -> ``ReservedNameError``
    4. longer than ``MAX_NAME_LENGTH`` -> ``NameTooLongError``

    Raises:
        ProjectNameError: One of the subclasses above.
    """
    trimmed = (name or "").strip()

    if not trimmed:
        raise EmptyNameError()

    if not NAME_PATTERN.fullmatch(trimmed):
        raise InvalidCharactersError(trimmed)

    if trimmed.lower() in RESERVED_NAMES:
        raise ReservedNameError(trimmed)

    if len(trimmed) > MAX_NAME_LENGTH:
        raise NameTooLongError(trimmed, MAX_NAME_LENGTH)

    return trimmed
