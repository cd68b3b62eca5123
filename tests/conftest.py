"""Shared pytest fixtures for the create-glsl-sandbox test suite.

Provides reusable fixtures for:
- Scaffold configs pointing into a temporary directory
- A git environment isolated from the user's global config
- Mocked external tool steps
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from glsl_sandbox.config import ScaffoldConfig


# ---------------------------------------------------------------------------
# Configs
# ---------------------------------------------------------------------------

@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Target directory for a generated project (not yet created)."""
    return tmp_path / "my-shader"


@pytest.fixture
def offline_config(project_dir: Path) -> ScaffoldConfig:
    """Config with every external tool step turned off."""
    return ScaffoldConfig(
        project_name="my-shader",
        target_dir=project_dir,
        auto_install=False,
        auto_git=False,
        auto_shader_lib=False,
        auto_editor=False,
        auto_run=False,
    )


@pytest.fixture
def make_config(project_dir: Path):
    """Factory for configs targeting ``project_dir`` with overrides."""

    def _make(**overrides) -> ScaffoldConfig:
        fields = {"project_name": "my-shader", "target_dir": project_dir}
        fields.update(overrides)
        return ScaffoldConfig(**fields)

    return _make


# ---------------------------------------------------------------------------
# Git
# ---------------------------------------------------------------------------

@pytest.fixture
def isolated_git_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Make real git commits work without touching the user's config."""
    empty_config = tmp_path / "gitconfig"
    empty_config.write_text("", encoding="utf-8")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(empty_config))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "GLSL Sandbox Test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@glsl-sandbox.local")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "GLSL Sandbox Test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@glsl-sandbox.local")


# ---------------------------------------------------------------------------
# Tool step mocks
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_tools():
    """Patch every tool step the pipeline calls; each reports success."""
    names = [
        "install_dependencies",
        "init_repository",
        "add_shader_library",
        "open_editor",
        "start_dev_server",
    ]
    patchers = {
        name: patch(f"glsl_sandbox.pipeline.{name}", new_callable=AsyncMock, return_value=True)
        for name in names
    }
    mocks = {name: p.start() for name, p in patchers.items()}
    yield mocks
    for p in patchers.values():
        p.stop()
