"""Integration tests for a full scaffold run.

These tests write real projects through ``main()`` and the ``Scaffolder``.
Package managers, the editor and the LYGIA clone are never invoked; the git
test runs the real ``git`` binary when it is installed.
"""

from __future__ import annotations

import io
import json
import shutil
import subprocess
import sys
from pathlib import Path

import pytest

from glsl_sandbox.cli import main
from glsl_sandbox.config import ScaffoldConfig
from glsl_sandbox.pipeline import Scaffolder

pytestmark = pytest.mark.integration

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


@pytest.fixture
def in_tmp_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(sys, "stdin", io.StringIO())
    monkeypatch.delenv("npm_config_user_agent", raising=False)
    return tmp_path


class TestMainEndToEnd:
    def test_offline_scaffold(self, in_tmp_cwd: Path):
        code = main(["demo", "--no-install", "--no-git", "--no-code"])

        assert code == 0
        root = in_tmp_cwd / "demo"
        written = sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())
        assert written == sorted([
            ".gitignore",
            "README.md",
            "index.html",
            "package.json",
            "src/main.js",
            "src/shaders/frag.glsl",
            "src/shaders/vert.glsl",
            "vite.config.js",
        ])
        manifest = json.loads((root / "package.json").read_text(encoding="utf-8"))
        assert manifest["name"] == "demo"
        for script in ("dev", "build", "preview"):
            assert isinstance(manifest["scripts"][script], str) and manifest["scripts"][script]
        assert not (root / ".git").exists()
        assert not (root / "node_modules").exists()

    def test_typescript_raw_scaffold(self, in_tmp_cwd: Path):
        code = main(
            ["ts-raw", "--template", "raw", "--ts", "--shadertoy", "--no-install", "--no-git", "--no-code"]
        )

        assert code == 0
        root = in_tmp_cwd / "ts-raw"
        assert (root / "src" / "main.ts").is_file()
        assert (root / "tsconfig.json").is_file()
        assert (root / "vite.config.ts").is_file()
        assert "mainImage" in (root / "src" / "shaders" / "frag.glsl").read_text(encoding="utf-8")

    def test_second_run_refuses_non_empty_directory(self, in_tmp_cwd: Path):
        argv = ["my-shader", "--no-install", "--no-git", "--no-code"]
        assert main(argv) == 0
        readme = in_tmp_cwd / "my-shader" / "README.md"
        readme.write_text("edited\n", encoding="utf-8")

        assert main(argv) == 1
        assert readme.read_text(encoding="utf-8") == "edited\n"

    def test_default_name_when_not_interactive(self, in_tmp_cwd: Path):
        assert main(["--no-install", "--no-git", "--no-code"]) == 0
        assert (in_tmp_cwd / "glsl-sandbox" / "package.json").is_file()


@requires_git
class TestRealGit:
    @pytest.mark.asyncio
    async def test_repository_on_main_with_initial_commit(self, tmp_path: Path, isolated_git_env):
        config = ScaffoldConfig(
            project_name="git-shader",
            target_dir=tmp_path / "git-shader",
            auto_install=False,
            auto_shader_lib=False,
            auto_editor=False,
            auto_run=False,
        )

        result = await Scaffolder(config).run()

        assert result.git_initialized is True
        assert result.shader_lib_added is None
        root = config.target_dir
        branch = subprocess.run(
            ["git", "symbolic-ref", "--short", "HEAD"],
            cwd=root, check=True, capture_output=True, text=True,
        ).stdout.strip()
        assert branch == "main"
        log = subprocess.run(
            ["git", "log", "--format=%s"],
            cwd=root, check=True, capture_output=True, text=True,
        ).stdout.split()
        assert log == ["init"]
        tracked = subprocess.run(
            ["git", "ls-files"],
            cwd=root, check=True, capture_output=True, text=True,
        ).stdout.split()
        assert "package.json" in tracked
        assert "src/shaders/frag.glsl" in tracked
        assert not (root / "src" / "shaders" / "lygia").exists()
