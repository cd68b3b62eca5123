"""Unit tests for opening the editor (glsl_sandbox.tools.editor)."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from glsl_sandbox.tools.editor import open_editor

pytestmark = pytest.mark.unit


@pytest.fixture
def mock_available():
    with patch("glsl_sandbox.tools.editor.command_available", new_callable=AsyncMock) as mock:
        yield mock


@pytest.fixture
def mock_run():
    with patch("glsl_sandbox.tools.editor.run_command", new_callable=AsyncMock) as mock:
        mock.return_value = (0, "", "")
        yield mock


class TestOpenEditor:
    @pytest.mark.asyncio
    async def test_opens_project(self, tmp_path: Path, mock_available, mock_run):
        mock_available.return_value = True
        assert await open_editor(tmp_path) is True
        mock_available.assert_awaited_once_with("code")
        assert mock_run.await_args.args[0] == ["code", "."]
        assert mock_run.await_args.kwargs["cwd"] == tmp_path
        assert mock_run.await_args.kwargs["capture"] is False
        assert mock_run.await_args.kwargs["timeout"] is None

    @pytest.mark.asyncio
    async def test_custom_editor(self, tmp_path: Path, mock_available, mock_run):
        mock_available.return_value = True
        assert await open_editor(tmp_path, "cursor") is True
        assert mock_run.await_args.args[0] == ["cursor", "."]

    @pytest.mark.asyncio
    async def test_missing_code_prints_install_hint(self, tmp_path: Path, mock_available, mock_run, capsys):
        mock_available.return_value = False
        assert await open_editor(tmp_path) is False
        mock_run.assert_not_awaited()
        assert "'code' command not found" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_missing_custom_editor(self, tmp_path: Path, mock_available, mock_run, capsys):
        mock_available.return_value = False
        assert await open_editor(tmp_path, "zed") is False
        assert "'zed' not found" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_launcher_failure(self, tmp_path: Path, mock_available, mock_run):
        mock_available.return_value = True
        mock_run.return_value = (2, "", "")
        assert await open_editor(tmp_path) is False
