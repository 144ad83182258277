"""Tests for the external generator invocation (solid_flutter.scaffolder.generator)."""

from __future__ import annotations

import asyncio
from pathlib import Path
from unittest.mock import patch

import pytest

from solid_flutter.config import GeneratorConfig
from solid_flutter.scaffolder.generator import FlutterGenerator, GeneratorError

pytestmark = pytest.mark.unit


class TestFlutterGenerator:
    def test_command_for(self, tmp_path: Path):
        gen = FlutterGenerator()
        assert gen.command_for(tmp_path / "app") == ["flutter", "create", str(tmp_path / "app")]

    def test_command_uses_configured_executable(self):
        gen = FlutterGenerator(GeneratorConfig(executable="/opt/flutter/bin/flutter"))
        assert gen.command_for("app")[0] == "/opt/flutter/bin/flutter"

    async def test_create_inherits_output(self, tmp_path: Path, mock_subprocess, capsys):
        proc = mock_subprocess(returncode=0)
        with patch("asyncio.create_subprocess_exec", return_value=proc) as spawn:
            await FlutterGenerator().create(tmp_path)

        assert spawn.call_args.args == ("flutter", "create", str(tmp_path))
        assert spawn.call_args.kwargs["stdout"] is None
        assert spawn.call_args.kwargs["stderr"] is None
        assert f"Creating Flutter project at: {tmp_path}" in capsys.readouterr().out

    async def test_bracketed_destination_is_printed_literally(
        self, tmp_path: Path, mock_subprocess, capsys
    ):
        destination = tmp_path / "a[/x]b"
        proc = mock_subprocess(returncode=0)
        with patch("asyncio.create_subprocess_exec", return_value=proc):
            await FlutterGenerator().create(destination)

        assert f"Creating Flutter project at: {destination}" in capsys.readouterr().out

    async def test_nonzero_exit_raises(self, tmp_path: Path, mock_subprocess):
        proc = mock_subprocess(returncode=69)
        with patch("asyncio.create_subprocess_exec", return_value=proc):
            with pytest.raises(GeneratorError, match="exited with status 69") as exc_info:
                await FlutterGenerator().create(tmp_path)

        assert exc_info.value.returncode == 69
        assert exc_info.value.command == f"flutter create {tmp_path}"

    async def test_missing_executable_raises(self, tmp_path: Path):
        gen = FlutterGenerator(GeneratorConfig(executable="flutter-not-installed-9d1c"))
        with pytest.raises(GeneratorError, match="could not launch"):
            await gen.create(tmp_path)

    async def test_timeout_raises(self, tmp_path: Path, mock_subprocess):
        proc = mock_subprocess()
        proc.communicate.side_effect = asyncio.TimeoutError
        gen = FlutterGenerator(GeneratorConfig(timeout=1))
        with patch("asyncio.create_subprocess_exec", return_value=proc):
            with pytest.raises(GeneratorError, match="timed out"):
                await gen.create(tmp_path)

        proc.kill.assert_called_once()
