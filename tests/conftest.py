"""Shared pytest fixtures for the solid-flutter test suite.

Provides reusable fixtures for:
- A miniature template tree and a Config pointing at it
- Mock subprocess helpers
- A fake ``flutter`` executable for end-to-end runs
"""

from __future__ import annotations

import stat
import sys
import textwrap
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from solid_flutter.config import Config, TemplateConfig

MANIFEST_BYTES = (
    b"name: solid_flutter_app\n"
    b"dependencies:\n"
    b"  flutter:\n"
    b"    sdk: flutter\n"
    b"  get_it: ^7.6.7\n"
)


# ---------------------------------------------------------------------------
# Template tree
# ---------------------------------------------------------------------------

@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """A small template tree: manifest, a README, nested lib/ sources and a binary asset."""
    root = tmp_path / "template"
    (root / "lib" / "core" / "di").mkdir(parents=True)
    (root / "lib" / "presentation").mkdir(parents=True)
    (root / "assets").mkdir()

    (root / "pubspec.yaml").write_bytes(MANIFEST_BYTES)
    (root / "lib" / "main.dart").write_text("void main() {}\n", encoding="utf-8")
    (root / "lib" / "core" / "di" / "service_locator.dart").write_text(
        "void setupServiceLocator() {}\n", encoding="utf-8"
    )
    (root / "lib" / "presentation" / "home_page.dart").write_text(
        "class HomePage {}\n", encoding="utf-8"
    )
    (root / "assets" / "logo.bin").write_bytes(bytes(range(256)))
    (root / "README.md").write_text("# SOLID Flutter app\n", encoding="utf-8")
    yield root


@pytest.fixture
def config(template_dir: Path) -> Config:
    """A Config for project ``MyApp`` that overlays :func:`template_dir`."""
    return Config(
        project_name="MyApp",
        template=TemplateConfig(template_dir=template_dir),
    )


@pytest.fixture
def generated_project(tmp_path: Path) -> Path:
    """A destination that looks like ``flutter create`` already ran in it."""
    project = tmp_path / "out" / "MyApp"
    (project / "lib").mkdir(parents=True)
    (project / "lib" / "main.dart").write_text("// generated counter app\n", encoding="utf-8")
    (project / "lib" / "extra.dart").write_text("// generated\n", encoding="utf-8")
    (project / "pubspec.yaml").write_text(
        "name: my_app\ndependencies:\n  flutter:\n    sdk: flutter\n", encoding="utf-8"
    )
    (project / "README.md").write_text("# my_app\n", encoding="utf-8")
    yield project


# ---------------------------------------------------------------------------
# Mock Subprocess (generic)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Factory for mock asyncio subprocess instances.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


# ---------------------------------------------------------------------------
# Fake generator executable
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_flutter(tmp_path: Path) -> Path:
    """An executable standing in for ``flutter create <path>``.

    Writes a default ``lib/main.dart``, ``pubspec.yaml`` and ``test/`` into the
    target, like the real generator. Exits 3 when the target name contains
    ``fail``.
    """
    script = tmp_path / "bin" / "fake-flutter"
    script.parent.mkdir()
    script.write_text(
        textwrap.dedent(
            f"""\
            #!{sys.executable}
            import pathlib
            import sys

            assert sys.argv[1] == "create", sys.argv
            target = pathlib.Path(sys.argv[2])
            if "fail" in target.name:
                print("generator exploded", file=sys.stderr)
                sys.exit(3)
            (target / "lib").mkdir(parents=True, exist_ok=True)
            (target / "lib" / "main.dart").write_text("// default counter app\\n")
            (target / "test").mkdir(exist_ok=True)
            (target / "test" / "widget_test.dart").write_text("// default test\\n")
            (target / "pubspec.yaml").write_text("name: generated\\n")
            print("All done!")
            """
        ),
        encoding="utf-8",
    )
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    yield script
