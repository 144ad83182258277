"""solid-flutter configuration.

Typed configuration for a scaffolding run. Settings use Pydantic v2 models so
bad values are rejected at construction time, and every external collaborator
(the Flutter generator, git, the bundled template) can be swapped out through
environment variables without code changes.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

_BUNDLED_TEMPLATE_DIR = Path(__file__).parent / "templates" / "flutter_base"


class GeneratorConfig(BaseModel):
    """How to invoke the external project generator."""

    executable: str = Field(default="flutter", min_length=1)
    subcommand: str = Field(default="create", min_length=1)
    source_dir: str = Field(
        default="lib",
        min_length=1,
        description="Default source folder the generator creates and the overlay replaces",
    )
    timeout: float | None = Field(
        default=None, gt=0, description="Seconds before the generator is killed (None waits forever)"
    )


class GitConfig(BaseModel):
    """How to bootstrap the version-control repository."""

    executable: str = Field(default="git", min_length=1)
    commit_message: str = Field(
        default="Initial commit: Flutter project structure", min_length=1
    )
    timeout: float | None = Field(default=None, gt=0)


class TemplateConfig(BaseModel):
    """Location and layout of the template tree overlaid on the generated project."""

    template_dir: Path = Field(default=_BUNDLED_TEMPLATE_DIR)
    manifest_name: str = Field(default="pubspec.yaml", min_length=1)


class Config(BaseModel):
    """Global configuration for one scaffolding run.

    Created once by the CLI entry point (usually through :meth:`from_env`) and
    handed to ``Pipeline``.
    """

    project_name: str = Field(default="")
    save_dir: Path | None = Field(
        default=None, description="Parent directory; skips the interactive prompt when set"
    )
    supported_platforms: list[str] = Field(default=["win32", "darwin", "linux"])
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    git: GitConfig = Field(default_factory=GitConfig)
    template: TemplateConfig = Field(default_factory=TemplateConfig)

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    @property
    def template_manifest_path(self) -> Path:
        """Path to the manifest shipped inside the template tree."""
        return self.template.template_dir / self.template.manifest_name

    def destination_source_dir(self, project_root: Path) -> Path:
        """The generator's default source folder inside *project_root*."""
        return Path(project_root) / self.generator.source_dir

    def destination_manifest_path(self, project_root: Path) -> Path:
        """The manifest file inside *project_root*."""
        return Path(project_root) / self.template.manifest_name

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, project_name: str = "") -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            SOLID_FLUTTER_SAVE_DIR, SOLID_FLUTTER_FLUTTER_BIN,
            SOLID_FLUTTER_GIT_BIN, SOLID_FLUTTER_COMMIT_MESSAGE,
            SOLID_FLUTTER_TEMPLATE_DIR, SOLID_FLUTTER_COMMAND_TIMEOUT.
        """
        timeout: float | None = None
        if os.environ.get("SOLID_FLUTTER_COMMAND_TIMEOUT"):
            timeout = float(os.environ["SOLID_FLUTTER_COMMAND_TIMEOUT"])

        generator_kwargs: dict[str, Any] = {"timeout": timeout}
        if os.environ.get("SOLID_FLUTTER_FLUTTER_BIN"):
            generator_kwargs["executable"] = os.environ["SOLID_FLUTTER_FLUTTER_BIN"]

        git_kwargs: dict[str, Any] = {"timeout": timeout}
        if os.environ.get("SOLID_FLUTTER_GIT_BIN"):
            git_kwargs["executable"] = os.environ["SOLID_FLUTTER_GIT_BIN"]
        if os.environ.get("SOLID_FLUTTER_COMMIT_MESSAGE"):
            git_kwargs["commit_message"] = os.environ["SOLID_FLUTTER_COMMIT_MESSAGE"]

        template_kwargs: dict[str, Any] = {}
        if os.environ.get("SOLID_FLUTTER_TEMPLATE_DIR"):
            template_kwargs["template_dir"] = Path(os.environ["SOLID_FLUTTER_TEMPLATE_DIR"])

        save_dir = os.environ.get("SOLID_FLUTTER_SAVE_DIR")

        return cls(
            project_name=project_name,
            save_dir=Path(save_dir) if save_dir else None,
            generator=GeneratorConfig(**generator_kwargs),
            git=GitConfig(**git_kwargs),
            template=TemplateConfig(**template_kwargs),
        )
