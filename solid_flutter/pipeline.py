"""solid-flutter pipeline orchestrator.

Scaffolds a SOLID Flutter project in seven strictly sequential steps:

Step 1: resolve the destination path (argument + prompt).
Step 2: make sure the destination directory exists.
Step 3: run ``flutter create`` against it.
Step 4: delete the generator's default ``lib`` folder.
Step 5: copy the bundled template tree over the project.
Step 6: replace ``pubspec.yaml`` with the template's copy.
Step 7: ``git init``, ``git add .``, ``git commit``.

Any failing step is fatal: the run stops, nothing is rolled back and the
process exits with status 1.

Usage::

    solid-flutter my_app
    python -m solid_flutter my_app
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
from pathlib import Path
from typing import Any, Awaitable, Callable, NoReturn, Sequence, TypeVar

from solid_flutter.config import Config
from solid_flutter.paths import PathResolutionError, ask_for_save_path, resolve_save_path
from solid_flutter.repository import GitError, RepositoryBootstrapper
from solid_flutter.scaffolder import FlutterGenerator, GeneratorError, OverlayError, TemplateOverlay
from solid_flutter.utils import (
    console,
    ensure_dir,
    format_duration,
    print_error,
    print_step_header,
    print_success,
    print_summary_table,
    print_warning,
)

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Steps and states
# ---------------------------------------------------------------------------

STEP_DESCRIPTIONS: dict[int, str] = {
    1: "determining save path",
    2: "ensuring directory exists",
    3: "creating Flutter project",
    4: "removing default lib content",
    5: "copying template structure",
    6: "merging pubspec.yaml",
    7: "initializing git repository",
}

# State reached once a step completes. Step 4 only prepares the overlay.
STEP_STATES: dict[int, str | None] = {
    1: "PathResolved",
    2: "DirReady",
    3: "Scaffolded",
    4: None,
    5: "Overlaid",
    6: "ManifestMerged",
    7: "GitInitialized",
}

STEP_ERRORS = (PathResolutionError, GeneratorError, OverlayError, GitError, OSError)


class PipelineError(Exception):
    """Raised when a pipeline step fails. Every step failure is fatal."""

    def __init__(self, step: int, message: str) -> None:
        self.step = step
        super().__init__(f"Error {STEP_DESCRIPTIONS.get(step, '?')}: {message}")


# ---------------------------------------------------------------------------
# Pipeline Orchestrator
# ---------------------------------------------------------------------------


class Pipeline:
    """Drives one scaffolding run from project name to first commit.

    Attributes:
        config: Run configuration.
        state: Accumulates the current state name, completed steps, the
            destination and the files written by the overlay.
    """

    def __init__(self, config: Config) -> None:
        self.config = config
        self.generator = FlutterGenerator(config.generator)
        self.overlay = TemplateOverlay(config)
        self.repository = RepositoryBootstrapper(config.git)
        self.state: dict[str, Any] = {
            "state": "Start",
            "steps_completed": [],
            "project_path": None,
            "files_overlaid": [],
            "success": False,
        }

    async def run(self) -> dict[str, Any]:
        """Execute every step in order and return the final state.

        Failures are reported on the console and recorded in the returned
        state (``state == "Failed"``) instead of being raised.
        """
        started = time.monotonic()
        try:
            project_path = await self._step(1, self._resolve_path)
            self.state["project_path"] = str(project_path)

            await self._step(2, lambda: asyncio.to_thread(ensure_dir, project_path))
            await self._step(3, lambda: self.generator.create(project_path))
            removed = await self._step(
                4, lambda: self.overlay.remove_default_source(project_path)
            )
            if not removed:
                print_warning(
                    f"No default {self.config.generator.source_dir} folder found in "
                    f"{project_path}; nothing removed"
                )
            written = await self._step(5, lambda: self.overlay.copy_tree(project_path))
            self.state["files_overlaid"] = [
                str(path.relative_to(project_path)) for path in written
            ]
            await self._step(6, lambda: self.overlay.merge_manifest(project_path))
            await self._step(7, lambda: self.repository.bootstrap(project_path))
        except PipelineError as exc:
            self.state["state"] = "Failed"
            self.state["failed_step"] = exc.step
            self.state["error"] = str(exc)
            self.state["duration_seconds"] = round(time.monotonic() - started, 2)
            print_error(str(exc))
            return self.state

        self.state["state"] = "Done"
        self.state["success"] = True
        self.state["duration_seconds"] = round(time.monotonic() - started, 2)
        self._print_final_summary(project_path)
        return self.state

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _step(self, step: int, action: Callable[[], Awaitable[T]]) -> T:
        """Run one step, translating component errors into ``PipelineError``."""
        print_step_header(step, STEP_DESCRIPTIONS[step].capitalize())
        try:
            result = await action()
        except STEP_ERRORS as exc:
            raise PipelineError(step, str(exc)) from exc

        self.state["steps_completed"].append(step)
        if STEP_STATES[step]:
            self.state["state"] = STEP_STATES[step]
        return result

    async def _resolve_path(self) -> Path:
        name = self.config.project_name
        platforms = self.config.supported_platforms
        if self.config.save_dir is not None:
            return resolve_save_path(
                str(self.config.save_dir), name, supported_platforms=platforms
            )
        return ask_for_save_path(name, supported_platforms=platforms)

    def _print_final_summary(self, project_path: Path) -> None:
        print_summary_table(
            {
                "Project": self.config.project_name,
                "Location": str(project_path),
                "Template files": str(len(self.state["files_overlaid"])),
                "Duration": format_duration(self.state["duration_seconds"]),
            },
            title="Scaffold Complete",
        )
        print_success(
            f"SOLID Flutter project '{self.config.project_name}' "
            f"created successfully at '{project_path}'!"
        )


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser whose usage errors exit with status 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="solid-flutter",
        description="Scaffold a SOLID-structured Flutter project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "The save directory is asked for interactively; press Enter to use\n"
            "<home>/Desktop/<project_name>.\n\n"
            "Examples:\n"
            "  solid-flutter my_app\n"
            "  SOLID_FLUTTER_SAVE_DIR=~/code solid-flutter my_app\n"
        ),
    )
    parser.add_argument(
        "project_name",
        nargs="?",
        help="Name of the Flutter project to create (extra arguments are ignored)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point for ``solid-flutter`` and ``python -m solid_flutter``."""
    raw = list(sys.argv[1:] if argv is None else argv)
    args, extras = build_parser().parse_known_args(raw)

    # The first argument names the project even when it looks like an option.
    project_name = raw[0] if raw and raw[0] in extras else args.project_name

    if not project_name or not project_name.strip():
        console.print("Please provide a project name.")
        sys.exit(1)

    try:
        config = Config.from_env(project_name)
    except ValueError as exc:
        print_error(f"Error loading configuration: {exc}")
        sys.exit(1)

    result = asyncio.run(Pipeline(config).run())
    if not result.get("success"):
        sys.exit(1)


if __name__ == "__main__":
    main()
