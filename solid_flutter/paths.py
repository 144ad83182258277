"""Destination path resolution.

Turns the project name and the user's answer to the save-directory prompt
into the destination path every later step works on.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable

from solid_flutter.utils import console

SAVE_PATH_PROMPT = (
    "Please enter the directory where you want to save the project "
    "(or press Enter to save on Desktop):"
)

DEFAULT_PLATFORMS: tuple[str, ...] = ("win32", "darwin", "linux")


class PathResolutionError(Exception):
    """Raised when the destination path cannot be determined."""


def join_project_path(base: str | Path, project_name: str) -> Path:
    """Append *project_name* below *base*.

    Unlike ``Path(base) / name``, an absolute or drive-qualified name never
    replaces *base*: its anchor is dropped and the rest is appended.
    """
    name = Path(project_name)
    if name.anchor:
        name = Path(*name.parts[1:])
    return Path(base) / name


def default_save_path(
    project_name: str,
    *,
    home: str | Path | None = None,
    platform: str | None = None,
    supported_platforms: Iterable[str] = DEFAULT_PLATFORMS,
) -> Path:
    """Return ``<home>/Desktop/<project_name>`` on a supported platform.

    Raises:
        PathResolutionError: If the platform is not supported or the home
            directory cannot be determined.
    """
    platform = platform or sys.platform
    if platform not in set(supported_platforms):
        raise PathResolutionError(f"unsupported OS: {platform}")

    if home is None:
        try:
            home = Path.home()
        except RuntimeError as exc:
            raise PathResolutionError(f"cannot determine home directory: {exc}") from exc

    return join_project_path(Path(home) / "Desktop", project_name)


def resolve_save_path(
    user_input: str,
    project_name: str,
    *,
    home: str | Path | None = None,
    platform: str | None = None,
    supported_platforms: Iterable[str] = DEFAULT_PLATFORMS,
) -> Path:
    """Resolve the prompt answer into the destination path.

    An empty answer or ``"."`` selects :func:`default_save_path`; anything
    else is joined with *project_name* as-is, whether or not it exists.
    """
    answer = user_input.strip()
    if answer in ("", "."):
        return default_save_path(
            project_name,
            home=home,
            platform=platform,
            supported_platforms=supported_platforms,
        )
    return join_project_path(answer, project_name)


def ask_for_save_path(
    project_name: str,
    *,
    supported_platforms: Iterable[str] = DEFAULT_PLATFORMS,
) -> Path:
    """Prompt on stdin for the save directory and resolve it.

    End of input is treated like pressing Enter.
    """
    console.print(SAVE_PATH_PROMPT, soft_wrap=True)
    try:
        answer = console.input()
    except EOFError:
        answer = ""
    return resolve_save_path(answer, project_name, supported_platforms=supported_platforms)
