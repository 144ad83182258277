"""Git repository bootstrap for a freshly scaffolded project.

Runs ``git init``, ``git add .`` and ``git commit -m <message>`` inside the
project directory. Output is inherited so git's own messages reach the user.
"""

from __future__ import annotations

from pathlib import Path

from solid_flutter.config import GitConfig
from solid_flutter.utils import run_command


class GitError(Exception):
    """Raised when a git command fails."""

    def __init__(self, message: str, command: str = "", returncode: int | None = None):
        self.command = command
        self.returncode = returncode
        super().__init__(message)


async def _run_git(
    executable: str,
    *args: str,
    cwd: str | Path,
    timeout: float | None = None,
) -> None:
    """Run a git command with inherited output.

    Raises GitError if git cannot be launched, times out or exits non-zero.
    """
    cmd = [executable, *args]
    cmd_str = " ".join(cmd)

    try:
        returncode, _, stderr = await run_command(
            cmd, cwd=cwd, timeout=timeout, capture=False
        )
    except OSError as exc:
        raise GitError(f"could not launch {executable}: {exc}", command=cmd_str) from exc

    if returncode == -1 and stderr:
        raise GitError(stderr, command=cmd_str, returncode=returncode)
    if returncode != 0:
        raise GitError(
            f"Git command failed (exit {returncode}): {cmd_str}",
            command=cmd_str,
            returncode=returncode,
        )


class RepositoryBootstrapper:
    """Initialises a repository and records the scaffold as its first commit.

    The three subcommands run strictly in order; the first failure stops the
    sequence and leaves the repository in whatever state the completed
    subcommands produced.
    """

    def __init__(self, config: GitConfig | None = None) -> None:
        self.config = config or GitConfig()

    def commands(self) -> list[list[str]]:
        """The git argument lists run by :meth:`bootstrap`, in order."""
        return [
            ["init"],
            ["add", "."],
            ["commit", "-m", self.config.commit_message],
        ]

    async def bootstrap(self, repo_path: str | Path) -> None:
        for args in self.commands():
            await _run_git(
                self.config.executable,
                *args,
                cwd=repo_path,
                timeout=self.config.timeout,
            )
