"""External project generator invocation.

Runs ``flutter create <destination>`` (or whatever the configuration names)
with inherited output streams so the user sees the generator's progress live.
"""

from __future__ import annotations

from pathlib import Path

from rich.markup import escape

from solid_flutter.config import GeneratorConfig
from solid_flutter.utils import console, run_command


class GeneratorError(Exception):
    """Raised when the project generator cannot be launched or exits non-zero."""

    def __init__(self, message: str, command: str = "", returncode: int | None = None):
        self.command = command
        self.returncode = returncode
        super().__init__(message)


class FlutterGenerator:
    """Populates a destination directory with the generator's baseline project."""

    def __init__(self, config: GeneratorConfig | None = None) -> None:
        self.config = config or GeneratorConfig()

    def command_for(self, destination: str | Path) -> list[str]:
        """The argv used to scaffold *destination*."""
        return [self.config.executable, self.config.subcommand, str(destination)]

    async def create(self, destination: str | Path) -> None:
        """Run the generator against *destination*.

        Raises:
            GeneratorError: If the executable is missing, times out, or exits
                with a non-zero status.
        """
        cmd = self.command_for(destination)
        cmd_str = " ".join(cmd)

        console.print(
            f"Creating Flutter project at: {escape(str(destination))}", soft_wrap=True
        )

        try:
            returncode, _, stderr = await run_command(
                cmd, timeout=self.config.timeout, capture=False
            )
        except OSError as exc:
            raise GeneratorError(
                f"could not launch {self.config.executable}: {exc}",
                command=cmd_str,
            ) from exc

        if returncode == -1 and stderr:
            raise GeneratorError(stderr, command=cmd_str, returncode=returncode)
        if returncode != 0:
            raise GeneratorError(
                f"{cmd_str} exited with status {returncode}",
                command=cmd_str,
                returncode=returncode,
            )
