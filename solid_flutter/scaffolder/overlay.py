"""Template overlay and manifest replacement.

After the generator has produced its baseline project, :class:`TemplateOverlay`
removes the generator's default source folder, copies the bundled template
tree over the destination and finally replaces the dependency manifest with
the template's copy.

Every template file is copied byte-for-byte to the same relative path.
The "merge" of the manifest is a full overwrite: whatever the generator wrote
to ``pubspec.yaml`` is discarded.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from solid_flutter.config import Config


class OverlayError(Exception):
    """Raised when a filesystem step of the overlay fails."""

    def __init__(self, message: str, path: str | Path = ""):
        self.path = str(path)
        super().__init__(message)


class TemplateOverlay:
    """Applies the template tree described by ``config.template`` to a project."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self.template_dir = Path(config.template.template_dir)

    # -- Public API --------------------------------------------------------

    async def remove_default_source(self, project_root: str | Path) -> bool:
        """Delete the generator's default source folder, if present.

        Returns:
            ``True`` if something was removed.
        """
        target = self.config.destination_source_dir(Path(project_root))
        return await asyncio.to_thread(_remove_path, target)

    async def copy_tree(self, project_root: str | Path) -> list[Path]:
        """Copy every template entry into *project_root* at the same relative path.

        Entries are visited in lexical order. Directories are created as
        needed and files are copied byte-for-byte, overwriting existing
        files. The first failure aborts the walk.

        Returns:
            Destination paths of the files written, in walk order.
        """
        if not self.template_dir.is_dir():
            raise OverlayError(
                f"template directory not found: {self.template_dir}", self.template_dir
            )

        return await asyncio.to_thread(self._copy_tree_sync, Path(project_root))

    async def merge_manifest(self, project_root: str | Path) -> Path:
        """Replace the destination manifest with the template's bytes verbatim."""
        source = self.config.template_manifest_path
        destination = self.config.destination_manifest_path(Path(project_root))
        try:
            data = await asyncio.to_thread(source.read_bytes)
            await asyncio.to_thread(destination.write_bytes, data)
        except OSError as exc:
            raise OverlayError(f"failed to replace manifest: {exc}", destination) from exc
        return destination

    # -- Internal helpers --------------------------------------------------

    def _copy_tree_sync(self, root: Path) -> list[Path]:
        written: list[Path] = []

        try:
            root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OverlayError(f"failed to create {root}: {exc}", root) from exc

        for source in sorted(self.template_dir.rglob("*")):
            rel = source.relative_to(self.template_dir)
            destination = root / rel

            try:
                if source.is_dir():
                    destination.mkdir(parents=True, exist_ok=True)
                    continue

                shutil.copyfile(source, destination)
            except OSError as exc:
                raise OverlayError(f"failed to copy {rel}: {exc}", source) from exc

            written.append(destination)

        return written


def _remove_path(path: Path) -> bool:
    """Synchronous helper: remove a directory tree or a single file."""
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
            return True
        if path.exists() or path.is_symlink():
            path.unlink()
            return True
    except OSError as exc:
        raise OverlayError(f"failed to remove {path}: {exc}", path) from exc
    return False
