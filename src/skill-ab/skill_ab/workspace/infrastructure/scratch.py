"""ScratchWorkspaceManager — isolated per-run temporary directories."""

import shutil
import tempfile
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path

from skill_ab.workspace.infrastructure.errors import WorkspaceError


class ScratchWorkspaceManager:
    """Creates and removes scratch directories for control and treatment runs.

    Uniqueness comes from ``tempfile.mkdtemp``; the label (e.g.
    ``trial-3-control``) only makes the directory recognisable on disk.
    """

    def __init__(self, root: Path | None = None) -> None:
        self._root = root

    def create(self, seed_files: Mapping[str, str], label: str) -> Path:
        """Create a fresh directory and write seed_files into it.

        Raises:
            WorkspaceError: if the directory or a seed file cannot be written.
        """
        try:
            path = Path(tempfile.mkdtemp(prefix=f"skill-ab-{label}-", dir=self._root))
        except OSError as exc:
            raise WorkspaceError(reason=str(exc)) from exc

        try:
            for relative, content in seed_files.items():
                target = path / relative
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(content, encoding="utf-8")
        except OSError as exc:
            self.destroy(path=path)
            raise WorkspaceError(reason=str(exc)) from exc

        return path

    def destroy(self, path: Path) -> None:
        """Recursively remove path. Removing an absent path is a no-op."""
        shutil.rmtree(path, ignore_errors=True)

    @contextmanager
    def workspace(self, seed_files: Mapping[str, str], label: str) -> Iterator[Path]:
        """Yield a seeded workspace that is destroyed exactly once on exit."""
        path = self.create(seed_files=seed_files, label=label)
        try:
            yield path
        finally:
            self.destroy(path=path)
