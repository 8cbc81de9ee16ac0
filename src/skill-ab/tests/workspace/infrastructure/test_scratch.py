"""Tests for ScratchWorkspaceManager."""

from pathlib import Path

import pytest

from skill_ab.workspace.infrastructure.errors import WorkspaceError
from skill_ab.workspace.infrastructure.scratch import ScratchWorkspaceManager

_SEEDS = {"README.md": "# Test Project\n", "src/app.py": "print('x')\n"}


class TestCreate:
    def test_writes_seed_files(self, tmp_path: Path) -> None:
        manager = ScratchWorkspaceManager(root=tmp_path)

        path = manager.create(seed_files=_SEEDS, label="trial-1-control")

        assert (path / "README.md").read_text(encoding="utf-8") == "# Test Project\n"
        assert (path / "src" / "app.py").is_file()

    def test_label_appears_in_directory_name(self, tmp_path: Path) -> None:
        manager = ScratchWorkspaceManager(root=tmp_path)

        path = manager.create(seed_files={}, label="trial-2-treatment")

        assert "trial-2-treatment" in path.name

    def test_same_label_gives_distinct_directories(self, tmp_path: Path) -> None:
        manager = ScratchWorkspaceManager(root=tmp_path)

        first = manager.create(seed_files={}, label="trial-1-control")
        second = manager.create(seed_files={}, label="trial-1-control")

        assert first != second

    def test_unwritable_root_raises(self, tmp_path: Path) -> None:
        manager = ScratchWorkspaceManager(root=tmp_path / "missing")

        with pytest.raises(WorkspaceError):
            manager.create(seed_files={}, label="x")

    def test_failed_seed_removes_directory(self, tmp_path: Path) -> None:
        manager = ScratchWorkspaceManager(root=tmp_path)

        # A seed path that collides with a seeded file cannot be created.
        with pytest.raises(WorkspaceError):
            manager.create(seed_files={"a": "file", "a/b": "nested"}, label="x")

        assert list(tmp_path.iterdir()) == []


class TestDestroy:
    def test_removes_tree(self, tmp_path: Path) -> None:
        manager = ScratchWorkspaceManager(root=tmp_path)
        path = manager.create(seed_files=_SEEDS, label="x")

        manager.destroy(path=path)

        assert not path.exists()

    def test_absent_path_is_noop(self, tmp_path: Path) -> None:
        ScratchWorkspaceManager().destroy(path=tmp_path / "never-created")


class TestWorkspaceContext:
    def test_destroyed_on_normal_exit(self, tmp_path: Path) -> None:
        manager = ScratchWorkspaceManager(root=tmp_path)

        with manager.workspace(seed_files=_SEEDS, label="x") as path:
            assert path.is_dir()

        assert not path.exists()

    def test_destroyed_when_body_raises(self, tmp_path: Path) -> None:
        manager = ScratchWorkspaceManager(root=tmp_path)

        with pytest.raises(RuntimeError):
            with manager.workspace(seed_files=_SEEDS, label="x") as path:
                raise RuntimeError("agent crashed")

        assert not path.exists()
