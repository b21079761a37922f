"""Tests for FilesystemTaskStore."""

import logging
from pathlib import Path

import frontmatter
import pytest

from exitboard.repositories import FilesystemTaskStore, TaskStoreError


@pytest.fixture
def repo(task_dir: Path) -> FilesystemTaskStore:
    return FilesystemTaskStore(task_dir)


def write_task(task_dir: Path, filename: str, status: str = "todo", position: int = 0, **extra):
    post = frontmatter.Post("Notes", title=filename[:-3].title(), status=status, position=position)
    post.metadata.update(extra)
    (task_dir / filename).write_text(frontmatter.dumps(post))


def read_meta(task_dir: Path, filename: str) -> dict:
    return frontmatter.load(task_dir / filename).metadata


class TestFilesystemLoad:
    """Tests for reading task files."""

    @pytest.mark.asyncio
    async def test_get_all(self, repo: FilesystemTaskStore, task_dir: Path):
        write_task(task_dir, "a.md", "todo", 0, tags=["finance"])
        write_task(task_dir, "b.md", "completed", 3)

        tasks = {t.id: t for t in await repo.get_all()}

        assert set(tasks) == {"a.md", "b.md"}
        assert tasks["a.md"].tags == ["finance"]
        assert tasks["a.md"].description == "Notes"
        assert (tasks["b.md"].status, tasks["b.md"].position) == ("completed", 3)

    @pytest.mark.asyncio
    async def test_missing_directory(self, tmp_path: Path):
        assert await FilesystemTaskStore(tmp_path / "nope").get_all() == []

    @pytest.mark.asyncio
    async def test_non_markdown_files_ignored(self, repo, task_dir: Path):
        (task_dir / "README.txt").write_text("not a task")
        assert await repo.get_all() == []

    @pytest.mark.asyncio
    async def test_unreadable_file_skipped(self, repo, task_dir: Path, caplog):
        write_task(task_dir, "good.md")
        (task_dir / "bad.md").write_text("---\nposition: [unclosed\n---\n")

        with caplog.at_level(logging.WARNING, logger="exitboard"):
            tasks = await repo.get_all()

        assert [t.id for t in tasks] == ["good.md"]
        assert "bad.md" in caplog.text

    @pytest.mark.asyncio
    async def test_get_by_id(self, repo, task_dir: Path):
        write_task(task_dir, "a.md")
        assert (await repo.get_by_id("a.md")).id == "a.md"
        assert await repo.get_by_id("missing.md") is None


class TestFilesystemMove:
    """Tests for persisting moves."""

    @pytest.mark.asyncio
    async def test_reorder_rewrites_positions(self, repo, task_dir: Path):
        for i, name in enumerate(["a.md", "b.md", "c.md"]):
            write_task(task_dir, name, "todo", i)

        await repo.move_task("c.md", "todo", 0)

        assert read_meta(task_dir, "c.md")["position"] == 0
        assert read_meta(task_dir, "a.md")["position"] == 1
        assert read_meta(task_dir, "b.md")["position"] == 2
        assert "updated" in read_meta(task_dir, "c.md")

    @pytest.mark.asyncio
    async def test_cross_column_move(self, repo, task_dir: Path):
        write_task(task_dir, "a.md", "todo", 0)
        write_task(task_dir, "b.md", "todo", 1)

        await repo.move_task("a.md", "in_progress", 0)

        assert read_meta(task_dir, "a.md")["status"] == "in_progress"
        assert read_meta(task_dir, "a.md")["position"] == 0
        assert read_meta(task_dir, "b.md")["position"] == 0

    @pytest.mark.asyncio
    async def test_untouched_files_not_rewritten(self, repo, task_dir: Path):
        write_task(task_dir, "a.md", "todo", 0)
        write_task(task_dir, "b.md", "todo", 1)
        write_task(task_dir, "z.md", "completed", 0)
        before = (task_dir / "z.md").read_text()

        await repo.move_task("b.md", "todo", 0)

        assert (task_dir / "z.md").read_text() == before

    @pytest.mark.asyncio
    async def test_body_preserved(self, repo, task_dir: Path):
        write_task(task_dir, "a.md", "todo", 0)
        await repo.move_task("a.md", "completed", 0)
        assert frontmatter.load(task_dir / "a.md").content == "Notes"

    @pytest.mark.asyncio
    async def test_unknown_task(self, repo):
        with pytest.raises(TaskStoreError, match="Unknown task"):
            await repo.move_task("ghost.md", "todo", 0)


class TestFilesystemCreateUpdate:
    """Tests for creating and updating task files."""

    @pytest.mark.asyncio
    async def test_create(self, repo, task_dir: Path):
        task = await repo.create_task({"title": "Sign the NDA", "status": "todo", "position": 2})

        assert task.id == "sign-the-nda.md"
        assert task.created is not None
        meta = read_meta(task_dir, "sign-the-nda.md")
        assert meta["title"] == "Sign the NDA"
        assert meta["position"] == 2

    @pytest.mark.asyncio
    async def test_create_avoids_collisions(self, repo):
        first = await repo.create_task({"title": "Review"})
        second = await repo.create_task({"title": "Review"})
        assert (first.id, second.id) == ("review.md", "review-2.md")

    @pytest.mark.asyncio
    async def test_create_makes_directory(self, tmp_path: Path):
        repo = FilesystemTaskStore(tmp_path / "new" / ".tasks")
        task = await repo.create_task({"title": "First"})
        assert (tmp_path / "new" / ".tasks" / task.id).exists()

    @pytest.mark.asyncio
    async def test_update(self, repo, task_dir: Path):
        write_task(task_dir, "a.md", "todo", 1)

        task = await repo.update_task("a.md", {"assignee": "dana", "priority": "high"})

        assert task.assignee == "dana"
        meta = read_meta(task_dir, "a.md")
        assert meta["assignee"] == "dana"
        assert meta["priority"] == "high"
        assert meta["position"] == 1

    @pytest.mark.asyncio
    async def test_update_unknown(self, repo):
        with pytest.raises(TaskStoreError):
            await repo.update_task("ghost.md", {"title": "x"})
