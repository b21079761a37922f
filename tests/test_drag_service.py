"""Tests for the drag controller and drop resolution."""

import asyncio

import pytest

from exitboard.models import BoardConfig, group_tasks
from exitboard.services import (
    BoardService,
    ColumnTarget,
    DragController,
    DragState,
    MoveRequest,
    MoveService,
    TaskTarget,
    parse_drop_target,
    resolve_intent,
)

from .fakes import FakeTaskStore, make_task


def column_ids(board_service: BoardService, status: str) -> list[str]:
    return [t.id for t in board_service.column_tasks(status)]


class TestParseDropTarget:
    """Tests for decoding drop target IDs."""

    def test_column_target(self):
        assert parse_drop_target("column-in_progress") == ColumnTarget("in_progress")

    def test_task_target(self):
        assert parse_drop_target("review-financials.md") == TaskTarget("review-financials.md")

    def test_no_target(self):
        assert parse_drop_target(None) is None
        assert parse_drop_target("") is None


class TestResolveIntent:
    """Tests for turning a drop into a move request."""

    @pytest.fixture
    def grouped(self):
        tasks = [
            make_task("A", "todo", 0),
            make_task("B", "todo", 1),
            make_task("C", "todo", 2),
            make_task("X", "in_review", 0),
        ]
        return group_tasks(tasks, BoardConfig.default().columns)

    def test_drop_on_task_takes_its_position(self, grouped):
        task = grouped["todo"][2]
        assert resolve_intent(grouped, task, TaskTarget("A")) == MoveRequest("C", "todo", 0)

    def test_drop_on_task_in_other_column(self, grouped):
        task = grouped["todo"][0]
        assert resolve_intent(grouped, task, TaskTarget("X")) == MoveRequest("A", "in_review", 0)

    def test_drop_on_task_uses_stored_position(self):
        grouped = group_tasks(
            [make_task("A", "todo", 0), make_task("X", "in_progress", 10)],
            BoardConfig.default().columns,
        )
        result = resolve_intent(grouped, grouped["todo"][0], TaskTarget("X"))
        assert result == MoveRequest("A", "in_progress", 10)

    def test_drop_on_empty_column(self, grouped):
        task = grouped["todo"][1]
        result = resolve_intent(grouped, task, ColumnTarget("in_progress"))
        assert result == MoveRequest("B", "in_progress", 0)

    def test_drop_on_column_appends(self, grouped):
        task = grouped["todo"][0]
        result = resolve_intent(grouped, task, ColumnTarget("in_review"))
        assert result == MoveRequest("A", "in_review", 1)

    def test_drop_on_own_column_moves_to_end(self, grouped):
        task = grouped["todo"][0]
        assert resolve_intent(grouped, task, ColumnTarget("todo")) == MoveRequest("A", "todo", 2)

    def test_drop_on_own_column_when_last_is_noop(self, grouped):
        task = grouped["todo"][2]
        assert resolve_intent(grouped, task, ColumnTarget("todo")) is None

    def test_drop_on_self_is_noop(self, grouped):
        task = grouped["todo"][1]
        assert resolve_intent(grouped, task, TaskTarget("B")) is None

    def test_unknown_targets(self, grouped):
        task = grouped["todo"][0]
        assert resolve_intent(grouped, task, ColumnTarget("archived")) is None
        assert resolve_intent(grouped, task, TaskTarget("missing")) is None


class TestDragController:
    """Tests for the drag state machine."""

    @pytest.mark.asyncio
    async def test_drag_c_onto_a(self, board_service, drag: DragController, store):
        await board_service.load()

        assert drag.drag_start("C") is True
        assert await drag.drag_end("A") is True

        assert column_ids(board_service, "todo") == ["C", "A", "B"]
        assert [t.position for t in board_service.column_tasks("todo")] == [0, 1, 2]
        assert store.move_calls == [("C", "todo", 0)]
        assert drag.state is DragState.IDLE

    @pytest.mark.asyncio
    async def test_drag_to_empty_column(self, notifier):
        store = FakeTaskStore([make_task("D", "todo", 0), make_task("E", "todo", 1)])
        board_service = BoardService(store)
        drag = DragController(board_service, MoveService(board_service, store, notifier))
        await board_service.load()

        drag.drag_start("D")
        assert await drag.drag_end("column-in_progress") is True

        moved = board_service.get_task("D")
        assert (moved.status, moved.position) == ("in_progress", 0)
        assert column_ids(board_service, "todo") == ["E"]
        assert store.move_calls == [("D", "in_progress", 0)]

    @pytest.mark.asyncio
    async def test_drag_over_previews_without_persisting(self, board_service, drag, store):
        await board_service.load()
        drag.drag_start("C")

        intent = drag.drag_over("A")

        assert intent == MoveRequest("C", "todo", 0)
        assert column_ids(board_service, "todo") == ["C", "A", "B"]
        assert store.move_calls == []

    @pytest.mark.asyncio
    async def test_drag_over_replaces_previous_preview(self, board_service, drag):
        await board_service.load()
        drag.drag_start("A")

        drag.drag_over("column-in_progress")
        drag.drag_over("C")

        assert column_ids(board_service, "todo") == ["B", "C", "A"]
        assert column_ids(board_service, "in_progress") == []

    @pytest.mark.asyncio
    async def test_many_drag_overs_one_store_call(self, board_service, drag, store):
        await board_service.load()
        drag.drag_start("A")
        for over in ("B", "C", "column-in_review", "column-in_progress"):
            drag.drag_over(over)

        await drag.drag_end("column-in_progress")

        assert store.move_calls == [("A", "in_progress", 0)]

    @pytest.mark.asyncio
    async def test_drop_outside_any_target(self, board_service, drag, store):
        await board_service.load()
        drag.drag_start("B")
        drag.drag_over("column-completed")

        assert await drag.drag_end(None) is False

        assert column_ids(board_service, "todo") == ["A", "B", "C"]
        assert store.move_calls == []
        assert drag.state is DragState.IDLE

    @pytest.mark.asyncio
    async def test_drop_on_unknown_target(self, board_service, drag, store):
        await board_service.load()
        drag.drag_start("B")

        assert await drag.drag_end("column-archived") is False
        assert store.move_calls == []

    @pytest.mark.asyncio
    async def test_drop_in_place_is_noop(self, board_service, drag, store):
        await board_service.load()
        drag.drag_start("B")

        assert await drag.drag_end("B") is False
        assert store.move_calls == []

    @pytest.mark.asyncio
    async def test_cancel_restores_board(self, board_service, drag, store):
        await board_service.load()
        drag.drag_start("A")
        drag.drag_over("column-completed")

        drag.drag_cancel()

        assert column_ids(board_service, "todo") == ["A", "B", "C"]
        assert drag.state is DragState.IDLE
        assert drag.active_id is None
        assert store.move_calls == []

    @pytest.mark.asyncio
    async def test_drag_start_unknown_task(self, board_service, drag):
        await board_service.load()
        assert drag.drag_start("Z") is False
        assert drag.state is DragState.IDLE

    @pytest.mark.asyncio
    async def test_events_ignored_when_idle(self, board_service, drag, store):
        await board_service.load()
        assert drag.drag_over("A") is None
        assert await drag.drag_end("A") is False
        assert store.move_calls == []

    @pytest.mark.asyncio
    async def test_active_task(self, board_service, drag):
        await board_service.load()
        drag.drag_start("B")
        assert drag.active_task.id == "B"
        assert drag.is_dragging

    @pytest.mark.asyncio
    async def test_origin_columns_ignore_preview(self, board_service, drag):
        await board_service.load()
        drag.drag_start("C")
        drag.drag_over("A")

        assert [t.id for t in drag.origin_columns["todo"]] == ["A", "B", "C"]

    @pytest.mark.asyncio
    async def test_failed_drop_rolls_back(self, board_service, drag, store, notifier):
        await board_service.load()
        store.fail_moves = True
        drag.drag_start("C")
        drag.drag_over("A")

        assert await drag.drag_end("A") is False

        assert column_ids(board_service, "todo") == ["A", "B", "C"]
        assert store.move_calls == [("C", "todo", 0)]
        assert notifier.messages[0][0] == "error"


class TestDragWithGappedPositions:
    """Boards whose stored positions skip numbers."""

    @pytest.fixture
    def gapped(self, notifier) -> tuple[BoardService, DragController, FakeTaskStore]:
        store = FakeTaskStore(
            [
                make_task("A", "todo", 0),
                make_task("B", "todo", 2),
                make_task("C", "todo", 3),
                make_task("X", "in_progress", 10),
                make_task("Y", "in_progress", 20),
            ]
        )
        board_service = BoardService(store)
        drag = DragController(board_service, MoveService(board_service, store, notifier))
        return board_service, drag, store

    @pytest.mark.asyncio
    async def test_reorder_is_persisted(self, gapped):
        board_service, drag, store = gapped
        await board_service.load()

        drag.drag_start("B")
        drag.drag_over("C")
        assert column_ids(board_service, "todo") == ["A", "C", "B"]

        assert await drag.drag_end("C") is True
        assert column_ids(board_service, "todo") == ["A", "C", "B"]
        assert store.move_calls == [("B", "todo", 2)]

    @pytest.mark.asyncio
    async def test_cross_column_drop_sends_target_position(self, gapped):
        board_service, drag, store = gapped
        await board_service.load()
        target = board_service.get_task("Y")

        drag.drag_start("A")
        assert await drag.drag_end("Y") is True

        assert store.move_calls == [("A", "in_progress", target.position)]
        assert column_ids(board_service, "in_progress") == ["X", "A", "Y"]


class TestDragDuringPendingMove:
    """A second drag while an earlier move is still in flight."""

    @pytest.mark.asyncio
    async def test_failed_move_not_reapplied_by_later_drag(self, board_service, drag, store):
        await board_service.load()
        store.gate = asyncio.Event()
        store.fail_moves = True

        drag.drag_start("C")
        pending = asyncio.create_task(drag.drag_end("A"))
        await asyncio.sleep(0)
        assert column_ids(board_service, "todo") == ["C", "A", "B"]

        drag.drag_start("B")
        drag.drag_over("column-in_progress")
        store.gate.set()
        assert await pending is False

        drag.drag_over(None)
        drag.drag_cancel()

        assert column_ids(board_service, "todo") == ["A", "B", "C"]
        assert column_ids(board_service, "in_progress") == []

    @pytest.mark.asyncio
    async def test_preview_follows_rollback(self, board_service, drag, store):
        await board_service.load()
        store.gate = asyncio.Event()
        store.fail_moves = True

        drag.drag_start("C")
        pending = asyncio.create_task(drag.drag_end("A"))
        await asyncio.sleep(0)

        drag.drag_start("B")
        store.gate.set()
        await pending

        drag.drag_over("column-in_progress")

        assert column_ids(board_service, "todo") == ["A", "C"]
        assert column_ids(board_service, "in_progress") == ["B"]

    @pytest.mark.asyncio
    async def test_drop_after_commit_keeps_both_moves(self, board_service, drag, store):
        await board_service.load()
        store.gate = asyncio.Event()

        drag.drag_start("C")
        pending = asyncio.create_task(drag.drag_end("A"))
        await asyncio.sleep(0)

        drag.drag_start("B")
        store.gate.set()
        assert await pending is True
        assert await drag.drag_end("column-completed") is True

        assert column_ids(board_service, "todo") == ["C", "A"]
        assert column_ids(board_service, "completed") == ["B"]
