"""Tests for the pointer gesture state machine."""

from datetime import date
from itertools import count
from unittest.mock import MagicMock

import pytest

from planner.core.gestures import (
    EDGE_ZONE_PX,
    RESIZE_CURSOR,
    MOVE_CURSOR,
    Creating,
    Edge,
    GestureController,
    Idle,
    Moving,
    Resizing,
    classify_press,
)
from planner.core.tasks import Category, TaskStore

CHIP_WIDTH = 120


@pytest.fixture
def store():
    ids = count(1)
    return TaskStore(id_factory=lambda: f"t{next(ids)}")


@pytest.fixture
def task(store):
    return store.create("Design review", Category.TODO, date(2024, 3, 10), date(2024, 3, 12))


@pytest.fixture
def on_create():
    return MagicMock()


@pytest.fixture
def controller(store, on_create):
    return GestureController(store, creation_handler=on_create)


def snapshot(store):
    return [(t.id, t.name, t.category, t.start_date, t.end_date) for t in store.all()]


class TestClassifyPress:
    def test_left_edge_zone(self):
        assert classify_press(0, CHIP_WIDTH) is Edge.START
        assert classify_press(9.9, CHIP_WIDTH) is Edge.START

    def test_right_edge_zone(self):
        assert classify_press(CHIP_WIDTH - 9, CHIP_WIDTH) is Edge.END

    def test_body(self):
        assert classify_press(10, CHIP_WIDTH) is None
        assert classify_press(60, CHIP_WIDTH) is None
        assert classify_press(CHIP_WIDTH - 10, CHIP_WIDTH) is None

    def test_custom_zone(self):
        assert classify_press(15, CHIP_WIDTH, edge_zone_px=20) is Edge.START

    def test_default_zone(self):
        assert EDGE_ZONE_PX == 10


class TestCreate:
    def test_press_on_empty_cell_starts_selection(self, controller):
        controller.pointer_down_on_empty_cell(date(2024, 3, 10))
        assert controller.state == Creating(date(2024, 3, 10), date(2024, 3, 10))

    def test_move_tracks_current(self, controller):
        controller.pointer_down_on_empty_cell(date(2024, 3, 10))
        controller.pointer_move(date(2024, 3, 14))
        assert controller.state == Creating(date(2024, 3, 10), date(2024, 3, 14))
        assert controller.selection_preview() == [date(2024, 3, d) for d in range(10, 15)]

    def test_release_hands_off_normalized_range(self, controller, on_create, store):
        controller.pointer_down_on_empty_cell(date(2024, 3, 14))
        controller.pointer_move(date(2024, 3, 10))
        controller.pointer_up()
        on_create.request_creation.assert_called_once_with(date(2024, 3, 10), date(2024, 3, 14))
        assert isinstance(controller.state, Idle)
        assert len(store) == 0

    def test_backwards_drag_preview_is_chronological(self, controller):
        controller.pointer_down_on_empty_cell(date(2024, 3, 12))
        controller.pointer_move(date(2024, 3, 10))
        assert controller.selection_preview() == [date(2024, 3, 10), date(2024, 3, 11), date(2024, 3, 12)]

    def test_leaving_surface_discards(self, controller, on_create):
        controller.pointer_down_on_empty_cell(date(2024, 3, 10))
        controller.pointer_move(date(2024, 3, 11))
        controller.pointer_leave_surface()
        on_create.request_creation.assert_not_called()
        assert isinstance(controller.state, Idle)
        assert controller.selection_preview() == []

    def test_without_handler_release_just_goes_idle(self, store):
        controller = GestureController(store)
        controller.pointer_down_on_empty_cell(date(2024, 3, 10))
        controller.pointer_up()
        assert controller.is_idle


class TestMove:
    def test_press_in_middle_starts_move(self, controller, task):
        controller.pointer_down_on_task(task.id, 60, CHIP_WIDTH)
        assert controller.state == Moving(task.id, date(2024, 3, 10), date(2024, 3, 12))
        assert controller.cursor == MOVE_CURSOR

    def test_drag_preserves_duration(self, controller, task, store):
        controller.pointer_down_on_task(task.id, 60, CHIP_WIDTH)
        controller.pointer_move(date(2024, 3, 15))
        assert controller.state.provisional_end == date(2024, 3, 17)
        # Store untouched until release
        assert store.get(task.id).start_date == date(2024, 3, 10)
        controller.pointer_up()
        assert (task.start_date, task.end_date) == (date(2024, 3, 15), date(2024, 3, 17))

    @pytest.mark.parametrize("target", [date(2024, 2, 27), date(2024, 3, 11), date(2024, 12, 30)])
    def test_duration_preserved_for_any_target(self, controller, task, target):
        controller.pointer_down_on_task(task.id, 50, CHIP_WIDTH)
        controller.pointer_move(target)
        controller.pointer_up()
        assert task.start_date == target
        assert task.duration_days == 2

    def test_leaving_surface_commits(self, controller, task):
        controller.pointer_down_on_task(task.id, 60, CHIP_WIDTH)
        controller.pointer_move(date(2024, 3, 20))
        controller.pointer_leave_surface()
        assert (task.start_date, task.end_date) == (date(2024, 3, 20), date(2024, 3, 22))
        assert controller.is_idle

    def test_release_without_move_is_noop(self, controller, task, store):
        before = snapshot(store)
        controller.pointer_down_on_task(task.id, 60, CHIP_WIDTH)
        controller.pointer_up()
        assert snapshot(store) == before

    def test_provisional_range_lookup(self, controller, task):
        controller.pointer_down_on_task(task.id, 60, CHIP_WIDTH)
        controller.pointer_move(date(2024, 3, 1))
        assert controller.provisional_range(task.id) == (date(2024, 3, 1), date(2024, 3, 3))
        assert controller.provisional_range("other") is None
        assert controller.active_task_id == task.id


class TestResize:
    def test_press_near_left_edge_resizes_start(self, controller, task):
        controller.pointer_down_on_task(task.id, 2, CHIP_WIDTH)
        assert controller.state == Resizing(task.id, Edge.START, date(2024, 3, 10), date(2024, 3, 12))
        assert controller.cursor == RESIZE_CURSOR

    def test_press_near_right_edge_resizes_end(self, controller, task):
        controller.pointer_down_on_task(task.id, CHIP_WIDTH - 2, CHIP_WIDTH)
        assert controller.state.edge is Edge.END

    def test_resize_start_scenario(self, controller, task):
        controller.pointer_down_on_task(task.id, 2, CHIP_WIDTH)
        controller.pointer_move(date(2024, 3, 9))
        controller.pointer_up()
        assert (task.start_date, task.end_date) == (date(2024, 3, 9), date(2024, 3, 12))

    def test_start_cannot_cross_end(self, controller, task):
        controller.pointer_down_on_task(task.id, 2, CHIP_WIDTH)
        controller.pointer_move(date(2024, 3, 11))
        controller.pointer_move(date(2024, 3, 14))
        assert controller.state.provisional_start == date(2024, 3, 11)
        controller.pointer_move(date(2024, 3, 12))
        assert controller.state.provisional_start == date(2024, 3, 12)
        controller.pointer_up()
        assert task.start_date == task.end_date == date(2024, 3, 12)

    def test_end_cannot_cross_start(self, controller, task):
        controller.pointer_down_on_task(task.id, CHIP_WIDTH - 1, CHIP_WIDTH)
        controller.pointer_move(date(2024, 3, 5))
        assert controller.state.provisional_end == date(2024, 3, 12)
        controller.pointer_move(date(2024, 3, 18))
        controller.pointer_up()
        assert (task.start_date, task.end_date) == (date(2024, 3, 10), date(2024, 3, 18))

    def test_invariant_holds_over_any_drag(self, controller, task):
        controller.pointer_down_on_task(task.id, 1, CHIP_WIDTH)
        for day in [1, 20, 5, 13, 12, 30]:
            controller.pointer_move(date(2024, 3, day))
            assert controller.state.provisional_start <= controller.state.provisional_end
        controller.pointer_up()
        assert task.start_date <= task.end_date


class TestExclusivity:
    def test_second_press_ignored_while_active(self, controller, task):
        controller.pointer_down_on_task(task.id, 60, CHIP_WIDTH)
        controller.pointer_down_on_empty_cell(date(2024, 3, 1))
        assert isinstance(controller.state, Moving)

    def test_events_in_idle_are_noops(self, controller, store, task, on_create):
        before = snapshot(store)
        controller.pointer_move(date(2024, 3, 1))
        controller.pointer_up()
        controller.pointer_leave_surface()
        assert controller.is_idle
        assert snapshot(store) == before
        on_create.request_creation.assert_not_called()

    def test_press_on_unknown_task_stays_idle(self, controller):
        controller.pointer_down_on_task("missing", 60, CHIP_WIDTH)
        assert controller.is_idle

    def test_task_vanishing_mid_move_is_not_fatal(self, controller, task, store):
        controller.pointer_down_on_task(task.id, 60, CHIP_WIDTH)
        store._tasks.clear()
        controller.pointer_move(date(2024, 3, 20))
        controller.pointer_up()
        assert controller.is_idle
        assert len(store) == 0
