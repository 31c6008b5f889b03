# tests/test_task_list.py

from __future__ import annotations

from datetime import timedelta

import pytest

from duke_tasks.errors import IndexOutOfRangeError, InvalidArgumentError
from duke_tasks.tasks.task_list import TaskList
from duke_tasks.tasks.task_models import Task

from .conftest import NOW


def _descriptions(tasks: TaskList) -> list[str]:
    return [t.description for t in tasks]


def test_add_then_get_last() -> None:
    tasks = TaskList()
    for desc in ("a", "b", "c"):
        before = tasks.size()
        t = Task.todo(desc)
        assert tasks.add_task(t) is t
        assert tasks.size() == before + 1
        assert tasks.get_task(tasks.size()) is t


def test_add_rejects_none_and_non_tasks() -> None:
    tasks = TaskList()
    with pytest.raises(InvalidArgumentError):
        tasks.add_task(None)  # type: ignore[arg-type]
    with pytest.raises(InvalidArgumentError):
        tasks.add_task("buy milk")  # type: ignore[arg-type]
    assert tasks.size() == 0


@pytest.mark.parametrize("i", [1, 2, 3])
def test_delete_shifts_later_tasks_down(tasks: TaskList, i: int) -> None:
    before = tasks.tasks()
    expected = tasks.get_task(i)

    removed = tasks.delete_task(i)

    assert removed is expected
    assert tasks.size() == len(before) - 1
    for j in range(i + 1, len(before) + 1):
        assert tasks.get_task(j - 1) is before[j - 1]


def test_out_of_range_never_mutates(tasks: TaskList) -> None:
    before = tasks.tasks()
    for bad in (0, -1, tasks.size() + 1, 100):
        with pytest.raises(IndexOutOfRangeError):
            tasks.get_task(bad)
        with pytest.raises(IndexOutOfRangeError):
            tasks.delete_task(bad)
        with pytest.raises(IndexOutOfRangeError):
            tasks.finish_task(bad)
    assert tasks.tasks() == before
    assert not any(t.is_complete for t in tasks)


def test_bool_and_non_int_indexes_rejected(tasks: TaskList) -> None:
    with pytest.raises(IndexOutOfRangeError):
        tasks.get_task(True)  # type: ignore[arg-type]
    with pytest.raises(IndexOutOfRangeError):
        tasks.delete_task("1")  # type: ignore[arg-type]
    assert tasks.size() == 3


def test_out_of_range_error_is_an_index_error_with_message() -> None:
    with pytest.raises(IndexError, match="no tasks"):
        TaskList().get_task(1)
    with pytest.raises(IndexError, match=r"valid: 1\.\.1"):
        TaskList([Task.todo("x")]).get_task(2)


def test_finish_task_idempotent(tasks: TaskList) -> None:
    first = tasks.finish_task(2)
    second = tasks.finish_task(2)
    assert first is second
    assert second.is_complete is True


def test_find_by_keyword_keeps_relative_order(tasks: TaskList) -> None:
    found = tasks.find_tasks_by_keyword("milk")
    assert [t.description for t in found] == ["milk run", "milk shake"]
    assert tasks.find_tasks_by_keyword("cheese") == []
    # the result is a fresh list, not a view
    found.clear()
    assert tasks.size() == 3


def test_scenario_finish_then_remove_completed() -> None:
    tasks = TaskList()
    tasks.add_task(Task.todo("buy milk"))
    tasks.add_task(Task.todo("submit report"))
    tasks.finish_task(1)

    removed = tasks.remove_completed_tasks()

    assert [str(t) for t in removed] == ["[T][X] buy milk"]
    assert tasks.size() == 1
    assert tasks.get_task(1).description == "submit report"


def test_remove_completed_keeps_order_of_both_partitions() -> None:
    tasks = TaskList([Task.todo(d) for d in "abcdef"])
    for n in (2, 3, 6):
        tasks.finish_task(n)

    removed = tasks.remove_completed_tasks()

    assert [t.description for t in removed] == ["b", "c", "f"]
    assert _descriptions(tasks) == ["a", "d", "e"]


def test_remove_completed_does_not_touch_equal_pending_task() -> None:
    done = Task.todo("water plants")
    pending = Task.todo("water plants")
    tasks = TaskList([pending, done])
    tasks.finish_task(2)

    removed = tasks.remove_completed_tasks()

    assert removed == [done] and removed[0] is done
    assert tasks.size() == 1
    assert tasks.get_task(1) is pending


def test_remove_expired_uses_one_instant() -> None:
    tasks = TaskList(
        [
            Task.deadline("old deadline", NOW - timedelta(days=1)),
            Task.todo("plain todo"),
            Task.event("past event", NOW - timedelta(days=3), NOW - timedelta(days=2)),
            Task.deadline("due right now", NOW),
            Task.event("future event", NOW + timedelta(days=1), NOW + timedelta(days=2)),
        ]
    )

    removed = tasks.remove_expired_tasks(NOW)

    assert [t.description for t in removed] == ["old deadline", "past event"]
    assert _descriptions(tasks) == ["plain todo", "due right now", "future event"]


def test_clear_all_returns_removed(tasks: TaskList) -> None:
    removed = tasks.clear_all()
    assert [t.description for t in removed] == ["milk run", "milk shake", "bread"]
    assert tasks.size() == 0
    assert list(tasks) == []


def test_iteration_is_a_snapshot(tasks: TaskList) -> None:
    seen = []
    for task in tasks:
        seen.append(task.description)
        if tasks.size():
            tasks.delete_task(1)
    assert seen == ["milk run", "milk shake", "bread"]
    assert tasks.size() == 0


def test_constructor_copies_existing_sequence() -> None:
    seed = [Task.todo("a"), Task.todo("b")]
    tasks = TaskList(seed)
    seed.append(Task.todo("c"))
    assert len(tasks) == 2
