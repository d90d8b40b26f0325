# tests/test_task_store.py

from __future__ import annotations

import pytest

from simple_todo.errors import ValidationError
from simple_todo.tasks.task_models import Task, TaskIdGenerator
from simple_todo.tasks.task_store import TaskStore


def test_add_prepends_and_captures_timestamps(store: TaskStore) -> None:
    texts = ["first", "second", "third", "fourth"]
    for text in texts:
        store.add(text)

    assert len(store) == len(texts)
    assert [t.text for t in store.tasks] == list(reversed(texts))

    newest = store.tasks[0]
    assert newest.completed is False
    assert newest.created_at == "09:30:00 AM"
    assert newest.created_date == "10/19/2026"


def test_add_trims_text(store: TaskStore) -> None:
    task = store.add("   Buy milk  ")
    assert task.text == "Buy milk"


@pytest.mark.parametrize("raw", ["", "   ", "\t\n"])
def test_add_rejects_blank_text(store: TaskStore, raw: str) -> None:
    store.add("keep")
    with pytest.raises(ValidationError):
        store.add(raw)
    assert len(store) == 1


def test_ids_unique_within_same_clock_tick() -> None:
    s = TaskStore(id_generator=TaskIdGenerator(lambda: 42))
    ids = [s.add(f"t{i}").id for i in range(5)]
    assert len(set(ids)) == 5


def test_id_generator_skips_taken_ids() -> None:
    gen = TaskIdGenerator(lambda: 100)
    assert gen.next_id(taken={"100", "101"}) == "102"
    assert gen.next_id() == "103"


def test_toggle_twice_restores(store: TaskStore) -> None:
    task = store.add("A")
    assert store.toggle(task.id) is True
    assert store.get(task.id).completed is True
    assert store.toggle(task.id) is True
    assert store.get(task.id).completed is False


def test_toggle_unknown_id_is_noop(store: TaskStore) -> None:
    store.add("A")
    store.add("B")
    before = store.tasks
    assert store.toggle("nope") is False
    assert store.tasks == before


def test_toggle_only_flips_target(store: TaskStore) -> None:
    a = store.add("A")
    b = store.add("B")
    c = store.add("C")
    store.toggle(b.id)
    flags = {t.text: t.completed for t in store.tasks}
    assert flags == {"A": False, "B": True, "C": False}
    assert [t.id for t in store.tasks] == [c.id, b.id, a.id]


def test_delete_existing_and_missing(store: TaskStore) -> None:
    a = store.add("A")
    store.add("B")
    assert store.delete(a.id) is True
    assert len(store) == 1
    assert store.delete(a.id) is False
    assert len(store) == 1


def test_delete_all(store: TaskStore) -> None:
    assert store.delete_all() == 0
    store.add("A")
    store.add("B")
    assert store.delete_all() == 2
    assert store.tasks == ()


def test_delete_many_removes_only_listed_ids(store: TaskStore) -> None:
    a, b, c = (store.add(x) for x in "ABC")
    seen: list[tuple[Task, ...]] = []
    store.subscribe(seen.append)

    assert store.delete_many([a.id, c.id, "no-such-id"]) == 2
    assert store.tasks == (b,)
    assert len(seen) == 1

    assert store.delete_many(["no-such-id"]) == 0
    assert store.delete_many([]) == 0
    assert len(seen) == 1


def test_toggle_all_completion(store: TaskStore) -> None:
    assert store.toggle_all_completion() is False

    a = store.add("A")
    store.add("B")
    store.toggle(a.id)

    # mixed -> all done
    assert store.toggle_all_completion() is True
    assert all(t.completed for t in store.tasks)

    # all done -> all pending
    store.toggle_all_completion()
    assert not any(t.completed for t in store.tasks)


def test_toggle_all_twice_restores_uniform_state(store: TaskStore) -> None:
    store.add("A")
    store.add("B")
    original = store.tasks
    store.toggle_all_completion()
    store.toggle_all_completion()
    assert store.tasks == original


def test_clear_completed_keeps_pending_order(store: TaskStore) -> None:
    tasks = [store.add(x) for x in "ABCDE"]
    store.toggle(tasks[1].id)
    store.toggle(tasks[3].id)

    assert store.clear_completed() == 2
    assert [t.text for t in store.tasks] == ["E", "C", "A"]
    assert store.clear_completed() == 0


def test_listeners_only_fire_on_change(store: TaskStore) -> None:
    seen: list[tuple[Task, ...]] = []
    unsubscribe = store.subscribe(seen.append)

    task = store.add("A")
    store.toggle("missing")
    store.delete("missing")
    store.clear_completed()
    store.toggle(task.id)
    assert len(seen) == 2
    assert seen[-1] == store.tasks

    unsubscribe()
    store.add("B")
    assert len(seen) == 2


def test_listener_error_does_not_break_mutation(store: TaskStore) -> None:
    def boom(_tasks) -> None:
        raise RuntimeError("listener broke")

    store.subscribe(boom)
    store.add("A")
    assert len(store) == 1


def test_replace_all_does_not_notify(store: TaskStore) -> None:
    seen = []
    store.subscribe(seen.append)
    store.replace_all([Task(id="1", text="x", completed=True, created_at="t", created_date="d")])
    assert len(store) == 1
    assert seen == []
