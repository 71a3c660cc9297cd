# tests/test_actions.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskshell.engine import actions, ops
from taskshell.engine.actions import Outcome
from taskshell.engine.categories import create_category, list_categories
from taskshell.engine.model import Status, Task

from .fakes import ScriptedReader


def _store(tasks_file: Path, *tasks: Task) -> None:
    ops.write_all(tasks_file, list(tasks))


# ---------------------------------------------------------------------
# create
# ---------------------------------------------------------------------

def test_create_defaults(tasks_file: Path) -> None:
    result = actions.create_task(tasks_file, "write report")

    assert result.outcome is Outcome.CREATED
    (task,) = ops.read_all(tasks_file)
    assert task == result.tasks[0]
    assert task.status is Status.TODO
    assert task.date == "01/01/2024"
    assert task.category is None


def test_create_date_resolution(tasks_file: Path) -> None:
    actions.create_task(tasks_file, "a", tomorrow=True)
    actions.create_task(tasks_file, "b", date="15/02/2024", tomorrow=True)
    actions.create_task(tasks_file, "c", date="tomorrow")

    assert [t.date for t in ops.read_all(tasks_file)] == ["02/01/2024", "15/02/2024", "02/01/2024"]


def test_create_with_status(tasks_file: Path) -> None:
    result = actions.create_task(tasks_file, "done already", status="done")
    assert result.tasks[0].status is Status.DONE


def test_create_rejects_bad_input_without_writing(tasks_file: Path) -> None:
    assert actions.create_task(tasks_file, "x", status="LATER").outcome is Outcome.INVALID
    assert actions.create_task(tasks_file, "x", date="2024-01-05").outcome is Outcome.INVALID
    assert actions.create_task(tasks_file, "   ").outcome is Outcome.INVALID
    assert tasks_file.read_text(encoding="utf-8") == ""


def test_created_ids_are_unique(tasks_file: Path) -> None:
    for i in range(50):
        actions.create_task(tasks_file, f"task {i}")

    ids = [t.id for t in ops.read_all(tasks_file)]
    assert len(ids) == 50
    assert len(set(ids)) == 50


def test_create_with_existing_category_does_not_prompt(tasks_file: Path, categories_file: Path) -> None:
    create_category(categories_file, "Work")
    reader = ScriptedReader()

    result = actions.create_task(
        tasks_file, "report", category="Work", categories_file=categories_file, reader=reader
    )

    assert result.tasks[0].category == "Work"
    assert reader.prompts == []


def test_create_with_declined_category_still_creates(tasks_file: Path, categories_file: Path) -> None:
    result = actions.create_task(
        tasks_file, "report", category="Work", categories_file=categories_file, reader=ScriptedReader("n")
    )

    assert result.outcome is Outcome.CREATED
    assert ops.read_all(tasks_file)[0].category is None
    assert list_categories(categories_file) == []


def test_create_with_category_requires_category_file(tasks_file: Path) -> None:
    with pytest.raises(ValueError):
        actions.create_task(tasks_file, "report", category="Work")


# ---------------------------------------------------------------------
# verify_category
# ---------------------------------------------------------------------

def test_verify_category_yes_creates(categories_file: Path) -> None:
    assert actions.verify_category(categories_file, "Work", ScriptedReader("y")) is True
    assert list_categories(categories_file) == ["Work"]


def test_verify_category_no_leaves_store_unchanged(categories_file: Path) -> None:
    categories_file.write_text("Home", encoding="utf-8")

    assert actions.verify_category(categories_file, "Work", ScriptedReader("n")) is False
    assert categories_file.read_text(encoding="utf-8") == "Home"


def test_verify_category_reprompts_on_garbage(categories_file: Path) -> None:
    reader = ScriptedReader("maybe", "", "YES")

    assert actions.verify_category(categories_file, "Work", reader) is True
    assert len(reader.prompts) == 3


def test_verify_category_eof_counts_as_no(categories_file: Path) -> None:
    assert actions.verify_category(categories_file, "Work", ScriptedReader()) is False


# ---------------------------------------------------------------------
# update / status / category
# ---------------------------------------------------------------------

def test_update_fields(tasks_file: Path) -> None:
    task = Task(description="old", date="01/01/2024")
    _store(tasks_file, task)

    result = actions.update_fields(tasks_file, task.id, description="new", date="05/01/2024")

    assert result.outcome is Outcome.UPDATED
    (stored,) = ops.read_all(tasks_file)
    assert (stored.id, stored.description, stored.date) == (task.id, "new", "05/01/2024")


def test_update_keeps_unset_fields(tasks_file: Path) -> None:
    task = Task(description="old", date="01/01/2024")
    _store(tasks_file, task)

    actions.update_fields(tasks_file, task.id, date="03/01/2024")
    assert ops.read_all(tasks_file)[0].description == "old"


def test_update_unknown_id_is_reported(tasks_file: Path) -> None:
    _store(tasks_file, Task(description="a"))
    before = tasks_file.read_bytes()

    result = actions.update_fields(tasks_file, "nope", description="b")

    assert result.outcome is Outcome.NOT_FOUND
    assert "nope" in result.message
    assert tasks_file.read_bytes() == before


def test_update_with_bad_date_does_not_write(tasks_file: Path) -> None:
    task = Task(description="a")
    _store(tasks_file, task)
    before = tasks_file.read_bytes()

    assert actions.update_fields(tasks_file, task.id, date="99/99/2024").outcome is Outcome.INVALID
    assert tasks_file.read_bytes() == before


def test_set_status_round_trip(tasks_file: Path) -> None:
    task = Task(description="a")
    _store(tasks_file, task)

    assert actions.set_status(tasks_file, task.id, "DONE").ok
    assert ops.read_all(tasks_file)[0].status is Status.DONE

    assert actions.set_status(tasks_file, task.id, Status.TODO).ok
    assert ops.read_all(tasks_file)[0].status is Status.TODO

    assert actions.set_status(tasks_file, task.id, "WAITING").outcome is Outcome.INVALID


def test_set_category(tasks_file: Path, categories_file: Path) -> None:
    task = Task(description="a")
    _store(tasks_file, task)

    result = actions.set_category(tasks_file, categories_file, task.id, "Work", ScriptedReader("y"))

    assert result.outcome is Outcome.UPDATED
    assert ops.read_all(tasks_file)[0].category == "Work"
    assert list_categories(categories_file) == ["Work"]


def test_set_category_declined_aborts(tasks_file: Path, categories_file: Path) -> None:
    task = Task(description="a")
    _store(tasks_file, task)
    before = tasks_file.read_bytes()

    result = actions.set_category(tasks_file, categories_file, task.id, "Work", ScriptedReader("n"))

    assert result.outcome is Outcome.ABORTED
    assert tasks_file.read_bytes() == before


def test_set_category_unknown_task_does_not_prompt(tasks_file: Path, categories_file: Path) -> None:
    _store(tasks_file, Task(description="a"))
    reader = ScriptedReader("y")

    result = actions.set_category(tasks_file, categories_file, "nope", "Work", reader)

    assert result.outcome is Outcome.NOT_FOUND
    assert reader.prompts == []


# ---------------------------------------------------------------------
# delete
# ---------------------------------------------------------------------

def test_delete_removes_task(tasks_file: Path) -> None:
    keep, drop = Task(description="keep"), Task(description="drop")
    _store(tasks_file, keep, drop)

    result = actions.delete_task(tasks_file, drop.id)

    assert result.outcome is Outcome.DELETED
    assert ops.read_all(tasks_file) == [keep]


def test_delete_missing_id_is_idempotent(tasks_file: Path) -> None:
    _store(tasks_file, Task(description="a"), Task(description="b"))
    before = ops.render_tasks(ops.read_all(tasks_file))

    result = actions.delete_task(tasks_file, "does-not-exist")

    assert result.outcome is Outcome.NOT_FOUND
    assert ops.render_tasks(ops.read_all(tasks_file)) == before


def test_delete_on_empty_store_keeps_file_empty(tasks_file: Path) -> None:
    actions.delete_task(tasks_file, "x")
    assert tasks_file.read_text(encoding="utf-8") == ""


# ---------------------------------------------------------------------
# move_incomplete
# ---------------------------------------------------------------------

def test_move_clones_only_undone_tasks(tasks_file: Path) -> None:
    a = Task(description="A", date="01/01/2024", category="Work")
    b = Task(description="B", status=Status.DONE, date="01/01/2024")
    other = Task(description="C", date="05/01/2024")
    _store(tasks_file, a, b, other)

    result = actions.move_incomplete(tasks_file, "01/01/2024", "02/01/2024", reader=ScriptedReader("y"))

    assert result.outcome is Outcome.MOVED
    stored = ops.read_all(tasks_file)
    assert stored[:3] == [a, b, other]

    new = stored[3:]
    assert len(new) == 1
    (clone,) = new
    assert clone == result.tasks[0]
    assert clone.date == "02/01/2024"
    assert clone.status is Status.TODO
    assert clone.description == "A"
    assert clone.category == "Work"
    assert clone.id not in {a.id, b.id, other.id}


def test_move_defaults_today_to_tomorrow(tasks_file: Path) -> None:
    _store(tasks_file, Task(description="A", date="01/01/2024"))
    reader = ScriptedReader("yes")

    actions.move_incomplete(tasks_file, reader=reader)

    assert reader.prompts == ["Do you want to move undone tasks from 01/01/2024 to 02/01/2024? (y/n) "]
    assert [t.date for t in ops.read_all(tasks_file)] == ["01/01/2024", "02/01/2024"]


def test_move_rejects_reversed_dates(tasks_file: Path) -> None:
    _store(tasks_file, Task(description="A", date="02/01/2024"))
    before = tasks_file.read_bytes()

    result = actions.move_incomplete(tasks_file, "02/01/2024", "01/01/2024", reader=ScriptedReader("y"))

    assert result.outcome is Outcome.REJECTED
    assert tasks_file.read_bytes() == before


@pytest.mark.parametrize("answer", ["n", "no", "sure", ""])
def test_move_aborts_unless_confirmed(tasks_file: Path, answer: str) -> None:
    _store(tasks_file, Task(description="A", date="01/01/2024"))
    before = tasks_file.read_bytes()

    result = actions.move_incomplete(tasks_file, "01/01/2024", "02/01/2024", reader=ScriptedReader(answer))

    assert result.outcome is Outcome.ABORTED
    assert result.message == "Aborted"
    assert tasks_file.read_bytes() == before


def test_move_with_bad_date_is_reported(tasks_file: Path) -> None:
    _store(tasks_file, Task(description="A", date="01/01/2024"))
    before = tasks_file.read_bytes()

    result = actions.move_incomplete(tasks_file, "01-01-2024", "02/01/2024", reader=ScriptedReader("y"))

    assert result.outcome is Outcome.INVALID
    assert tasks_file.read_bytes() == before


def test_move_with_nothing_to_move(tasks_file: Path) -> None:
    _store(tasks_file, Task(description="A", status=Status.DONE, date="01/01/2024"))
    before = tasks_file.read_bytes()

    result = actions.move_incomplete(tasks_file, reader=ScriptedReader("y"))

    assert result.outcome is Outcome.MOVED
    assert result.tasks == ()
    assert tasks_file.read_bytes() == before


# ---------------------------------------------------------------------
# list / failures
# ---------------------------------------------------------------------

def test_list_distinguishes_empty_store(tasks_file: Path) -> None:
    empty = actions.list_tasks(tasks_file)
    assert not empty.ok
    assert empty.store_empty

    _store(tasks_file, Task(description="later", date="09/09/2024"))
    no_match = actions.list_tasks(tasks_file)
    assert not no_match.ok
    assert not no_match.store_empty
    assert no_match.message != empty.message


def test_list_rejects_malformed_date(tasks_file: Path) -> None:
    _store(tasks_file, Task(description="a"))
    result = actions.list_tasks(tasks_file, date="1/1/24")
    assert result.failed


def test_corrupted_store_is_reported_not_raised(tasks_file: Path) -> None:
    tasks_file.write_text("[{oops", encoding="utf-8")

    assert actions.set_status(tasks_file, "x", "DONE").outcome is Outcome.FAILED
    assert actions.delete_task(tasks_file, "x").outcome is Outcome.FAILED
    assert actions.list_tasks(tasks_file).failed
    assert tasks_file.read_text(encoding="utf-8") == "[{oops"


def test_missing_store_is_reported(tmp_path: Path) -> None:
    result = actions.create_task(tmp_path / "missing.json", "a")
    assert result.outcome is Outcome.FAILED
    assert "Try again later" in result.message


def test_category_actions(categories_file: Path) -> None:
    assert actions.add_category(categories_file, "Work").outcome is Outcome.CREATED
    assert actions.add_category(categories_file, " ").outcome is Outcome.INVALID
    assert actions.remove_category(categories_file, "Gym").outcome is Outcome.NOT_FOUND
    assert actions.remove_category(categories_file, "Work").outcome is Outcome.DELETED
    assert list_categories(categories_file) == []


def test_create_on_corrupted_store_fails_without_writing(tasks_file: Path) -> None:
    tasks_file.write_text("[{oops]", encoding="utf-8")

    result = actions.create_task(tasks_file, "a")

    assert result.outcome is Outcome.FAILED
    assert tasks_file.read_text(encoding="utf-8") == "[{oops]"


def test_failed_create_leaves_categories_unchanged(tasks_file: Path, categories_file: Path) -> None:
    tasks_file.write_text("{oops", encoding="utf-8")
    reader = ScriptedReader("y")

    result = actions.create_task(
        tasks_file, "report", category="Work", categories_file=categories_file, reader=reader
    )

    assert result.outcome is Outcome.FAILED
    assert reader.prompts == []
    assert categories_file.read_text(encoding="utf-8") == ""


def test_list_accepts_date_keywords(tasks_file: Path) -> None:
    _store(
        tasks_file,
        Task(description="now", date="01/01/2024"),
        Task(description="next", date="02/01/2024"),
    )

    assert [t.description for t in actions.list_tasks(tasks_file, date="tomorrow").tasks] == ["next"]
    assert [t.description for t in actions.list_tasks(tasks_file, date="Today").tasks] == ["now"]
