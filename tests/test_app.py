from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
from unittest.mock import patch

from conftest import make_module
from palette_navigator.app import (
    SessionExitRequested, cmd_add_media, cmd_add_task, cmd_delete_media, cmd_delete_task,
    cmd_edit_task, cmd_playlists, parse_due_date, run_lesson_session, run_quiz,
    session_int_prompt, session_prompt,
)
from palette_navigator.app_state import AppContext
from palette_navigator.learning import LearningStore
from palette_navigator.media import MediaStore
from palette_navigator.models import MediaType, Task, TaskCategory, TaskPriority
from palette_navigator.tasks import TaskStore


def test_session_exit_requested_is_exception():
    with pytest.raises(SessionExitRequested):
        raise SessionExitRequested()


def test_session_prompt_raises_on_q():
    with patch("palette_navigator.app.Prompt.ask", return_value="q"):
        with pytest.raises(SessionExitRequested):
            session_prompt("test prompt")


def test_session_prompt_raises_on_menu():
    with patch("palette_navigator.app.Prompt.ask", return_value="menu"):
        with pytest.raises(SessionExitRequested):
            session_prompt("test prompt")


def test_session_prompt_returns_normal_input():
    with patch("palette_navigator.app.Prompt.ask", return_value="hello"):
        result = session_prompt("test prompt")
        assert result == "hello"


def test_session_int_prompt_raises_on_q():
    with patch("palette_navigator.app.Prompt.ask", return_value="q"):
        with pytest.raises(SessionExitRequested):
            session_int_prompt("answer", choices=["1", "2", "3", "4"])


def test_session_int_prompt_returns_normal_input():
    with patch("palette_navigator.app.Prompt.ask", return_value="3"):
        result = session_int_prompt("answer", choices=["1", "2", "3", "4"])
        assert result == 3


def _store_on_quiz(ready_db, answers):
    store = LearningStore(ready_db)
    module = make_module(2, quiz_answers=answers)
    store.add_module(module)
    store.start_module(module)
    return store, module


def test_run_quiz_seals_and_scores(ready_db):
    store, module = _store_on_quiz(ready_db, [1, 0])
    # options are shown 1-based
    with patch("palette_navigator.app.Prompt.ask", side_effect=["2", "1"]):
        run_quiz(store)
    quiz = module.lessons[0].quiz
    assert quiz.is_completed is True
    assert quiz.score == 2
    assert module.progress == 0.5


def test_run_quiz_exit_keeps_answered_questions(ready_db):
    store, module = _store_on_quiz(ready_db, [1, 0])
    with patch("palette_navigator.app.Prompt.ask", side_effect=["2", "q"]):
        with pytest.raises(SessionExitRequested):
            run_quiz(store)
    reloaded = LearningStore(ready_db)
    reloaded.load()
    questions = reloaded.find(module.id).lessons[0].quiz.questions
    assert questions[0].user_answer == 1
    assert questions[1].user_answer is None


def test_run_quiz_resumes_unanswered_only(ready_db):
    store, module = _store_on_quiz(ready_db, [1, 0])
    store.submit_quiz_answer(module.lessons[0].quiz.questions[0].id, 1)
    with patch("palette_navigator.app.Prompt.ask", side_effect=["1"]) as ask:
        run_quiz(store)
    assert ask.call_count == 1
    assert module.lessons[0].quiz.score == 2


def test_run_lesson_session_completes_module(ready_db):
    store = LearningStore(ready_db)
    module = make_module(2)
    store.add_module(module)
    with patch("palette_navigator.app.Confirm.ask", return_value=True), \
            patch("palette_navigator.app.Prompt.ask", side_effect=["next", "next"]):
        run_lesson_session(store, module)
    assert module.is_completed is True


def test_cmd_add_task(tmp_db):
    ctx = AppContext.open(tmp_db)
    before = ctx.tasks.total_tasks_count
    with patch("palette_navigator.app.Prompt.ask", side_effect=["Ship it", "", "High", "Business", ""]):
        cmd_add_task(ctx)
    task = ctx.tasks.tasks[-1]
    assert ctx.tasks.total_tasks_count == before + 1
    assert task.title == "Ship it"
    assert task.priority is TaskPriority.HIGH
    assert task.category is TaskCategory.BUSINESS
    assert task.due_date is None


def test_cmd_add_task_requires_title(tmp_db):
    ctx = AppContext.open(tmp_db)
    before = ctx.tasks.total_tasks_count
    with patch("palette_navigator.app.Prompt.ask", side_effect=["   "]):
        cmd_add_task(ctx)
    assert ctx.tasks.total_tasks_count == before


def test_parse_due_date():
    now = datetime(2026, 1, 1, 9, 0)
    assert parse_due_date("", now) is None
    assert parse_due_date("none", now) is None
    assert parse_due_date("2", now) == datetime(2026, 1, 3, 9, 0)
    assert parse_due_date("-1", now) == datetime(2025, 12, 31, 9, 0)
    assert parse_due_date("2026-02-14", now) == datetime(2026, 2, 14)
    with pytest.raises(ValueError):
        parse_due_date("soon", now)


def test_cmd_add_task_with_due_date(tmp_db):
    ctx = AppContext.open(tmp_db)
    with patch("palette_navigator.app.Prompt.ask", side_effect=["Ship it", "", "High", "Business", "3"]):
        cmd_add_task(ctx)
    due = ctx.tasks.tasks[-1].due_date
    assert timedelta(days=2, hours=23) < due - datetime.now() <= timedelta(days=3)


def test_cmd_add_task_rejects_bad_due_date(tmp_db):
    ctx = AppContext.open(tmp_db)
    before = ctx.tasks.total_tasks_count
    with patch("palette_navigator.app.Prompt.ask", side_effect=["Ship it", "", "High", "Business", "soon"]):
        cmd_add_task(ctx)
    assert ctx.tasks.total_tasks_count == before


def test_cmd_edit_task(tmp_db):
    ctx = AppContext.open(tmp_db)
    target = ctx.tasks.tasks[0]
    with patch("palette_navigator.app.IntPrompt.ask", return_value=1), \
            patch("palette_navigator.app.Prompt.ask",
                  side_effect=["Renamed", "new notes", "Low", "Creative", "none"]):
        cmd_edit_task(ctx)
    edited = ctx.tasks.find(target.id)
    assert edited.title == "Renamed"
    assert edited.priority is TaskPriority.LOW
    assert edited.category is TaskCategory.CREATIVE
    assert edited.due_date is None
    reloaded = TaskStore(tmp_db)
    reloaded.load()
    assert reloaded.find(target.id).title == "Renamed"


def test_cmd_edit_task_keeps_values_on_enter(tmp_db):
    ctx = AppContext.open(tmp_db)
    due = datetime(2030, 5, 1, 17, 45)
    task = Task(title="Keep", description="d", priority=TaskPriority.HIGH,
                category=TaskCategory.BUSINESS, due_date=due)
    ctx.tasks.add_task(task)
    index = len(ctx.tasks.tasks)

    def press_enter(prompt, **kwargs):
        return kwargs.get("default", "")

    with patch("palette_navigator.app.IntPrompt.ask", return_value=index), \
            patch("palette_navigator.app.Prompt.ask", side_effect=press_enter):
        cmd_edit_task(ctx)
    kept = ctx.tasks.find(task.id)
    assert kept.title == "Keep"
    assert kept.due_date == due


def test_cmd_delete_task(tmp_db):
    ctx = AppContext.open(tmp_db)
    target = ctx.tasks.tasks[0]
    before = ctx.tasks.total_tasks_count
    with patch("palette_navigator.app.IntPrompt.ask", return_value=1), \
            patch("palette_navigator.app.Confirm.ask", return_value=True):
        cmd_delete_task(ctx)
    assert ctx.tasks.total_tasks_count == before - 1
    assert ctx.tasks.find(target.id) is None


def test_cmd_delete_task_declined(tmp_db):
    ctx = AppContext.open(tmp_db)
    before = ctx.tasks.total_tasks_count
    with patch("palette_navigator.app.IntPrompt.ask", return_value=1), \
            patch("palette_navigator.app.Confirm.ask", return_value=False):
        cmd_delete_task(ctx)
    assert ctx.tasks.total_tasks_count == before


def test_cmd_add_media(tmp_db):
    ctx = AppContext.open(tmp_db)
    with patch("palette_navigator.app.Prompt.ask",
               side_effect=["Rain sounds", "Ambient loop", "Podcast", "Relax", "4"]):
        cmd_add_media(ctx)
    item = ctx.media.media_items[-1]
    assert item.title == "Rain sounds"
    assert item.type is MediaType.PODCAST
    assert item.category == "Relax"
    assert item.rating == 4


def test_cmd_delete_media_removes_from_playlists(tmp_db):
    ctx = AppContext.open(tmp_db)
    item = ctx.media.media_items[0]
    _, playlist = ctx.media.create_playlist("Mine", "", "#ffc934")
    ctx.media.add_to_playlist(item, playlist.id)
    with patch("palette_navigator.app.IntPrompt.ask", return_value=1), \
            patch("palette_navigator.app.Confirm.ask", return_value=True):
        cmd_delete_media(ctx)
    assert ctx.media.find(item.id) is None
    assert not any(p.contains(item.id) for p in ctx.media.playlists)


def test_cmd_playlists_create_reports_write_failure(tmp_db):
    # Database file was never initialized
    ctx = SimpleNamespace(media=MediaStore(tmp_db))
    with patch("palette_navigator.app.Prompt.ask", side_effect=["create", "P", "", "#fff"]), \
            patch("palette_navigator.app.console") as console:
        cmd_playlists(ctx)
    printed = " ".join(str(call.args[0]) for call in console.print.call_args_list)
    assert "could not write" in printed
    assert "Created" not in printed
