from palette_navigator.db import init_db
from palette_navigator.models import MediaType, TaskPriority
from palette_navigator.seed import (
    is_seeded, seed_media_items, seed_modules, seed_playlists, seed_tasks,
)
from palette_navigator.tasks import TaskStore


def test_seed_tasks():
    tasks = seed_tasks()
    assert len(tasks) == 4
    assert tasks[0].title == "Design App Mockups"
    assert tasks[0].priority is TaskPriority.HIGH
    assert all(t.due_date is not None for t in tasks)
    assert all(not t.is_completed for t in tasks)


def test_seed_media_items():
    items = seed_media_items()
    assert len(items) == 5
    assert {i.type for i in items} == set(MediaType)
    assert all(not i.is_favorite for i in items)


def test_seed_playlists_start_empty():
    playlists = seed_playlists()
    assert [p.name for p in playlists] == ["Creative Palette", "Focus Collection"]
    assert all(p.items == [] for p in playlists)


def test_seed_modules():
    modules = seed_modules()
    assert len(modules) == 4
    swift = modules[0]
    assert len(swift.lessons) == 3
    quiz = swift.lessons[0].quiz
    assert len(quiz.questions) == 2
    assert [q.correct_answer for q in quiz.questions] == [1, 1]
    assert swift.lessons[1].quiz is None
    assert all(m.progress == 0.0 for m in modules)


def test_seed_ids_are_fresh_each_call():
    assert seed_tasks()[0].id != seed_tasks()[0].id


def test_is_seeded(tmp_db):
    init_db(tmp_db)
    assert not is_seeded(tmp_db)
    TaskStore(tmp_db).bootstrap(seed_tasks)
    assert is_seeded(tmp_db)
