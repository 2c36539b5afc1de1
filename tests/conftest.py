import pytest

from palette_navigator.db import init_db
from palette_navigator.learning import LearningStore
from palette_navigator.media import MediaStore
from palette_navigator.models import (
    Difficulty, EducationalModule, EducationCategory, Lesson, Question, Quiz,
)
from palette_navigator.tasks import TaskStore


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_palette.db")
    return db_path


@pytest.fixture
def ready_db(tmp_db):
    init_db(tmp_db)
    return tmp_db


@pytest.fixture
def task_store(ready_db):
    return TaskStore(ready_db)


@pytest.fixture
def media_store(ready_db):
    return MediaStore(ready_db)


@pytest.fixture
def learning_store(ready_db):
    return LearningStore(ready_db)


def make_module(lesson_count=2, quiz_answers=None, title="Module"):
    """Module with lesson_count plain lessons; quiz_answers puts a quiz on the first."""
    lessons = [
        Lesson(title=f"Lesson {i + 1}", content="...", duration=600)
        for i in range(lesson_count)
    ]
    if quiz_answers is not None and lessons:
        lessons[0].quiz = Quiz(questions=[
            Question(text=f"Q{i + 1}", options=["a", "b", "c", "d"], correct_answer=correct)
            for i, correct in enumerate(quiz_answers)
        ])
    return EducationalModule(
        title=title,
        description="A module",
        difficulty=Difficulty.BEGINNER,
        category=EducationCategory.TECHNOLOGY,
        lessons=lessons,
    )
