"""First-run sample data for tasks, media and learning modules."""
import json
from datetime import datetime, timedelta
from pathlib import Path

from palette_navigator.models import (
    Difficulty, EducationalModule, EducationCategory, Lesson, MediaItem,
    MediaType, Playlist, Question, Quiz, Task, TaskCategory, TaskPriority,
)
from palette_navigator.storage import TASKS_KEY, get_bytes

CONTENT_DIR = Path(__file__).parent / "content"


def _read_content(name: str) -> dict:
    return json.loads((CONTENT_DIR / name).read_text(encoding="utf-8"))


def is_seeded(db_path: str) -> bool:
    """Check whether the task collection has ever been written."""
    return get_bytes(db_path, TASKS_KEY) is not None


def seed_tasks() -> list[Task]:
    """Sample tasks from tasks.json, due dates relative to now."""
    now = datetime.now()
    tasks = []
    for t in _read_content("tasks.json")["tasks"]:
        due = now + timedelta(days=t["due_in_days"]) if "due_in_days" in t else None
        tasks.append(Task(
            title=t["title"],
            description=t["description"],
            priority=TaskPriority(t["priority"]),
            category=TaskCategory(t["category"]),
            due_date=due,
        ))
    return tasks


def seed_media_items() -> list[MediaItem]:
    return [
        MediaItem(
            title=m["title"],
            description=m["description"],
            type=MediaType(m["type"]),
            category=m["category"],
            rating=m.get("rating", 0),
            image_name=m.get("image_name"),
        )
        for m in _read_content("media.json")["media_items"]
    ]


def seed_playlists() -> list[Playlist]:
    return [
        Playlist(name=p["name"], description=p["description"], color_theme=p["color_theme"])
        for p in _read_content("media.json")["playlists"]
    ]


def _build_lesson(data: dict) -> Lesson:
    quiz = None
    if data.get("quiz"):
        quiz = Quiz(questions=[
            Question(
                text=q["text"],
                options=q["options"],
                correct_answer=q["correct_answer"],
                explanation=q.get("explanation", ""),
            )
            for q in data["quiz"]
        ])
    return Lesson(
        title=data["title"],
        content=data["content"],
        duration=float(data["duration"]),
        quiz=quiz,
    )


def seed_modules() -> list[EducationalModule]:
    """Sample modules from modules.json, each with its lessons and quizzes."""
    return [
        EducationalModule(
            title=m["title"],
            description=m["description"],
            difficulty=Difficulty(m["difficulty"]),
            category=EducationCategory(m["category"]),
            lessons=[_build_lesson(l) for l in m["lessons"]],
        )
        for m in _read_content("modules.json")["modules"]
    ]
