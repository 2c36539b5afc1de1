"""Progress overview statistics for each area."""
from palette_navigator.learning import LearningStore, completed_lessons_count, module_duration
from palette_navigator.media import MediaStore
from palette_navigator.models import EducationCategory, MediaType
from palette_navigator.tasks import TaskStore


def get_progress_label(score: float) -> str:
    if score >= 80:
        return "MASTERED"
    elif score >= 50:
        return "ON TRACK"
    elif score > 0:
        return "STARTED"
    return "NOT STARTED"


def get_progress_color(score: float) -> str:
    if score >= 80:
        return "green"
    elif score >= 50:
        return "yellow"
    elif score > 0:
        return "dark_orange"
    return "red"


def get_task_stats(store: TaskStore) -> dict:
    return {
        "total": store.total_tasks_count,
        "completed": store.completed_tasks_count,
        "progress": round(store.completion_progress * 100, 1),
        "overdue": len(store.overdue_tasks()),
    }


def get_media_stats(store: MediaStore) -> dict:
    items = store.media_items
    by_type = {t: 0 for t in MediaType}
    for item in items:
        by_type[item.type] += 1
    avg_rating = sum(i.rating for i in items) / len(items) if items else 0.0
    return {
        "total": len(items),
        "favorites": len(store.favorite_items),
        "playlists": len(store.playlists),
        "by_type": by_type,
        "avg_rating": round(avg_rating, 1),
    }


def get_learning_stats(store: LearningStore) -> dict:
    modules = store.modules
    per_category = {c: 0 for c in EducationCategory}
    for m in modules:
        per_category[m.category] += 1
    return {
        "total_modules": store.total_modules_count,
        "completed_modules": store.completed_modules_count,
        "overall_progress": round(store.overall_progress * 100, 1),
        "lessons_completed": sum(completed_lessons_count(m) for m in modules),
        "total_lessons": sum(len(m.lessons) for m in modules),
        "study_time": sum(module_duration(m) for m in modules),
        "per_category": {c: n for c, n in per_category.items() if n > 0},
    }
