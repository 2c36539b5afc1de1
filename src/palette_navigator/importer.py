"""Bulk import of tasks and media items from JSON, YAML or plain text."""
import json
import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from palette_navigator.errors import Status
from palette_navigator.media import MediaStore
from palette_navigator.models import MediaItem, MediaType, Task, TaskCategory, TaskPriority
from palette_navigator.tasks import TaskStore

logger = logging.getLogger(__name__)

# Keyword mapping for auto-categorization
CATEGORY_KEYWORDS = {
    TaskCategory.BUSINESS: ["meeting", "client", "report", "budget", "invoice", "presentation", "quarterly", "deadline", "review", "proposal"],
    TaskCategory.PERSONAL: ["groceries", "doctor", "gym", "family", "birthday", "home", "clean", "laundry", "call mom", "dentist"],
    TaskCategory.CREATIVE: ["design", "draw", "sketch", "color", "palette", "mockup", "write", "paint", "photo", "music"],
    TaskCategory.EDUCATION: ["learn", "course", "study", "read", "tutorial", "lesson", "exam", "practice", "lecture", "homework"],
}


@dataclass
class ImportResult:
    filename: str
    added: int = 0
    skipped: int = 0


def read_records(file_path: str) -> list:
    """Return a list of raw entries (dicts or title strings) from a file."""
    path = Path(file_path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        data = json.loads(path.read_text())
    elif suffix in (".yaml", ".yml"):
        data = yaml.safe_load(path.read_text())
    else:
        # One title per line
        return [line.strip() for line in path.read_text().splitlines() if line.strip()]

    if isinstance(data, dict):
        for key in ("tasks", "items", "media_items"):
            if isinstance(data.get(key), list):
                return data[key]
        return [data]
    return data if isinstance(data, list) else []


def categorize_task(text: str) -> TaskCategory:
    """Auto-categorize by keyword matching. Falls back to Personal."""
    text_lower = text.lower()
    scores = {
        category: sum(1 for kw in keywords if kw in text_lower)
        for category, keywords in CATEGORY_KEYWORDS.items()
    }
    best = max(scores, key=scores.get)
    return best if scores[best] > 0 else TaskCategory.PERSONAL


def _enum_or(enum_cls, value, default):
    try:
        return enum_cls(str(value).capitalize())
    except ValueError:
        return default


def _int_or(value, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_entry(raw) -> dict:
    if isinstance(raw, str):
        return {"title": raw}
    return raw if isinstance(raw, dict) else {}


def build_task(raw) -> Task | None:
    entry = _as_entry(raw)
    title = str(entry.get("title", "")).strip()
    if not title:
        return None
    description = str(entry.get("description", ""))
    if "category" in entry:
        category = _enum_or(TaskCategory, entry["category"], categorize_task(f"{title} {description}"))
    else:
        category = categorize_task(f"{title} {description}")
    return Task(
        title=title,
        description=description,
        priority=_enum_or(TaskPriority, entry.get("priority", "Medium"), TaskPriority.MEDIUM),
        category=category,
    )


def build_media_item(raw) -> MediaItem | None:
    entry = _as_entry(raw)
    title = str(entry.get("title", "")).strip()
    if not title:
        return None
    return MediaItem(
        title=title,
        description=str(entry.get("description", "")),
        type=_enum_or(MediaType, entry.get("type", "Music"), MediaType.MUSIC),
        category=str(entry.get("category", "")),
        rating=min(max(_int_or(entry.get("rating", 0), 0), 0), 5),
        image_name=entry.get("image_name") if isinstance(entry.get("image_name"), str) else None,
    )


def _import(file_path: str, build, add) -> ImportResult:
    result = ImportResult(filename=Path(file_path).name)
    for raw in read_records(file_path):
        record = build(raw)
        if record is None:
            result.skipped += 1
            continue
        if add(record) is Status.WRITE_ERROR:
            logger.error("Imported %s but it could not be saved", record.title)
        result.added += 1
    logger.info("Imported %d records from %s (%d skipped)",
                result.added, result.filename, result.skipped)
    return result


def import_tasks(store: TaskStore, file_path: str) -> ImportResult:
    return _import(file_path, build_task, store.add_task)


def import_media_items(store: MediaStore, file_path: str) -> ImportResult:
    return _import(file_path, build_media_item, store.add_media_item)
