"""Task coordinator: prioritized, categorized to-do items."""
from datetime import datetime, timedelta
from typing import Optional

from palette_navigator.errors import Status
from palette_navigator.models import Task, TaskCategory, TaskPriority
from palette_navigator.storage import TASKS_KEY
from palette_navigator.store import CollectionStore


class TaskStore(CollectionStore):
    key = TASKS_KEY
    record_type = Task
    text_fields = ("title", "description")
    filter_fields = {"selected_category": "category", "selected_priority": "priority"}
    group_field = "category"

    selected_category: Optional[TaskCategory]
    selected_priority: Optional[TaskPriority]

    @property
    def tasks(self) -> list[Task]:
        return self.records

    @property
    def filtered_tasks(self) -> list[Task]:
        return self.filtered

    @property
    def tasks_by_category(self) -> dict[TaskCategory, list[Task]]:
        return self.grouped

    @property
    def completed_tasks_count(self) -> int:
        return sum(1 for t in self.records if t.is_completed)

    @property
    def total_tasks_count(self) -> int:
        return len(self.records)

    @property
    def completion_progress(self) -> float:
        if self.total_tasks_count == 0:
            return 0.0
        return self.completed_tasks_count / self.total_tasks_count

    def overdue_tasks(self, now: Optional[datetime] = None) -> list[Task]:
        now = now or datetime.now()
        return [
            t for t in self.records
            if not t.is_completed and t.due_date is not None and t.due_date < now
        ]

    def tasks_due_within(self, days: int, now: Optional[datetime] = None) -> list[Task]:
        """Incomplete tasks due between now and now + days, soonest first."""
        now = now or datetime.now()
        horizon = now + timedelta(days=days)
        due = [
            t for t in self.records
            if not t.is_completed and t.due_date is not None and now <= t.due_date <= horizon
        ]
        return sorted(due, key=lambda t: t.due_date)

    def add_task(self, task: Task) -> Status:
        return self.add(task)

    def update_task(self, task: Task) -> Status:
        return self.update(task)

    def delete_task(self, task: Task) -> Status:
        return self.delete(task)

    def toggle_task_completion(self, task: Task) -> Status:
        return self.toggle(task, "is_completed")
