"""Display helpers for durations, percentages and dates."""
from datetime import datetime
from typing import Optional


def format_duration(seconds: float) -> str:
    total = int(seconds)
    hours, rem = divmod(total, 3600)
    minutes, secs = divmod(rem, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_percentage(fraction: float) -> str:
    return f"{fraction * 100:.0f}%"


def format_rating(rating: float) -> str:
    return f"{rating:.1f}"


def truncate(text: str, max_length: int) -> str:
    if len(text) > max_length:
        return text[:max_length] + "..."
    return text


def _plural(n: int, word: str) -> str:
    return f"{n} {word}{'' if n == 1 else 's'}"


def due_date_display(due: datetime, now: Optional[datetime] = None) -> str:
    """Today / Tomorrow / In N days / N days overdue, by calendar day."""
    now = now or datetime.now()
    days = (due.date() - now.date()).days
    if days == 0:
        return "Today"
    if days == 1:
        return "Tomorrow"
    if days > 0:
        return f"In {_plural(days, 'day')}"
    return f"{_plural(-days, 'day')} overdue"


def time_ago_display(timestamp: datetime, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    days = (now.date() - timestamp.date()).days
    if days == 0:
        delta = now - timestamp
        hours = int(delta.total_seconds() // 3600)
        minutes = int(delta.total_seconds() // 60)
        if hours > 0:
            return f"{hours}h ago"
        if minutes > 0:
            return f"{minutes}m ago"
        return "Just now"
    if days == 1:
        return "Yesterday"
    return timestamp.strftime("%Y-%m-%d")
