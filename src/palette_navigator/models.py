"""Data classes for the coordinator, entertainment and education areas."""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


def new_id() -> str:
    return uuid.uuid4().hex


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def _checked(data: dict, key: str, kind: type, default=None):
    """Return data[key] (or default when absent), raising TypeError on the wrong type."""
    value = data[key] if default is None else data.get(key, default)
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise TypeError(f"{key} must be {kind.__name__}, got {type(value).__name__}")
    return value


def _optional_int(data: dict, key: str) -> Optional[int]:
    if data.get(key) is None:
        return None
    return _checked(data, key, int)


def _text_list(data: dict, key: str) -> list[str]:
    values = _checked(data, key, list)
    if not all(isinstance(v, str) for v in values):
        raise TypeError(f"{key} must hold only strings")
    return list(values)


def _format_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


class TaskPriority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class TaskCategory(str, Enum):
    BUSINESS = "Business"
    PERSONAL = "Personal"
    CREATIVE = "Creative"
    EDUCATION = "Education"


class MediaType(str, Enum):
    MUSIC = "Music"
    VIDEO = "Video"
    ART = "Art"
    PODCAST = "Podcast"


class Difficulty(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class EducationCategory(str, Enum):
    TECHNOLOGY = "Technology"
    DESIGN = "Design"
    BUSINESS = "Business"
    LANGUAGES = "Languages"
    SCIENCE = "Science"


class AppPhase(str, Enum):
    ONBOARDING = "onboarding"
    MAIN = "main"


class MainTab(str, Enum):
    COORDINATOR = "coordinator"
    ENTERTAINMENT = "entertainment"
    EDUCATION = "education"

    @property
    def title(self) -> str:
        return self.value.capitalize()


@dataclass
class Task:
    title: str
    description: str
    priority: TaskPriority
    category: TaskCategory
    is_completed: bool = False
    created_date: datetime = field(default_factory=datetime.now)
    due_date: Optional[datetime] = None
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "category": self.category.value,
            "is_completed": self.is_completed,
            "created_date": _format_datetime(self.created_date),
            "due_date": _format_datetime(self.due_date),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        return cls(
            id=_checked(data, "id", str),
            title=_checked(data, "title", str),
            description=_checked(data, "description", str, ""),
            priority=TaskPriority(data["priority"]),
            category=TaskCategory(data["category"]),
            is_completed=bool(data.get("is_completed", False)),
            created_date=_parse_datetime(data.get("created_date")) or datetime.now(),
            due_date=_parse_datetime(data.get("due_date")),
        )


@dataclass
class MediaItem:
    title: str
    description: str
    type: MediaType
    category: str
    is_favorite: bool = False
    rating: int = 0
    image_name: Optional[str] = None
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "type": self.type.value,
            "category": self.category,
            "is_favorite": self.is_favorite,
            "rating": self.rating,
            "image_name": self.image_name,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MediaItem":
        return cls(
            id=_checked(data, "id", str),
            title=_checked(data, "title", str),
            description=_checked(data, "description", str, ""),
            type=MediaType(data["type"]),
            category=_checked(data, "category", str, ""),
            is_favorite=bool(data.get("is_favorite", False)),
            rating=_checked(data, "rating", int, 0),
            image_name=data.get("image_name"),
        )


@dataclass
class Playlist:
    name: str
    description: str
    color_theme: str
    items: list[MediaItem] = field(default_factory=list)
    created_date: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=new_id)

    def contains(self, item_id: str) -> bool:
        return any(item.id == item_id for item in self.items)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "color_theme": self.color_theme,
            "items": [item.to_dict() for item in self.items],
            "created_date": _format_datetime(self.created_date),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Playlist":
        return cls(
            id=_checked(data, "id", str),
            name=_checked(data, "name", str),
            description=_checked(data, "description", str, ""),
            color_theme=_checked(data, "color_theme", str, ""),
            items=[MediaItem.from_dict(item) for item in data.get("items", [])],
            created_date=_parse_datetime(data.get("created_date")) or datetime.now(),
        )


@dataclass
class Question:
    text: str
    options: list[str]
    correct_answer: int
    explanation: str = ""
    user_answer: Optional[int] = None
    id: str = field(default_factory=new_id)

    @property
    def is_answered(self) -> bool:
        return self.user_answer is not None

    @property
    def is_correct(self) -> bool:
        return self.user_answer == self.correct_answer

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "options": list(self.options),
            "correct_answer": self.correct_answer,
            "user_answer": self.user_answer,
            "explanation": self.explanation,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Question":
        return cls(
            id=_checked(data, "id", str),
            text=_checked(data, "text", str),
            options=_text_list(data, "options"),
            correct_answer=_checked(data, "correct_answer", int),
            user_answer=_optional_int(data, "user_answer"),
            explanation=_checked(data, "explanation", str, ""),
        )


@dataclass
class Quiz:
    questions: list[Question]
    score: int = 0
    is_completed: bool = False
    id: str = field(default_factory=new_id)

    @property
    def all_answered(self) -> bool:
        return all(q.is_answered for q in self.questions)

    def calculate_score(self) -> int:
        return sum(1 for q in self.questions if q.is_correct)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "questions": [q.to_dict() for q in self.questions],
            "score": self.score,
            "is_completed": self.is_completed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Quiz":
        return cls(
            id=_checked(data, "id", str),
            questions=[Question.from_dict(q) for q in data["questions"]],
            score=int(data.get("score", 0)),
            is_completed=bool(data.get("is_completed", False)),
        )


@dataclass
class Lesson:
    title: str
    content: str
    duration: float
    is_completed: bool = False
    quiz: Optional[Quiz] = None
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "duration": self.duration,
            "is_completed": self.is_completed,
            "quiz": self.quiz.to_dict() if self.quiz else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Lesson":
        quiz = data.get("quiz")
        return cls(
            id=_checked(data, "id", str),
            title=_checked(data, "title", str),
            content=_checked(data, "content", str, ""),
            duration=float(data.get("duration", 0)),
            is_completed=bool(data.get("is_completed", False)),
            quiz=Quiz.from_dict(quiz) if quiz else None,
        )


@dataclass
class EducationalModule:
    title: str
    description: str
    difficulty: Difficulty
    category: EducationCategory
    lessons: list[Lesson] = field(default_factory=list)
    is_completed: bool = False
    progress: float = 0.0
    id: str = field(default_factory=new_id)

    def find_lesson(self, lesson_id: str) -> Optional[Lesson]:
        return next((l for l in self.lessons if l.id == lesson_id), None)

    def lesson_index(self, lesson_id: str) -> Optional[int]:
        for i, lesson in enumerate(self.lessons):
            if lesson.id == lesson_id:
                return i
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "difficulty": self.difficulty.value,
            "category": self.category.value,
            "lessons": [lesson.to_dict() for lesson in self.lessons],
            "is_completed": self.is_completed,
            "progress": self.progress,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "EducationalModule":
        return cls(
            id=_checked(data, "id", str),
            title=_checked(data, "title", str),
            description=_checked(data, "description", str, ""),
            difficulty=Difficulty(data["difficulty"]),
            category=EducationCategory(data["category"]),
            lessons=[Lesson.from_dict(l) for l in data.get("lessons", [])],
            is_completed=bool(data.get("is_completed", False)),
            progress=float(data.get("progress", 0.0)),
        )


@dataclass(frozen=True)
class OnboardingStep:
    title: str
    description: str


ONBOARDING_STEPS = (
    OnboardingStep(
        "Welcome to Palette Navigator",
        "Discover a new way to organize your life with vibrant colors and intuitive design",
    ),
    OnboardingStep(
        "Color Coordinator",
        "Organize tasks and projects with our unique color-coded system for maximum productivity",
    ),
    OnboardingStep(
        "Entertainment Hub",
        "Explore and curate media content tailored to your preferences and creative palette",
    ),
    OnboardingStep(
        "Educational Insights",
        "Learn and grow with interactive modules designed around our beautiful color system",
    ),
)
