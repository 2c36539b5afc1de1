"""Educational modules, lesson progress and quiz grading."""
import logging
from typing import Optional

from palette_navigator.errors import Status
from palette_navigator.models import (
    Difficulty, EducationalModule, EducationCategory, Lesson,
)
from palette_navigator.storage import MODULES_KEY
from palette_navigator.store import CollectionStore

logger = logging.getLogger(__name__)


def completed_lessons_count(module: EducationalModule) -> int:
    return sum(1 for lesson in module.lessons if lesson.is_completed)


def module_duration(module: EducationalModule) -> float:
    """Total study time of a module in seconds."""
    return sum(lesson.duration for lesson in module.lessons)


def recompute_progress(module: EducationalModule) -> None:
    """Set progress to the completed fraction of lessons.

    A module without lessons keeps whatever progress it already had.
    """
    total = len(module.lessons)
    if total == 0:
        return
    module.progress = completed_lessons_count(module) / total
    module.is_completed = module.progress == 1.0


def is_lesson_unlocked(module: EducationalModule, index: int) -> bool:
    """Lesson 0 is always open; any later lesson opens once its predecessor is done."""
    if index < 0 or index >= len(module.lessons):
        return False
    if index == 0:
        return True
    return module.lessons[index - 1].is_completed


class LearningStore(CollectionStore):
    """Module collection plus the active module/lesson selection.

    The selection is kept as ids and resolved against ``records`` on every
    read, so it always reflects the stored state of the module.
    """

    key = MODULES_KEY
    record_type = EducationalModule
    text_fields = ("title", "description")
    filter_fields = {"selected_difficulty": "difficulty", "selected_category": "category"}
    group_field = "category"

    selected_difficulty: Optional[Difficulty]
    selected_category: Optional[EducationCategory]

    def __init__(self, db_path: str):
        super().__init__(db_path)
        self.current_module_id: Optional[str] = None
        self.current_lesson_id: Optional[str] = None

    # -- views --

    @property
    def modules(self) -> list[EducationalModule]:
        return self.records

    @property
    def filtered_modules(self) -> list[EducationalModule]:
        return self.filtered

    @property
    def modules_by_category(self) -> dict[EducationCategory, list[EducationalModule]]:
        return self.grouped

    @property
    def completed_modules_count(self) -> int:
        return sum(1 for m in self.records if m.is_completed)

    @property
    def total_modules_count(self) -> int:
        return len(self.records)

    @property
    def overall_progress(self) -> float:
        if not self.records:
            return 0.0
        return sum(m.progress for m in self.records) / len(self.records)

    @property
    def current_module(self) -> Optional[EducationalModule]:
        if self.current_module_id is None:
            return None
        return self.find(self.current_module_id)

    @property
    def current_lesson(self) -> Optional[Lesson]:
        module = self.current_module
        if module is None or self.current_lesson_id is None:
            return None
        return module.find_lesson(self.current_lesson_id)

    # -- collection mutations --

    def load(self) -> Status:
        status = super().load()
        self.current_module_id = None
        self.current_lesson_id = None
        return status

    def add_module(self, module: EducationalModule) -> Status:
        return self.add(module)

    def update_module(self, module: EducationalModule) -> Status:
        return self.update(module)

    def delete_module(self, module: EducationalModule) -> Status:
        return self.delete(module)

    def _after_delete(self, record_id: str) -> None:
        if record_id == self.current_module_id:
            self.current_module_id = None
            self.current_lesson_id = None

    # -- progress engine --

    def start_module(self, module: EducationalModule) -> Status:
        with self._lock:
            stored = self.find(module.id)
            if stored is None:
                return Status.NOT_FOUND
            self.current_module_id = stored.id
            self.current_lesson_id = stored.lessons[0].id if stored.lessons else None
            logger.debug("Started module %s", stored.title)
        self._notify()
        return Status.OK

    def select_lesson(self, lesson: Lesson) -> Status:
        """Point the active lesson at a lesson of the active module."""
        with self._lock:
            module = self.current_module
            if module is None or module.find_lesson(lesson.id) is None:
                return Status.NOT_FOUND
            self.current_lesson_id = lesson.id
        self._notify()
        return Status.OK

    def complete_lesson(self, lesson: Lesson) -> Status:
        with self._lock:
            module = self.current_module
            if module is None:
                return Status.NOT_FOUND
            stored = module.find_lesson(lesson.id)
            if stored is None:
                return Status.NOT_FOUND
            stored.is_completed = True
            recompute_progress(module)
            logger.info("Completed lesson %r (%s at %.0f%%)",
                        stored.title, module.title, module.progress * 100)
            return self._commit()

    def submit_quiz_answer(self, question_id: str, answer: int) -> Status:
        """Record an answer on the active lesson's quiz.

        Once every question is answered the quiz is sealed: it is scored,
        marked complete, and its lesson completes too. A sealed quiz rejects
        further answers until reset_quiz is called.
        """
        with self._lock:
            module = self.current_module
            lesson = self.current_lesson
            if lesson is None or lesson.quiz is None:
                return Status.NOT_FOUND
            quiz = lesson.quiz
            question = next((q for q in quiz.questions if q.id == question_id), None)
            if question is None:
                return Status.NOT_FOUND
            if quiz.is_completed:
                logger.debug("Quiz %s already sealed; answer ignored", quiz.id)
                return Status.REJECTED
            if not 0 <= answer < len(question.options):
                return Status.REJECTED
            question.user_answer = answer
            if quiz.all_answered:
                quiz.score = quiz.calculate_score()
                quiz.is_completed = True
                lesson.is_completed = True
                recompute_progress(module)
                logger.info("Quiz sealed for %r: %d/%d",
                            lesson.title, quiz.score, len(quiz.questions))
            return self._commit()

    def reset_quiz(self, lesson: Lesson) -> Status:
        """Clear answers, score and seal so the quiz can be retaken."""
        with self._lock:
            module = self.current_module
            stored = module.find_lesson(lesson.id) if module else None
            if stored is None or stored.quiz is None:
                return Status.NOT_FOUND
            for question in stored.quiz.questions:
                question.user_answer = None
            stored.quiz.score = 0
            stored.quiz.is_completed = False
            return self._commit()

    def _step_lesson(self, offset: int) -> Status:
        with self._lock:
            module = self.current_module
            if module is None or self.current_lesson_id is None:
                return Status.NOT_FOUND
            index = module.lesson_index(self.current_lesson_id)
            if index is None:
                return Status.NOT_FOUND
            target = index + offset
            if not 0 <= target < len(module.lessons):
                return Status.NOT_FOUND
            self.current_lesson_id = module.lessons[target].id
        self._notify()
        return Status.OK

    def next_lesson(self) -> Status:
        return self._step_lesson(1)

    def previous_lesson(self) -> Status:
        return self._step_lesson(-1)

    def is_lesson_unlocked(self, module: EducationalModule, index: int) -> bool:
        return is_lesson_unlocked(module, index)
