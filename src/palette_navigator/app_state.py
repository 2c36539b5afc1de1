"""Application-wide state and the root composition of stores."""
import logging

from palette_navigator.db import init_db
from palette_navigator.media import MediaStore
from palette_navigator.learning import LearningStore
from palette_navigator.models import AppPhase, MainTab
from palette_navigator.seed import seed_media_items, seed_modules, seed_playlists, seed_tasks
from palette_navigator.storage import ONBOARDING_KEY, get_flag, set_flag
from palette_navigator.tasks import TaskStore

logger = logging.getLogger(__name__)


class AppState:
    """Onboarding flag (persisted) and selected tab (in memory)."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self.phase = AppPhase.ONBOARDING
        self.selected_tab = MainTab.COORDINATOR
        self.has_completed_onboarding = False

    def load(self) -> None:
        self.has_completed_onboarding = get_flag(self.db_path, ONBOARDING_KEY)
        self.phase = AppPhase.MAIN if self.has_completed_onboarding else AppPhase.ONBOARDING

    def save(self) -> None:
        set_flag(self.db_path, ONBOARDING_KEY, self.has_completed_onboarding)

    def complete_onboarding(self) -> None:
        self.has_completed_onboarding = True
        self.phase = AppPhase.MAIN
        self.save()

    def reset_onboarding(self) -> None:
        self.has_completed_onboarding = False
        self.phase = AppPhase.ONBOARDING
        self.save()

    def select_tab(self, tab: MainTab) -> None:
        self.selected_tab = tab


class AppContext:
    """Owns the app state and the three collection stores."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self.state = AppState(db_path)
        self.tasks = TaskStore(db_path)
        self.media = MediaStore(db_path)
        self.learning = LearningStore(db_path)

    @classmethod
    def open(cls, db_path: str) -> "AppContext":
        """Create the database if needed, load everything and seed empty stores."""
        init_db(db_path)
        ctx = cls(db_path)
        ctx.state.load()
        ctx.tasks.bootstrap(seed_tasks)
        ctx.media.bootstrap(seed_media_items, seed_playlists)
        ctx.learning.bootstrap(seed_modules)
        logger.info(
            "Opened %s: %d tasks, %d media items, %d modules",
            db_path, ctx.tasks.total_tasks_count, len(ctx.media.media_items),
            ctx.learning.total_modules_count,
        )
        return ctx
