"""
LessonStore - Persist lessons under <workspace>/<config dir>/.

Layout:
- lessons.json: master index (active lesson id + lesson summaries)
- lessons/lesson-<id>.json: one lesson body per id

All files are plain JSON meant to be hand-edited and shared. Anything that
fails to read or parse is treated as absent: the store never raises on
corrupt state, it falls back to defaults and logs a warning.
"""

import json
import logging
from pathlib import Path
from typing import Callable, Optional, TypeVar

from pydantic import BaseModel

from codelecture.errors import NotFoundError, ValidationError
from codelecture.schemas import Lesson, LessonSummary, MasterState
from codelecture.utils.config import DEFAULT_CONFIG_DIR


MASTER_STATE_FILENAME = "lessons.json"
LESSONS_DIRNAME = "lessons"

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Called after every successful mutation with the (possibly None) active lesson.
ChangeHook = Callable[[Optional[Lesson]], None]


def lesson_filename(lesson_id: int) -> str:
    return f"lesson-{lesson_id}.json"


def _read_model(path: Path, model: type[ModelT]) -> Optional[ModelT]:
    """Parse a JSON file into `model`, or None if missing or unparsable."""
    if not path.exists():
        return None
    try:
        return model.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        # pydantic.ValidationError and json errors are both ValueErrors
        logger.warning(f"Ignoring unreadable {model.__name__} file {path}: {e}")
        return None


def _write_model(path: Path, value: BaseModel) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(value.model_dump(mode="json", by_alias=True), f, ensure_ascii=False, indent=2)


class LessonStore:
    """
    Sole owner of lesson persistence, id assignment and the active lesson.

    Directories are created lazily before each read or write, so a store can
    be pointed at a fresh workspace without any setup step.
    """

    def __init__(
        self,
        workspace_root: Path,
        config_dir: str = DEFAULT_CONFIG_DIR,
        on_change: Optional[ChangeHook] = None,
    ):
        """
        Initialize the store.

        Args:
            workspace_root: Workspace root directory
            config_dir: Config directory name under the root
            on_change: Hook called after each mutation (status display refresh)
        """
        self.workspace_root = Path(workspace_root)
        self.config_path = self.workspace_root / config_dir
        self.master_state_path = self.config_path / MASTER_STATE_FILENAME
        self.lessons_dir = self.config_path / LESSONS_DIRNAME
        self.on_change = on_change

    def _ensure_dirs(self):
        """Create the config and lessons directories if they don't exist."""
        self.lessons_dir.mkdir(parents=True, exist_ok=True)

    def _lesson_path(self, lesson_id: int) -> Path:
        return self.lessons_dir / lesson_filename(lesson_id)

    def _notify(self):
        if self.on_change is not None:
            self.on_change(self.get_active_lesson())

    # -------------------------------------------------------------------------
    # Master state
    # -------------------------------------------------------------------------

    def load_master_state(self) -> MasterState:
        """Load the master index; missing or corrupt files give an empty index."""
        self._ensure_dirs()
        return _read_model(self.master_state_path, MasterState) or MasterState()

    def _save_master_state(self, state: MasterState):
        self._ensure_dirs()
        _write_model(self.master_state_path, state)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list_lessons(self) -> list[LessonSummary]:
        """Lesson summaries in creation order."""
        return self.load_master_state().lessons

    def get_lesson_by_id(self, lesson_id: int) -> Optional[Lesson]:
        """Load a lesson body, or None if it is absent or unparsable."""
        self._ensure_dirs()
        return _read_model(self._lesson_path(lesson_id), Lesson)

    def get_active_lesson_id(self) -> Optional[int]:
        state = self.load_master_state()
        if state.active_lesson_id is None or not state.has_lesson(state.active_lesson_id):
            return None
        return state.active_lesson_id

    def get_active_lesson(self) -> Optional[Lesson]:
        """Resolve the active lesson; dangling or unreadable references give None."""
        lesson_id = self.get_active_lesson_id()
        if lesson_id is None:
            return None
        lesson = self.get_lesson_by_id(lesson_id)
        if lesson is None:
            logger.warning(f"Active lesson {lesson_id} has no readable body")
        return lesson

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create_lesson(self, title: str) -> Lesson:
        """
        Create an empty lesson and make it the active one.

        Raises:
            ValidationError: If the title is empty after trimming
        """
        clean_title = title.strip()
        if not clean_title:
            raise ValidationError("Lesson title cannot be empty")

        state = self.load_master_state()
        lesson_id = state.next_lesson_id()
        # A lost or corrupt index must not overwrite surviving lesson bodies
        while self._lesson_path(lesson_id).exists():
            logger.warning(f"Skipping lesson id {lesson_id}: {self._lesson_path(lesson_id)} already exists")
            lesson_id += 1
        lesson = Lesson(id=lesson_id, title=clean_title, notes=[])

        self._ensure_dirs()
        _write_model(self._lesson_path(lesson.id), lesson)

        state.lessons.append(lesson.summary())
        state.active_lesson_id = lesson.id
        state.last_lesson_id = lesson.id
        self._save_master_state(state)

        logger.info(f"Created lesson {lesson.id}: {lesson.title}")
        self._notify()
        return lesson

    def set_active_lesson(self, lesson_id: int):
        """
        Make an existing lesson active.

        Raises:
            NotFoundError: If the id is not in the master index
        """
        state = self.load_master_state()
        if not state.has_lesson(lesson_id):
            raise NotFoundError(lesson_id)

        state.active_lesson_id = lesson_id
        self._save_master_state(state)
        logger.info(f"Active lesson set to {lesson_id}")
        self._notify()

    def save_lesson(self, lesson: Lesson):
        """Overwrite the stored body for lesson.id (the master index is untouched)."""
        self._ensure_dirs()
        _write_model(self._lesson_path(lesson.id), lesson)
        self._notify()

    def delete_lesson(self, lesson_id: int):
        """
        Delete a lesson body and its summary.

        If the lesson was active, the first remaining lesson becomes active,
        or none if the index is now empty.

        Raises:
            NotFoundError: If the id is not in the master index
        """
        state = self.load_master_state()
        if not state.has_lesson(lesson_id):
            raise NotFoundError(lesson_id)

        self._lesson_path(lesson_id).unlink(missing_ok=True)

        state.lessons = [s for s in state.lessons if s.id != lesson_id]
        # Keep the high-water mark so the id is never handed out again
        state.last_lesson_id = max(state.last_lesson_id or 0, lesson_id)
        if state.active_lesson_id == lesson_id:
            state.active_lesson_id = state.lessons[0].id if state.lessons else None
        self._save_master_state(state)

        logger.info(f"Deleted lesson {lesson_id}")
        self._notify()
