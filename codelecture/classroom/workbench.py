"""
Workbench - Single owner of the store, the annotation session and the navigator.

Front ends build exactly one Workbench and route every command through it:

    create-lesson / delete-lesson / set-active-lesson  -> LessonStore
    begin-or-extend-annotation / commit / cancel       -> AnnotationSession
    start-review / review-next / review-prev / stop    -> ReviewNavigator
"""

from pathlib import Path
from typing import Optional

from codelecture.schemas import Lesson, LessonSummary, LineRange, Note
from codelecture.utils.config import DEFAULT_CONFIG_DIR, Settings

from .host import DisplayCallback, EditorHost, ReviewNotice
from .navigator import ReviewNavigator
from .session import AnnotationSession
from .store import ChangeHook, LessonStore


class Workbench:
    """
    Holds at most one annotation session and one review navigator.

    Both are created once here and reused, which is what keeps them single:
    nothing else constructs them.
    """

    def __init__(
        self,
        workspace_root: Path,
        host: EditorHost,
        config_dir: str = DEFAULT_CONFIG_DIR,
        on_change: Optional[ChangeHook] = None,
    ):
        """
        Initialize the workbench.

        Args:
            workspace_root: Workspace root the lessons are stored under
            host: EditorHost implementation
            config_dir: Config directory name under the root
            on_change: Status display hook forwarded to the store
        """
        self.workspace_root = Path(workspace_root)
        self.host = host
        self.store = LessonStore(self.workspace_root, config_dir, on_change=on_change)
        self.session = AnnotationSession(self.store, host, self.workspace_root)
        self.navigator = ReviewNavigator(self.store, host, self.workspace_root)

    @classmethod
    def from_settings(cls, settings: Settings, host: EditorHost, on_change: Optional[ChangeHook] = None) -> "Workbench":
        return cls(settings.workspace_root, host, settings.config_dir, on_change=on_change)

    # -------------------------------------------------------------------------
    # Lessons
    # -------------------------------------------------------------------------

    def create_lesson(self, title: str) -> Lesson:
        return self.store.create_lesson(title)

    def delete_lesson(self, lesson_id: int):
        self.store.delete_lesson(lesson_id)

    def set_active_lesson(self, lesson_id: int):
        self.store.set_active_lesson(lesson_id)

    def list_lessons(self) -> list[LessonSummary]:
        return self.store.list_lessons()

    def get_active_lesson(self) -> Optional[Lesson]:
        return self.store.get_active_lesson()

    # -------------------------------------------------------------------------
    # Annotation
    # -------------------------------------------------------------------------

    @property
    def is_annotating(self) -> bool:
        return self.session.is_active

    def begin_or_extend_annotation(
        self,
        file_path: Optional[str | Path] = None,
        line_range: Optional[LineRange] = None,
    ) -> bool:
        """
        Open the annotation session, or add a selection to the open one.

        Returns:
            False if the range was already selected, else True
        """
        if file_path is None or line_range is None:
            return True
        return self.session.add_range(file_path, line_range)

    def commit_annotation(self, text: str) -> Note:
        return self.session.commit(text)

    def cancel_annotation(self):
        self.session.discard()

    # -------------------------------------------------------------------------
    # Review
    # -------------------------------------------------------------------------

    @property
    def is_reviewing(self) -> bool:
        return self.navigator.is_active

    def subscribe_display(self, callback: Optional[DisplayCallback]):
        self.navigator.subscribe(callback)

    def start_review(self) -> Optional[ReviewNotice]:
        return self.navigator.start()

    def review_next(self) -> Optional[ReviewNotice]:
        return self.navigator.next()

    def review_prev(self) -> Optional[ReviewNotice]:
        return self.navigator.prev()

    def review_stop(self):
        self.navigator.stop()
