"""
ReviewNavigator - Step through a lesson's notes with synchronized highlighting.

Provides:
- start/stop of a review over a snapshot of the active lesson's notes
- bounded next/previous navigation
- per-note display: open file, highlight ranges, reveal, publish Markdown
"""

import logging
from pathlib import Path
from typing import Optional

from codelecture.errors import HostError
from codelecture.schemas import CodeNote, Note
from codelecture.utils.paths import resolve_workspace_path

from .host import DisplayCallback, DisplayUpdate, EditorHost, ReviewNotice, reveal_target
from .store import LessonStore


logger = logging.getLogger(__name__)


class ReviewNavigator:
    """
    Cursor over a fixed snapshot of notes.

    States are Inactive (no snapshot) and Active (snapshot + index). stop()
    always returns to Inactive, so one navigator serves any number of reviews.
    Notes added to the lesson during a review are not seen until the next start().
    """

    def __init__(self, store: LessonStore, host: EditorHost, workspace_root: Optional[Path] = None):
        """
        Initialize an inactive navigator.

        Args:
            store: LessonStore to read the active lesson from
            host: EditorHost that shows code
            workspace_root: Root for resolving note files (None: no workspace open)
        """
        self.store = store
        self.host = host
        self.workspace_root = workspace_root
        self._notes: list[Note] = []
        self._index = 0
        self._active = False
        self._renderer_opened = False
        self._subscriber: Optional[DisplayCallback] = None

    def subscribe(self, callback: Optional[DisplayCallback]):
        """Set the single display subscriber (None to unsubscribe)."""
        self._subscriber = callback

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def index(self) -> int:
        return self._index

    @property
    def total(self) -> int:
        return len(self._notes)

    @property
    def current_note(self) -> Optional[Note]:
        if not self._active:
            return None
        return self._notes[self._index]

    def get_position(self) -> tuple[int, int]:
        """Position as (current, total), 1-based; (0, 0) when inactive."""
        if not self._active:
            return (0, 0)
        return (self._index + 1, len(self._notes))

    # -------------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------------

    def start(self) -> Optional[ReviewNotice]:
        """
        Begin reviewing the active lesson from its first note.

        Returns:
            NO_ACTIVE_LESSON / NO_NOTES if the review could not start,
            OPEN_FAILED if the first note's file could not be opened,
            otherwise None
        """
        lesson = self.store.get_active_lesson()
        if lesson is None:
            return ReviewNotice.NO_ACTIVE_LESSON
        if not lesson.notes:
            return ReviewNotice.NO_NOTES

        self._notes = list(lesson.notes)
        self._index = 0
        self._active = True
        self._renderer_opened = False
        logger.info(f"Review started for lesson {lesson.id} ({len(self._notes)} notes)")
        return self._show_current()

    def next(self) -> Optional[ReviewNotice]:
        if not self._active:
            return ReviewNotice.NOT_ACTIVE
        if self._index >= len(self._notes) - 1:
            return ReviewNotice.END_REACHED
        self._index += 1
        logger.debug(f"Review moved to note {self._index + 1}/{len(self._notes)}")
        return self._show_current()

    def prev(self) -> Optional[ReviewNotice]:
        if not self._active:
            return ReviewNotice.NOT_ACTIVE
        if self._index <= 0:
            return ReviewNotice.START_REACHED
        self._index -= 1
        logger.debug(f"Review moved to note {self._index + 1}/{len(self._notes)}")
        return self._show_current()

    def stop(self):
        """
        End the review and clear any highlight.

        Does nothing while inactive: the host is shared with the annotation
        session, whose highlight must survive a stray stop.
        """
        if not self._active:
            return
        self._notes = []
        self._index = 0
        self._active = False
        self._renderer_opened = False
        self.host.clear_highlight()
        if self._subscriber is not None:
            self._subscriber(None)
        logger.info("Review stopped")

    # -------------------------------------------------------------------------
    # Display
    # -------------------------------------------------------------------------

    def _show_current(self) -> Optional[ReviewNotice]:
        """Drive the host for the current note, then publish its Markdown."""
        note = self._notes[self._index]
        notice = None

        if isinstance(note, CodeNote):
            if self.workspace_root is not None:
                notice = self._show_code(note)
        else:
            # General notes don't point to code
            self.host.clear_highlight()

        self._publish(note)
        return notice

    def _show_code(self, note: CodeNote) -> Optional[ReviewNotice]:
        path = resolve_workspace_path(note.file, self.workspace_root)
        try:
            lines = self.host.open_file(path)
        except (OSError, ValueError, HostError) as e:
            logger.warning(f"Could not open {note.file} for review: {e}")
            self.host.clear_highlight()
            return ReviewNotice.OPEN_FAILED

        self.host.highlight(path, note.ranges)
        self.host.reveal(path, reveal_target(lines, note.ranges))
        return None

    def _publish(self, note: Note):
        update = DisplayUpdate(
            note=note,
            markdown=note.markdown,
            index=self._index,
            total=len(self._notes),
            open_renderer=not self._renderer_opened,
        )
        self._renderer_opened = True
        if self._subscriber is not None:
            self._subscriber(update)
