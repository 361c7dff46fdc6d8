"""
AnnotationSession - Build one note interactively and commit it to the active lesson.

A session accumulates:
- a target file (fixed by the first range; switching files starts over)
- zero or more line ranges (none means the note will be a general note)
- the Markdown draft

Nothing is written until commit(). The active lesson is re-read from the
store right before appending, so edits made to the lesson file while the
session was open are not overwritten.
"""

import logging
from pathlib import Path
from typing import Optional

from codelecture.errors import NoActiveLessonError, ValidationError
from codelecture.schemas import CodeNote, GeneralNote, LineRange, Note, is_valid_range
from codelecture.utils.paths import resolve_workspace_path, to_workspace_path

from .host import EditorHost
from .store import LessonStore


logger = logging.getLogger(__name__)


class AnnotationSession:
    """
    Pending note under construction.

    One instance is owned by the Workbench and reused: commit() and discard()
    return it to the empty state.
    """

    def __init__(self, store: LessonStore, host: EditorHost, workspace_root: Optional[Path] = None):
        """
        Initialize an empty session.

        Args:
            store: LessonStore the note is committed to
            host: EditorHost used to show the accumulated ranges
            workspace_root: Root used to relativize and resolve file paths
        """
        self.store = store
        self.host = host
        self.workspace_root = workspace_root
        self._file: Optional[str] = None
        self._ranges: list[LineRange] = []
        self._draft = ""

    @property
    def file(self) -> Optional[str]:
        """Workspace-relative target file, once a range has been added."""
        return self._file

    @property
    def ranges(self) -> list[LineRange]:
        return list(self._ranges)

    @property
    def draft(self) -> str:
        return self._draft

    @property
    def is_active(self) -> bool:
        """True while anything has been accumulated."""
        return bool(self._file or self._ranges or self._draft)

    # -------------------------------------------------------------------------
    # Building
    # -------------------------------------------------------------------------

    def add_range(self, file_path: str | Path, line_range: LineRange) -> bool:
        """
        Add a range in `file_path` to the pending note.

        Selecting in a different file than the current target discards the
        accumulated ranges and draft first, so one note never mixes files.

        Returns:
            False if the identical range was already selected, else True
        """
        file = to_workspace_path(file_path, self.workspace_root)
        if self._file is not None and file != self._file:
            logger.info(f"Annotation target changed from {self._file} to {file}; starting over")
            self._reset()
        self._file = file

        candidate = (int(line_range[0]), int(line_range[1]))
        if candidate in self._ranges:
            logger.debug(f"Range {list(candidate)} already selected in {file}")
            return False

        self._ranges.append(candidate)
        logger.debug(f"Added range {list(candidate)} in {file} ({len(self._ranges)} total)")
        self._refresh_highlight()
        return True

    def remove_range(self, index: int):
        """Remove the range at `index`; out-of-bounds indexes are ignored."""
        if 0 <= index < len(self._ranges):
            removed = self._ranges.pop(index)
            logger.debug(f"Removed range {list(removed)}")
        self._refresh_highlight()

    def update_draft_text(self, text: str):
        self._draft = text

    # -------------------------------------------------------------------------
    # Finishing
    # -------------------------------------------------------------------------

    def build_note(self) -> Note:
        """
        Build the note from the current state without saving it.

        Raises:
            ValidationError: If ranges were selected but none is valid
        """
        markdown = self._draft.strip()
        if not self._ranges:
            return GeneralNote(markdown=markdown)

        valid = [r for r in self._ranges if is_valid_range(r)]
        if not valid:
            raise ValidationError("no valid ranges")
        return CodeNote(file=self._file, ranges=valid, markdown=markdown)

    def commit(self, text: Optional[str] = None) -> Note:
        """
        Append the pending note to the active lesson and save it.

        Args:
            text: Optional final Markdown, replacing the draft

        Returns:
            The committed note

        Raises:
            NoActiveLessonError: If no lesson is active
            ValidationError: If ranges were selected but none is valid
        """
        if text is not None:
            self.update_draft_text(text)

        if self.store.get_active_lesson_id() is None:
            raise NoActiveLessonError()

        note = self.build_note()

        # Re-read right before appending to pick up external edits
        lesson = self.store.get_active_lesson()
        if lesson is None:
            raise NoActiveLessonError()
        lesson.notes.append(note)
        self.store.save_lesson(lesson)

        ranges = len(note.ranges) if isinstance(note, CodeNote) else 0
        logger.info(f"Saved {note.type} note to lesson {lesson.id} ({ranges} ranges)")

        self._reset()
        self.host.clear_highlight()
        return note

    def discard(self):
        """Drop everything accumulated; nothing is persisted."""
        self._reset()
        self.host.clear_highlight()

    def _reset(self):
        self._file = None
        self._ranges = []
        self._draft = ""

    def _refresh_highlight(self):
        if self._file is None:
            return
        if self.workspace_root is not None:
            path = resolve_workspace_path(self._file, self.workspace_root)
        else:
            path = Path(self._file)
        self.host.highlight(path, list(self._ranges))
