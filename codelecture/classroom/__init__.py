"""
codelecture Classroom - Runtime components for recording and reviewing lessons.

This module provides:
- LessonStore: Persist lessons and the active-lesson pointer
- AnnotationSession: Build a note from selected ranges and Markdown
- ReviewNavigator: Step through a lesson's notes
- Workbench: Single owner wiring the three together for a front end
"""

from .store import (
    LessonStore,
    ChangeHook,
    MASTER_STATE_FILENAME,
    LESSONS_DIRNAME,
    lesson_filename,
)

from .host import (
    EditorHost,
    RevealTarget,
    ReviewNotice,
    NOTICE_MESSAGES,
    DisplayUpdate,
    DisplayCallback,
    highlight_spans,
    reveal_target,
    read_document_lines,
)

from .session import AnnotationSession

from .navigator import ReviewNavigator

from .workbench import Workbench

__all__ = [
    # Store
    "LessonStore",
    "ChangeHook",
    "MASTER_STATE_FILENAME",
    "LESSONS_DIRNAME",
    "lesson_filename",
    # Host
    "EditorHost",
    "RevealTarget",
    "ReviewNotice",
    "NOTICE_MESSAGES",
    "DisplayUpdate",
    "DisplayCallback",
    "highlight_spans",
    "reveal_target",
    "read_document_lines",
    # Session
    "AnnotationSession",
    # Navigator
    "ReviewNavigator",
    # Workbench
    "Workbench",
]
