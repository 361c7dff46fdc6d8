"""
Error taxonomy for codelecture.

Lesson store and annotation session raise these synchronously; front ends
(CLI, Streamlit app) decide how to present them. Corrupt persisted state is
never raised, it is folded to defaults inside the store.
"""

from typing import Optional


class LectureError(Exception):
    """Base class for all codelecture errors."""


class ValidationError(LectureError, ValueError):
    """User-supplied content failed a precondition (empty title, no valid ranges)."""


class NotFoundError(LectureError, LookupError):
    """A referenced lesson id does not exist."""

    def __init__(self, lesson_id: int, message: Optional[str] = None):
        self.lesson_id = lesson_id
        super().__init__(message or f"Lesson with ID {lesson_id} does not exist")


class NoActiveLessonError(LectureError):
    """An operation needs an active lesson and none is set."""

    def __init__(self, message: str = "No active lesson. Please create or select a lesson first."):
        super().__init__(message)


class HostError(LectureError):
    """A request to the external editor host failed."""
