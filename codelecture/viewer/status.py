"""Status line text for the active lesson."""

from typing import Optional

from codelecture.schemas import Lesson


def status_text(lesson: Optional[Lesson]) -> str:
    if lesson is None:
        return "No active lesson"
    return f"Lesson: {lesson.title}"


def status_tooltip(lesson: Optional[Lesson]) -> str:
    if lesson is None:
        return "Click to create a new lesson"
    return f"Active lesson: {lesson.title}"
