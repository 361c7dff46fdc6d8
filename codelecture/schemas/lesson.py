"""
Lesson schemas for codelecture.

Defines Pydantic models for:
- Line ranges (closed, 0-based intervals)
- General and code notes (tagged by "type")
- Lessons and lesson summaries
- The master index (active lesson + lesson list)

JSON field names follow the on-disk format (camelCase for the master index).
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Annotated, Literal, Optional, Union

# =============================================================================
# RANGE CONVENTION: All ranges are [start, end], 0-based, end-INCLUSIVE
# Both numbers are line numbers; a one-line range is [n, n].
# =============================================================================

LineRange = tuple[int, int]


def is_valid_range(r: LineRange) -> bool:
    """True if r is a well-formed closed line interval."""
    start, end = r
    return 0 <= start <= end


def validate_line_range(v: LineRange) -> LineRange:
    """Shared range validation: 0-based, end-inclusive."""
    if not is_valid_range(v):
        raise ValueError('Invalid range: must be [start, end] where 0 <= start <= end')
    return v


# -----------------------------------------------------------------------------
# Note types
# -----------------------------------------------------------------------------

class NoteBase(BaseModel):
    type: str
    markdown: str = ""


class GeneralNote(NoteBase):
    """A note that does not point at any code."""
    type: Literal["general"] = "general"


class CodeNote(NoteBase):
    """
    A note attached to one or more line ranges of a single file.
    `file` is workspace-relative with forward slashes.
    """
    type: Literal["code"] = "code"
    file: str = Field(..., min_length=1)
    ranges: list[LineRange] = Field(..., min_length=1)

    @field_validator('ranges')
    @classmethod
    def ranges_valid(cls, v):
        return [validate_line_range(r) for r in v]


Note = Annotated[Union[GeneralNote, CodeNote], Field(discriminator="type")]


# -----------------------------------------------------------------------------
# Lessons and the master index
# -----------------------------------------------------------------------------

class LessonSummary(BaseModel):
    """Lightweight lesson info for listing (without note bodies)."""
    id: int = Field(..., ge=1)
    title: str


class Lesson(BaseModel):
    id: int = Field(..., ge=1)
    title: str = Field(..., min_length=1)
    notes: list[Note] = []

    def summary(self) -> LessonSummary:
        return LessonSummary(id=self.id, title=self.title)


class MasterState(BaseModel):
    """
    Process-wide index stored in lessons.json.

    `lessons` is the authoritative list of existing ids, in creation order.
    `last_lesson_id` is the highest id ever assigned; it is optional on disk
    so that hand-written files without it still load.
    """
    model_config = ConfigDict(populate_by_name=True)

    active_lesson_id: Optional[int] = Field(default=None, alias="activeLessonId")
    lessons: list[LessonSummary] = []
    last_lesson_id: Optional[int] = Field(default=None, alias="lastLessonId")

    def has_lesson(self, lesson_id: int) -> bool:
        return any(s.id == lesson_id for s in self.lessons)

    def next_lesson_id(self) -> int:
        """Next id: one past the highest id that exists or ever existed."""
        highest = max((s.id for s in self.lessons), default=0)
        if self.last_lesson_id is not None:
            highest = max(highest, self.last_lesson_id)
        return highest + 1
