"""
codelecture Schemas - Pydantic models for lessons and notes.

This module exports all schema classes for:
- Ranges: closed 0-based line intervals
- Notes: general and code notes
- Lessons: lesson bodies, summaries, and the master index
"""

from .lesson import (
    LineRange,
    is_valid_range,
    validate_line_range,
    GeneralNote,
    CodeNote,
    Note,
    LessonSummary,
    Lesson,
    MasterState,
)

__all__ = [
    # Ranges
    'LineRange',
    'is_valid_range',
    'validate_line_range',
    # Notes
    'GeneralNote',
    'CodeNote',
    'Note',
    # Lessons
    'LessonSummary',
    'Lesson',
    'MasterState',
]
