"""
codelecture Viewer - Rendering components for notes and review steps.

This module provides:
- Code excerpt rendering with highlighted and dimmed lines
- Status line text for the active lesson
- A terminal implementation of the editor host
"""

from .code import (
    get_code_css,
    highlighted_lines,
    dimmed_lines,
    visible_lines,
    format_range,
    format_ranges,
    describe_note,
    render_code_excerpt,
)

from .status import (
    status_text,
    status_tooltip,
)

from .terminal import (
    TerminalHost,
    format_code_excerpt_text,
)

__all__ = [
    # Code rendering
    "get_code_css",
    "highlighted_lines",
    "dimmed_lines",
    "visible_lines",
    "format_range",
    "format_ranges",
    "describe_note",
    "render_code_excerpt",
    # Status
    "status_text",
    "status_tooltip",
    # Terminal
    "TerminalHost",
    "format_code_excerpt_text",
]
