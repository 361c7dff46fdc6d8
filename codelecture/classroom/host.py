"""
Host interfaces - what the classroom core asks of an editor front end.

The core never renders anything itself. It issues requests to an EditorHost
(open a file, highlight ranges, reveal a range) and publishes DisplayUpdate
events to a single Markdown subscriber. Concrete hosts live in the viewer
package (terminal) and app.py (Streamlit).
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Protocol, Sequence, runtime_checkable

from codelecture.errors import HostError
from codelecture.schemas import LineRange, Note


@runtime_checkable
class EditorHost(Protocol):
    """Editor operations the core relies on."""

    def open_file(self, path: Path) -> Sequence[str]:
        """
        Open a file and return its lines.

        Raises:
            OSError or HostError if the file cannot be opened
        """
        ...

    def highlight(self, path: Path, ranges: Sequence[LineRange]) -> None:
        """Highlight exactly `ranges` in `path`, replacing any previous highlight."""
        ...

    def clear_highlight(self) -> None:
        ...

    def reveal(self, path: Path, target: "RevealTarget") -> None:
        """Scroll so that `target` is centered in the viewport."""
        ...


@dataclass(frozen=True)
class RevealTarget:
    """Character span to scroll into view: (start_line, start_col) to (end_line, end_col)."""
    start_line: int
    start_col: int
    end_line: int
    end_col: int


class ReviewNotice(str, Enum):
    """Non-fatal outcomes reported back to whoever drives the navigator."""
    NO_ACTIVE_LESSON = "no_active_lesson"
    NO_NOTES = "no_notes"
    END_REACHED = "end_reached"
    START_REACHED = "start_reached"
    NOT_ACTIVE = "not_active"
    OPEN_FAILED = "open_failed"


NOTICE_MESSAGES = {
    ReviewNotice.NO_ACTIVE_LESSON: "No active lesson. Please create or select a lesson first.",
    ReviewNotice.NO_NOTES: "No lecture notes found in the active lesson.",
    ReviewNotice.END_REACHED: "Reached the end of the lecture notes.",
    ReviewNotice.START_REACHED: "Already at the first lecture note.",
    ReviewNotice.NOT_ACTIVE: "No review in progress.",
    ReviewNotice.OPEN_FAILED: "Could not open the file for this note.",
}


@dataclass(frozen=True)
class DisplayUpdate:
    """One review step as the Markdown renderer should show it."""
    note: Note
    markdown: str
    index: int
    total: int
    open_renderer: bool  # True only for the first step of a review


# Receives an update per shown step, and None when the review stops.
DisplayCallback = Callable[[Optional[DisplayUpdate]], None]


def read_document_lines(path: Path) -> list[str]:
    """
    Read a UTF-8 source file as lines, for hosts backed by the filesystem.

    Raises:
        OSError: If the file cannot be read
        HostError: If the file is not valid UTF-8
    """
    try:
        return Path(path).read_text(encoding="utf-8").splitlines()
    except UnicodeDecodeError as e:
        raise HostError(f"{path} is not a UTF-8 text file: {e}") from e


def line_end_col(lines: Sequence[str], line: int) -> int:
    """Last column of `line`, or 0 if the document is shorter than that."""
    if 0 <= line < len(lines):
        return len(lines[line])
    return 0


def highlight_spans(lines: Sequence[str], ranges: Sequence[LineRange]) -> list[RevealTarget]:
    """Whole-line spans for each range: column 0 of start through the end of the last line."""
    return [
        RevealTarget(start, 0, end, line_end_col(lines, end))
        for start, end in ranges
    ]


def reveal_target(lines: Sequence[str], ranges: Sequence[LineRange]) -> RevealTarget:
    """Span of the first range, used to scroll the viewport."""
    return highlight_spans(lines, ranges[:1])[0]
