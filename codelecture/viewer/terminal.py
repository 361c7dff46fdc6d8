"""
Terminal host - show review steps as plain text.

TerminalHost implements the EditorHost protocol by reading files from disk
and printing an excerpt around the revealed range, with highlighted lines
marked by '>'. It also acts as the Markdown subscriber, printing each note.
"""

import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

from codelecture.classroom.host import DisplayUpdate, RevealTarget, read_document_lines
from codelecture.schemas import LineRange

from .code import dimmed_lines, visible_lines


def format_code_excerpt_text(
    lines: Sequence[str],
    ranges: Sequence[LineRange],
    context: Optional[int] = 3,
) -> str:
    """Plain-text excerpt: highlighted lines are prefixed with '>'."""
    dimmed = set(dimmed_lines(len(lines), ranges))
    width = len(str(len(lines)))
    out = []
    previous = None
    for i in visible_lines(len(lines), ranges, context):
        if previous is not None and i != previous + 1:
            out.append("  " + "." * width)
        marker = " " if i in dimmed else ">"
        out.append(f"{marker} {i + 1:>{width}} | {lines[i]}")
        previous = i
    return "\n".join(out)


class TerminalHost:
    """EditorHost + Markdown renderer writing to a text stream."""

    def __init__(self, out: Optional[TextIO] = None, context: Optional[int] = 3):
        self.out = out or sys.stdout
        self.context = context
        self.highlighted_file: Optional[Path] = None
        self.highlighted_ranges: list[LineRange] = []
        self._documents: dict[Path, list[str]] = {}

    # EditorHost -------------------------------------------------------------

    def open_file(self, path: Path) -> list[str]:
        lines = read_document_lines(path)
        self._documents[Path(path)] = lines
        return lines

    def highlight(self, path: Path, ranges: Sequence[LineRange]) -> None:
        self.highlighted_file = Path(path)
        self.highlighted_ranges = list(ranges)

    def clear_highlight(self) -> None:
        self.highlighted_file = None
        self.highlighted_ranges = []

    def reveal(self, path: Path, target: RevealTarget) -> None:
        lines = self._documents.get(Path(path))
        if lines is None:
            lines = self.open_file(path)
        ranges = self.highlighted_ranges if self.highlighted_file == Path(path) else []
        print(f"--- {path} (line {target.start_line + 1})", file=self.out)
        print(format_code_excerpt_text(lines, ranges, self.context), file=self.out)

    # Markdown subscriber ----------------------------------------------------

    def render(self, update: Optional[DisplayUpdate]) -> None:
        if update is None:
            print("Review finished.", file=self.out)
            return
        print(f"=== Note {update.index + 1}/{update.total} ===", file=self.out)
        print(update.markdown, file=self.out)
        print(file=self.out)
