"""
Code renderer - HTML excerpts of source files with highlighted note ranges.

Features:
- Whole-line highlight for every range of a note
- Dimming of all lines outside the ranges
- Context window around the ranges for compact display
- Human-readable (1-based) range labels
"""

from typing import Optional, Sequence
import html

from codelecture.schemas import CodeNote, LineRange, Note


def get_code_css() -> str:
    """Get CSS styles for code excerpt display."""
    return """
    <style>
    .code-excerpt {
        font-family: "JetBrains Mono", "Fira Code", Menlo, monospace;
        font-size: 0.9em;
        line-height: 1.5em;
        background: #fafafa;
        border-left: 4px solid #3B82F6;
        border-radius: 0 8px 8px 0;
        padding: 0.6em 0;
        margin: 1em 0;
        overflow-x: auto;
    }
    .code-line {
        white-space: pre;
        padding: 0 1em;
    }
    .code-line-number {
        display: inline-block;
        min-width: 3.5em;
        color: #999;
        user-select: none;
    }
    .code-highlighted {
        background-color: rgba(59, 130, 246, 0.1);
        border-top: 1px solid rgba(59, 130, 246, 0.3);
        border-bottom: 1px solid rgba(59, 130, 246, 0.3);
        font-weight: 700;
        letter-spacing: 0.5px;
    }
    .code-dimmed {
        opacity: 0.45;
    }
    .code-gap {
        color: #bbb;
        padding: 0 1em;
        font-style: italic;
    }
    .code-file {
        font-size: 0.85em;
        color: #666;
        margin-bottom: 0.3em;
    }
    </style>
    """


def highlighted_lines(ranges: Sequence[LineRange]) -> set[int]:
    """All line numbers covered by the ranges."""
    lines = set()
    for start, end in ranges:
        lines.update(range(start, end + 1))
    return lines


def dimmed_lines(line_count: int, ranges: Sequence[LineRange]) -> list[int]:
    """Line numbers of a document that fall outside every range, in order."""
    covered = highlighted_lines(ranges)
    return [i for i in range(line_count) if i not in covered]


def visible_lines(line_count: int, ranges: Sequence[LineRange], context: Optional[int]) -> list[int]:
    """
    Lines to show for an excerpt: each range plus `context` lines around it.

    context=None shows the whole document.
    """
    if context is None:
        return list(range(line_count))
    shown = set()
    for start, end in ranges:
        shown.update(range(max(0, start - context), min(line_count, end + context + 1)))
    return sorted(shown)


def format_range(r: LineRange) -> str:
    """Label a range for people: 1-based, 'line 5' or 'lines 5-9'."""
    start, end = r
    if start == end:
        return f"line {start + 1}"
    return f"lines {start + 1}-{end + 1}"


def format_ranges(ranges: Sequence[LineRange]) -> str:
    return ", ".join(format_range(r) for r in ranges)


def describe_note(note: Note) -> str:
    """One-line description used in listings."""
    if isinstance(note, CodeNote):
        return f"{note.file} ({format_ranges(note.ranges)})"
    return "general note"


def render_code_excerpt(
    lines: Sequence[str],
    ranges: Sequence[LineRange],
    context: Optional[int] = 3,
    file_label: Optional[str] = None,
) -> str:
    """
    Render lines of a file with the ranges highlighted and the rest dimmed.

    Args:
        lines: Document lines (without trailing newlines)
        ranges: Closed 0-based ranges to highlight
        context: Lines of context around each range (None: whole file)
        file_label: Optional file name shown above the excerpt

    Returns:
        HTML string for the excerpt
    """
    dimmed = set(dimmed_lines(len(lines), ranges))
    shown = visible_lines(len(lines), ranges, context)

    parts = []
    if file_label:
        parts.append(f'<div class="code-file">{html.escape(file_label)}</div>')
    parts.append('<div class="code-excerpt">')

    previous = None
    for i in shown:
        if previous is not None and i != previous + 1:
            parts.append('<div class="code-gap">⋯</div>')
        css_class = "code-dimmed" if i in dimmed else "code-highlighted"
        parts.append(
            f'<div class="code-line {css_class}">'
            f'<span class="code-line-number">{i + 1}</span>{html.escape(lines[i])}</div>'
        )
        previous = i

    parts.append('</div>')
    return ''.join(parts)
