"""
codelecture command line - manage lessons, record notes, and review them.

Usage:
  codelecture create "Introduction to React"
  codelecture list
  codelecture activate 2
  codelecture note --file src/app.ts --lines 10-12 --lines 20 -m "Explain the loop"
  codelecture note -m "Wrap up"                      # general note
  codelecture show
  codelecture review                                 # n = next, p = previous, q = quit
  codelecture delete 2 --yes

Line numbers on the command line are 1-based, as shown in editors; they are
stored 0-based.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from codelecture.classroom import NOTICE_MESSAGES, ReviewNotice, Workbench
from codelecture.errors import LectureError, NoActiveLessonError
from codelecture.schemas import LineRange
from codelecture.utils.config import load_settings, setup_logging
from codelecture.viewer import TerminalHost, describe_note, status_text


logger = logging.getLogger(__name__)

InputFunc = Callable[[str], str]


def parse_lines(value: str) -> LineRange:
    """Parse '12' or '10-12' (1-based, inclusive) into a stored 0-based range."""
    try:
        if "-" in value:
            start_text, end_text = value.split("-", 1)
            start, end = int(start_text), int(end_text)
        else:
            start = end = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid line range: {value!r} (use N or START-END)")
    if start < 1 or end < 1:
        raise argparse.ArgumentTypeError(f"Line numbers start at 1: {value!r}")
    return (start - 1, end - 1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codelecture",
        description="Annotate code with Markdown lecture notes and review them",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--workspace", type=Path, default=None, help="Workspace root (default: $CODELECTURE_WORKSPACE or cwd)")
    parser.add_argument("--config-dir", default=None, help="Config directory under the root (default: .vscode)")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("create", help="Create a lesson and make it active")
    p.add_argument("title", nargs="+")

    sub.add_parser("list", help="List lessons in creation order")

    p = sub.add_parser("activate", help="Set the active lesson")
    p.add_argument("lesson_id", type=int)

    p = sub.add_parser("delete", help="Delete a lesson")
    p.add_argument("lesson_id", type=int)
    p.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")

    p = sub.add_parser("show", help="Show a lesson's notes (default: active lesson)")
    p.add_argument("lesson_id", type=int, nargs="?")

    p = sub.add_parser("note", help="Add a note to the active lesson")
    p.add_argument("--file", help="File the ranges belong to")
    p.add_argument("--lines", type=parse_lines, action="append", default=[], help="Line or range, 1-based (repeatable)")
    p.add_argument("-m", "--message", help="Markdown text (default: read from stdin)")

    p = sub.add_parser("review", help="Walk through the active lesson's notes")
    p.add_argument("--context", type=int, default=3, help="Lines of context around highlighted ranges")

    return parser


# -----------------------------------------------------------------------------
# Commands
# -----------------------------------------------------------------------------

def cmd_create(bench: Workbench, args, out, input_func) -> int:
    lesson = bench.create_lesson(" ".join(args.title))
    print(f'Lesson "{lesson.title}" created and activated! (ID: {lesson.id})', file=out)
    return 0


def cmd_list(bench: Workbench, args, out, input_func) -> int:
    lessons = bench.list_lessons()
    if not lessons:
        print("No lessons available. Create a lesson first.", file=out)
        return 0
    active_id = bench.store.get_active_lesson_id()
    for summary in lessons:
        marker = "  (currently active)" if summary.id == active_id else ""
        print(f"{summary.id:>4}  {summary.title}{marker}", file=out)
    return 0


def cmd_activate(bench: Workbench, args, out, input_func) -> int:
    if bench.store.get_active_lesson_id() == args.lesson_id:
        print(f"Lesson {args.lesson_id} is already active.", file=out)
        return 0
    bench.set_active_lesson(args.lesson_id)
    print(f"Lesson {args.lesson_id} is now active.", file=out)
    return 0


def cmd_delete(bench: Workbench, args, out, input_func) -> int:
    summary = next((s for s in bench.list_lessons() if s.id == args.lesson_id), None)
    title = summary.title if summary else str(args.lesson_id)
    if not args.yes:
        answer = input_func(f'Are you sure you want to delete "{title}"? This action cannot be undone. [y/N] ')
        if answer.strip().lower() not in ("y", "yes"):
            print("Cancelled.", file=out)
            return 0
    bench.delete_lesson(args.lesson_id)
    print(f'Lesson "{title}" has been deleted.', file=out)
    return 0


def cmd_show(bench: Workbench, args, out, input_func) -> int:
    if args.lesson_id is None:
        lesson = bench.get_active_lesson()
        if lesson is None:
            raise NoActiveLessonError()
    else:
        lesson = bench.store.get_lesson_by_id(args.lesson_id)
        if lesson is None:
            print(f"Lesson {args.lesson_id} not found.", file=sys.stderr)
            return 1

    print(f"# {lesson.title} (ID: {lesson.id}, {len(lesson.notes)} notes)", file=out)
    for i, note in enumerate(lesson.notes, start=1):
        print(f"\n[{i}] {describe_note(note)}", file=out)
        print(note.markdown, file=out)
    return 0


def cmd_note(bench: Workbench, args, out, input_func) -> int:
    if args.lines and not args.file:
        print("--lines requires --file", file=sys.stderr)
        return 2

    text = args.message if args.message is not None else sys.stdin.read()
    for line_range in args.lines:
        if not bench.begin_or_extend_annotation(args.file, line_range):
            print(f"Range {line_range[0] + 1}-{line_range[1] + 1} already selected.", file=out)

    try:
        note = bench.commit_annotation(text)
    except LectureError:
        bench.cancel_annotation()
        raise
    lesson = bench.get_active_lesson()
    print(f"Lecture notes saved to \"{lesson.title}\": {describe_note(note)}", file=out)
    return 0


def cmd_review(bench: Workbench, args, out, input_func) -> int:
    bench.host.context = args.context
    bench.subscribe_display(bench.host.render)

    notice = bench.start_review()
    if not bench.is_reviewing:
        print(NOTICE_MESSAGES[notice], file=out)
        return 1 if notice == ReviewNotice.NO_ACTIVE_LESSON else 0

    try:
        while bench.is_reviewing:
            if notice is not None:
                print(NOTICE_MESSAGES[notice], file=out)
            try:
                choice = input_func("[n]ext, [p]revious, [q]uit: ").strip().lower()
            except EOFError:
                break
            if choice in ("n", "next", ""):
                notice = bench.review_next()
            elif choice in ("p", "prev", "previous"):
                notice = bench.review_prev()
            elif choice in ("q", "quit", "exit"):
                break
            else:
                notice = None
    finally:
        bench.review_stop()
    return 0


COMMANDS = {
    "create": cmd_create,
    "list": cmd_list,
    "activate": cmd_activate,
    "delete": cmd_delete,
    "show": cmd_show,
    "note": cmd_note,
    "review": cmd_review,
}


def main(
    argv: Optional[Sequence[str]] = None,
    input_func: InputFunc = input,
    out=None,
) -> int:
    args = build_parser().parse_args(argv)
    out = out or sys.stdout

    try:
        settings = load_settings(workspace=args.workspace, config_dir=args.config_dir)
    except ValueError as e:
        # pydantic's ValidationError is a ValueError
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1
    setup_logging(settings)

    bench = Workbench.from_settings(
        settings,
        TerminalHost(out=out),
        on_change=lambda lesson: logger.debug(status_text(lesson)),
    )

    try:
        return COMMANDS[args.command](bench, args, out, input_func)
    except NoActiveLessonError as e:
        print(f"{e}\nCreate one with: codelecture create <title>", file=sys.stderr)
        return 1
    except LectureError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def main_entry():
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
