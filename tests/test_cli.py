"""Tests for the codelecture command line."""

import argparse
import io

import pytest

from codelecture.cli import main, parse_lines
from codelecture.classroom import LessonStore
from codelecture.schemas import CodeNote, GeneralNote


def scripted(*answers):
    """input() replacement that replays answers, then signals EOF."""
    queue = list(answers)

    def _input(prompt=""):
        if not queue:
            raise EOFError
        return queue.pop(0)

    return _input


@pytest.fixture
def run(workspace):
    def _run(*argv, answers=()):
        out = io.StringIO()
        code = main(["--workspace", str(workspace), *argv], input_func=scripted(*answers), out=out)
        return code, out.getvalue()

    return _run


class TestParseLines:
    """Test 1-based line arguments."""

    def test_single_line(self):
        assert parse_lines("12") == (11, 11)

    def test_range(self):
        assert parse_lines("10-12") == (9, 11)

    @pytest.mark.parametrize("value", ["x", "3-", "0", "0-4"])
    def test_invalid(self, value):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_lines(value)


class TestLessonCommands:
    """Test create / list / activate / delete / show."""

    def test_create_and_list(self, run):
        code, out = run("create", "Introduction", "to", "React")
        assert code == 0
        assert 'Lesson "Introduction to React" created and activated! (ID: 1)' in out

        run("create", "Hooks")
        code, out = run("list")
        assert out.splitlines() == [
            "   1  Introduction to React",
            "   2  Hooks  (currently active)",
        ]

    def test_list_empty(self, run):
        assert run("list")[1].strip() == "No lessons available. Create a lesson first."

    def test_activate(self, run, workspace):
        run("create", "A")
        run("create", "B")
        code, out = run("activate", "1")
        assert code == 0
        assert LessonStore(workspace).get_active_lesson_id() == 1
        assert "already active" in run("activate", "1")[1]

    def test_activate_unknown(self, run, capsys):
        code, _ = run("activate", "7")
        assert code == 1
        assert "Lesson with ID 7 does not exist" in capsys.readouterr().err

    def test_delete_confirmed(self, run, workspace):
        run("create", "A")
        code, out = run("delete", "1", answers=["y"])
        assert code == 0
        assert 'Lesson "A" has been deleted.' in out
        assert LessonStore(workspace).list_lessons() == []

    def test_delete_declined(self, run, workspace):
        run("create", "A")
        code, out = run("delete", "1", answers=["n"])
        assert "Cancelled." in out
        assert len(LessonStore(workspace).list_lessons()) == 1

    def test_delete_yes_flag(self, run, workspace):
        run("create", "A")
        run("delete", "1", "--yes")
        assert LessonStore(workspace).list_lessons() == []

    def test_show(self, run):
        run("create", "Intro")
        run("note", "--file", "a.ts", "--lines", "11-13", "-m", "explain loop")
        code, out = run("show")
        assert code == 0
        assert "# Intro (ID: 1, 1 notes)" in out
        assert "[1] a.ts (lines 11-13)" in out
        assert "explain loop" in out

    def test_show_unknown(self, run):
        assert run("show", "5")[0] == 1


class TestNoteCommand:
    """Test recording notes."""

    def test_code_note(self, run, workspace):
        run("create", "Intro")
        code, out = run("note", "--file", "a.ts", "--lines", "11-13", "--lines", "16", "-m", "explain loop")
        assert code == 0
        assert "a.ts (lines 11-13, line 16)" in out
        notes = LessonStore(workspace).get_active_lesson().notes
        assert notes == [CodeNote(file="a.ts", ranges=[(10, 12), (15, 15)], markdown="explain loop")]

    def test_general_note_from_stdin(self, run, workspace, monkeypatch):
        run("create", "Intro")
        monkeypatch.setattr("sys.stdin", io.StringIO("wrap up\n"))
        assert run("note")[0] == 0
        assert LessonStore(workspace).get_active_lesson().notes == [GeneralNote(markdown="wrap up")]

    def test_lines_without_file(self, run):
        run("create", "Intro")
        assert run("note", "--lines", "3", "-m", "x")[0] == 2

    def test_inverted_range_rejected(self, run, workspace, capsys):
        run("create", "Intro")
        code, _ = run("note", "--file", "a.ts", "--lines", "9-3", "-m", "x")
        assert code == 1
        assert "no valid ranges" in capsys.readouterr().err
        assert LessonStore(workspace).get_active_lesson().notes == []

    def test_no_active_lesson(self, run, capsys):
        code, _ = run("note", "-m", "orphan")
        assert code == 1
        assert "codelecture create" in capsys.readouterr().err


class TestReviewCommand:
    """Test the interactive review loop."""

    def test_review_walkthrough(self, run, workspace):
        run("create", "Intro")
        run("note", "--file", "a.ts", "--lines", "11-13", "-m", "explain loop")
        run("note", "-m", "wrap up")

        code, out = run("review", "--context", "0", answers=["n", "n", "q"])
        assert code == 0
        assert f"--- {workspace.resolve() / 'a.ts'} (line 11)" in out
        assert "> 11 | line 10" in out
        assert "=== Note 1/2 ===" in out
        assert "=== Note 2/2 ===" in out
        assert "Reached the end of the lecture notes." in out
        assert out.rstrip().endswith("Review finished.")

    def test_review_stops_on_eof(self, run):
        run("create", "Intro")
        run("note", "-m", "only")
        code, out = run("review")
        assert code == 0
        assert "Review finished." in out

    def test_review_without_notes(self, run):
        run("create", "Empty")
        code, out = run("review")
        assert code == 0
        assert "No lecture notes found in the active lesson." in out

    def test_review_without_lesson(self, run):
        code, out = run("review")
        assert code == 1
        assert "No active lesson" in out

    def test_review_non_utf8_file(self, run, workspace):
        (workspace / "legacy.c").write_bytes(b"/* caf\xe9 */\nint main(void);\n")
        run("create", "Legacy")
        run("note", "--file", "legacy.c", "--lines", "1", "-m", "old encoding")

        code, out = run("review", answers=["q"])
        assert code == 0
        assert "old encoding" in out
        assert "Could not open the file for this note." in out


class TestConfiguration:
    """Test settings errors at startup."""

    def test_invalid_log_level(self, run, monkeypatch, capsys):
        monkeypatch.setenv("CODELECTURE_LOG_LEVEL", "chatty")
        code, out = run("list")
        assert code == 1
        assert out == ""
        assert "Invalid configuration" in capsys.readouterr().err
