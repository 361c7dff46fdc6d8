"""Tests for ReviewNavigator state transitions and per-note display."""

import io
from pathlib import Path

import pytest

from codelecture.classroom import ReviewNavigator, ReviewNotice, RevealTarget
from codelecture.schemas import CodeNote, GeneralNote
from codelecture.viewer import TerminalHost


def add_notes(store, *notes):
    lesson = store.get_active_lesson()
    lesson.notes.extend(notes)
    store.save_lesson(lesson)


@pytest.fixture
def navigator(store, host, workspace):
    return ReviewNavigator(store, host, workspace)


@pytest.fixture
def updates(navigator):
    received = []
    navigator.subscribe(received.append)
    return received


@pytest.fixture
def three_notes(store):
    store.create_lesson("Intro")
    add_notes(
        store,
        CodeNote(file="a.ts", ranges=[(10, 12)], markdown="explain loop"),
        GeneralNote(markdown="aside"),
        CodeNote(file="src/b.py", ranges=[(0, 0), (1, 1)], markdown="the function"),
    )


class TestStart:
    """Test starting a review."""

    def test_no_active_lesson(self, navigator):
        assert navigator.start() == ReviewNotice.NO_ACTIVE_LESSON
        assert not navigator.is_active

    def test_no_notes(self, navigator, store):
        store.create_lesson("Empty")
        assert navigator.start() == ReviewNotice.NO_NOTES
        assert not navigator.is_active

    def test_start_shows_first_note(self, navigator, three_notes, updates):
        assert navigator.start() is None
        assert navigator.is_active
        assert navigator.index == 0
        assert navigator.get_position() == (1, 3)
        assert updates[0].markdown == "explain loop"

    def test_snapshot_ignores_later_edits(self, navigator, three_notes, store):
        navigator.start()
        add_notes(store, GeneralNote(markdown="late"))
        assert navigator.total == 3


class TestBounds:
    """Test bounded linear navigation."""

    def test_next_stops_at_end(self, navigator, three_notes):
        navigator.start()
        assert navigator.next() is None
        assert navigator.next() is None
        assert navigator.next() == ReviewNotice.END_REACHED
        assert navigator.index == 2

    def test_prev_stops_at_start(self, navigator, three_notes):
        navigator.start()
        assert navigator.prev() == ReviewNotice.START_REACHED
        assert navigator.index == 0

    def test_prev_after_next(self, navigator, three_notes, updates):
        navigator.start()
        navigator.next()
        navigator.prev()
        assert navigator.index == 0
        assert [u.markdown for u in updates] == ["explain loop", "aside", "explain loop"]

    def test_navigation_requires_active(self, navigator):
        assert navigator.next() == ReviewNotice.NOT_ACTIVE
        assert navigator.prev() == ReviewNotice.NOT_ACTIVE


class TestDisplay:
    """Test what the host and renderer are asked to show."""

    def test_code_note_sequence(self, navigator, three_notes, host, updates, workspace):
        navigator.start()
        path = workspace / "a.ts"
        assert host.calls == [
            ("open", path),
            ("highlight", path, [(10, 12)]),
            ("reveal", path, RevealTarget(10, 0, 12, len("line 12"))),
        ]
        assert len(updates) == 1

    def test_markdown_published_after_host_calls(self, navigator, three_notes, host):
        order = []
        navigator.subscribe(lambda update: order.append(("publish", len(host.calls))))
        navigator.start()
        assert order == [("publish", 3)]

    def test_general_note_clears_highlight(self, navigator, three_notes, host):
        navigator.start()
        navigator.next()
        assert host.calls[-1] == ("clear",)
        assert host.highlighted is None

    def test_multi_range_reveals_first_range(self, navigator, three_notes, host, workspace):
        navigator.start()
        navigator.next()
        navigator.next()
        path = workspace / "src" / "b.py"
        assert host.highlighted == (path, [(0, 0), (1, 1)])
        assert host.calls[-1] == ("reveal", path, RevealTarget(0, 0, 0, len("def f():")))

    def test_renderer_opened_once_per_review(self, navigator, three_notes, updates):
        navigator.start()
        navigator.next()
        navigator.next()
        assert [u.open_renderer for u in updates] == [True, False, False]

    def test_missing_file_warns_and_still_publishes(self, navigator, store, host, updates, caplog):
        store.create_lesson("Broken")
        add_notes(store, CodeNote(file="gone.ts", ranges=[(0, 1)], markdown="missing"))
        assert navigator.start() == ReviewNotice.OPEN_FAILED
        assert navigator.is_active
        assert updates[0].markdown == "missing"
        assert isinstance(navigator.current_note, CodeNote)
        assert host.highlighted is None
        assert "gone.ts" in caplog.text

    def test_no_workspace_root_publishes_only(self, store, host, three_notes):
        navigator = ReviewNavigator(store, host, workspace_root=None)
        received = []
        navigator.subscribe(received.append)
        assert navigator.start() is None
        assert host.calls == []
        assert received[0].markdown == "explain loop"


class TestStop:
    """Test stopping and reusing a navigator."""

    def test_stop_clears(self, navigator, three_notes, host, updates):
        navigator.start()
        navigator.stop()
        assert not navigator.is_active
        assert navigator.current_note is None
        assert host.calls[-1] == ("clear",)
        assert updates[-1] is None

    def test_stop_when_inactive_does_nothing(self, navigator, host, updates):
        host.highlight("a.ts", [(1, 2)])
        navigator.stop()
        assert host.highlighted == (Path("a.ts"), [(1, 2)])
        assert host.calls[-1][0] == "highlight"
        assert updates == []

    def test_restart_after_stop(self, navigator, three_notes, updates):
        navigator.start()
        navigator.next()
        navigator.stop()
        navigator.start()
        assert navigator.index == 0
        assert updates[-1].open_renderer is True


class TestUnreadableFiles:
    """Files that exist but cannot be decoded."""

    @pytest.fixture
    def legacy_note(self, store, workspace):
        (workspace / "legacy.c").write_bytes(b"/* caf\xe9 */\nint main(void);\n")
        store.create_lesson("Legacy")
        add_notes(store, CodeNote(file="legacy.c", ranges=[(0, 1)], markdown="old encoding"))

    def test_terminal_host_reports_open_failed(self, store, workspace, legacy_note):
        out = io.StringIO()
        host = TerminalHost(out=out)
        navigator = ReviewNavigator(store, host, workspace)
        received = []
        navigator.subscribe(received.append)

        assert navigator.start() == ReviewNotice.OPEN_FAILED
        assert navigator.is_active
        assert received[0].markdown == "old encoding"
        assert host.highlighted_file is None

    def test_decode_error_from_any_host(self, navigator, host, updates, legacy_note, caplog):
        # RecordingHost reads strictly and lets UnicodeDecodeError through
        assert navigator.start() == ReviewNotice.OPEN_FAILED
        assert updates[0].markdown == "old encoding"
        assert "legacy.c" in caplog.text
