"""End-to-end tests through the Workbench: create, annotate, review."""

import pytest

from codelecture.classroom import ReviewNotice, Workbench
from codelecture.errors import NoActiveLessonError
from codelecture.schemas import CodeNote, GeneralNote
from codelecture.utils import load_settings


class TestWorkbench:
    """Commands routed through a single workbench."""

    def test_lecture_walkthrough(self, bench, host, workspace):
        lesson = bench.create_lesson("Intro")
        assert lesson.id == 1

        assert bench.begin_or_extend_annotation("a.ts", (10, 12))
        bench.commit_annotation("explain loop")
        bench.commit_annotation("wrap up")

        notes = bench.get_active_lesson().notes
        assert notes == [
            CodeNote(file="a.ts", ranges=[(10, 12)], markdown="explain loop"),
            GeneralNote(markdown="wrap up"),
        ]

        updates = []
        bench.subscribe_display(updates.append)
        assert bench.start_review() is None
        assert host.highlighted == (workspace / "a.ts", [(10, 12)])
        assert updates[-1].markdown == "explain loop"

        assert bench.review_next() is None
        assert host.highlighted is None
        assert updates[-1].markdown == "wrap up"

        assert bench.review_next() == ReviewNotice.END_REACHED
        bench.review_stop()
        assert not bench.is_reviewing
        assert updates[-1] is None

    def test_begin_without_selection_is_noop(self, bench):
        assert bench.begin_or_extend_annotation()
        assert not bench.is_annotating

    def test_single_session_reused(self, bench):
        bench.begin_or_extend_annotation("a.ts", (1, 1))
        session = bench.session
        bench.begin_or_extend_annotation("a.ts", (3, 4))
        assert bench.session is session
        assert session.ranges == [(1, 1), (3, 4)]

    def test_commit_without_lesson(self, bench):
        with pytest.raises(NoActiveLessonError):
            bench.commit_annotation("text")

    def test_cancel_annotation(self, bench, host):
        bench.create_lesson("Intro")
        bench.begin_or_extend_annotation("a.ts", (1, 1))
        bench.cancel_annotation()
        assert not bench.is_annotating
        assert host.highlighted is None
        assert bench.get_active_lesson().notes == []

    def test_delete_and_activate(self, bench):
        bench.create_lesson("A")
        bench.create_lesson("B")
        bench.set_active_lesson(1)
        bench.delete_lesson(1)
        assert [s.title for s in bench.list_lessons()] == ["B"]
        assert bench.get_active_lesson().title == "B"

    def test_from_settings(self, workspace, host):
        settings = load_settings(workspace=workspace, config_dir=".lectures")
        bench = Workbench.from_settings(settings, host)
        bench.create_lesson("Intro")
        assert (workspace / ".lectures" / "lessons" / "lesson-1.json").exists()

    def test_review_stop_keeps_annotation_highlight(self, bench, host, workspace):
        bench.begin_or_extend_annotation("a.ts", (1, 2))
        bench.review_stop()
        assert host.highlighted == (workspace / "a.ts", [(1, 2)])
        assert bench.session.ranges == [(1, 2)]
