"""
codelecture - Code lecture notes

Streamlit application for annotating source files with Markdown notes,
grouping them into lessons, and replaying a lesson as a guided walkthrough.

Usage:
    streamlit run app.py
"""

from pathlib import Path
from typing import Optional, Sequence

import streamlit as st

from codelecture.classroom import (
    NOTICE_MESSAGES,
    DisplayUpdate,
    RevealTarget,
    ReviewNotice,
    Workbench,
    read_document_lines,
)
from codelecture.errors import LectureError, NoActiveLessonError
from codelecture.schemas import CodeNote, LineRange
from codelecture.utils import load_settings, setup_logging, to_workspace_path
from codelecture.viewer import (
    format_range,
    get_code_css,
    render_code_excerpt,
    status_text,
    status_tooltip,
)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

SETTINGS = load_settings()
setup_logging(SETTINGS)

MAX_LISTED_FILES = 500

st.set_page_config(
    page_title="codelecture",
    page_icon="📝",
    layout="wide",
    initial_sidebar_state="expanded",
)


# -----------------------------------------------------------------------------
# Host: keeps highlight and Markdown state in the Streamlit session
# -----------------------------------------------------------------------------

class StreamlitHost:
    """EditorHost that records requests; the page renders them on each rerun."""

    def open_file(self, path: Path) -> list[str]:
        lines = read_document_lines(path)
        st.session_state.open_file = (Path(path), lines)
        return lines

    def highlight(self, path: Path, ranges: Sequence[LineRange]) -> None:
        st.session_state.highlight = (Path(path), list(ranges))

    def clear_highlight(self) -> None:
        st.session_state.highlight = None

    def reveal(self, path: Path, target: RevealTarget) -> None:
        st.session_state.reveal = target

    def render(self, update: Optional[DisplayUpdate]) -> None:
        st.session_state.review_update = update


def list_workspace_files(root: Path) -> list[str]:
    """Workspace-relative paths of visible files, skipping hidden directories."""
    files = []
    for path in sorted(root.rglob("*")):
        rel = path.relative_to(root)
        if any(part.startswith(".") for part in rel.parts):
            continue
        if path.is_file():
            files.append(rel.as_posix())
            if len(files) >= MAX_LISTED_FILES:
                break
    return files


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Initialize session state variables."""
    if "host" not in st.session_state:
        st.session_state.host = StreamlitHost()

    if "bench" not in st.session_state:
        bench = Workbench.from_settings(SETTINGS, st.session_state.host)
        bench.subscribe_display(st.session_state.host.render)
        st.session_state.bench = bench

    for key in ("highlight", "open_file", "reveal", "review_update", "notice"):
        if key not in st.session_state:
            st.session_state[key] = None

    if "view_mode" not in st.session_state:
        st.session_state.view_mode = "annotate"  # annotate, review


# -----------------------------------------------------------------------------
# Sidebar: Lessons
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render the sidebar with the active lesson and lesson management."""
    bench = st.session_state.bench
    st.sidebar.title("📝 codelecture")

    active = bench.get_active_lesson()
    st.sidebar.markdown(f"**{status_text(active)}**", help=status_tooltip(active))

    st.sidebar.divider()

    view_mode = st.sidebar.radio(
        "View",
        ["Annotate", "Review"],
        index=["annotate", "review"].index(st.session_state.view_mode),
        horizontal=True,
        label_visibility="collapsed",
    )
    st.session_state.view_mode = view_mode.lower()

    st.sidebar.divider()
    render_lesson_list(active.id if active else None)
    render_create_lesson()


def render_lesson_list(active_id: Optional[int]):
    """Lessons in creation order with activate / delete buttons."""
    bench = st.session_state.bench
    lessons = bench.list_lessons()

    st.sidebar.subheader("Lessons")
    if not lessons:
        st.sidebar.info("No lessons yet. Create one below.")
        return

    for summary in lessons:
        col1, col2 = st.sidebar.columns([8, 2])
        with col1:
            label = f"→ {summary.title}" if summary.id == active_id else summary.title
            if st.button(label, key=f"lesson_{summary.id}", use_container_width=True,
                         disabled=summary.id == active_id):
                run_command(bench.set_active_lesson, summary.id)
                st.rerun()
        with col2:
            if st.button("🗑", key=f"delete_{summary.id}", help=f"Delete ID {summary.id}"):
                st.session_state.pending_delete = summary.id

    pending = st.session_state.get("pending_delete")
    if pending is not None:
        st.sidebar.warning(f"Delete lesson {pending}? This action cannot be undone.")
        col1, col2 = st.sidebar.columns(2)
        with col1:
            if st.button("Delete", type="primary"):
                run_command(bench.delete_lesson, pending)
                st.session_state.pending_delete = None
                st.rerun()
        with col2:
            if st.button("Keep"):
                st.session_state.pending_delete = None
                st.rerun()


def render_create_lesson():
    bench = st.session_state.bench
    with st.sidebar.form("create_lesson", clear_on_submit=True):
        title = st.text_input("New lesson", placeholder="e.g., Introduction to React")
        if st.form_submit_button("Create lesson"):
            lesson = run_command(bench.create_lesson, title)
            if lesson:
                st.toast(f'Lesson "{lesson.title}" created and activated!')
                st.rerun()


def run_command(func, *args):
    """Run a workbench command, showing domain errors instead of raising."""
    try:
        return func(*args)
    except NoActiveLessonError as e:
        st.error(f"{e} Use **New lesson** in the sidebar to create one.")
    except LectureError as e:
        st.error(str(e))
    return None


# -----------------------------------------------------------------------------
# Main Content: Annotate View
# -----------------------------------------------------------------------------

def render_annotate_view():
    """Select ranges in a file, write Markdown, and save the note."""
    bench = st.session_state.bench
    session = bench.session
    root = bench.workspace_root

    st.title("Add lecture notes")

    files = list_workspace_files(root)
    if not files:
        st.info(f"No files found under {root}.")
        return

    default = files.index(session.file) if session.file in files else 0
    file = st.selectbox("File", files, index=default)
    lines = (root / file).read_text(encoding="utf-8", errors="replace").splitlines()
    if not lines:
        st.info("This file is empty.")

    if session.file is not None and session.file != to_workspace_path(file, root):
        st.caption("Selecting a range in this file will start a new note.")

    col1, col2, col3 = st.columns([2, 2, 1])
    with col1:
        start = st.number_input("From line", min_value=1, max_value=max(1, len(lines)), value=1)
    with col2:
        end = st.number_input("To line", min_value=1, max_value=max(1, len(lines)), value=int(start))
    with col3:
        st.write("")
        if st.button("Add range", use_container_width=True):
            if not bench.begin_or_extend_annotation(file, (int(start) - 1, int(end) - 1)):
                st.warning("This range is already selected.")

    ranges = session.ranges if session.file == file else []
    for i, r in enumerate(ranges):
        c1, c2 = st.columns([9, 1])
        c1.markdown(f"- {format_range(r)}")
        if c2.button("✕", key=f"remove_range_{i}"):
            session.remove_range(i)
            st.rerun()

    st.markdown(get_code_css(), unsafe_allow_html=True)
    st.markdown(render_code_excerpt(lines, ranges, context=None, file_label=file), unsafe_allow_html=True)

    draft = st.text_area(
        "Lecture notes",
        value=session.draft,
        placeholder="Write your lecture notes in Markdown here...",
        height=200,
    )
    session.update_draft_text(draft)

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Save", type="primary", use_container_width=True):
            note = run_command(bench.commit_annotation, draft)
            if note:
                st.success("Lecture notes saved!")
    with col2:
        if st.button("Cancel", use_container_width=True):
            bench.cancel_annotation()
            st.rerun()


# -----------------------------------------------------------------------------
# Main Content: Review View
# -----------------------------------------------------------------------------

def render_review_view():
    """Step through the active lesson's notes."""
    bench = st.session_state.bench

    if not bench.is_reviewing:
        st.title("Review")
        if st.button("Start review", type="primary"):
            st.session_state.notice = bench.start_review()
            st.rerun()
        show_notice()
        return

    render_navigation_bar()
    show_notice()

    update = st.session_state.review_update
    highlight = st.session_state.highlight
    opened = st.session_state.open_file

    col_code, col_notes = st.columns([3, 2])
    with col_code:
        if highlight and opened and opened[0] == highlight[0]:
            path, ranges = highlight
            st.markdown(get_code_css(), unsafe_allow_html=True)
            st.markdown(
                render_code_excerpt(opened[1], ranges, context=5,
                                    file_label=to_workspace_path(path, bench.workspace_root)),
                unsafe_allow_html=True,
            )
        elif isinstance(bench.navigator.current_note, CodeNote):
            st.warning(f"Could not open {bench.navigator.current_note.file} for this note.")
        else:
            st.caption("General note: no code for this step.")
    with col_notes:
        if update:
            st.markdown(update.markdown)


def render_navigation_bar():
    """Render navigation bar with prev/next/stop buttons."""
    bench = st.session_state.bench
    pos, total = bench.navigator.get_position()

    col1, col2, col3, col4 = st.columns([1, 2, 1, 1])
    with col1:
        if st.button("← Previous", use_container_width=True):
            st.session_state.notice = bench.review_prev()
            st.rerun()
    with col2:
        st.markdown(f"<center>Note {pos} of {total}</center>", unsafe_allow_html=True)
    with col3:
        if st.button("Next →", use_container_width=True):
            st.session_state.notice = bench.review_next()
            st.rerun()
    with col4:
        if st.button("Exit", use_container_width=True):
            bench.review_stop()
            st.session_state.notice = None
            st.rerun()

    st.divider()


def show_notice():
    notice = st.session_state.notice
    if notice is None:
        return
    if notice in (ReviewNotice.NO_ACTIVE_LESSON, ReviewNotice.OPEN_FAILED):
        st.warning(NOTICE_MESSAGES[notice])
    else:
        st.info(NOTICE_MESSAGES[notice])


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    render_sidebar()

    if st.session_state.view_mode == "annotate":
        render_annotate_view()
    elif st.session_state.view_mode == "review":
        render_review_view()


if __name__ == "__main__":
    main()
