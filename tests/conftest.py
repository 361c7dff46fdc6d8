"""Shared fixtures: a temporary workspace, a recording editor host, and a store."""

from pathlib import Path

import pytest

from codelecture.classroom import LessonStore, Workbench


class RecordingHost:
    """EditorHost fake that records every request in order."""

    def __init__(self):
        self.calls = []
        self.highlighted = None

    def open_file(self, path):
        self.calls.append(("open", Path(path)))
        return Path(path).read_text(encoding="utf-8").splitlines()

    def highlight(self, path, ranges):
        self.calls.append(("highlight", Path(path), list(ranges)))
        self.highlighted = (Path(path), list(ranges))

    def clear_highlight(self):
        self.calls.append(("clear",))
        self.highlighted = None

    def reveal(self, path, target):
        self.calls.append(("reveal", Path(path), target))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep CODELECTURE_* settings and stray .env files out of tests."""
    for name in ("CODELECTURE_WORKSPACE", "CODELECTURE_CONFIG_DIR", "CODELECTURE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def workspace(tmp_path):
    root = tmp_path / "workspace"
    root.mkdir()
    (root / "a.ts").write_text("\n".join(f"line {i}" for i in range(20)) + "\n", encoding="utf-8")
    (root / "src").mkdir()
    (root / "src" / "b.py").write_text("def f():\n    return 1\n", encoding="utf-8")
    return root


@pytest.fixture
def host():
    return RecordingHost()


@pytest.fixture
def store(workspace):
    return LessonStore(workspace)


@pytest.fixture
def bench(workspace, host):
    return Workbench(workspace, host)
